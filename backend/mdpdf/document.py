from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .config import DEFAULT_LAYOUT, DOWNLOAD_NAME, LayoutConfig
from .writer import FontSpec, page_size, pdf_safe_text, write_pdf

if TYPE_CHECKING:
    from .preview import PreviewHandle, PreviewRegistry


@dataclass(frozen=True)
class DrawCommand:
    text: str
    x: float
    y: float
    font: FontSpec
    color: tuple[int, int, int]


@dataclass(frozen=True)
class Page:
    commands: list[DrawCommand] | tuple[DrawCommand, ...] = field(default_factory=list)


class Document:
    """Pages of positioned text, built by one render pass.

    ``add_page`` and ``draw`` belong to the pass that builds the document.
    ``seal`` ends it: pages and their commands become tuples and further
    building raises ``RuntimeError``. ``render_markdown`` only returns sealed
    documents.
    """

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT) -> None:
        self.config = config
        self.page_width, self.page_height = page_size(config)
        self.pages: list[Page] | tuple[Page, ...] = []
        self._sealed = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def content_width(self) -> float:
        return self.page_width - self.config.margin * 2

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> Document:
        if not self._sealed:
            self.pages = tuple(Page(tuple(page.commands)) for page in self.pages)
            self._sealed = True
        return self

    def _check_open(self) -> None:
        if self._sealed:
            raise RuntimeError("Document is sealed; start a new render instead")

    def add_page(self) -> Page:
        self._check_open()
        page = Page()
        self.pages.append(page)
        return page

    def draw(self, text: str, *, y: float, font: FontSpec, color: tuple[int, int, int]) -> DrawCommand:
        self._check_open()
        if not self.pages:
            raise RuntimeError("Document has no page to draw on")
        top = self.config.margin
        if not top <= y <= self.page_height - top:
            raise ValueError(f"Line at y={y:.2f} falls outside the printable band")
        pdf_safe_text(text)
        cmd = DrawCommand(text=text, x=self.config.margin, y=y, font=font, color=color)
        self.pages[-1].commands.append(cmd)
        return cmd

    def commands(self) -> list[DrawCommand]:
        return [cmd for page in self.pages for cmd in page.commands]

    def to_bytes(self) -> bytes:
        return write_pdf(self)

    def save_as(self, filename: str | Path = DOWNLOAD_NAME) -> Path:
        path = Path(filename)
        path.write_bytes(self.to_bytes())
        return path

    def to_preview_handle(self, registry: PreviewRegistry, *, slot: str = "default") -> PreviewHandle:
        return registry.publish(self.to_bytes(), page_count=self.page_count, slot=slot)
