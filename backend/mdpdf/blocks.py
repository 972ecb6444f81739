from __future__ import annotations

from typing import Callable, Iterator

from .cursor import PageCursor
from .document import Document
from .logging_utils import get_logger
from .styles import scan_styles
from .tokens import Token
from .wrap import wrap_text
from .writer import FontSpec, TextMeasurer, normalize_text

log = get_logger(__name__)


class BlockRenderer:
    """Draws one block token at a time onto a Document through its cursor."""

    def __init__(self, document: Document, cursor: PageCursor, measurer: TextMeasurer) -> None:
        self.document = document
        self.cursor = cursor
        self.measurer = measurer
        self.config = document.config
        self._handlers: dict[str, Callable[[Token], None]] = {
            "heading": self.write_heading,
            "paragraph": self.write_paragraph,
            "code": self.write_code_block,
            "list": self.write_list,
        }

    def render(self, token: Token) -> bool:
        handler = self._handlers.get(token.kind)
        if handler is None:
            log.debug("Skipping unsupported block %r", token.source_type or token.kind)
            return False
        handler(token)
        self.cursor.add_spacing(self.config.paragraph_spacing)
        return True

    def _draw(self, text: str, font: FontSpec, color: tuple[int, int, int], line_height: float) -> None:
        y = self.cursor.place_line(line_height)
        self.document.draw(text, y=y, font=font, color=color)

    def _styled_lines(self, text: str, size: float, max_width: float) -> Iterator[tuple[str, FontSpec]]:
        # Every run starts on a fresh line; hard breaks split a run further.
        for run in scan_styles(normalize_text(text)):
            font = FontSpec(self.config.text_family, run.style, size)
            for physical in run.text.split("\n"):
                for line in wrap_text(self.measurer, physical, font, max_width):
                    yield line, font

    def write_heading(self, token: Token) -> None:
        size = self.config.heading_size(token.depth)
        line_height = self.config.line_height(size)
        for line, font in self._styled_lines(token.text, size, self.document.content_width):
            self._draw(line, font, self.config.text_color, line_height)

    def write_paragraph(self, token: Token) -> None:
        size = self.config.normal_size
        line_height = self.config.line_height(size)
        for line, font in self._styled_lines(token.text, size, self.document.content_width):
            self._draw(line, font, self.config.text_color, line_height)

    def write_code_block(self, token: Token) -> None:
        size = self.config.code_size
        line_height = self.config.line_height(size)
        font = FontSpec(self.config.code_family, "normal", size)
        for physical in normalize_text(token.text).split("\n"):
            for line in wrap_text(self.measurer, physical, font, self.document.content_width):
                self._draw(line, font, self.config.code_color, line_height)

    def write_list(self, token: Token) -> None:
        size = self.config.normal_size
        line_height = self.config.line_height(size)
        max_width = self.document.content_width - self.config.list_indent
        first_prefix = f"{self.config.bullet}  "
        continuation = " " * len(first_prefix)
        for item in token.items:
            first = True
            for line, font in self._styled_lines(item, size, max_width):
                prefix = first_prefix if first else continuation
                self._draw(prefix + line, font, self.config.text_color, line_height)
                first = False
            self.cursor.add_spacing(line_height * self.config.list_item_spacing)
