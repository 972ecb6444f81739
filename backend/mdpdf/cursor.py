from __future__ import annotations

from typing import TYPE_CHECKING

from .logging_utils import get_logger

if TYPE_CHECKING:
    from .document import Document

log = get_logger(__name__)


class PageCursor:
    """Vertical position on the current page of a Document being built."""

    def __init__(self, document: Document) -> None:
        self.document = document
        self.margin = document.config.margin
        self.page_height = document.page_height
        self.y = self.margin

    @property
    def page_index(self) -> int:
        return len(self.document.pages) - 1

    @property
    def bottom(self) -> float:
        return self.page_height - self.margin

    def place_line(self, height: float) -> float:
        """Reserve ``height`` for the next line and return its baseline.

        Starts a new page when the line would end below the bottom margin.
        """
        if self.y + height > self.bottom:
            self.document.add_page()
            self.y = self.margin
            log.debug("Page break: now on page %d", self.page_index + 1)
        y = self.y
        self.y += height
        return y

    def add_spacing(self, gap: float) -> None:
        # No page check; an overflowing gap is absorbed by the next place_line.
        self.y += gap
