from __future__ import annotations

import os
from dataclasses import dataclass

LOG_LEVEL = os.getenv("MDPDF_LOG_LEVEL", "INFO").upper()

DOWNLOAD_NAME = os.getenv("MDPDF_DOWNLOAD_NAME", "converted.pdf")

MAX_INPUT_CHARS = int(os.getenv("MDPDF_MAX_INPUT_CHARS", "1000000"))

MAX_PREVIEWS = int(os.getenv("MDPDF_MAX_PREVIEWS", "64"))


@dataclass(frozen=True)
class LayoutConfig:
    """Fixed geometry, sizes and colors for one render pass (points)."""

    page_format: str = "A4"
    margin: float = 50
    line_height_multiplier: float = 1.2
    paragraph_spacing: float = 16
    heading_sizes: tuple[float, ...] = (24, 20, 18, 16, 14, 12)
    normal_size: float = 12
    code_size: float = 11
    text_color: tuple[int, int, int] = (0, 0, 0)
    code_color: tuple[int, int, int] = (80, 80, 80)
    text_family: str = "Helvetica"
    code_family: str = "Courier"
    list_indent: float = 20
    list_item_spacing: float = 0.5
    bullet: str = "\u2022"

    def heading_size(self, depth: int) -> float:
        if 1 <= depth <= len(self.heading_sizes):
            return self.heading_sizes[depth - 1]
        return self.normal_size

    def line_height(self, size: float) -> float:
        return size * self.line_height_multiplier


DEFAULT_LAYOUT = LayoutConfig()
