from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Protocol

from fpdf import FPDF

from .config import DEFAULT_LAYOUT, LayoutConfig
from .logging_utils import get_logger
from .styles import FontStyle

if TYPE_CHECKING:
    from .document import Document

log = get_logger(__name__)

_PDF_STYLE = {
    "normal": "",
    "bold": "B",
    "italic": "I",
    "bolditalic": "BI",
}
_CORE_ENCODING = "latin-1"
# Fixed so identical input serializes to identical bytes.
_CREATION_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)
_ASCII_REPLACEMENTS = {
    "\u00a0": " ",
    "\u2007": " ",
    "\u2009": " ",
    "\u200b": "",
    "\u2010": "-",
    "\u2011": "-",
    "\u2012": "-",
    "\u2013": "-",
    "\u2014": "--",
    "\u2015": "--",
    "\u2212": "-",
    "\u2026": "...",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": "\"",
    "\u201d": "\"",
    "\u2190": "<-",
    "\u2192": "->",
    "\u2194": "<->",
    "\u21d0": "<=",
    "\u21d2": "=>",
    "\u21d4": "<=>",
}
# Glyphs the layout itself emits; drawn with the closest core-font character.
_LAYOUT_GLYPHS = {
    "\u2022": "\u00b7",
}


class PdfWriterError(RuntimeError):
    pass


@dataclass(frozen=True)
class FontSpec:
    family: str
    style: FontStyle
    size: float

    @property
    def pdf_style(self) -> str:
        return _PDF_STYLE[self.style]


class TextMeasurer(Protocol):
    def width(self, text: str, font: FontSpec) -> float: ...


def normalize_text(text: str) -> str:
    out = text or ""
    for key, val in _ASCII_REPLACEMENTS.items():
        out = out.replace(key, val)
    return out


def pdf_safe_text(text: str) -> str:
    for key, val in _LAYOUT_GLYPHS.items():
        text = text.replace(key, val)
    try:
        text.encode(_CORE_ENCODING)
    except UnicodeEncodeError as e:
        bad = text[e.start : e.end]
        raise PdfWriterError(
            f"Character {bad!r} at index {e.start} is not supported by the core PDF fonts"
        ) from e
    return text


def _new_pdf(config: LayoutConfig) -> FPDF:
    pdf = FPDF(orientation="P", unit="pt", format=config.page_format)
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(config.margin, config.margin, config.margin)
    pdf.set_creation_date(_CREATION_DATE)
    return pdf


def page_size(config: LayoutConfig = DEFAULT_LAYOUT) -> tuple[float, float]:
    pdf = _new_pdf(config)
    return pdf.w, pdf.h


class FpdfMeasurer:
    """String widths from fpdf2 core-font metrics.

    The font is set on every call, so no font state leaks between callers.
    """

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT) -> None:
        self._pdf = _new_pdf(config)

    def width(self, text: str, font: FontSpec) -> float:
        safe = pdf_safe_text(text)
        self._pdf.set_font(font.family, font.pdf_style, font.size)
        return self._pdf.get_string_width(safe)


def write_pdf(document: Document) -> bytes:
    config = document.config
    pdf = _new_pdf(config)
    for page in document.pages:
        pdf.add_page()
        for cmd in page.commands:
            pdf.set_font(cmd.font.family, cmd.font.pdf_style, cmd.font.size)
            pdf.set_text_color(*cmd.color)
            pdf.text(cmd.x, cmd.y, pdf_safe_text(cmd.text))
    output = pdf.output()
    if isinstance(output, (bytes, bytearray)):
        data = bytes(output)
    else:
        data = str(output).encode(_CORE_ENCODING, "replace")
    log.debug("Serialized %d page(s) into %d bytes", len(document.pages), len(data))
    return data
