from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Literal

FontStyle = Literal["normal", "bold", "italic", "bolditalic"]

# Double markers must win over single ones.
_MARKER_RE = re.compile(r"\*\*|__|\*|_")
_BOLD_MARKERS = {"**", "__"}


@dataclass(frozen=True)
class StyledRun:
    text: str
    style: FontStyle


def style_name(bold: bool, italic: bool) -> FontStyle:
    if bold and italic:
        return "bolditalic"
    if bold:
        return "bold"
    if italic:
        return "italic"
    return "normal"


class _EmphasisState:
    """Two independent toggles, flipped by emphasis markers.

    Markers are not paired: an unmatched marker leaves its toggle flipped for
    the rest of the span.
    """

    def __init__(self) -> None:
        self.bold = False
        self.italic = False

    @property
    def style(self) -> FontStyle:
        return style_name(self.bold, self.italic)

    def consume(self, marker: str) -> None:
        if marker in _BOLD_MARKERS:
            self.bold = not self.bold
        else:
            self.italic = not self.italic


class StyleScan:
    """Restartable view over the styled runs of one text span."""

    def __init__(self, text: str) -> None:
        self.text = text or ""

    def __iter__(self) -> Iterator[StyledRun]:
        state = _EmphasisState()
        last = 0
        for match in _MARKER_RE.finditer(self.text):
            if match.start() > last:
                yield StyledRun(self.text[last : match.start()], state.style)
            state.consume(match.group(0))
            last = match.end()
        if last < len(self.text):
            yield StyledRun(self.text[last:], state.style)

    def __repr__(self) -> str:
        return f"StyleScan({self.text!r})"


def scan_styles(text: str) -> StyleScan:
    return StyleScan(text)

