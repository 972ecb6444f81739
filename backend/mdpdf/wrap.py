from __future__ import annotations

from .writer import FontSpec, TextMeasurer


def wrap_text(measurer: TextMeasurer, text: str, font: FontSpec, max_width: float) -> list[str]:
    """Greedy word wrap of ``text`` into lines no wider than ``max_width``.

    Words are split on single spaces, so runs of spaces survive as empty
    words and are rejoined verbatim. A word that is wider than ``max_width``
    on its own is emitted alone and never split. Whitespace-only lines are
    dropped.
    """
    if not text:
        return []
    lines: list[str] = []
    current: str | None = None
    for word in text.split(" "):
        if current is None:
            current = word
            continue
        candidate = f"{current} {word}"
        if measurer.width(candidate, font) <= max_width:
            current = candidate
        elif current.strip():
            lines.append(current)
            current = word
        else:
            current = word
    if current and current.strip():
        lines.append(current)
    return lines
