from __future__ import annotations

from .blocks import BlockRenderer
from .config import DEFAULT_LAYOUT, LayoutConfig
from .cursor import PageCursor
from .document import Document
from .logging_utils import get_logger
from .tokens import tokenize
from .writer import FpdfMeasurer, TextMeasurer

log = get_logger(__name__)


def render_markdown(
    markdown: str,
    *,
    config: LayoutConfig = DEFAULT_LAYOUT,
    measurer: TextMeasurer | None = None,
) -> Document | None:
    """Lay out ``markdown`` into a new Document.

    Returns ``None`` for empty or whitespace-only input. Every call is a full
    rebuild; nothing is shared with earlier renders. Writer failures
    (``PdfWriterError``) propagate and no partial document is returned.
    """
    markdown = str(markdown or "")
    if not markdown.strip():
        return None

    tokens = tokenize(markdown)
    document = Document(config)
    document.add_page()
    cursor = PageCursor(document)
    renderer = BlockRenderer(document, cursor, measurer or FpdfMeasurer(config))

    rendered = 0
    for token in tokens:
        if renderer.render(token):
            rendered += 1

    log.info(
        "Rendered %d of %d block(s) into %d page(s)",
        rendered,
        len(tokens),
        document.page_count,
    )
    return document.seal()
