from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .assembler import render_markdown
from .config import DOWNLOAD_NAME
from .logging_utils import get_logger
from .writer import PdfWriterError

log = get_logger(__name__)

EXIT_OK = 0
EXIT_EMPTY = 1
EXIT_WRITER = 2


def _read_input(ap: argparse.ArgumentParser, source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        ap.error(f"input file not found: {path}")
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        ap.error(f"input file is not valid UTF-8: {path} (byte {e.start})")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="mdpdf", description="Convert a markdown file into a paginated A4 PDF.")
    ap.add_argument("input", type=str, help="Markdown file to convert ('-' reads stdin)")
    ap.add_argument("-o", "--output", type=Path, default=Path(DOWNLOAD_NAME), help="Output PDF path")
    ap.add_argument("--stdout", action="store_true", help="Write the PDF bytes to stdout instead of a file")
    args = ap.parse_args(argv)

    markdown = _read_input(ap, args.input)
    try:
        document = render_markdown(markdown)
        if document is None:
            log.error("Nothing to convert: %s is empty", args.input)
            return EXIT_EMPTY
        if args.stdout:
            sys.stdout.buffer.write(document.to_bytes())
            sys.stdout.buffer.flush()
        else:
            document.save_as(args.output)
            log.info("Wrote %s (%d page(s))", args.output, document.page_count)
    except PdfWriterError as e:
        log.error("Failed to convert %s: %s", args.input, e)
        return EXIT_WRITER
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
