from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from markdown_it import MarkdownIt

TokenKind = Literal["heading", "paragraph", "code", "list", "other"]

_LIST_OPEN = {"bullet_list_open", "ordered_list_open"}
_CODE = {"fence", "code_block"}


@dataclass(frozen=True)
class Token:
    """One top-level block of the markdown source."""

    kind: TokenKind
    text: str = ""
    depth: int = 0
    items: tuple[str, ...] = ()
    source_type: str = ""


def _build_markdown_parser() -> MarkdownIt:
    # breaks: newlines inside a paragraph are hard breaks. commonmark never
    # generates heading anchors.
    md = MarkdownIt("commonmark", {"html": True, "breaks": True})
    md.enable(["table", "strikethrough"])
    return md


_MD_PARSER: MarkdownIt | None = None


def _get_markdown_parser() -> MarkdownIt:
    global _MD_PARSER
    if _MD_PARSER is None:
        _MD_PARSER = _build_markdown_parser()
    return _MD_PARSER


def _parse_block(tokens: list, start_idx: int, open_type: str, close_type: str) -> tuple[list, int]:
    depth = 0
    i = start_idx
    if tokens[i].type == open_type:
        depth = 1
        i += 1
    inner_start = i
    while i < len(tokens):
        t = tokens[i].type
        if t == open_type:
            depth += 1
        elif t == close_type:
            depth -= 1
            if depth == 0:
                break
        i += 1
    return tokens[inner_start:i], i + 1


def _inline_content(tokens: list, idx: int) -> str:
    if idx >= len(tokens):
        return ""
    tok = tokens[idx]
    if tok.type != "inline":
        return ""
    return tok.content or ""


def _code_content(tok) -> str:
    content = tok.content or ""
    if content.endswith("\n"):
        content = content[:-1]
    return content


def _heading_depth(tok) -> int:
    tag = tok.tag or ""
    if tag.startswith("h") and tag[1:].isdigit():
        return int(tag[1:])
    return 0


def _item_text(inner: list) -> str:
    parts: list[str] = []
    for tok in inner:
        if tok.type == "inline":
            parts.append(tok.content or "")
        elif tok.type in _CODE:
            parts.append(_code_content(tok))
    return "\n".join(p for p in parts if p)


def _list_items(inner: list) -> tuple[str, ...]:
    items: list[str] = []
    i = 0
    while i < len(inner):
        if inner[i].type == "list_item_open":
            body, i = _parse_block(inner, i, "list_item_open", "list_item_close")
            items.append(_item_text(body))
            continue
        i += 1
    return tuple(items)


def tokenize(markdown: str) -> list[Token]:
    tokens = _get_markdown_parser().parse(markdown or "")
    out: list[Token] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        t = tok.type

        if t == "heading_open":
            out.append(Token("heading", text=_inline_content(tokens, i + 1), depth=_heading_depth(tok)))
            _, i = _parse_block(tokens, i, t, "heading_close")
            continue

        if t == "paragraph_open":
            out.append(Token("paragraph", text=_inline_content(tokens, i + 1)))
            _, i = _parse_block(tokens, i, t, "paragraph_close")
            continue

        if t in _CODE:
            out.append(Token("code", text=_code_content(tok)))
            i += 1
            continue

        if t in _LIST_OPEN:
            inner, i = _parse_block(tokens, i, t, t.replace("_open", "_close"))
            out.append(Token("list", items=_list_items(inner)))
            continue

        if t.endswith("_open"):
            _, i = _parse_block(tokens, i, t, t[: -len("_open")] + "_close")
            out.append(Token("other", source_type=t[: -len("_open")]))
            continue

        out.append(Token("other", source_type=t))
        i += 1
    return out
