from __future__ import annotations

import contextlib
import re
from pathlib import Path
from typing import Any, Iterator
from urllib.parse import quote

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from .assembler import render_markdown
from .config import DEFAULT_LAYOUT, DOWNLOAD_NAME
from .logging_utils import get_logger
from .preview import PreviewRegistry
from .schemas import (
    HealthResponse,
    LayoutSummary,
    OkResponse,
    PreviewRequest,
    PreviewResponse,
    RenderRequest,
)
from .writer import PdfWriterError

log = get_logger(__name__)

app = FastAPI(title="mdpdf-backend")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

previews = PreviewRegistry()

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def _download_name(raw: str | None) -> str:
    name = _CONTROL_CHARS_RE.sub("", str(raw or ""))
    name = Path(name.replace("\\", "/").strip()).name.replace('"', "")
    if not name:
        return DOWNLOAD_NAME
    if not name.lower().endswith(".pdf"):
        name = f"{name}.pdf"
    return name


def _content_disposition(filename: str, kind: str = "attachment") -> str:
    if filename.isascii():
        return f'{kind}; filename="{filename}"'
    # Header values go out as latin-1; keep an ASCII fallback next to the UTF-8 form.
    fallback = filename.encode("ascii", "ignore").decode().strip()
    if fallback.lower() in ("", ".pdf"):
        fallback = DOWNLOAD_NAME
    return f"{kind}; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@contextlib.contextmanager
def _writer_errors() -> Iterator[None]:
    try:
        yield
    except PdfWriterError as e:
        log.warning("Render failed: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    layout = DEFAULT_LAYOUT
    return HealthResponse(
        status="ok",
        download_name=DOWNLOAD_NAME,
        live_previews=len(previews),
        layout=LayoutSummary(
            page_format=layout.page_format,
            margin=layout.margin,
            line_height_multiplier=layout.line_height_multiplier,
            paragraph_spacing=layout.paragraph_spacing,
            heading_sizes=list(layout.heading_sizes),
            normal_size=layout.normal_size,
            code_size=layout.code_size,
        ),
    )


@app.post("/render")
def render_pdf(req: RenderRequest) -> Response:
    with _writer_errors():
        document = render_markdown(req.markdown)
        if document is None:
            raise HTTPException(status_code=400, detail="Markdown input is empty")
        data = document.to_bytes()
    filename = _download_name(req.filename)
    return Response(
        content=data,
        media_type="application/pdf",
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@app.post("/preview", response_model=PreviewResponse)
def create_preview(req: PreviewRequest) -> Any:
    with _writer_errors():
        document = render_markdown(req.markdown)
        if document is None:
            previews.revoke_slot(req.slot)
            return Response(status_code=204)
        handle = document.to_preview_handle(previews, slot=req.slot)
    return PreviewResponse(
        handle=handle.handle_id,
        url=handle.url,
        slot=handle.slot,
        page_count=handle.page_count,
        byte_size=handle.byte_size,
        created_at=handle.created_at,
    )


@app.get("/preview/{handle_id}")
def get_preview(handle_id: str) -> Response:
    try:
        handle = previews.get(handle_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail="Preview not found") from e
    return Response(
        content=handle.data,
        media_type="application/pdf",
        headers={"Content-Disposition": _content_disposition("preview.pdf", "inline")},
    )


@app.delete("/preview/{handle_id}", response_model=OkResponse)
def delete_preview(handle_id: str) -> OkResponse:
    if not previews.revoke(handle_id):
        raise HTTPException(status_code=404, detail="Preview not found")
    return OkResponse()
