from __future__ import annotations

from pydantic import BaseModel, Field

from .config import MAX_INPUT_CHARS


class RenderRequest(BaseModel):
    markdown: str = Field(max_length=MAX_INPUT_CHARS)
    filename: str | None = Field(default=None, max_length=200)


class PreviewRequest(BaseModel):
    markdown: str = Field(max_length=MAX_INPUT_CHARS)
    slot: str = Field(default="default", min_length=1, max_length=64)


class PreviewResponse(BaseModel):
    handle: str
    url: str
    slot: str
    page_count: int
    byte_size: int
    created_at: str


class LayoutSummary(BaseModel):
    page_format: str
    margin: float
    line_height_multiplier: float
    paragraph_spacing: float
    heading_sizes: list[float]
    normal_size: float
    code_size: float


class HealthResponse(BaseModel):
    status: str
    download_name: str
    live_previews: int
    layout: LayoutSummary


class OkResponse(BaseModel):
    ok: bool = True
