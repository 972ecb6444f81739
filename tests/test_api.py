"""Tests for the HTTP surface (FastAPI TestClient)."""

import pytest
from fastapi.testclient import TestClient

from mdpdf import main
from mdpdf.preview import PreviewRegistry


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "previews", PreviewRegistry())
    return TestClient(main.app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["download_name"] == "converted.pdf"
    assert body["layout"]["margin"] == 50
    assert body["layout"]["heading_sizes"] == [24, 20, 18, 16, 14, 12]


def test_render_returns_pdf_attachment(client):
    resp = client.post("/render", json={"markdown": "# Hello **World**"})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == 'attachment; filename="converted.pdf"'
    assert resp.content.startswith(b"%PDF")


def test_render_custom_filename(client):
    resp = client.post("/render", json={"markdown": "text", "filename": "../notes"})
    assert resp.headers["content-disposition"] == 'attachment; filename="notes.pdf"'


def test_render_empty_input_is_rejected(client):
    resp = client.post("/render", json={"markdown": "   "})
    assert resp.status_code == 400


def test_render_unsupported_character(client):
    resp = client.post("/render", json={"markdown": "emoji 😀"})
    assert resp.status_code == 422
    assert "not supported" in resp.json()["detail"]


def test_preview_lifecycle(client):
    resp = client.post("/preview", json={"markdown": "# One"})
    assert resp.status_code == 200
    first = resp.json()
    assert first["page_count"] == 1
    assert first["byte_size"] > 0

    pdf = client.get(first["url"])
    assert pdf.status_code == 200
    assert pdf.content.startswith(b"%PDF")
    assert pdf.headers["content-disposition"].startswith("inline")

    second = client.post("/preview", json={"markdown": "# Two"}).json()
    assert second["handle"] != first["handle"]
    assert client.get(first["url"]).status_code == 404
    assert client.get(second["url"]).status_code == 200


def test_empty_preview_revokes_current_handle(client):
    handle = client.post("/preview", json={"markdown": "text", "slot": "editor"}).json()
    resp = client.post("/preview", json={"markdown": "", "slot": "editor"})
    assert resp.status_code == 204
    assert client.get(handle["url"]).status_code == 404


def test_delete_preview(client):
    handle = client.post("/preview", json={"markdown": "text"}).json()
    assert client.delete(handle["url"]).json() == {"ok": True}
    assert client.delete(handle["url"]).status_code == 404


def test_render_non_ascii_filename(client):
    resp = client.post("/render", json={"markdown": "text", "filename": "отчёт"})
    assert resp.status_code == 200
    assert resp.headers["content-disposition"] == (
        "attachment; filename=\"converted.pdf\"; "
        "filename*=UTF-8''%D0%BE%D1%82%D1%87%D1%91%D1%82.pdf"
    )
    assert resp.content.startswith(b"%PDF")


def test_render_filename_control_characters_are_stripped(client):
    resp = client.post("/render", json={"markdown": "text", "filename": "a\r\nSet-Cookie: x"})
    assert resp.status_code == 200
    assert resp.headers["content-disposition"] == 'attachment; filename="aSet-Cookie: x.pdf"'
