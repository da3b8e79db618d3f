"""Integration tests for FastAPI endpoints (contract tests)."""

import dataclasses

import pytest
from httpx import AsyncClient, ASGITransport

import changes.main
from changes import __version__
from changes.main import app

CHANGES_TEXT = (
    "## 0.3.0 (2018-07-10)\n"
    "\n"
    "### Fixed\n"
    "\n"
    "-   Crash on empty input\n"
    "    (#12, @alice)\n"
    "\n"
    "## 0.2.0 (2018-06-01)\n"
    "\n"
    "- Initial release\n"
)


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
class TestHealthEndpoint:
    async def test_health_returns_ok(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__


@pytest.mark.asyncio
class TestParseEndpoint:
    async def test_parse_structure(self, client):
        resp = await client.post("/v1/parse", json={"text": CHANGES_TEXT})
        assert resp.status_code == 200
        data = resp.json()
        assert data["release_count"] == 2

        first = data["releases"][0]
        assert first["version"] == "0.3.0"
        assert first["header_format"] == {"kind": "atx", "level": 2, "trailing": None}
        assert first["date"]["kind"] == "full"
        assert first["date"]["month"] == "07"

        section = first["sections"][0]
        assert section["title"]["text"] == "Fixed"
        assert section["changes"] == [
            {"description": "Crash on empty input\n(#12, @alice)", "bullet_glyph": "-"},
        ]

    async def test_empty_text(self, client):
        resp = await client.post("/v1/parse", json={"text": ""})
        assert resp.status_code == 200
        assert resp.json() == {"releases": [], "release_count": 0}

    async def test_missing_text_returns_422(self, client):
        resp = await client.post("/v1/parse", json={})
        assert resp.status_code == 422

    async def test_parse_error_is_structured(self, client):
        resp = await client.post("/v1/parse", json={"text": "1.0.0:\n* one\n- two\n"})
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["error_code"] == "INCONSISTENT_BULLET"
        assert detail["message"] == "line 3, column 1: expected bullet '*', found '-'"
        assert detail["detail"]["line"] == 3
        assert "suggestion" in detail

    async def test_unrecognized_header(self, client):
        resp = await client.post("/v1/parse", json={"text": "Hello there\n"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["error_code"] == "UNRECOGNIZED_HEADER"

    async def test_oversized_input_returns_413(self, client, monkeypatch):
        small = dataclasses.replace(changes.main.settings, max_input_bytes=16)
        monkeypatch.setattr(changes.main, "settings", small)
        resp = await client.post("/v1/parse", json={"text": CHANGES_TEXT})
        assert resp.status_code == 413
        assert resp.json()["detail"]["error_code"] == "INPUT_TOO_LARGE"


@pytest.mark.asyncio
class TestRenderEndpoint:
    async def test_render_from_parse_output(self, client):
        parsed = (await client.post("/v1/parse", json={"text": CHANGES_TEXT})).json()
        resp = await client.post("/v1/render", json={"releases": parsed["releases"]})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == (
            "## 0.3.0 (2018-07-10)\n"
            "### Fixed\n"
            "- Crash on empty input\n"
            "  (#12, @alice)\n"
            "\n"
            "## 0.2.0 (2018-06-01)\n"
            "- Initial release\n"
        )

    async def test_render_minimal_release(self, client):
        resp = await client.post("/v1/render", json={"releases": [{"version": "1.0"}]})
        assert resp.status_code == 200
        assert resp.text == "## 1.0\n"

    async def test_render_empty(self, client):
        resp = await client.post("/v1/render", json={"releases": []})
        assert resp.status_code == 200
        assert resp.text == ""

    async def test_render_rejects_bad_release(self, client):
        resp = await client.post("/v1/render", json={
            "releases": [{"version": "1.0", "header_format": {"kind": "setext", "length": 1}}],
        })
        assert resp.status_code == 422


@pytest.mark.asyncio
class TestNormalizeEndpoint:
    async def test_normalize(self, client):
        resp = await client.post("/v1/normalize", json={"text": "0.1:\n\n*   a\n    b\n"})
        assert resp.status_code == 200
        assert resp.text == "0.1:\n* a\n  b\n"

    async def test_normalize_parse_error(self, client):
        resp = await client.post("/v1/normalize", json={"text": "## 1.0\n### Fixed\n"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["error_code"] == "UNEXPECTED_END_OF_INPUT"
