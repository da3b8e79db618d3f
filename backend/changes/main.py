"""
changes — FastAPI service

Endpoints:
  POST /v1/parse      — Changelog text → structured releases (JSON)
  POST /v1/render     — Structured releases → changelog text
  POST /v1/normalize  — Changelog text → re-rendered changelog text
  GET  /health        — Health check
"""

import time
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from changes import __version__
from changes.core.config import settings
from changes.errors import ChangesError, InputTooLargeError
from changes.models import Changelog, Release
from changes.parser import parse
from changes.render import render
from changes.utils.logging import logger


app = FastAPI(
    title="changes API",
    description="Parse free-form CHANGES / CHANGELOG files and render them back to text.",
    version=__version__,
    debug=settings.server.debug,
)


@app.on_event("startup")
async def _startup_banner():
    logger.info("")
    logger.info("╔══════════════════════════════════════════════════╗")
    logger.info("║             changes  ·  API Server               ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  POST /v1/parse      → Text → releases JSON      ║")
    logger.info("║  POST /v1/render     → Releases JSON → text      ║")
    logger.info("║  POST /v1/normalize  → Text → text               ║")
    logger.info("║  GET  /health        → Health check              ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  Max input : %-36s║", f"{settings.max_input_bytes} bytes")
    logger.info("╚══════════════════════════════════════════════════╝")
    logger.info("")


# ──────────────────────────────────────────────────────────
# Request/Response models
# ──────────────────────────────────────────────────────────

class TextRequest(BaseModel):
    text: str = Field(..., description="Full contents of a CHANGES / CHANGELOG file")


class RenderRequest(BaseModel):
    releases: list[Release] = Field(
        default_factory=list, description="Releases as returned by /v1/parse"
    )


class ParseResponse(BaseModel):
    releases: list[Release]
    release_count: int


def _check_size(text: str) -> None:
    size = len(text.encode("utf-8"))
    if size > settings.max_input_bytes:
        raise HTTPException(
            status_code=413,
            detail=InputTooLargeError(size, settings.max_input_bytes).to_dict(),
        )


def _parse_or_422(text: str, request_id: str) -> Changelog:
    try:
        return parse(text)
    except ChangesError as exc:
        logger.warning("[%s] changes error: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "changes-api", "version": __version__}


@app.post("/v1/parse", response_model=ParseResponse)
async def parse_changelog(req: TextRequest):
    """
    Parse changelog text into releases, sections and changes.

    The formatting choices seen in the input (header style, bullets,
    date layout) are part of the returned structure so /v1/render can
    reproduce them.
    """
    request_id = uuid.uuid4().hex[:12]
    logger.info("[%s] POST /v1/parse — %d chars", request_id, len(req.text))
    _check_size(req.text)

    start = time.perf_counter()
    changelog = _parse_or_422(req.text, request_id)
    logger.info(
        "[%s] Complete — %d releases in %.0f ms",
        request_id, len(changelog), (time.perf_counter() - start) * 1000,
    )
    return ParseResponse(releases=list(changelog.releases), release_count=len(changelog))


@app.post("/v1/render", response_class=PlainTextResponse)
async def render_changelog(req: RenderRequest):
    """Render structured releases back to changelog text."""
    request_id = uuid.uuid4().hex[:12]
    logger.info("[%s] POST /v1/render — %d releases", request_id, len(req.releases))
    return PlainTextResponse(render(Changelog(releases=tuple(req.releases))))


@app.post("/v1/normalize", response_class=PlainTextResponse)
async def normalize_changelog(req: TextRequest):
    """Parse then re-render, returning the canonical layout of the input."""
    request_id = uuid.uuid4().hex[:12]
    logger.info("[%s] POST /v1/normalize — %d chars", request_id, len(req.text))
    _check_size(req.text)
    changelog = _parse_or_422(req.text, request_id)
    return PlainTextResponse(render(changelog))
