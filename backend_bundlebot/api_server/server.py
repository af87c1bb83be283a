"""
FastAPI server — signing-page endpoint.

Serves the two static Phantom pages and the JSON endpoints the send page
uses: fetch a session's bundle by id, and post back the wallet's transaction
signatures. No authentication beyond knowing the session id from the link.
The session table is the AppContext's, shared with the Discord bot.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field, ValidationError

from backend_bundlebot import __version__
from backend_bundlebot.bundlebot_logging import get_logger
from backend_bundlebot.context import AppContext
from backend_bundlebot.core.exceptions import InvalidSession, SessionNotFound

logger = get_logger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"
ASSETS_DIR = PUBLIC_DIR / "assets"


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------


class SignedRequest(BaseModel):
    """POST /phantom/send/signed body. Session membership is checked by the registry."""

    session: str | None = Field(None, description="Session id from the signing link")
    signatures: Any = Field(None, description="Transaction signatures, one per transfer")


class SignedResponse(BaseModel):
    success: bool = True


# -----------------------------------------------------------------------------
# Dependency
# -----------------------------------------------------------------------------


def get_context(request: Request) -> AppContext:
    """Dependency: the process-wide AppContext attached in create_app."""
    return request.app.state.ctx


def _page(name: str) -> FileResponse | PlainTextResponse:
    path = PUBLIC_DIR / name
    if not path.is_file():
        logger.error("static_page_missing", page=name, path=str(path))
        return PlainTextResponse("Internal server error", status_code=500)
    return FileResponse(path, media_type="text/html")


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------


def create_app(ctx: AppContext) -> FastAPI:
    app = FastAPI(
        title="BundleBot signing endpoint",
        description="Session lookup and signature callback for the Phantom signing page.",
        version=__version__,
    )
    app.state.ctx = ctx
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.mount("/assets", StaticFiles(directory=ASSETS_DIR, check_dir=False), name="assets")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response

    @app.get("/phantom/connect")
    def phantom_connect():
        return _page("connect.html")

    @app.get("/phantom/send")
    def phantom_send():
        return _page("send.html")

    @app.get("/phantom/send/session")
    def get_send_session(
        session: str | None = Query(None, description="Session id"),
        ctx: AppContext = Depends(get_context),
    ) -> JSONResponse:
        """Return the stored session ({"bundle": [...], "signatures"?: [...]}) or 404."""
        try:
            stored = ctx.sessions.get_session(session)
        except SessionNotFound:
            logger.warning("session_not_found", session_id=session)
            return JSONResponse(status_code=404, content={"error": "Session not found"})
        return JSONResponse(content=stored)

    @app.post("/phantom/send/signed", response_model=SignedResponse)
    async def post_signed(request: Request, ctx: AppContext = Depends(get_context)) -> JSONResponse:
        """
        Attach signatures to a session.

        The body is validated here rather than by FastAPI so that every malformed
        shape (invalid JSON, non-object body, non-string session, non-list
        signatures, unknown id) answers the same 400 the signing page expects.
        """
        raw = await request.body()
        try:
            body = SignedRequest.model_validate_json(raw or b"null")
            ctx.sessions.attach_signatures(body.session, body.signatures)
        except (ValidationError, InvalidSession) as e:
            logger.warning(
                "invalid_session_or_signatures",
                reason=type(e).__name__,
                body_bytes=len(raw),
            )
            return JSONResponse(status_code=400, content={"error": "Invalid session or signatures"})
        return JSONResponse(content=SignedResponse().model_dump())

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness check: API is up."""
        return {"status": "ok"}

    return app
