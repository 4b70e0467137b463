"""FastAPI application serving initials avatars as PNG."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from avatar_core.config import AvatarConfig, load_config
from avatar_core.errors import AvatarError, EmptyInputError
from avatar_core.logging_setup import get_logger, log_event
from avatar_renderer import AvatarCache, AvatarComposer

from .delivery import CACHE_MAX_AGE, avatar_response, etag_for

log = get_logger("server")


def create_app(
    composer: AvatarComposer | None = None,
    config: AvatarConfig | None = None,
    cache_size: int | None = None,
) -> FastAPI:
    app = FastAPI(title="Initials Avatar Service", version="0.1.0")
    app.state.composer = composer or AvatarComposer(cache=AvatarCache(max_entries=cache_size))
    app.state.config = config or load_config()

    @app.exception_handler(AvatarError)
    async def _avatar_error(request: Request, exc: AvatarError) -> JSONResponse:
        log_event(
            log,
            "avatar_failed",
            f"avatar render failed: {exc}",
            logging.ERROR,
            path=request.url.path,
            status=500,
        )
        return JSONResponse(status_code=500, content={"detail": str(exc), "error": type(exc).__name__})

    @app.get("/health")
    def health() -> dict:
        return {"ok": True, "cached": len(app.state.composer.cache)}

    @app.get("/avatar/{name}")
    def avatar(name: str, request: Request, fg: str | None = None, bg: str | None = None) -> Response:
        if name.lower().endswith(".png"):
            name = name[:-4]

        composer: AvatarComposer = app.state.composer
        token = composer.initials(name)
        if not token.strip():
            raise HTTPException(status_code=400, detail="name has no initials")

        # An unbounded cache never re-renders a token, so the token alone
        # identifies the bytes. A bounded one may, so its tags hash the image.
        bounded = composer.cache.max_entries is not None
        if_none_match = request.headers.get("if-none-match")
        if not bounded and if_none_match == etag_for(token):
            return _not_modified(token, etag_for(token))

        try:
            response = avatar_response(
                composer, name, app.state.config, font_color=fg, back_color=bg, content_etag=bounded
            )
        except EmptyInputError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        if bounded and if_none_match == response.headers["etag"]:
            return _not_modified(token, response.headers["etag"])
        return response

    return app


def _not_modified(token: str, etag: str) -> Response:
    log_event(log, "avatar_not_modified", "avatar not modified", token=token, status=304, etag=etag)
    return Response(status_code=304, headers={"Etag": etag, "Cache-Control": f"max-age={CACHE_MAX_AGE}"})
