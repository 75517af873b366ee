from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from astrobiogen.clients.sources import iter_sources
from astrobiogen.net import Upstream, UpstreamError
from astrobiogen.routers import chat_router, genelab_router, groq_router, nasa_router, space_data_router, tavily_router
from astrobiogen.settings import Settings

load_dotenv()

# ------------------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger("astrobiogen.main")


# ------------------------------------------------------------------------------
# Error handlers: every error body is {"error": ...}
# ------------------------------------------------------------------------------
async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


async def _upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    # only reachable in mode=live; auto mode always falls back
    log.warning("live upstream failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"error": f"Upstream {exc.source} failed: {exc.message}"})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


# ------------------------------------------------------------------------------
# App factory
# ------------------------------------------------------------------------------
def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """Build the gateway. `transport` replaces the network (tests pass an httpx.MockTransport)."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Shared client; per-call timeouts come from the source registry
        http = httpx.AsyncClient(
            transport=transport,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        )
        app.state.http = http
        app.state.upstream = Upstream(http, settings)
        log.info("%s %s ready (keys: %s)", settings.app_title, settings.app_version, settings.key_status())
        try:
            yield
        finally:
            await http.aclose()

    app = FastAPI(title=settings.app_title, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings

    # CORS (default permissive; tighten with CORS_ALLOW_ORIGINS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Data-Source", "X-Degraded"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(UpstreamError, _upstream_error)
    app.add_exception_handler(Exception, _unhandled_error)

    for mod in (genelab_router, groq_router, tavily_router, space_data_router, chat_router, nasa_router):
        app.include_router(mod.router)

    # --------------------------------------------------------------------------
    # Health
    # --------------------------------------------------------------------------
    @app.get("/healthz")
    async def healthz():
        return {"ok": True, "version": settings.app_version}

    @app.get("/readyz")
    async def readyz(request: Request):
        upstream: Upstream = request.app.state.upstream
        return {
            "ok": True,
            "keys": settings.key_status(),
            "sources": [
                {"name": s.name, "timeout_s": s.timeout, "needs_key": s.required_key}
                for s in iter_sources(upstream.sources)
            ],
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return {"ok": True, "service": settings.app_title, "docs": "/docs", "api": "/api"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("astrobiogen.main:app", host="0.0.0.0", port=Settings.from_env().port)
