"""
FastAPI app entry point aggregating the routers under activities_api/routes.
Keep as `uvicorn activities_api.api:app`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import read_config_yaml, get_log_level
from .db import ensure_schema
from .logs import setup_logging
from .services.activity_store import ActivityStore, SqliteActivityStore

logger = logging.getLogger(__name__)

RESOURCE_NOT_FOUND = "Unable to find the requested resource! Try another URL."

# detail strings Starlette uses when no route matches
_ROUTING_DETAILS = {"Not Found", "Method Not Allowed"}


def create_app(store: ActivityStore | None = None) -> FastAPI:
    app = FastAPI(
        title="Activities API",
        description="Create, list, search, update and delete activities.",
        version=__version__,
        docs_url="/api-docs",
        redoc_url=None,
    )
    app.state.store = store if store is not None else SqliteActivityStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=read_config_yaml()["cors_origins"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def on_startup():
        setup_logging(get_log_level())
        if isinstance(app.state.store, SqliteActivityStore):
            ensure_schema(app.state.store.db_path)
        logger.info("activities api started, docs at /api-docs")

    @app.exception_handler(StarletteHTTPException)
    async def on_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405) and isinstance(exc.detail, str) and exc.detail in _ROUTING_DETAILS:
            return JSONResponse(status_code=404, content={"detail": RESOURCE_NOT_FOUND})
        return await http_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def on_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    # Include routers
    from .routes import base as base_routes
    from .routes import activities as activities_routes

    app.include_router(base_routes.router)
    app.include_router(activities_routes.router)
    return app


app = create_app()
