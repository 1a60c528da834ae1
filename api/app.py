"""
Setlist reader HTTP API.

Usage:
    uvicorn api.app:app --reload

SETLIST_FILE picks the save file, SETLIST_LOG_LEVEL the log level (default INFO).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import log_level
from api.routes.navigation import router as navigation_router
from api.routes.setlists import router as setlists_router


def setup_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="Setlist Reader API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(setlists_router)
    app.include_router(navigation_router)

    @app.get("/healthz")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
