#!/usr/bin/env python3
# ============================================================
# stock_extractor/server/main.py — v1.0 (app factory)
# Run: uvicorn stock_extractor.server.main:app --reload
# ============================================================
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stock_extractor.server.routers import (
    health,  # /health
    screener,  # /screener/*
)
from stock_extractor.helpers.logger import enable_file_logging
from stock_extractor.settings import settings as SETTINGS


# ------------------------------------------------------------
# Application Factory
# ------------------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(title=f"{SETTINGS.APP['name']} API", version=SETTINGS.APP["version"])

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Routers ---
    app.include_router(health.router)
    app.include_router(screener.router)
    return app


# ------------------------------------------------------------
# Entrypoint
# ------------------------------------------------------------
app = create_app()


def serve() -> None:
    """stockx-serve: run the API with uvicorn on SETTINGS.SERVER host/port."""
    import uvicorn

    enable_file_logging()
    uvicorn.run(app, host=SETTINGS.SERVER["HOST"], port=SETTINGS.SERVER["PORT"])


if __name__ == "__main__":
    serve()
