# stock_extractor/server/routers/health.py — v1.0
from __future__ import annotations

from fastapi import APIRouter

from stock_extractor.settings import settings as SETTINGS

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health():
    return {"ok": True, "version": SETTINGS.APP["version"], "env": SETTINGS.get_env()}
