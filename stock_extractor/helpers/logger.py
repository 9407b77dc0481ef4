#!/usr/bin/env python3
# ============================================================
# stock_extractor/helpers/logger.py — v1.2
# ------------------------------------------------------------
# "StockExtractor" logger: Rich console on stderr at import,
# JSONL rotating file only once an entrypoint asks for it
# (parsing text never touches the disk).
# ============================================================
from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from stock_extractor.settings import settings as SETTINGS

_cfg = SETTINGS.LOGGING

LEVEL = getattr(logging, str(_cfg.get("LEVEL", "INFO")).upper(), logging.INFO)


def _console_enabled() -> bool:
    # explicit env wins; else settings, quiet under pytest
    env = os.getenv("STOCKX_LOG_CONSOLE")
    if env is not None:
        return env != "0"
    return bool(_cfg.get("CONSOLE_ENABLED", True)) and not os.getenv("PYTEST_CURRENT_TEST")


def _console_level() -> int:
    name = _cfg.get("CONSOLE_LEVEL") or os.getenv("STOCKX_LOG_CONSOLE_LEVEL") or ""
    return getattr(logging, name.upper(), LEVEL)


class JSONLFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, module, message, pid, env."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "timestamp": datetime.fromtimestamp(record.created).isoformat(timespec="seconds"),
                "level": record.levelname,
                "module": record.name,
                "message": record.getMessage(),
                "pid": os.getpid(),
                "env": SETTINGS.get_env(),
            },
            ensure_ascii=False,
        )


# stderr so --json output on stdout stays clean
console = Console(stderr=True)

log = logging.getLogger("StockExtractor")
log.setLevel(LEVEL)
log.propagate = False
if _console_enabled() and not any(isinstance(h, RichHandler) for h in log.handlers):
    _rich = RichHandler(
        console=console,
        markup=False,
        rich_tracebacks=True,
        show_path=False,
        log_time_format="%H:%M:%S",
    )
    _rich.setLevel(_console_level())
    log.addHandler(_rich)

_file_handler: Optional[RotatingFileHandler] = None
_file_lock = threading.Lock()


def resolve_log_path() -> Path:
    """STOCKX_LOG_FILE if set, else the CORE stream under PATHS["LOGS"]."""
    env_path = os.getenv("STOCKX_LOG_FILE")
    if env_path:
        p = Path(env_path).expanduser()
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    return SETTINGS.log_file("CORE")


def enable_file_logging(path: Optional[Path] = None) -> RotatingFileHandler:
    """Attach the JSONL file handler once; later calls return the same handler."""
    global _file_handler
    with _file_lock:
        if _file_handler is None:
            target = Path(path) if path is not None else resolve_log_path()
            target.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                target,
                maxBytes=int(_cfg.get("MAX_SIZE_MB", 10)) * 1024 * 1024,
                backupCount=int(_cfg.get("BACKUP_COUNT", 3)),
                encoding="utf-8",
            )
            handler.setFormatter(JSONLFormatter())
            log.addHandler(handler)
            _file_handler = handler
        return _file_handler
