#!/usr/bin/env python3
# ============================================================
# stock_extractor/settings/settings.py — v1.2
# (env-aware paths, NSE/Yahoo endpoints, fetch + logging knobs)
# ============================================================
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

# ============================================================
# 🧭 Environment
#   STOCKX_ENV controls dev/prod path roots (default: dev)
#   Values: "dev", "prod"
# ============================================================
_ENV = os.getenv("STOCKX_ENV", "dev").strip().lower()
if _ENV not in {"dev", "prod"}:
    _ENV = "dev"

def get_env() -> str:
    return _ENV

# ============================================================
# 📁 Paths (package-relative; log dir created on first use)
# ============================================================
_PKG_ROOT = Path(__file__).resolve().parents[1]

def _env_base(env: str) -> Path:
    override = os.getenv("STOCKX_HOME")
    if override:
        return Path(override).expanduser()
    env = (env or "dev").strip().lower()
    if env not in {"dev", "prod"}:
        env = "dev"
    return (
        _PKG_ROOT / "data" / "runtime"
        if env == "dev"
        else _PKG_ROOT / "data" / "runtime" / "prod"
    )

def _build_paths(env: str) -> Dict[str, Path]:
    base_runtime = _env_base(env)
    return {
        "ROOT": _PKG_ROOT,
        "RUNTIME": base_runtime,
        "LOGS": base_runtime / "logs",
    }

PATHS: Dict[str, Path] = _build_paths(get_env())

# ============================================================
# 🧩 App
# ============================================================
APP = {"name": "Stock Extractor", "version": "1.0.0", "env": get_env()}

# ============================================================
# 🌐 External APIs (HTTP endpoints)
# ============================================================
EXTERNAL_APIS = {
    "NSE": {
        "BASE_URL": "https://www.nseindia.com",
        "API_ROOT": "https://www.nseindia.com/api",
        "QUOTE_EQUITY": "/quote-equity?symbol={symbol}",
        "QUOTE_SECTION": "/quote-equity?symbol={symbol}&section={section}",
        "CORPORATE_ACTIONS": "/corporates-corporateActions?symbol={symbol}&index=equities",
        "ANNOUNCEMENTS": "/corporate-announcements?symbol={symbol}&index=equities",
        "SHAREHOLDING": [
            "/corporate-share-holdings?symbol={symbol}&series=EQ",
            "/shareholding-pattern?symbol={symbol}&series=EQ",
        ],
    },
    "YAHOO": {
        "CHART_URL": "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}?interval=1d&range=1d",
        "SUMMARY_URL": "https://query1.finance.yahoo.com/v10/finance/quoteSummary/{symbol}?modules=financialData",
        "SUFFIX": ".NS",
    },
    "SCREENER": {
        "BASE_URL": "https://www.screener.in",
        "COMPANY_PATH": "/company/{symbol}/",
    },
}

# ============================================================
# -------------------- FETCH knobs ---------------------------
# Read by:
#   • fetchers/nse_client.py  → NSE session + retry
#   • fetchers/yahoo_client.py → timeout
#   • cli/nse_cli.py → worker count
#   • parsers/screener_parser.py → section fan-out
# ============================================================
FETCH = {
    "NSE": {
        "REQUEST_TIMEOUT": 15,
        "MAX_RETRIES": 3,
        "RETRY_SLEEP_BASE": 1.5,
        "WARMUP_DELAY": 1.0,
        "MAX_WORKERS": 5,
        "USER_AGENT": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
    },
    "YAHOO": {
        "REQUEST_TIMEOUT": 10,
    },
    "SCREENER": {
        "PARALLEL_SECTIONS": False,
    },
}

# ============================================================
# 🖥️ HTTP API
# ============================================================
SERVER = {
    "HOST": os.getenv("STOCKX_HOST", "127.0.0.1"),
    "PORT": int(os.getenv("STOCKX_PORT", "8000")),
}

# ============================================================
# 🪵 Logging
# ============================================================
LOGGING = {
    "LEVEL": "INFO",
    "MAX_SIZE_MB": 10,
    "BACKUP_COUNT": 3,
    "CONSOLE_ENABLED": True,
    "FILES": {
        "CORE": "core_activity.log",
    },
}

# ============================================================
# 🔎 Access helpers
# ============================================================
def log_file(name: str) -> Path:
    """Return resolved path for a named log stream (e.g., 'CORE')."""
    fname = LOGGING.get("FILES", {}).get(name.upper(), f"{name.lower()}.log")
    PATHS["LOGS"].mkdir(parents=True, exist_ok=True)
    return PATHS["LOGS"] / fname

def nse_url(key: str, **params: Any) -> str:
    """Build an absolute NSE API url from an EXTERNAL_APIS template."""
    cfg = EXTERNAL_APIS["NSE"]
    return cfg["API_ROOT"] + cfg[key].format(**params)

def fetch_cfg(source: str) -> Dict[str, Any]:
    return FETCH.get(source.upper(), {})
