#!/usr/bin/env python3
# ============================================================
# stock_extractor/fetchers/nse_client.py — v1.3
# Cookie-gated NSE session (warm-up + retrying JSON fetch)
# ============================================================
"""NSE only answers API calls from a session that has first loaded the
homepage (it sets the bot-protection cookies there). `NseClient` owns one
`requests.Session`, warms it once, and turns every failure into an
`NseError` carrying status, url and a one-line reason.
"""

from __future__ import annotations

import re
import threading
import time
from typing import Any, Callable, Optional

import requests

from stock_extractor.helpers.logger import log
from stock_extractor.settings import settings as SETTINGS

_nse_api = SETTINGS.EXTERNAL_APIS["NSE"]
_nse_fetch = SETTINGS.fetch_cfg("NSE")

NSE_HOME: str = _nse_api["BASE_URL"]

BROWSER_HEADERS = {
    "User-Agent": _nse_fetch["USER_AGENT"],
    "Accept": "application/json,text/plain,*/*",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Referer": f"{NSE_HOME}/",
    "Connection": "keep-alive",
    "sec-ch-ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"Windows"',
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-origin",
}

# Homepage load must look like a top-level navigation
NAVIGATION_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "sec-fetch-dest": "document",
    "sec-fetch-mode": "navigate",
    "sec-fetch-site": "none",
    "sec-fetch-user": "?1",
    "Upgrade-Insecure-Requests": "1",
}

REASON_MAX_CHARS = 100


class NseError(Exception):
    """Raised when an NSE request fails; carries status, url and reason."""

    def __init__(self, status: Optional[int], url: str, reason: str):
        self.status = status
        self.url = url
        self.reason = reason
        super().__init__(f"Request failed | status={status} | reason={reason}")


# ============================================================
# Error reason extraction
# ============================================================
_SCRIPT = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_WS = re.compile(r"\s+")


def strip_html(html: str) -> str:
    text = _SCRIPT.sub(" ", str(html))
    text = _STYLE.sub(" ", text)
    text = _TAG.sub(" ", text)
    return _WS.sub(" ", text).strip()


def reason_from_body(body: Any) -> str:
    """One readable line for an error body (HTML page, JSON or nothing)."""
    if body is None:
        return "No response"

    if isinstance(body, str):
        text = strip_html(body)
        if not text:
            return "Empty response"
        if re.search(r"resource not found", text, re.IGNORECASE):
            return "Resource not found"
        return text[:REASON_MAX_CHARS]

    if isinstance(body, dict):
        keys = list(body.keys())[:5]
        return f"JSON: {', '.join(keys)}" if keys else "Empty JSON"

    return str(body)[:REASON_MAX_CHARS]


def _response_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


# ============================================================
# Client
# ============================================================
class NseClient:
    """Thread-safe NSE session with idempotent warm-up and retries."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        warmup_delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(BROWSER_HEADERS)
        self.timeout = timeout if timeout is not None else _nse_fetch["REQUEST_TIMEOUT"]
        self.retries = max(1, retries if retries is not None else _nse_fetch["MAX_RETRIES"])
        self.backoff = backoff if backoff is not None else _nse_fetch["RETRY_SLEEP_BASE"]
        self.warmup_delay = warmup_delay if warmup_delay is not None else _nse_fetch["WARMUP_DELAY"]
        self._sleep = sleep
        self._warm = False
        self._lock = threading.Lock()

    @property
    def is_warm(self) -> bool:
        return self._warm

    def warm_session(self) -> None:
        """Load the homepage once to collect session cookies."""
        with self._lock:
            if self._warm:
                return
            try:
                resp = self.session.get(NSE_HOME, headers=NAVIGATION_HEADERS, timeout=self.timeout)
            except requests.RequestException as e:
                raise NseError(None, NSE_HOME, str(e)) from e
            if not resp.ok:
                raise NseError(resp.status_code, NSE_HOME, reason_from_body(_response_body(resp)))

            # cookies settle server-side before the API accepts them
            self._sleep(self.warmup_delay)
            self._warm = True
            log.info("[NSE] session warmed")

    def reset_session(self) -> None:
        self._warm = False

    def fetch_json(self, url: str) -> Any:
        """GET `url` as JSON; 4xx raise at once, 5xx/transport errors retry."""
        self.warm_session()

        last: Optional[NseError] = None
        for attempt in range(self.retries):
            if attempt > 0:
                self._sleep(self.backoff * (2 ** (attempt - 1)))
            try:
                resp = self.session.get(url, timeout=self.timeout)
            except requests.RequestException as e:
                last = NseError(None, url, str(e))
                log.warning(f"[NSE] request error on attempt {attempt + 1}/{self.retries}: {e}")
                continue

            if resp.ok:
                try:
                    return resp.json()
                except ValueError as e:
                    raise NseError(resp.status_code, url, "Invalid JSON") from e

            err = NseError(resp.status_code, url, reason_from_body(_response_body(resp)))
            if 400 <= resp.status_code < 500:
                raise err
            last = err
            log.warning(f"[NSE] HTTP {resp.status_code} on attempt {attempt + 1}/{self.retries}: {url}")

        assert last is not None
        raise last


_DEFAULT: Optional[NseClient] = None
_DEFAULT_LOCK = threading.Lock()


def get_client() -> NseClient:
    """Process-wide client so every fetch shares one warmed session."""
    global _DEFAULT
    with _DEFAULT_LOCK:
        if _DEFAULT is None:
            _DEFAULT = NseClient()
        return _DEFAULT
