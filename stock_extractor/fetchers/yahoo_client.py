#!/usr/bin/env python3
# ============================================================
# stock_extractor/fetchers/yahoo_client.py — v1.1
# Yahoo Finance chart client (day range, volume, D/E)
# ------------------------------------------------------------
# Only the four live data points a pasted Screener page lacks:
#   day high/low, today's volume, 10-day avg volume, debt/equity
# fetch_yahoo_data never raises; failures land in `.error`.
# ============================================================
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from stock_extractor.helpers.logger import log
from stock_extractor.settings import settings as SETTINGS
from stock_extractor.settings.screener_map import NOT_APPLICABLE, RUPEE

_yahoo_api = SETTINGS.EXTERNAL_APIS["YAHOO"]
_yahoo_fetch = SETTINGS.fetch_cfg("YAHOO")

SOURCE = "Yahoo Finance"

# Display keys match the live rows in CLI_DISPLAY_GROUPS so the CLI / API
# can overlay them on the "N/A (live data)" markers.
DAY_RANGE_LABEL = "Day High / Low"
VOLUME_LABEL = "Volume (today)"
AVG_VOLUME_LABEL = "10-day average volume"
DEBT_EQUITY_LABEL = "Debt to Equity"


class YahooError(Exception):
    """Raised inside the client when the chart endpoint is unusable."""


@dataclass(frozen=True)
class YahooQuote:
    day_high: Optional[float] = None
    day_low: Optional[float] = None
    volume: Optional[float] = None
    avg_volume_10d: Optional[float] = None
    debt_to_equity: Optional[float] = None
    source: str = SOURCE
    symbol: Optional[str] = None
    error: Optional[str] = None


def yahoo_symbol(symbol: str) -> str:
    s = symbol.strip().upper()
    suffix = _yahoo_api["SUFFIX"]
    return s if s.endswith(suffix) else f"{s}{suffix}"


def _clean(values: Any) -> List[float]:
    if not isinstance(values, list):
        return []
    return [float(v) for v in values if isinstance(v, (int, float)) and not isinstance(v, bool)]


def _first_truthy(*values: Any) -> Any:
    # Yahoo reports 0 for "no data" in meta, so zero falls through
    for v in values:
        if v:
            return v
    return None


def _chart_result(client: httpx.Client, ysym: str) -> Dict[str, Any]:
    resp = client.get(_yahoo_api["CHART_URL"].format(symbol=ysym))
    if resp.status_code != 200:
        raise YahooError(f"Yahoo API error: {resp.status_code}")
    try:
        payload = resp.json()
    except ValueError as e:
        raise YahooError("Yahoo API returned invalid JSON") from e

    results = ((payload or {}).get("chart") or {}).get("result") or []
    if not results or not isinstance(results[0], dict):
        raise YahooError("No data returned from Yahoo Finance")
    return results[0]


def _debt_to_equity(client: httpx.Client, ysym: str) -> Optional[float]:
    """quoteSummary financialData; optional, so failures only warn."""
    try:
        resp = client.get(_yahoo_api["SUMMARY_URL"].format(symbol=ysym))
        if resp.status_code != 200:
            return None
        results = ((resp.json() or {}).get("quoteSummary") or {}).get("result") or []
        if not results:
            return None
        raw = ((results[0].get("financialData") or {}).get("debtToEquity") or {}).get("raw")
        return float(raw) if raw else None
    except (httpx.HTTPError, ValueError, AttributeError, TypeError) as e:
        log.warning(f"[Yahoo] could not fetch debt to equity for {ysym}: {e}")
        return None


def fetch_yahoo_data(symbol: str, client: Optional[httpx.Client] = None) -> YahooQuote:
    ysym = yahoo_symbol(symbol)
    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=_yahoo_fetch.get("REQUEST_TIMEOUT", 10), follow_redirects=True)

    try:
        result = _chart_result(client, ysym)
        meta = result.get("meta") or {}
        quotes = (result.get("indicators") or {}).get("quote") or [{}]
        quote = quotes[0] if isinstance(quotes[0], dict) else {}

        highs = _clean(quote.get("high"))
        lows = _clean(quote.get("low"))
        volumes = _clean(quote.get("volume"))

        return YahooQuote(
            day_high=_first_truthy(meta.get("regularMarketDayHigh"), max(highs) if highs else None),
            day_low=_first_truthy(meta.get("regularMarketDayLow"), min(lows) if lows else None),
            volume=_first_truthy(meta.get("regularMarketVolume"), sum(volumes) if volumes else None),
            avg_volume_10d=_first_truthy(meta.get("averageDailyVolume10Day")),
            debt_to_equity=_debt_to_equity(client, ysym),
            symbol=ysym,
        )
    except (YahooError, httpx.HTTPError) as e:
        log.error(f"[Yahoo] fetch failed for {ysym}: {e}")
        return YahooQuote(error=str(e) or type(e).__name__)
    finally:
        if own_client:
            client.close()


# ============================================================
# Display helpers
# ============================================================
def format_volume(volume: Optional[float]) -> Optional[str]:
    """Indian units: 2_100_000 → '21.00 L', 12_500_000 → '1.25 Cr'."""
    if volume is None:
        return None
    if volume >= 10_000_000:
        return f"{volume / 10_000_000:.2f} Cr"
    if volume >= 100_000:
        return f"{volume / 100_000:.2f} L"
    if volume >= 1_000:
        return f"{volume / 1_000:.2f} K"
    return str(int(volume)) if float(volume).is_integer() else str(volume)


def format_yahoo_data(data: YahooQuote) -> Dict[str, Optional[str]]:
    if data.error:
        return {
            DAY_RANGE_LABEL: NOT_APPLICABLE,
            VOLUME_LABEL: NOT_APPLICABLE,
            AVG_VOLUME_LABEL: NOT_APPLICABLE,
            DEBT_EQUITY_LABEL: NOT_APPLICABLE,
        }

    day_range = None
    if data.day_high and data.day_low:
        day_range = f"{RUPEE}{data.day_high:.2f} / {RUPEE}{data.day_low:.2f}"

    return {
        DAY_RANGE_LABEL: day_range,
        VOLUME_LABEL: format_volume(data.volume),
        AVG_VOLUME_LABEL: format_volume(data.avg_volume_10d),
        DEBT_EQUITY_LABEL: f"{data.debt_to_equity:.2f}" if data.debt_to_equity is not None else None,
    }
