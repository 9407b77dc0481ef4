#!/usr/bin/env python3
# ============================================================
# stock_extractor/fetchers/nse_data.py — v1.1
# NSE endpoint fetchers + response normalizers
# ============================================================
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from stock_extractor.fetchers.nse_client import NseClient, NseError, get_client
from stock_extractor.helpers.common import pick
from stock_extractor.helpers.logger import log
from stock_extractor.settings import settings as SETTINGS

# Market cap sanity band for price × issued size (rupees)
MCAP_MIN = 1e9
MCAP_MAX = 1e15


def _sym(symbol: str) -> str:
    return quote(symbol.strip().upper(), safe="")


def _client(client: Optional[NseClient]) -> NseClient:
    return client if client is not None else get_client()


# ============================================================
# Fetchers
# ============================================================
def fetch_quote_equity(symbol: str, client: Optional[NseClient] = None) -> Any:
    """Quote: price, P/E, market cap, face value."""
    return _client(client).fetch_json(SETTINGS.nse_url("QUOTE_EQUITY", symbol=_sym(symbol)))


def fetch_quote_equity_section(symbol: str, section: str, client: Optional[NseClient] = None) -> Any:
    """Quote sub-section, e.g. 'trade_info' for volume and delivery %."""
    url = SETTINGS.nse_url("QUOTE_SECTION", symbol=_sym(symbol), section=quote(section, safe=""))
    return _client(client).fetch_json(url)


def fetch_corporate_actions(symbol: str, client: Optional[NseClient] = None) -> Any:
    return _client(client).fetch_json(SETTINGS.nse_url("CORPORATE_ACTIONS", symbol=_sym(symbol)))


def fetch_announcements(symbol: str, client: Optional[NseClient] = None) -> Any:
    return _client(client).fetch_json(SETTINGS.nse_url("ANNOUNCEMENTS", symbol=_sym(symbol)))


def is_4xx_error(err: Exception) -> bool:
    status = str(getattr(err, "status", "") or "")
    return status.startswith("4") or "status=404" in str(err)


def fetch_shareholding_best_effort(symbol: str, client: Optional[NseClient] = None) -> Any:
    """Try each known shareholding endpoint; NSE moves these around often."""
    c = _client(client)
    api_root = SETTINGS.EXTERNAL_APIS["NSE"]["API_ROOT"]
    paths: List[str] = SETTINGS.EXTERNAL_APIS["NSE"]["SHAREHOLDING"]

    last: Optional[NseError] = None
    for path in paths:
        url = api_root + path.format(symbol=_sym(symbol))
        try:
            return c.fetch_json(url)
        except NseError as err:
            last = err
            if is_4xx_error(err):
                log.debug(f"[NSE] shareholding endpoint unavailable ({err.status}): {url}")
                continue
            raise

    raise last if last is not None else NseError(None, "", "Shareholding not available")


# ============================================================
# Normalizers
# ============================================================
def num(value: Any) -> Optional[float]:
    """Finite float from a number or a '1,234.5 %'-style string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        f = float(value)
        return f if math.isfinite(f) else None
    cleaned = str(value).replace(",", "").replace("%", "").replace(" ", "")
    if not cleaned:
        return None
    try:
        f = float(cleaned)
    except ValueError:
        return None
    return f if math.isfinite(f) else None


def _dig(obj: Any, *keys: str) -> Any:
    for k in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(k)
    return obj


def _market_cap(quote_resp: Any, cmp: Optional[float]) -> Optional[float]:
    direct = num(pick(
        _dig(quote_resp, "securityInfo", "marketCapitalisation"),
        _dig(quote_resp, "securityInfo", "marketCap"),
        _dig(quote_resp, "metadata", "marketCap"),
    ))
    if direct:
        return direct

    issued = num(pick(
        _dig(quote_resp, "securityInfo", "issuedSize"),
        _dig(quote_resp, "securityInfo", "issuedCapital"),
    ))
    if cmp and issued:
        computed = cmp * issued
        if MCAP_MIN < computed < MCAP_MAX:
            return computed
    return None


def normalize_quote_metrics(quote_resp: Any) -> Dict[str, Optional[float]]:
    cmp = num(pick(_dig(quote_resp, "priceInfo", "lastPrice"), _dig(quote_resp, "priceInfo", "close")))
    return {
        "cmp": cmp,
        "day_high": num(pick(
            _dig(quote_resp, "priceInfo", "intraDayHighLow", "max"),
            _dig(quote_resp, "priceInfo", "dayHigh"),
        )),
        "day_low": num(pick(
            _dig(quote_resp, "priceInfo", "intraDayHighLow", "min"),
            _dig(quote_resp, "priceInfo", "dayLow"),
        )),
        "week52_high": num(_dig(quote_resp, "priceInfo", "weekHighLow", "max")),
        "week52_low": num(_dig(quote_resp, "priceInfo", "weekHighLow", "min")),
        "market_cap": _market_cap(quote_resp, cmp),
        "pe_standalone": num(pick(_dig(quote_resp, "metadata", "pdSymbolPe"), _dig(quote_resp, "metadata", "pe"))),
        "face_value": num(pick(_dig(quote_resp, "securityInfo", "faceValue"), _dig(quote_resp, "metadata", "faceValue"))),
    }


def normalize_trade_info_metrics(resp: Any) -> Dict[str, Optional[float]]:
    trade_info = pick(_dig(resp, "marketDeptOrderBook", "tradeInfo"), _dig(resp, "tradeInfo"), resp)
    security_dp = _dig(resp, "securityWiseDP")
    return {
        "volume": num(pick(
            _dig(trade_info, "totalTradedVolume"),
            _dig(trade_info, "totalTradedQuantity"),
        )),
        "deliverable_pct": num(pick(
            _dig(security_dp, "deliveryToTradedQuantity"),
            _dig(security_dp, "deliveryPercentage"),
            _dig(trade_info, "deliveryToTradedQuantity"),
        )),
        "volatility": num(pick(
            _dig(resp, "metadata", "volatility"),
            _dig(trade_info, "volatility"),
        )),
    }


def _as_list(value: Any) -> Optional[list]:
    return value if isinstance(value, list) else None


def normalize_corporate_actions_latest(resp: Any) -> Any:
    items = _as_list(_dig(resp, "data")) or _as_list(resp) or []
    return items[0] if items else None


def normalize_announcements_headline(resp: Any) -> Optional[str]:
    items = _as_list(_dig(resp, "data")) or _as_list(_dig(resp, "rows")) or _as_list(resp) or []
    first = items[0] if items else None
    if not isinstance(first, dict):
        return None
    return pick(first.get("subject"), first.get("headline"), first.get("title"))
