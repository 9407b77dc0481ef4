#!/usr/bin/env python3
# ============================================================
# stock_extractor/tests/test_yahoo_client.py — chart client via MockTransport
# ============================================================
from __future__ import annotations

import httpx

from stock_extractor.fetchers.yahoo_client import (
    YahooQuote,
    fetch_yahoo_data,
    format_volume,
    format_yahoo_data,
    yahoo_symbol,
)
from stock_extractor.settings.screener_map import NOT_APPLICABLE

CHART_OK = {
    "chart": {
        "result": [
            {
                "meta": {
                    "regularMarketDayHigh": 950.5,
                    "regularMarketDayLow": 930.25,
                    "regularMarketVolume": 2100000,
                    "averageDailyVolume10Day": 12500000,
                },
                "indicators": {"quote": [{}]},
            }
        ]
    }
}

SUMMARY_OK = {"quoteSummary": {"result": [{"financialData": {"debtToEquity": {"raw": 0.85}}}]}}


def _client(chart=None, chart_status=200, summary=None, summary_status=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(str(request.url))
        if "/v8/finance/chart/" in request.url.path:
            return httpx.Response(chart_status, json=chart if chart is not None else {})
        if "/quoteSummary/" in request.url.path:
            return httpx.Response(summary_status, json=summary if summary is not None else {})
        return httpx.Response(404)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_yahoo_symbol_suffix():
    assert yahoo_symbol("hdfcbank") == "HDFCBANK.NS"
    assert yahoo_symbol("tcs.ns") == "TCS.NS"


def test_fetch_success():
    seen = []
    with _client(CHART_OK, summary=SUMMARY_OK, seen=seen) as client:
        q = fetch_yahoo_data("hdfcbank", client)
    assert q.error is None
    assert q.symbol == "HDFCBANK.NS"
    assert (q.day_high, q.day_low) == (950.5, 930.25)
    assert q.volume == 2100000
    assert q.avg_volume_10d == 12500000
    assert q.debt_to_equity == 0.85
    assert any("HDFCBANK.NS" in u for u in seen)

    shown = format_yahoo_data(q)
    assert shown["Day High / Low"] == "₹950.50 / ₹930.25"
    assert shown["Volume (today)"] == "21.00 L"
    assert shown["10-day average volume"] == "1.25 Cr"
    assert shown["Debt to Equity"] == "0.85"


def test_fetch_falls_back_to_quote_arrays():
    chart = {
        "chart": {
            "result": [
                {
                    "meta": {},
                    "indicators": {"quote": [{"high": [None, 10, 12], "low": [9, None, 8], "volume": [100, 200, None]}]},
                }
            ]
        }
    }
    with _client(chart, summary_status=404) as client:
        q = fetch_yahoo_data("INFY", client)
    assert (q.day_high, q.day_low, q.volume) == (12.0, 8.0, 300.0)
    assert q.avg_volume_10d is None
    assert q.debt_to_equity is None
    assert q.error is None


def test_http_error_is_captured():
    with _client(chart_status=500) as client:
        q = fetch_yahoo_data("HDFCBANK", client)
    assert q.error == "Yahoo API error: 500"
    assert (q.day_high, q.day_low, q.volume, q.avg_volume_10d, q.debt_to_equity) == (None,) * 5
    assert set(format_yahoo_data(q).values()) == {NOT_APPLICABLE}


def test_empty_result_is_captured():
    with _client({"chart": {"result": []}}) as client:
        q = fetch_yahoo_data("HDFCBANK", client)
    assert q.error == "No data returned from Yahoo Finance"


def test_transport_error_is_captured():
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(boom)) as client:
        q = fetch_yahoo_data("HDFCBANK", client)
    assert "connection refused" in q.error


def test_format_volume_thresholds():
    assert format_volume(None) is None
    assert format_volume(999) == "999"
    assert format_volume(1_000) == "1.00 K"
    assert format_volume(100_000) == "1.00 L"
    assert format_volume(10_000_000) == "1.00 Cr"


def test_format_partial_quote():
    shown = format_yahoo_data(YahooQuote(day_high=950.5, volume=1500))
    assert shown["Day High / Low"] is None
    assert shown["Volume (today)"] == "1.50 K"
    assert shown["Debt to Equity"] is None


def run_all():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("✅ test_yahoo_client: passed")


if __name__ == "__main__":
    run_all()
