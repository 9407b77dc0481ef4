#!/usr/bin/env python3
# ============================================================
# stock_extractor/tests/test_nse_data.py — NSE fetchers + normalizers
# ============================================================
from __future__ import annotations

from stock_extractor.fetchers import nse_data
from stock_extractor.fetchers.nse_client import NseError
from stock_extractor.tests.fakes import FakeNseClient

QUOTE = {
    "info": {"symbol": "HDFCBANK"},
    "priceInfo": {
        "lastPrice": 937.5,
        "intraDayHighLow": {"min": 930.25, "max": 950.5},
        "weekHighLow": {"min": 812, "max": 1020},
    },
    "metadata": {"pdSymbolPe": "20.3"},
    "securityInfo": {"faceValue": 1, "issuedSize": 7600000000},
}


def test_num():
    assert nse_data.num("1,234.5") == 1234.5
    assert nse_data.num("12 %") == 12.0
    assert nse_data.num(7) == 7.0
    for bad in (None, "", "abc", True, float("inf"), float("nan")):
        assert nse_data.num(bad) is None, bad


def test_normalize_quote_metrics():
    m = nse_data.normalize_quote_metrics(QUOTE)
    assert m["cmp"] == 937.5
    assert m["day_high"] == 950.5
    assert m["day_low"] == 930.25
    assert m["week52_high"] == 1020.0
    assert m["week52_low"] == 812.0
    assert m["pe_standalone"] == 20.3
    assert m["face_value"] == 1.0
    assert m["market_cap"] == 937.5 * 7600000000


def test_market_cap_prefers_direct_and_bounds_fallback():
    direct = dict(QUOTE, securityInfo={"marketCapitalisation": "1,000", "issuedSize": 7600000000})
    assert nse_data.normalize_quote_metrics(direct)["market_cap"] == 1000.0

    tiny = dict(QUOTE, securityInfo={"issuedSize": 10})
    assert nse_data.normalize_quote_metrics(tiny)["market_cap"] is None

    assert nse_data.normalize_quote_metrics({})["cmp"] is None
    assert nse_data.normalize_quote_metrics(None)["market_cap"] is None


def test_normalize_trade_info_metrics():
    resp = {
        "marketDeptOrderBook": {"tradeInfo": {"totalTradedVolume": 123456}},
        "securityWiseDP": {"deliveryToTradedQuantity": "45.5"},
    }
    t = nse_data.normalize_trade_info_metrics(resp)
    assert t == {"volume": 123456.0, "deliverable_pct": 45.5, "volatility": None}


def test_corporate_actions_and_announcements():
    assert nse_data.normalize_corporate_actions_latest([{"subject": "Dividend"}, {}]) == {"subject": "Dividend"}
    assert nse_data.normalize_corporate_actions_latest({"data": []}) is None
    assert nse_data.normalize_announcements_headline({"data": [{"headline": "Board meeting"}]}) == "Board meeting"
    assert nse_data.normalize_announcements_headline([{"subject": "AGM", "headline": "x"}]) == "AGM"
    assert nse_data.normalize_announcements_headline([]) is None
    assert nse_data.normalize_announcements_headline(["text only"]) is None


def test_fetcher_urls_are_encoded():
    client = FakeNseClient({"quote-equity": QUOTE})
    assert nse_data.fetch_quote_equity("hdfcbank", client) == QUOTE
    nse_data.fetch_quote_equity_section("M&M", "trade_info", client)
    assert client.urls == [
        "https://www.nseindia.com/api/quote-equity?symbol=HDFCBANK",
        "https://www.nseindia.com/api/quote-equity?symbol=M%26M&section=trade_info",
    ]


def test_shareholding_falls_through_4xx():
    client = FakeNseClient({
        "corporate-share-holdings": NseError(404, "u", "Resource not found"),
        "shareholding-pattern": {"data": [1]},
    })
    assert nse_data.fetch_shareholding_best_effort("TCS", client) == {"data": [1]}
    assert len(client.urls) == 2


def test_shareholding_raises_5xx_and_last_4xx():
    client = FakeNseClient({"corporate-share-holdings": NseError(500, "u", "down")})
    try:
        nse_data.fetch_shareholding_best_effort("TCS", client)
    except NseError as e:
        assert e.status == 500
    else:
        raise AssertionError("expected NseError")
    assert len(client.urls) == 1

    client = FakeNseClient({})
    try:
        nse_data.fetch_shareholding_best_effort("TCS", client)
    except NseError as e:
        assert e.status == 404
    else:
        raise AssertionError("expected NseError")
    assert len(client.urls) == 2


def test_is_4xx_error():
    assert nse_data.is_4xx_error(NseError(404, "u", "x"))
    assert not nse_data.is_4xx_error(NseError(503, "u", "x"))
    assert not nse_data.is_4xx_error(NseError(None, "u", "x"))


def run_all():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("✅ test_nse_data: passed")


if __name__ == "__main__":
    run_all()
