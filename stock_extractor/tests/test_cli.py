#!/usr/bin/env python3
# ============================================================
# stock_extractor/tests/test_cli.py — stockx-screener / stockx-nse / stockx-man
# ============================================================
from __future__ import annotations

import contextlib
import io as _io
import json
import tempfile
from pathlib import Path

import polars as pl

from stock_extractor.cli import manual, nse_cli, screener_cli
from stock_extractor.fetchers.nse_client import NseError
from stock_extractor.tests import samples
from stock_extractor.tests.fakes import FakeNseClient


def _run(fn, *args, **kwargs):
    buf = _io.StringIO()
    with contextlib.redirect_stdout(buf):
        code = fn(*args, **kwargs)
    return code, buf.getvalue()


def _write(tmp: Path, name: str, text: str) -> str:
    p = tmp / name
    p.write_text(text, encoding="utf-8")
    return str(p)


# ---------------- stockx-screener ----------------
def test_screener_json_output():
    with tempfile.TemporaryDirectory() as d:
        path = _write(Path(d), "hdfc.txt", samples.FULL_PAGE)
        code, out = _run(screener_cli.main, [path, "--json"])
    assert code == 0
    flat = json.loads(out)
    assert flat["Current Market Price (CMP)"] == "₹937"
    assert flat["Volume (today)"] == "N/A (live data)"
    assert flat["Data points extracted"] == "23 / 23"


def test_screener_raw_output():
    with tempfile.TemporaryDirectory() as d:
        path = _write(Path(d), "hdfc.txt", samples.FULL_PAGE)
        code, out = _run(screener_cli.main, [path, "--raw"])
    assert code == 0
    raw = json.loads(out)
    assert raw["valuation"]["pb_ratio"] == 2.78
    assert raw["_meta"]["dataPoints"]["total"] == 23


def test_screener_table_output():
    with tempfile.TemporaryDirectory() as d:
        path = _write(Path(d), "hdfc.txt", samples.FULL_PAGE)
        code, out = _run(screener_cli.main, [path])
    assert code == 0
    assert "Shareholding Pattern" in out
    assert "Data points extracted" in out


def test_screener_rejects_missing_and_empty_files():
    with tempfile.TemporaryDirectory() as d:
        empty = _write(Path(d), "empty.txt", "  \n\n")
        assert _run(screener_cli.main, [empty])[0] == 1
        assert _run(screener_cli.main, [str(Path(d) / "nope.txt")])[0] == 1
    assert _run(screener_cli.main, [])[0] == 1


def test_screener_save_csv():
    with tempfile.TemporaryDirectory() as d:
        path = _write(Path(d), "hdfc.txt", samples.FULL_PAGE)
        out_csv = Path(d) / "out" / "hdfc.csv"
        code, _ = _run(screener_cli.main, [path, "--json", "--save", str(out_csv)])
        assert code == 0
        df = pl.read_csv(out_csv)
    assert df.height == 1
    assert df["Current Market Price (CMP)"][0] == "₹937"


def test_screener_batch_json_export():
    with tempfile.TemporaryDirectory() as d:
        a = _write(Path(d), "a.txt", samples.FULL_PAGE)
        b = _write(Path(d), "b.txt", samples.WITHOUT_SHAREHOLDING)
        out_json = Path(d) / "batch.json"
        code, _ = _run(screener_cli.main, ["--batch", a, b, "--save", str(out_json)])
        assert code == 0
        rows = json.loads(out_json.read_text(encoding="utf-8"))
    assert [r["source"] for r in rows] == ["a.txt", "b.txt"]
    assert rows[1]["Data points extracted"] == "18 / 23"
    assert rows[1]["Promoter holding (%)"] is None


def test_screener_batch_parquet_export():
    with tempfile.TemporaryDirectory() as d:
        a = _write(Path(d), "a.txt", samples.FULL_PAGE)
        b = _write(Path(d), "b.txt", samples.WITHOUT_SHAREHOLDING)
        out_pq = Path(d) / "batch.parquet"
        code, _ = _run(screener_cli.main, ["--batch", a, b, "--save", str(out_pq)])
        assert code == 0
        df = pl.read_parquet(out_pq)
    assert df["source"].to_list() == ["a.txt", "b.txt"]
    assert df["Data points extracted"].to_list() == ["23 / 23", "18 / 23"]


def test_screener_batch_partial_failure_exits_1():
    with tempfile.TemporaryDirectory() as d:
        a = _write(Path(d), "a.txt", samples.FULL_PAGE)
        code, out = _run(screener_cli.main, ["--batch", a, str(Path(d) / "missing.txt")])
    assert code == 1
    assert '"source": "a.txt"' in out


# ---------------- stockx-nse ----------------
def test_api_error_line():
    assert nse_cli.api_error_line("quote-equity", NseError(404, "u", "Resource not found")) == (
        "quote-equity failed: 404 Resource not found"
    )
    assert nse_cli.api_error_line("trade_info", NseError(None, "u", "timed out")) == "trade_info failed: timed out"


def test_nse_warm_failure_exits_1():
    client = FakeNseClient({}, warm_error=NseError(403, "https://www.nseindia.com", "Access Denied"))
    code, out = _run(nse_cli.run, "HDFCBANK", client=client)
    assert code == 1
    assert "warm_session failed: 403 Access Denied" in out


def test_nse_failures_do_not_stop_other_sections():
    client = FakeNseClient({
        "section=trade_info": NseError(500, "u", "Internal Server Error"),
        "quote-equity": {"priceInfo": {"lastPrice": 937.5}},
        "corporates-corporateActions": [{"subject": "Dividend - Rs 19.50 Per Share"}],
    })
    code, out = _run(nse_cli.run, "HDFCBANK", client=client)
    assert code == 0
    assert "937.5" in out
    assert "Dividend - Rs 19.50 Per Share" in out
    assert "trade_info failed: 500 Internal Server Error" in out
    assert "announcements failed: 404 Resource not found" in out
    assert "shareholding failed: 404 Resource not found" in out


def test_nse_unexpected_task_error_is_isolated():
    client = FakeNseClient({
        "corporate-announcements": ValueError("unexpected payload"),
        "quote-equity": {"priceInfo": {"lastPrice": 937.5}},
    })
    code, out = _run(nse_cli.run, "HDFCBANK", client=client)
    assert code == 0
    assert "announcements failed: unexpected payload" in out
    assert "937.5" in out
    assert "corporate-actions failed: 404 Resource not found" in out
    assert "shareholding failed: 404 Resource not found" in out


# ---------------- stockx-man ----------------
def test_manual_topics():
    assert _run(manual.main, [])[0] == 0
    code, out = _run(manual.main, ["data"])
    assert code == 0
    assert "Debt to Equity" in out
    code, out = _run(manual.main, ["bogus"])
    assert code == 0
    assert "Unknown topic: bogus" in out


def run_all():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("✅ test_cli: passed")


if __name__ == "__main__":
    run_all()
