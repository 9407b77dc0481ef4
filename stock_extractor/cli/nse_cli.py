#!/usr/bin/env python3
# ============================================================
# stock_extractor/cli/nse_cli.py — v1.2
# ------------------------------------------------------------
# Live NSE data for one symbol. The five endpoint calls run
# concurrently; each section prints as soon as it completes and
# a failed call prints one line without stopping the others.
#
# Usage:
#   stockx-nse HDFCBANK
#   stockx-nse RELIANCE --raw
# ============================================================
from __future__ import annotations

import argparse
import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table

from stock_extractor.fetchers import nse_data
from stock_extractor.fetchers.nse_client import NseClient, NseError, get_client
from stock_extractor.helpers.common import normalize_symbol
from stock_extractor.helpers.logger import enable_file_logging, log
from stock_extractor.settings import settings as SETTINGS

console = Console()

Rows = List[Tuple[str, Any]]


def _fmt(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def api_error_line(api: str, err: Exception) -> str:
    """'<api> failed: <status> <reason>' with no HTML noise."""
    status = getattr(err, "status", None)
    reason = getattr(err, "reason", None) or str(err)
    parts = [f"{api} failed:"]
    if status is not None:
        parts.append(str(status))
    parts.append(str(reason))
    return " ".join(parts)


# ============================================================
# Section tasks (run in worker threads; return rows, never print)
# ============================================================
def _quote(symbol: str, client: NseClient) -> Tuple[Any, Rows]:
    raw = nse_data.fetch_quote_equity(symbol, client)
    m = nse_data.normalize_quote_metrics(raw)
    return raw, [
        ("CMP", m["cmp"]),
        ("Day High", m["day_high"]),
        ("Day Low", m["day_low"]),
        ("52W High", m["week52_high"]),
        ("52W Low", m["week52_low"]),
        ("Market Cap", m["market_cap"]),
        ("P/E (standalone)", m["pe_standalone"]),
        ("Face Value", m["face_value"]),
    ]


def _trade_info(symbol: str, client: NseClient) -> Tuple[Any, Rows]:
    raw = nse_data.fetch_quote_equity_section(symbol, "trade_info", client)
    t = nse_data.normalize_trade_info_metrics(raw)
    if not (t["volume"] or t["deliverable_pct"] or t["volatility"]):
        return raw, []
    return raw, [
        ("Today Volume", t["volume"]),
        ("Deliverable %", t["deliverable_pct"]),
        ("Volatility", t["volatility"]),
    ]


def _corporate_actions(symbol: str, client: NseClient) -> Tuple[Any, Rows]:
    raw = nse_data.fetch_corporate_actions(symbol, client)
    return raw, [("Latest", nse_data.normalize_corporate_actions_latest(raw))]


def _announcements(symbol: str, client: NseClient) -> Tuple[Any, Rows]:
    raw = nse_data.fetch_announcements(symbol, client)
    return raw, [("Headline", nse_data.normalize_announcements_headline(raw))]


def _shareholding(symbol: str, client: NseClient) -> Tuple[Any, Rows]:
    raw = nse_data.fetch_shareholding_best_effort(symbol, client)
    return raw, [("Data", raw if raw is not None else "not available")]


# (api name for errors / raw dumps, section title, task)
TASKS: List[Tuple[str, str, Callable[[str, NseClient], Tuple[Any, Rows]]]] = [
    ("quote-equity", "Quote", _quote),
    ("trade_info", "Trade Info", _trade_info),
    ("corporate-actions", "Corporate Actions", _corporate_actions),
    ("announcements", "Announcements", _announcements),
    ("shareholding", "Shareholding", _shareholding),
]


def _print_section(title: str, rows: Rows) -> None:
    table = Table(title=title, show_header=False, title_justify="left")
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for label, value in rows:
        table.add_row(label, _fmt(value))
    console.print(table)


def run(symbol: str, *, raw: bool = False, client: Optional[NseClient] = None) -> int:
    client = client if client is not None else get_client()
    console.print(f"Fetching data for [bold]{symbol}[/bold]...\n")

    try:
        client.warm_session()
    except NseError as e:
        console.print(api_error_line("warm_session", e), markup=False)
        return 1

    workers = SETTINGS.fetch_cfg("NSE").get("MAX_WORKERS", len(TASKS))
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = {ex.submit(task, symbol, client): (api, title) for api, title, task in TASKS}
        for fut in as_completed(futures):
            api, title = futures[fut]
            try:
                payload, rows = fut.result()
            except NseError as e:
                console.print(api_error_line(api, e), markup=False)
                continue
            except Exception as e:
                log.exception(f"[NSE] {api} task crashed")
                console.print(api_error_line(api, e), markup=False)
                continue

            if raw:
                console.rule(f"RAW {api}")
                print(json.dumps(payload, indent=2, ensure_ascii=False))
            if rows:
                _print_section(title, rows)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="stockx-nse", description="Fetch live stock data from NSE India")
    ap.add_argument("symbol", help="NSE symbol, e.g. HDFCBANK")
    ap.add_argument("--raw", action="store_true", help="also print raw API responses")
    args = ap.parse_args(argv)
    enable_file_logging()

    symbol = normalize_symbol(args.symbol)
    if not symbol:
        ap.print_usage()
        return 1
    return run(symbol, raw=args.raw)


if __name__ == "__main__":
    raise SystemExit(main())
