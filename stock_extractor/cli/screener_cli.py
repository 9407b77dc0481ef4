#!/usr/bin/env python3
# ============================================================
# stock_extractor/cli/screener_cli.py — v1.3
# ------------------------------------------------------------
# Parse text copied from a Screener.in company page.
#
# Usage:
#   stockx-screener screener-input.txt
#   stockx-screener screener-input.txt --json
#   stockx-screener screener-input.txt --raw
#   stockx-screener screener-input.txt --symbol HDFCBANK
#   stockx-screener screener-input.txt --save out/hdfc.csv
#   stockx-screener --batch hdfc.txt tcs.txt --save out/batch.parquet
# ============================================================
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stock_extractor.fetchers.yahoo_client import fetch_yahoo_data, format_yahoo_data
from stock_extractor.helpers import io
from stock_extractor.helpers.logger import enable_file_logging, log
from stock_extractor.parsers.presentation import (
    apply_live_data,
    flatten_parsed_data,
    format_parsed_data,
    section_titles,
)
from stock_extractor.parsers.screener_parser import (
    ScreenerParseError,
    StockRecord,
    parse_screener_text,
)
from stock_extractor.settings.screener_map import COMPLETENESS_LABEL

console = Console()
err_console = Console(stderr=True)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="stockx-screener",
        description="Parse stock data from text copied off a Screener.in company page",
    )
    ap.add_argument("input", nargs="?", help="text file with the pasted page")
    ap.add_argument("--json", action="store_true", help="flat label → value JSON")
    ap.add_argument("--raw", action="store_true", help="nested record JSON with _meta")
    ap.add_argument("--symbol", default=None, help="NSE symbol; fills live rows from Yahoo Finance")
    ap.add_argument("--save", default=None, help="export path (.csv / .parquet / .json)")
    ap.add_argument("--batch", nargs="+", default=None, metavar="FILE", help="parse several files into one table")
    return ap


def _load(path: str) -> Optional[str]:
    """File text, or None (after printing why) when unusable."""
    try:
        text = io.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error reading file:[/red] {escape(path)}\n{escape(str(e))}")
        return None
    if not text.strip():
        err_console.print(f"[red]Error:[/red] input file is empty: {escape(path)}")
        return None
    return text


def _live_overlay(symbol: Optional[str]) -> Dict[str, Any]:
    if not symbol:
        return {}
    return format_yahoo_data(fetch_yahoo_data(symbol))


def _flat_with_live(record: StockRecord, live: Dict[str, Any]) -> Dict[str, Any]:
    flat = flatten_parsed_data(record)
    if not live:
        return flat
    return apply_live_data({"_": flat}, live)["_"]


def _print_tables(record: StockRecord, live: Dict[str, Any]) -> None:
    grouped = apply_live_data(format_parsed_data(record, include_live=True), live)
    titles = section_titles()

    for key, rows in grouped.items():
        table = Table(title=titles[key], expand=False, show_header=False, title_justify="left")
        table.add_column("Metric", style="bold", no_wrap=True)
        table.add_column("Value", justify="left")
        for label, value in rows.items():
            table.add_row(label, "—" if value is None else str(value))
        console.print(table)

    summary = Table(title="Summary", show_header=False, title_justify="left")
    summary.add_column("Metric", style="bold", no_wrap=True)
    summary.add_column("Value")
    c = record.completeness
    summary.add_row(COMPLETENESS_LABEL, f"{c.extracted} / {c.total}")
    summary.add_row("Parsed at", record.parsed_at)
    console.print(summary)


def _save(rows: List[Dict[str, Any]], path: str) -> bool:
    ok = io.write_any(io.rows_to_frame(rows), path)
    if ok:
        err_console.print(f"[green]Saved[/green] {len(rows)} row(s) → {path}")
    else:
        err_console.print(f"[red]Failed to save[/red] → {path}")
    return ok


def _run_batch(files: Sequence[str], save: Optional[str]) -> int:
    rows: List[Dict[str, Any]] = []
    failed = 0
    for path in files:
        text = _load(path)
        if text is None:
            failed += 1
            continue
        record = parse_screener_text(text)
        row = {"source": Path(path).name}
        row.update(flatten_parsed_data(record))
        rows.append(row)
        log.info(f"[Screener] {path}: {record.completeness.extracted}/{record.completeness.total}")

    if not rows:
        err_console.print("[red]No usable input files.[/red]")
        return 1

    if save:
        if not _save(rows, save):
            return 1
    else:
        print(json.dumps(rows, indent=2, ensure_ascii=False))
    return 1 if failed else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)
    enable_file_logging()

    if args.batch:
        return _run_batch(args.batch, args.save)

    if not args.input:
        ap.print_usage()
        err_console.print("Example: stockx-screener screener-input.txt --json")
        return 1

    text = _load(args.input)
    if text is None:
        return 1

    try:
        record = parse_screener_text(text)
    except ScreenerParseError as e:
        err_console.print(f"[red]Error parsing text:[/red] {escape(str(e))}")
        return 1

    live = _live_overlay(args.symbol)
    flat = _flat_with_live(record, live)

    if args.save and not _save([flat], args.save):
        return 1

    if args.raw:
        print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    elif args.json:
        print(json.dumps(flat, indent=2, ensure_ascii=False))
    else:
        console.print(f"Parsing Screener.in data from: [cyan]{args.input}[/cyan]\n")
        _print_tables(record, live)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
