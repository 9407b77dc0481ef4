#!/usr/bin/env python3
# ============================================================
# stock_extractor/cli/manual.py — v1.0
# Manual pages: stockx-man [nse|screener|data|examples]
# ============================================================
from __future__ import annotations

import argparse
from typing import Dict, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stock_extractor.settings import settings as SETTINGS
from stock_extractor.settings.screener_map import CLI_DISPLAY_GROUPS

console = Console()

_VERSION = SETTINGS.APP["version"]
_screener = SETTINGS.EXTERNAL_APIS["SCREENER"]
_SCREENER_COMPANY_URL = _screener["BASE_URL"] + _screener["COMPANY_PATH"].format(symbol="<SYMBOL>")

PAGES: Dict[str, str] = {
    "main": """\
[bold underline]NAME[/]
    stock-extractor: Indian stock data from NSE and Screener.in

[bold underline]SYNOPSIS[/]
    [green]stockx-nse[/] [cyan]<SYMBOL>[/] [--raw]
    [green]stockx-screener[/] [cyan]<input-file>[/] [--json] [--raw] [--symbol SYM] [--save PATH]
    [green]stockx-screener[/] --batch [cyan]FILE...[/] [--save PATH]
    [green]stockx-man[/] [[cyan]nse[/] | [cyan]screener[/] | [cyan]data[/] | [cyan]examples[/]]

[bold underline]DESCRIPTION[/]
    [bold]1. NSE API (stockx-nse)[/]
       Live prices, volume, corporate actions, announcements.
    [bold]2. Screener parser (stockx-screener)[/]
       Fundamentals, ratios, growth and shareholding from pasted page text.
    [bold]3. HTTP API[/]
       stockx-serve  →  POST /screener/parse, GET /health

[bold underline]SEE ALSO[/]
    https://www.nseindia.com   https://www.screener.in
""",
    "nse": """\
[bold underline]NAME[/]
    stockx-nse: fetch live stock data from NSE India APIs

[bold underline]SYNOPSIS[/]
    [green]stockx-nse[/] [cyan]<SYMBOL>[/] [[yellow]--raw[/]]

[bold underline]DESCRIPTION[/]
    Warms an NSE session (homepage cookies), then calls quote-equity,
    trade_info, corporate actions, announcements and shareholding
    concurrently. Each section prints when its call completes; a failed
    call prints "<api> failed: <status> <reason>".

[bold underline]OPTIONS[/]
    [yellow]--raw[/]   also print the raw JSON of every response

[bold underline]EXIT STATUS[/]
    0  success (individual API failures included)
    1  missing symbol or session warm-up failure

[bold underline]NOTES[/]
    NSE rate-limits aggressively; wait a few seconds between runs.
    Shareholding endpoints move around and often return 404.
""",
    "screener": f"""\
[bold underline]NAME[/]
    stockx-screener: parse stock data from Screener.in copy-pasted text

[bold underline]SYNOPSIS[/]
    [green]stockx-screener[/] [cyan]<input-file>[/] [[yellow]--json[/]] [[yellow]--raw[/]] [[yellow]--symbol SYM[/]] [[yellow]--save PATH[/]]

[bold underline]HOW TO GET INPUT[/]
    1. Open {_SCREENER_COMPANY_URL}
    2. Select all (Ctrl+A), copy (Ctrl+C)
    3. Paste into a text file and run the parser on it

[bold underline]OPTIONS[/]
    [yellow]--json[/]      flat label → value JSON
    [yellow]--raw[/]       nested record with _meta (dataPoints, parsedAt)
    [yellow]--symbol[/]    fill day range / volume / D/E from Yahoo Finance
    [yellow]--save[/]      export to .csv / .parquet / .json
    [yellow]--batch[/]     several input files → one table (one row per file)

[bold underline]EXIT STATUS[/]
    0  success
    1  missing file, empty file or parse error
""",
    "examples": """\
[bold underline]BASIC[/]
    [green]stockx-nse RELIANCE[/]
    [green]stockx-screener screener-input.txt[/]

[bold underline]OUTPUT FORMATS[/]
    [green]stockx-screener screener-input.txt --json > hdfc.json[/]
    [green]stockx-screener screener-input.txt --raw[/]
    [green]stockx-nse HDFCBANK --raw[/]

[bold underline]BATCH[/]
    [green]stockx-screener --batch hdfc.txt reliance.txt tcs.txt --save batch.csv[/]

[bold underline]TROUBLESHOOTING[/]
    NSE errors: wait and retry; check the symbol on nseindia.com.
    Missing Screener fields: copy the ENTIRE page; some fields are
    genuinely live-only and show "N/A (live data)".
""",
}


def _data_page() -> Table:
    """Every data point per section, built from the display contract."""
    table = Table(title="Extractable data points", show_lines=False)
    table.add_column("Section", style="bold")
    table.add_column("Data point")
    table.add_column("Screener text", justify="center")
    for title, rows in CLI_DISPLAY_GROUPS.values():
        for i, (label, _source, unit) in enumerate(rows):
            table.add_row(title if i == 0 else "", label, "✗ live" if unit == "live" else "✓")
    return table


def topics() -> list[str]:
    return [k for k in PAGES if k != "main"] + ["data"]


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="stockx-man", description="Stock Extractor manual")
    ap.add_argument("topic", nargs="?", default=None)
    args = ap.parse_args(argv)

    topic = (args.topic or "").strip().lower()
    if topic == "data":
        console.print(_data_page())
        return 0

    if topic and topic not in PAGES:
        console.print(f"[yellow]Unknown topic: {topic}[/yellow]")
        console.print(f"Available topics: {', '.join(topics())}\n")

    page = PAGES.get(topic, PAGES["main"])
    subtitle = f"stock-extractor {_VERSION}"
    console.print(Panel(page, title=(topic or "stock-extractor").upper(), subtitle=subtitle, expand=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
