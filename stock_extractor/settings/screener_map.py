#!/usr/bin/env python3
# ============================================================
# stock_extractor/settings/screener_map.py — v1.4 (SCREENER TEXT CONTRACT)
# ------------------------------------------------------------
# Canonical snake_case contract for the Screener text pipeline:
#   patterns → primitives → sections → aggregator → presentation → cli/api
#
# Units:
#   • roe / roce / growth / margin / holdings are PERCENT (0–100)
#   • cmp / book_value / face_value / eps_ttm are RUPEES
#   • market_cap is TEXT (unit suffix depends on page layout)
# ============================================================

from __future__ import annotations

import re
from typing import Dict, List, Pattern, Tuple

RUPEE = "₹"

# Placeholder a source may emit for "not applicable"; counted as absent.
NOT_APPLICABLE = "N/A"

# Synthetic marker for fields only the live APIs can provide.
LIVE_DATA_PLACEHOLDER = "N/A (live data)"

_FLAGS = re.IGNORECASE

_NUM = r"[\d,]+(?:\.\d+)?"


def _c(expr: str) -> Pattern[str]:
    return re.compile(expr, _FLAGS)


# ------------------------------------------------------------
# Field → compiled pattern (group 1 is always the value)
# Labels and values are separated by \s, so a newline between
# them (the usual copy/paste shape) still matches.
# ------------------------------------------------------------
SCREENER_PATTERNS: Dict[str, Pattern[str]] = {
    # Price / volume
    "cmp": _c(rf"{RUPEE}\s*({_NUM})"),
    "high_low": _c(rf"High\s*/\s*Low\s*{RUPEE}?\s*({_NUM})\s*/\s*{RUPEE}?\s*({_NUM})"),

    # Valuation
    "pe_ratio": _c(r"(?:Stock\s+)?P/E\s*([\d.]+)"),
    "book_value": _c(rf"Book\s+Value\s*{RUPEE}?\s*({_NUM})"),
    "face_value": _c(rf"Face\s+Value\s*{RUPEE}?\s*([\d.]+)"),
    "explicit_pb": _c(r"trading\s+at\s+([\d.]+)\s+times\s+its\s+book\s+value"),

    # Financial strength
    "market_cap": _c(rf"Market\s+Cap\s*{RUPEE}?\s*({_NUM}\s*(?:Cr\.?)?)"),
    "market_cap_alt": _c(rf"Mar\s+Cap\s+Rs\.?\s*Cr\.?\s*({_NUM})"),
    "eps_block": _c(r"Profit\s+&\s+Loss[\s\S]*?TTM[\s\S]*?EPS\s+in\s+Rs\s+([\d.\s]+)"),
    "eps_row": _c(r"EPS\s+in\s+Rs\s+([\d.\s]+)"),
    "roe": _c(r"ROE\s*%?\s*([\d.]+)\s*%?"),
    "roce": _c(r"ROCE\s*%?\s*([\d.]+)\s*%?"),

    # Growth (tight = inline "TTM: N%", loose = first "N %" after TTM)
    "sales_growth": _c(r"Compounded\s+Sales\s+Growth[\s\S]*?TTM[:\s]*(-?[\d.]+%)"),
    "sales_growth_loose": _c(r"Compounded\s+Sales\s+Growth[\s\S]*?TTM[\s\S]*?(-?[\d.]+)\s*%"),
    "profit_growth": _c(r"Compounded\s+Profit\s+Growth[\s\S]*?TTM[:\s]*(-?[\d.]+%)"),
    "profit_growth_loose": _c(r"Compounded\s+Profit\s+Growth[\s\S]*?TTM[\s\S]*?(-?[\d.]+)\s*%"),
    "financing_margin": _c(r"Financing\s+Margin\s+%\s+([\d.%\s\-]+)"),

    # Shareholding rows ("Promoters +\t25.59%\t25.52%")
    "promoter": _c(r"Promoters?\s*\+?\s+([\d.%\s]+)"),
    "fii": _c(r"FIIs?\s*\+?\s+([\d.%\s]+)"),
    "dii": _c(r"DIIs?\s*\+?\s+([\d.%\s]+)"),
    "public": _c(r"Public\s*\+?\s+([\d.%\s]+)"),

    # Corporate signals
    "upcoming_result_date": _c(r"Upcoming\s+result\s+date[:\s]*(\d+\s+\w+\s+\d{4})"),
}

# ------------------------------------------------------------
# Corporate actions: (key, pattern, display label), highest priority first.
# The first entry that matches anywhere in the text wins.
# ------------------------------------------------------------
CORPORATE_ACTION_PRIORITY: List[Tuple[str, Pattern[str], str]] = [
    ("esop", _c(r"(?:Allotment\s+of\s+)?ESOP\s*/?\s*ESPS[^\n]*?(\d+\s+\w+)"), "ESOP/ESPS"),
    ("dividend", _c(r"Dividend[^\n]*?(\d+\s+\w+)"), "Dividend"),
    ("bonus", _c(r"Bonus[^\n]*?(\d+\s+\w+)"), "Bonus"),
    ("split", _c(r"Split[^\n]*?(\d+\s+\w+)"), "Stock Split"),
]

# ------------------------------------------------------------
# Announcement signals, checked in order. Every match raises the flag;
# only the first match supplies the headline.
# ------------------------------------------------------------
ANNOUNCEMENT_PRIORITY: List[Tuple[str, Pattern[str]]] = [
    ("board_meeting", _c(r"Board\s+Meeting[^\n]*(?:Intimation|Approving)[^\n]*")),
    ("regulatory", _c(r"(?:Intimation|Announcement)\s+Under\s+(?:SEBI|Regulation)[^\n]*")),
    ("rbi_approval", _c(r"RBI\s+approved[^\n]*")),
]

HEADLINE_MAX_CHARS = 100

# ------------------------------------------------------------
# Section schema (static; completeness walks these lists)
# ------------------------------------------------------------
SECTION_FIELDS: Dict[str, Tuple[str, ...]] = {
    "price_volume": ("cmp", "week52_high", "week52_low"),
    "valuation": ("pe_ratio", "pb_ratio", "book_value", "face_value"),
    "financial_strength": ("market_cap", "eps_ttm", "roe", "roce"),
    "growth": ("revenue_growth_yoy", "profit_growth_yoy", "operating_margin"),
    "shareholding": ("promoter", "promoter_change", "fii", "dii", "public"),
    "corporate_signals": (
        "upcoming_result_date",
        "recent_corporate_action",
        "has_announcement",
        "announcement_headline",
    ),
}

SECTION_ORDER: Tuple[str, ...] = tuple(SECTION_FIELDS.keys())

TOTAL_FIELDS: int = sum(len(v) for v in SECTION_FIELDS.values())

# ------------------------------------------------------------
# Display groups: section → (title, [(label, source, unit)])
#   source: record field name, "week52" for the high/low pair,
#           or None for fields only live APIs can supply.
#   unit:   "₹" | "%" | "±%" | "" | "range" | "text" | "announcement" | "live"
# ------------------------------------------------------------
CLI_DISPLAY_GROUPS: Dict[str, Tuple[str, List[Tuple[str, str | None, str]]]] = {
    "price_volume": ("Price & Volume", [
        ("Current Market Price (CMP)", "cmp", RUPEE),
        ("Day High / Low", None, "live"),
        ("52-Week High / Low", "week52", "range"),
        ("Volume (today)", None, "live"),
        ("10-day average volume", None, "live"),
    ]),
    "valuation": ("Valuation Metrics", [
        ("P/E Ratio", "pe_ratio", ""),
        ("Industry P/E", None, "live"),
        ("P/B Ratio", "pb_ratio", ""),
        ("Book Value", "book_value", RUPEE),
        ("Face Value", "face_value", RUPEE),
    ]),
    "financial_strength": ("Financial Strength", [
        ("Market Capitalization", "market_cap", "text"),
        ("Debt to Equity", None, "live"),
        ("EPS (TTM)", "eps_ttm", RUPEE),
        ("ROE (%)", "roe", "%"),
        ("ROCE (%)", "roce", "%"),
    ]),
    "growth": ("Growth & Profitability", [
        ("Revenue growth (YoY)", "revenue_growth_yoy", "%"),
        ("Net profit growth (YoY)", "profit_growth_yoy", "%"),
        ("Operating margin", "operating_margin", "%"),
    ]),
    "shareholding": ("Shareholding Pattern", [
        ("Promoter holding (%)", "promoter", "%"),
        ("Promoter holding change", "promoter_change", "±%"),
        ("FII holding (%)", "fii", "%"),
        ("DII holding (%)", "dii", "%"),
        ("Public holding (%)", "public", "%"),
    ]),
    "corporate_signals": ("Corporate Signals", [
        ("Recent results date", "upcoming_result_date", "text"),
        ("Recent corporate action", "recent_corporate_action", "text"),
        ("Recent announcement", "has_announcement", "announcement"),
    ]),
}

COMPLETENESS_LABEL = "Data points extracted"
