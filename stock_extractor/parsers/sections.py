#!/usr/bin/env python3
# ============================================================
# stock_extractor/parsers/sections.py — v1.3
# Six independent section extractors over pasted Screener text
# ------------------------------------------------------------
# Each extractor:
#   • reads the whole text, writes nothing outside its return value
#   • is total (empty text → all-None section)
#   • pulls every regex from settings.screener_map.SCREENER_PATTERNS
# ============================================================
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from stock_extractor.helpers.common import indian_grouping, safe_round
from stock_extractor.parsers.primitives import (
    extract_number,
    extract_row_tokens,
    extract_string,
    is_holding_token,
    is_numeric_token,
    parse_indian_number,
)
from stock_extractor.settings.screener_map import (
    ANNOUNCEMENT_PRIORITY,
    CORPORATE_ACTION_PRIORITY,
    HEADLINE_MAX_CHARS,
    RUPEE,
    SCREENER_PATTERNS as P,
)


# ============================================================
# Section records
# ============================================================
@dataclass(frozen=True)
class PriceVolume:
    cmp: Optional[float] = None
    week52_high: Optional[float] = None
    week52_low: Optional[float] = None


@dataclass(frozen=True)
class Valuation:
    pe_ratio: Optional[float] = None
    pb_ratio: Optional[float] = None       # derived unless stated explicitly
    book_value: Optional[float] = None
    face_value: Optional[float] = None


@dataclass(frozen=True)
class FinancialStrength:
    market_cap: Optional[str] = None       # text: unit varies by layout
    eps_ttm: Optional[float] = None
    roe: Optional[float] = None
    roce: Optional[float] = None


@dataclass(frozen=True)
class Growth:
    revenue_growth_yoy: Optional[float] = None
    profit_growth_yoy: Optional[float] = None
    operating_margin: Optional[float] = None


@dataclass(frozen=True)
class Shareholding:
    promoter: Optional[float] = None
    promoter_change: Optional[float] = None
    fii: Optional[float] = None
    dii: Optional[float] = None
    public: Optional[float] = None


@dataclass(frozen=True)
class CorporateSignals:
    upcoming_result_date: Optional[str] = None
    recent_corporate_action: Optional[str] = None
    has_announcement: bool = False
    announcement_headline: Optional[str] = None


# ============================================================
# Price & Volume
# ============================================================
def extract_price_volume(text: str) -> PriceVolume:
    # First ₹ figure on the page is the headline price.
    cmp = extract_number(text, P["cmp"])

    high = low = None
    m = P["high_low"].search(text)
    if m:
        high = parse_indian_number(m.group(1))
        low = parse_indian_number(m.group(2))

    return PriceVolume(cmp=cmp, week52_high=high, week52_low=low)


# ============================================================
# Valuation
# ============================================================
def extract_valuation(text: str) -> Valuation:
    pe_ratio = extract_number(text, P["pe_ratio"])
    book_value = extract_number(text, P["book_value"])
    face_value = extract_number(text, P["face_value"])

    cmp = extract_number(text, P["cmp"])
    pb_ratio = None
    if cmp is not None and book_value is not None and book_value > 0:
        pb_ratio = safe_round(cmp / book_value, 2)

    # "trading at 2.78 times its book value" (pros/cons block) wins
    explicit_pb = extract_number(text, P["explicit_pb"])
    if explicit_pb:
        pb_ratio = explicit_pb

    return Valuation(
        pe_ratio=pe_ratio,
        pb_ratio=pb_ratio,
        book_value=book_value,
        face_value=face_value,
    )


# ============================================================
# Financial Strength
# ============================================================
def _market_cap(text: str) -> Optional[str]:
    direct = extract_string(text, P["market_cap"])
    if direct is not None:
        direct = " ".join(direct.split())
        return direct if direct.startswith(RUPEE) else f"{RUPEE}{direct}"

    # Peer-table layout: "Mar Cap Rs.Cr.\n1441456.96"
    crores = extract_number(text, P["market_cap_alt"])
    if crores is not None:
        return f"{RUPEE}{indian_grouping(crores)} Cr"
    return None


def _last_eps(text: str, key: str) -> Optional[float]:
    values = extract_row_tokens(text, P[key], is_numeric_token)
    return parse_indian_number(values[-1]) if values else None


def extract_financial_strength(text: str) -> FinancialStrength:
    # Annual P&L rows run oldest → newest with TTM last.
    eps_ttm = _last_eps(text, "eps_block")
    if eps_ttm is None:
        eps_ttm = _last_eps(text, "eps_row")

    return FinancialStrength(
        market_cap=_market_cap(text),
        eps_ttm=eps_ttm,
        roe=extract_number(text, P["roe"]),
        roce=extract_number(text, P["roce"]),
    )


# ============================================================
# Growth & Profitability
# ============================================================
def _ttm_growth(text: str, key: str) -> Optional[float]:
    value = extract_number(text, P[key])
    if value is None:
        value = extract_number(text, P[f"{key}_loose"])
    return value


def _latest_margin(text: str) -> Optional[float]:
    """Last cell of the margin row that still parses as a number.

    Trailing columns can be blank or placeholders, so the literal last
    token is not always the latest figure.
    """
    tokens = extract_row_tokens(text, P["financing_margin"], lambda t: t != "-")
    for token in reversed(tokens):
        value = parse_indian_number(token)
        if value is not None:
            return value
    return None


def extract_growth(text: str) -> Growth:
    return Growth(
        revenue_growth_yoy=_ttm_growth(text, "sales_growth"),
        profit_growth_yoy=_ttm_growth(text, "profit_growth"),
        operating_margin=_latest_margin(text),
    )


# ============================================================
# Shareholding Pattern
# ============================================================
def _holding_row(text: str, key: str) -> List[str]:
    return extract_row_tokens(text, P[key], is_holding_token)


def _latest(tokens: List[str]) -> Optional[float]:
    return parse_indian_number(tokens[-1]) if tokens else None


def extract_shareholding(text: str) -> Shareholding:
    # Quarter columns run oldest → newest; the last cell is current.
    promoter_row = _holding_row(text, "promoter")
    promoter = _latest(promoter_row)

    promoter_change = None
    if len(promoter_row) >= 2:
        previous = parse_indian_number(promoter_row[-2])
        if previous is not None and promoter is not None:
            promoter_change = safe_round(promoter - previous, 2)

    return Shareholding(
        promoter=promoter,
        promoter_change=promoter_change,
        fii=_latest(_holding_row(text, "fii")),
        dii=_latest(_holding_row(text, "dii")),
        public=_latest(_holding_row(text, "public")),
    )


# ============================================================
# Corporate Signals
# ============================================================
def _corporate_action(text: str) -> Optional[str]:
    # Priority order, not position in the text, decides the winner.
    for _key, pattern, label in CORPORATE_ACTION_PRIORITY:
        m = pattern.search(text)
        if m:
            return f"{label} ({m.group(1)})"
    return None


def extract_corporate_signals(text: str) -> CorporateSignals:
    has_announcement = False
    headline: Optional[str] = None
    for _key, pattern in ANNOUNCEMENT_PRIORITY:
        m = pattern.search(text)
        if not m:
            continue
        has_announcement = True
        if headline is None:
            headline = m.group(0)[:HEADLINE_MAX_CHARS].strip()

    return CorporateSignals(
        upcoming_result_date=extract_string(text, P["upcoming_result_date"]),
        recent_corporate_action=_corporate_action(text),
        has_announcement=has_announcement,
        announcement_headline=headline,
    )


# ============================================================
# Registry (order-insensitive; aggregator iterates this)
# ============================================================
SECTION_EXTRACTORS: Dict[str, Callable[[str], object]] = {
    "price_volume": extract_price_volume,
    "valuation": extract_valuation,
    "financial_strength": extract_financial_strength,
    "growth": extract_growth,
    "shareholding": extract_shareholding,
    "corporate_signals": extract_corporate_signals,
}
