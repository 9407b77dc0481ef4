#!/usr/bin/env python3
# ============================================================
# stock_extractor/parsers/primitives.py — v1.1
# Indian number normalizer + total pattern primitives
# ============================================================
"""Leaf helpers shared by every section extractor.

All functions here are total: any text in, a value or ``None`` out. ``None``
is the absence marker and is never confused with ``0`` or ``""``.
"""

from __future__ import annotations

import math
import re
from typing import Callable, List, Optional, Pattern

from stock_extractor.settings.screener_map import RUPEE

_STRIP = re.compile(rf"[{RUPEE},\s]")
_CURRENCY_TAG = re.compile(r"^(?:Rs\.?|INR)", re.IGNORECASE)
_LEADING_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_TOKEN_SPLIT = re.compile(r"\s+")


def parse_indian_number(token: object) -> Optional[float]:
    """Parse '14,41,457', '₹ 937' or '12.5%' into a float.

    Grouping is removed, never validated, so Indian and Western
    separators parse the same. Garbage ('', '-', 'abc') gives None.
    """
    if not isinstance(token, str) or not token:
        return None

    cleaned = _STRIP.sub("", token)
    cleaned = _CURRENCY_TAG.sub("", cleaned)
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]

    m = _LEADING_DECIMAL.match(cleaned)
    if not m:
        return None
    value = float(m.group(0))
    return value if math.isfinite(value) else None


def extract_number(text: str, pattern: Pattern[str]) -> Optional[float]:
    """First match of `pattern`; its group 1 normalized to a number."""
    m = pattern.search(text)
    if not m or not m.group(1):
        return None
    return parse_indian_number(m.group(1))


def extract_string(text: str, pattern: Pattern[str]) -> Optional[str]:
    """First match of `pattern`; its group 1 trimmed."""
    m = pattern.search(text)
    if not m or not m.group(1):
        return None
    return m.group(1).strip() or None


def split_tokens(run: str) -> List[str]:
    return [t for t in _TOKEN_SPLIT.split(run.strip()) if t]


def extract_row_tokens(
    text: str,
    pattern: Pattern[str],
    keep: Callable[[str], bool] = lambda t: True,
) -> List[str]:
    """Whitespace/tab separated tokens of the first matching row."""
    m = pattern.search(text)
    if not m or not m.group(1):
        return []
    return [t for t in split_tokens(m.group(1)) if keep(t)]


def is_numeric_token(token: str) -> bool:
    """Row cell that starts like a number."""
    return "0" <= token[:1] <= "9"


def is_holding_token(token: str) -> bool:
    """Shareholding cell: a percentage or a number."""
    return "%" in token or is_numeric_token(token)
