#!/usr/bin/env python3
# ============================================================
# stock_extractor/helpers/common.py — v1.0 (settings-free, no Polars)
# ============================================================

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional


# ---- time ----
def utc_now_iso() -> str:
    """UTC timestamp like 2026-01-17T06:41:12.323113Z."""
    return datetime.now(tz=timezone.utc).isoformat().replace("+00:00", "Z")


# ---- symbols ----
def normalize_symbol(s: str | None) -> str | None:
    """Uppercase, stripped, empty-safe symbol normalization."""
    if s is None:
        return None
    s = str(s).strip().upper()
    return s or None


# ---- first non-None ----
def pick(*values: Any) -> Any:
    for v in values:
        if v is not None:
            return v
    return None


# ---- number rendering ----
def display_number(value: float | int) -> str:
    """Shortest round-trip text; integral values drop the fraction (937.0 → '937')."""
    f = float(value)
    if math.isfinite(f) and f.is_integer():
        return str(int(f))
    return repr(f)


def indian_grouping(value: float, max_fraction: int = 3) -> str:
    """Group digits the Indian way: 1441456.96 → '14,41,456.96'."""
    negative = value < 0
    text = f"{abs(value):.{max_fraction}f}"
    whole, _, frac = text.partition(".")
    frac = frac.rstrip("0")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        whole = ",".join(pairs + [tail])

    out = f"{whole}.{frac}" if frac else whole
    return f"-{out}" if negative else out


def safe_round(value: Optional[float], ndigits: int = 2) -> Optional[float]:
    """Half-up rounding to `ndigits`; None passes through."""
    if value is None:
        return None
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale
