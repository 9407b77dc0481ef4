#!/usr/bin/env python3
# ============================================================
# stock_extractor/parsers/presentation.py — v1.1
# StockRecord → display mappings (grouped + flat)
# ============================================================
from __future__ import annotations

from typing import Any, Dict, Optional

from stock_extractor.helpers.common import display_number, indian_grouping
from stock_extractor.settings.screener_map import (
    CLI_DISPLAY_GROUPS,
    COMPLETENESS_LABEL,
    LIVE_DATA_PLACEHOLDER,
    RUPEE,
)


def _render(section: Any, source: Optional[str], unit: str) -> Any:
    if unit == "live":
        return LIVE_DATA_PLACEHOLDER

    if unit == "range":
        high, low = section.week52_high, section.week52_low
        if high is None or low is None:
            return None
        return f"{RUPEE}{indian_grouping(high)} / {RUPEE}{indian_grouping(low)}"

    value = getattr(section, source)

    if unit == "announcement":
        return (section.announcement_headline or "Yes") if value else "No"
    if value is None:
        return None
    if unit == RUPEE:
        return f"{RUPEE}{display_number(value)}"
    if unit == "%":
        return f"{display_number(value)}%"
    if unit == "±%":
        sign = "+" if value > 0 else ""
        return f"{sign}{display_number(value)}%"
    if unit == "":
        return display_number(value)
    return value


def format_parsed_data(record: Any, *, include_live: bool = False) -> Dict[str, Dict[str, Any]]:
    """Grouped view: section key → label → display value (None when absent)."""
    out: Dict[str, Dict[str, Any]] = {}
    for key, (_title, rows) in CLI_DISPLAY_GROUPS.items():
        section = record.section(key)
        out[key] = {
            label: _render(section, source, unit)
            for label, source, unit in rows
            if include_live or unit != "live"
        }
    return out


def flatten_parsed_data(record: Any) -> Dict[str, Any]:
    """Flat label → value mapping in display order, live-only fields marked."""
    flat: Dict[str, Any] = {}
    for group in format_parsed_data(record, include_live=True).values():
        flat.update(group)
    c = record.completeness
    flat[COMPLETENESS_LABEL] = f"{c.extracted} / {c.total}"
    return flat


def apply_live_data(grouped: Dict[str, Dict[str, Any]], live: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Overlay live values onto their "N/A (live data)" rows; other rows untouched."""
    out: Dict[str, Dict[str, Any]] = {}
    for key, rows in grouped.items():
        out[key] = {
            label: (live[label] if value == LIVE_DATA_PLACEHOLDER and live.get(label) is not None else value)
            for label, value in rows.items()
        }
    return out


def section_titles() -> Dict[str, str]:
    return {key: title for key, (title, _rows) in CLI_DISPLAY_GROUPS.items()}
