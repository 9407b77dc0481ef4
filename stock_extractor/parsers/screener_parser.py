#!/usr/bin/env python3
# ============================================================
# stock_extractor/parsers/screener_parser.py — v1.2
# Screener.in pasted-text parser (aggregator)
# ------------------------------------------------------------
# Usage:
#   from stock_extractor.parsers.screener_parser import parse_screener_text
#   record = parse_screener_text(open("screener-input.txt").read())
#   record.completeness.extracted, record.completeness.total
# ============================================================
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from stock_extractor.helpers.common import utc_now_iso
from stock_extractor.helpers.logger import log
from stock_extractor.parsers.sections import (
    SECTION_EXTRACTORS,
    CorporateSignals,
    FinancialStrength,
    Growth,
    PriceVolume,
    Shareholding,
    Valuation,
)
from stock_extractor.settings import settings as SETTINGS
from stock_extractor.settings.screener_map import (
    NOT_APPLICABLE,
    SECTION_FIELDS,
    SECTION_ORDER,
    TOTAL_FIELDS,
)


class ScreenerParseError(ValueError):
    """Raised when the input is not text or is empty."""


@dataclass(frozen=True)
class CompletenessSummary:
    total: int
    extracted: int


@dataclass(frozen=True)
class StockRecord:
    price_volume: PriceVolume
    valuation: Valuation
    financial_strength: FinancialStrength
    growth: Growth
    shareholding: Shareholding
    corporate_signals: CorporateSignals
    completeness: CompletenessSummary
    parsed_at: str = field(default_factory=utc_now_iso, compare=False)

    def section(self, name: str) -> Any:
        return getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        """Nested JSON-ready view: section → field → value, plus _meta."""
        out: Dict[str, Any] = {name: asdict(self.section(name)) for name in SECTION_ORDER}
        out["_meta"] = {
            "dataPoints": asdict(self.completeness),
            "parsedAt": self.parsed_at,
        }
        return out


def _is_present(value: Any) -> bool:
    return value is not None and value != NOT_APPLICABLE


def count_completeness(sections: Dict[str, Any]) -> CompletenessSummary:
    """Walk the static field list of every section; count present leaves."""
    extracted = 0
    for name, fields in SECTION_FIELDS.items():
        record = sections[name]
        extracted += sum(1 for f in fields if _is_present(getattr(record, f)))
    return CompletenessSummary(total=TOTAL_FIELDS, extracted=extracted)


def _run_sections(text: str, parallel: bool) -> Dict[str, Any]:
    if not parallel:
        return {name: fn(text) for name, fn in SECTION_EXTRACTORS.items()}

    with ThreadPoolExecutor(max_workers=len(SECTION_EXTRACTORS)) as ex:
        futures = {name: ex.submit(fn, text) for name, fn in SECTION_EXTRACTORS.items()}
        return {name: fut.result() for name, fut in futures.items()}


def parse_screener_text(raw_text: Any, *, parallel: Optional[bool] = None) -> StockRecord:
    """Parse raw Screener.in copy-paste into a StockRecord.

    The only failure is a non-string or blank input. Everything past that
    point degrades to None per field instead of raising.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise ScreenerParseError("Invalid input: raw_text must be a non-empty string")

    if parallel is None:
        parallel = bool(SETTINGS.fetch_cfg("SCREENER").get("PARALLEL_SECTIONS", False))

    sections = _run_sections(raw_text, parallel)
    completeness = count_completeness(sections)
    log.debug(
        f"[Screener] extracted {completeness.extracted}/{completeness.total} "
        f"fields from {len(raw_text)} chars"
    )

    return StockRecord(
        price_volume=sections["price_volume"],
        valuation=sections["valuation"],
        financial_strength=sections["financial_strength"],
        growth=sections["growth"],
        shareholding=sections["shareholding"],
        corporate_signals=sections["corporate_signals"],
        completeness=completeness,
    )
