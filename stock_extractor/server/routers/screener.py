# stock_extractor/server/routers/screener.py — v1.1
# POST /screener/parse: pasted Screener text (+ optional symbol) → sections
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from stock_extractor.fetchers.yahoo_client import YahooQuote, fetch_yahoo_data, format_yahoo_data
from stock_extractor.helpers.common import normalize_symbol
from stock_extractor.helpers.logger import log
from stock_extractor.parsers.presentation import apply_live_data, format_parsed_data
from stock_extractor.parsers.screener_parser import ScreenerParseError, parse_screener_text

router = APIRouter(prefix="/screener", tags=["screener"])


class ParseRequest(BaseModel):
    text: str = Field(..., description="Text copied from a Screener.in company page")
    symbol: Optional[str] = Field(None, description="NSE symbol for the live Yahoo fields")


def get_yahoo_fetcher() -> Callable[[str], YahooQuote]:
    return fetch_yahoo_data


@router.post("/parse")
def parse(
    req: ParseRequest,
    fetch_live: Callable[[str], YahooQuote] = Depends(get_yahoo_fetcher),
) -> Dict[str, Any]:
    try:
        record = parse_screener_text(req.text)
    except ScreenerParseError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    grouped = format_parsed_data(record, include_live=True)

    yahoo: Optional[Dict[str, Any]] = None
    symbol = normalize_symbol(req.symbol)
    if symbol:
        yahoo = format_yahoo_data(fetch_live(symbol))
        grouped = apply_live_data(grouped, yahoo)

    log.info(
        f"[Screener] API parse {symbol or '-'}: "
        f"{record.completeness.extracted}/{record.completeness.total}"
    )
    return {
        "screener": grouped,
        "completeness": asdict(record.completeness),
        "yahoo": yahoo,
        "parsedAt": record.parsed_at,
    }
