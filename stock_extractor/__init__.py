# stock_extractor/__init__.py
"""Structured data points for Indian-listed equities from NSE and Screener.in.

    from stock_extractor import parse_screener_text, flatten_parsed_data

    record = parse_screener_text(pasted_text)
    flat = flatten_parsed_data(record)
"""

from stock_extractor.parsers.presentation import flatten_parsed_data, format_parsed_data
from stock_extractor.parsers.screener_parser import (
    ScreenerParseError,
    StockRecord,
    parse_screener_text,
)

__version__ = "1.0.0"

__all__ = [
    "ScreenerParseError",
    "StockRecord",
    "flatten_parsed_data",
    "format_parsed_data",
    "parse_screener_text",
]
