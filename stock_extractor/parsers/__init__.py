# stock_extractor/parsers/__init__.py
"""Screener text extraction core.

  primitives       → number normalizer + pattern helpers
  sections         → six independent section extractors
  screener_parser  → aggregator + completeness
  presentation     → display mappings for CLI / API
"""
