# stock_extractor/cli/__init__.py
"""Console entry points.

  screener_cli → stockx-screener (parse pasted Screener.in text)
  nse_cli      → stockx-nse      (live NSE quote + filings)
  manual       → stockx-man      (manual pages)
"""
