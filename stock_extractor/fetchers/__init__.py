# stock_extractor/fetchers/__init__.py
"""HTTP collaborators around the Screener text core.

  nse_client    → cookie-gated NSE session (warm-up + retrying JSON GET)
  nse_data      → NSE endpoint fetchers + response normalizers
  yahoo_client  → live fields Screener text cannot carry
"""
