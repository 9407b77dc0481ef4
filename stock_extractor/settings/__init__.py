# stock_extractor/settings/__init__.py
"""Lean settings package initializer.

Avoids eager re-exports so that importing a pattern table never pulls in
path/env handling. Import submodules directly:

  from stock_extractor.settings import settings as SETTINGS
  from stock_extractor.settings import screener_map as SMAP
"""

__all__ = ()  # no eager exports on purpose
