# stock_extractor/server/routers/__init__.py
