# stock_extractor/server/__init__.py
"""HTTP API: uvicorn stock_extractor.server.main:app"""
