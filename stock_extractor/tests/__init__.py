#!/usr/bin/env python3
# ============================================================
# stock_extractor/tests/__init__.py — v1.0 (One-Command Test Bundle)
# ============================================================
"""Run every test module sequentially via `python -m stock_extractor.tests`.

Each module is also pytest-collectable; this runner needs nothing beyond
the package's own dependencies.
"""

from __future__ import annotations

import importlib
import textwrap

# ------------------------------------------------------------
# Ordered test modules (leaves first)
# ------------------------------------------------------------
TESTS = [
    "stock_extractor.tests.test_logger",
    "stock_extractor.tests.test_primitives",
    "stock_extractor.tests.test_sections",
    "stock_extractor.tests.test_screener_parser",
    "stock_extractor.tests.test_presentation",
    "stock_extractor.tests.test_nse_client",
    "stock_extractor.tests.test_nse_data",
    "stock_extractor.tests.test_yahoo_client",
    "stock_extractor.tests.test_cli",
    "stock_extractor.tests.test_server",
]


# ------------------------------------------------------------
# Runner
# ------------------------------------------------------------
def run_all() -> int:
    banner = textwrap.dedent(
        """
        🧪 Stock Extractor Test Suite — Sequential Run
        ------------------------------------------------------------
        """
    )
    print(banner.strip())
    failed: list[str] = []

    for name in TESTS:
        print(f"\n▶ Running {name} ...")
        try:
            importlib.import_module(name).run_all()
        except Exception as e:
            print(f"❌ {name}: {type(e).__name__}: {e}")
            failed.append(name)

    print("\n" + "—" * 60)
    if failed:
        print(f"❌ {len(failed)} failed → {', '.join(failed)}")
        return 1
    print("✅ All tests passed.")
    return 0
