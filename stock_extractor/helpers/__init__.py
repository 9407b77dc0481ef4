# stock_extractor/helpers/__init__.py
"""Lightweight helpers package init (lazy submodule access).

Usage:
    from stock_extractor.helpers import io
    io.write_csv(...)

    # When (and only when) you actually need them:
    from stock_extractor.helpers import common, logger
"""

from importlib import import_module as _im

__all__ = ["common", "io", "logger"]


def __getattr__(name: str):
    if name in __all__:
        return _im(f".{name}", __name__)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + __all__)
