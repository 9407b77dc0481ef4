#!/usr/bin/env python3
# ============================================================
# stock_extractor/helpers/io.py — v1.2 (JSON/CSV/Parquet export + safe dirs)
# ============================================================
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

import polars as pl

from stock_extractor.helpers.logger import log


# ---------- path helpers ----------
def _p(path: str | Path) -> Path:
    return Path(path).expanduser().resolve()


def ensure_dir(path: str | Path) -> Path:
    p = _p(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


# ---------- atomic byte write ----------
def _atomic_write_bytes(path: Path, data: bytes) -> None:
    ensure_dir(path)
    with tempfile.NamedTemporaryFile(dir=str(path.parent), delete=False) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_name = tmp.name
    os.replace(tmp_name, path)


# ---------- text input ----------
def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file; missing files raise FileNotFoundError."""
    return _p(path).read_text(encoding="utf-8")


# ---------- rows → frame ----------
def rows_to_frame(rows: list[dict[str, Any]]) -> pl.DataFrame:
    """Build a frame from display rows; every value is kept as text."""
    if not rows:
        return pl.DataFrame()
    columns: list[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    data = {
        c: [None if r.get(c) is None else str(r.get(c)) for r in rows]
        for c in columns
    }
    return pl.DataFrame(data, schema={c: pl.Utf8 for c in columns})


# ---------- JSON ----------
def write_json(
    data: Any, path: str | Path, *, indent: int = 2, atomic: bool = True
) -> bool:
    p = _p(path)
    try:
        if isinstance(data, pl.DataFrame):
            data = data.to_dicts()
        payload = json.dumps(data, ensure_ascii=False, indent=indent).encode("utf-8")
        if atomic:
            _atomic_write_bytes(p, payload)
        else:
            ensure_dir(p)
            p.write_bytes(payload)
        log.info(f"[IO] JSON written → {p}")
        return True
    except (OSError, TypeError, ValueError) as e:
        log.error(f"[IO] Failed to write JSON {p.name} → {e}")
        return False


# ---------- CSV ----------
def write_csv(df: pl.DataFrame, path: str | Path, *, atomic: bool = True) -> bool:
    p = _p(path)
    try:
        ensure_dir(p)
        if atomic:
            tmp = p.with_suffix(p.suffix + ".tmp")
            df.write_csv(tmp)
            os.replace(tmp, p)
        else:
            df.write_csv(p)
        log.info(f"[IO] CSV written → {p}")
        return True
    except (OSError, pl.exceptions.PolarsError) as e:
        log.error(f"[IO] Failed to write CSV {p.name} → {e}")
        return False


# ---------- Parquet ----------
def write_parquet(df: pl.DataFrame, path: str | Path, *, atomic: bool = True) -> bool:
    p = _p(path)
    try:
        ensure_dir(p)
        if atomic:
            tmp = p.with_suffix(p.suffix + ".tmp")
            df.write_parquet(tmp, compression="zstd", statistics=True)
            os.replace(tmp, p)
        else:
            df.write_parquet(p, compression="zstd", statistics=True)
        log.info(f"[IO] Parquet written → {p}")
        return True
    except (OSError, pl.exceptions.PolarsError) as e:
        log.error(f"[IO] Failed to write Parquet {p.name} → {e}")
        return False


# ---------- convenience ----------
def write_any(df: pl.DataFrame, path: str | Path) -> bool:
    """Dispatch on suffix: .csv / .parquet|.pq / anything else → JSON."""
    suf = _p(path).suffix.lower()
    if suf == ".csv":
        return write_csv(df, path)
    if suf in (".parquet", ".pq"):
        return write_parquet(df, path)
    return write_json(df, path)
