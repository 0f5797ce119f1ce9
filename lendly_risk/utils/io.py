# lendly_risk/utils/io.py
"""
Table and JSON file helpers for batch quoting.

Supported table formats (by suffix): .csv, .parquet, .jsonl (one record per line).
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Union

import pandas as pd

TABLE_SUFFIXES = (".csv", ".parquet", ".jsonl")


def _table_suffix(path: Path) -> str:
    suf = path.suffix.lower()
    if suf not in TABLE_SUFFIXES:
        raise ValueError(f"Unsupported table format: {suf} (expected one of {', '.join(TABLE_SUFFIXES)})")
    return suf


def write_json(obj: Any, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(obj) if is_dataclass(obj) else obj
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def read_table(path: Union[str, Path]) -> pd.DataFrame:
    path = Path(path)
    suf = _table_suffix(path)
    if not path.exists():
        raise FileNotFoundError(f"Input table not found: {path}")

    if suf == ".csv":
        return pd.read_csv(path)
    if suf == ".parquet":
        return pd.read_parquet(path)
    return pd.read_json(path, lines=True)


def write_table(df: pd.DataFrame, path: Union[str, Path]) -> None:
    path = Path(path)
    suf = _table_suffix(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if suf == ".csv":
        df.to_csv(path, index=False)
    elif suf == ".parquet":
        df.to_parquet(path, index=False)
    else:
        df.to_json(path, orient="records", lines=True, force_ascii=False)
