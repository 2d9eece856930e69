from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Tuple

import pandas as pd

from riskdash.config import get_settings
from riskdash.records import COLUMNS, FLOAT_COLUMNS, INT_COLUMNS, CATEGORICAL_DOMAINS


logger = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    """The input resource is missing, unreadable or not coercible to records."""


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


def numericize(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def coerce_str_safe(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = df[col].astype(str).str.strip()
    return df


def coerce_records(raw: pd.DataFrame) -> pd.DataFrame:
    """Turn raw text columns into typed record columns."""
    missing = [c for c in COLUMNS if c not in raw.columns]
    if missing:
        raise DatasetLoadError(f"Missing columns: {', '.join(missing)}")

    df = raw[COLUMNS].copy()
    df = numericize(df, INT_COLUMNS + FLOAT_COLUMNS)
    bad = [c for c in INT_COLUMNS + FLOAT_COLUMNS if df[c].isna().any()]
    if bad:
        raise DatasetLoadError(f"Non-numeric values in columns: {', '.join(bad)}")
    fractional = [c for c in INT_COLUMNS if (df[c] % 1 != 0).any()]
    if fractional:
        raise DatasetLoadError(f"Non-integer values in columns: {', '.join(fractional)}")
    for col in INT_COLUMNS:
        df[col] = df[col].astype("int64")
    for col in FLOAT_COLUMNS:
        df[col] = df[col].astype("float64")
    df = coerce_str_safe(df, CATEGORICAL_DOMAINS.keys())
    return df.reset_index(drop=True)


def read_dataset(path: Path) -> pd.DataFrame:
    try:
        raw = pd.read_csv(path, dtype=str, keep_default_na=False)
    except FileNotFoundError as exc:
        raise DatasetLoadError(f"Data file not found: {path}") from exc
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(f"Could not read {path}: {exc}") from exc
    return coerce_records(raw)


@lru_cache(maxsize=4)
def _load_dataset_cached(signature: Tuple[str, float]) -> pd.DataFrame:
    path = Path(signature[0])
    df = read_dataset(path)
    logger.info("Loaded %d records from %s", len(df), path)
    return df


def load_dataset(path: Optional[Path] = None) -> pd.DataFrame:
    """Load the full dataset, cached on (path, mtime). Returns a copy."""
    path = Path(path) if path is not None else get_settings().data_path
    if not path.exists():
        raise DatasetLoadError(f"Data file not found: {path}")
    return _load_dataset_cached(file_signature(path)).copy()
