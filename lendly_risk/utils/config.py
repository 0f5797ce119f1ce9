# lendly_risk/utils/config.py
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from lendly_risk.pricing.config import RiskConfig, merge_overrides


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    return v if v is not None and v != "" else default


def env_flag(key: str, default: bool = False) -> bool:
    v = _env(key)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes"}


def configure_logging(level: Optional[str] = None) -> None:
    """
    Entry-point logging setup.

    Env:
      LENDLY_LOG_LEVEL (default: INFO)
    """
    name = (level or _env("LENDLY_LOG_LEVEL", "INFO") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def read_overrides(path: Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Risk config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"Risk config file must hold a JSON object: {path}")
    return raw


def load_risk_config(path: Optional[str] = None) -> RiskConfig:
    """
    Default RiskConfig, optionally overridden from a JSON file.

    Env:
      LENDLY_RISK_CONFIG (optional path to a JSON object of overrides)
    """
    source = path or _env("LENDLY_RISK_CONFIG")
    if source is None:
        return RiskConfig()
    return merge_overrides(read_overrides(Path(source)))
