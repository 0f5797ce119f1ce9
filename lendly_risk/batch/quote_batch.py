# lendly_risk/batch/quote_batch.py
"""
Quote a table of bookings in one pass.

What it does:
- Reads bookings (CSV / Parquet / JSONL); columns are InsuranceInput fields,
  snake_case or camelCase
- Prices every row with the risk engine
- Writes the input columns plus the quote columns
- Writes a JSON summary (rows, failures, per-band counts, deposit totals)

Rows that fail validation keep empty amounts and carry the message in
`error`; the rest of the table is still quoted.

Usage:
  python -m lendly_risk.batch.quote_batch --in_path data/bookings.csv --out_path reports/quotes.parquet

Optional:
  python -m lendly_risk.batch.quote_batch --in_path data/bookings.csv \
    --out_path reports/quotes.csv \
    --summary_path reports/quote_summary.json \
    --config config/risk_overrides.json
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from lendly_risk.pricing.config import RISK_BANDS, RiskConfig
from lendly_risk.quoting.schemas import InsuranceInput
from lendly_risk.quoting.service import price_input
from lendly_risk.quoting.validation import ValidationError
from lendly_risk.utils.config import configure_logging, load_risk_config
from lendly_risk.utils.io import read_table, write_json, write_table

logger = logging.getLogger(__name__)

QUOTE_COLUMNS = [
    "risk_score",
    "risk_band",
    "security_deposit",
    "protection_fee",
    "max_coverage",
    "explanation",
    "error",
]


@dataclass
class BatchSummary:
    rows: int
    quoted: int
    failed: int
    band_counts: Dict[str, int]
    total_security_deposit: float
    total_protection_fee: float
    mean_risk_score: Optional[float]
    errors: Dict[str, int]


def _quote_row(record: Dict[str, Any], cfg: RiskConfig) -> Dict[str, Any]:
    try:
        result = price_input(InsuranceInput.from_dict(record), cfg)
    except ValidationError as e:
        out: Dict[str, Any] = {c: None for c in QUOTE_COLUMNS}
        out["error"] = e.message
        return out
    out = result.to_dict()
    out["error"] = None
    return out


def quote_frame(df: pd.DataFrame, cfg: Optional[RiskConfig] = None) -> pd.DataFrame:
    """
    Return df with the quote columns appended (one quote per row).
    """
    cfg = cfg or RiskConfig()
    rows = [_quote_row(rec, cfg) for rec in df.to_dict(orient="records")]
    quotes = pd.DataFrame(rows, columns=QUOTE_COLUMNS, index=df.index)

    for c in ("security_deposit", "protection_fee", "max_coverage"):
        quotes[c] = quotes[c].astype("Int64")
    quotes["risk_score"] = quotes["risk_score"].astype(float)

    base = df.drop(columns=[c for c in QUOTE_COLUMNS if c in df.columns])
    return pd.concat([base, quotes], axis=1)


def summarize(quoted: pd.DataFrame) -> BatchSummary:
    ok = quoted[quoted["error"].isna()]
    failed = quoted[quoted["error"].notna()]

    band_counts = {b: int((ok["risk_band"] == b).sum()) for b in RISK_BANDS}
    errors = {str(k): int(v) for k, v in failed["error"].value_counts().items()}
    mean_score = float(np.mean(ok["risk_score"])) if len(ok) else None

    return BatchSummary(
        rows=int(quoted.shape[0]),
        quoted=int(ok.shape[0]),
        failed=int(failed.shape[0]),
        band_counts=band_counts,
        total_security_deposit=float(ok["security_deposit"].sum()),
        total_protection_fee=float(ok["protection_fee"].sum()),
        mean_risk_score=mean_score,
        errors=errors,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Quote a table of rental bookings with the risk engine.")
    p.add_argument("--in_path", type=str, required=True, help="Input CSV/Parquet/JSONL of booking risk inputs")
    p.add_argument("--out_path", type=str, required=True, help="Output CSV/Parquet/JSONL with quote columns")
    p.add_argument("--summary_path", type=str, default=None, help="Summary JSON path. Default: <out_path stem>_summary.json")
    p.add_argument("--config", type=str, default=None, help="JSON file of risk config overrides (else LENDLY_RISK_CONFIG)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging()

    in_path = Path(args.in_path)
    out_path = Path(args.out_path)
    summary_path = (
        Path(args.summary_path)
        if args.summary_path
        else out_path.with_name(f"{out_path.stem}_summary.json")
    )

    cfg = load_risk_config(args.config)
    df = read_table(in_path)
    if df.empty:
        logger.warning("Input table %s is empty", in_path)

    quoted = quote_frame(df, cfg)
    write_table(quoted, out_path)

    summary = summarize(quoted)
    write_json(summary, summary_path)

    print(f"[OK] Read bookings        : {in_path}")
    print(f"[OK] Quotes saved         : {out_path}")
    print(f"[OK] Summary saved        : {summary_path}")
    print(
        f"Rows: {summary.rows} | Quoted: {summary.quoted} | Failed: {summary.failed} | "
        + " ".join(f"{b}={n}" for b, n in summary.band_counts.items())
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
