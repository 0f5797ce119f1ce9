# lendly_risk/pricing/deposit.py
"""
Security deposit and protection fee.

deposit = item_value * 0.35 * band multiplier (* 1.15 when rental > 7 days)
clamped to [2 * daily_price, 0.8 * item_value], then rounded to the nearest 10.

When 2 * daily_price exceeds 0.8 * item_value the floor wins: the deposit
always covers two rental days even if that passes the item-value cap.

Protection fee is a band-dependent share of item value (3% / 5% / 8%),
rounded to the nearest 10. Coverage is a fixed 60% of item value for every band.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from lendly_risk.pricing.config import RiskConfig


def round_half_up(value: float, unit: float = 1.0) -> int:
    """Round to the nearest multiple of unit, halves going up."""
    return int(np.floor(value / unit + 0.5) * unit)


def compute_security_deposit(
    item_value: float,
    daily_price: float,
    rental_days: int,
    risk_band: str,
    cfg: Optional[RiskConfig] = None,
) -> int:
    cfg = cfg or RiskConfig()

    raw = item_value * cfg.base_deposit_ratio * cfg.deposit_multiplier(risk_band)
    if rental_days > cfg.long_rental_threshold_days:
        raw *= 1.0 + cfg.long_rental_deposit_surcharge

    floor = max(daily_price * cfg.min_deposit_days, 0.0)
    cap = item_value * cfg.max_deposit_ratio
    # np.clip would let the cap win; the two-day floor has priority
    deposit = max(floor, min(raw, cap))

    return round_half_up(deposit, cfg.rounding_unit)


@dataclass(frozen=True)
class ProtectionQuote:
    fee: int
    coverage: int


def compute_protection(
    item_value: float,
    risk_band: str,
    cfg: Optional[RiskConfig] = None,
) -> ProtectionQuote:
    cfg = cfg or RiskConfig()
    fee = round_half_up(item_value * cfg.protection_fee_rate(risk_band), cfg.rounding_unit)
    coverage = round_half_up(item_value * cfg.coverage_ratio)
    return ProtectionQuote(fee=fee, coverage=coverage)
