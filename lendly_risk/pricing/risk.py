# lendly_risk/pricing/risk.py
"""
Risk scoring and banding.

Score is additive on a base of 50, clamped to [0, 100] (higher = riskier):
- category factor        : (factor - 1) * 40
- renter trust           : > 80 -> -10, < 50 -> +15, otherwise 0
- owner trust            : > 80 -> -5,  < 50 -> +10, otherwise 0
- incidents              : renter * 8 + item * 5, capped at +25
- long rental (> 7 days) : +10
- location index         : index * 10 (absent -> 0)

Trust adjustments are step functions on purpose; a smooth curve would shift
every quoted amount and must ship as a separate algorithm.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from lendly_risk.pricing.config import RiskConfig

if TYPE_CHECKING:
    from lendly_risk.quoting.schemas import InsuranceInput


def _trust_adjustment(score: int, high: float, low: float, cfg: RiskConfig) -> float:
    if score > cfg.high_trust_threshold:
        return high
    if score < cfg.low_trust_threshold:
        return low
    return 0.0


def incident_points(renter_incidents: int, item_incidents: int, cfg: Optional[RiskConfig] = None) -> float:
    cfg = cfg or RiskConfig()
    raw = renter_incidents * cfg.renter_incident_points + item_incidents * cfg.item_incident_points
    return min(raw, cfg.incident_points_cap)


def calculate_risk_score(inp: "InsuranceInput", cfg: Optional[RiskConfig] = None) -> float:
    """Risk score in [0, 100] for a validated input."""
    cfg = cfg or RiskConfig()

    score = cfg.base_score
    score += (cfg.category_factor(inp.item_category) - 1.0) * cfg.category_weight

    score += _trust_adjustment(
        inp.renter_trust_score,
        cfg.renter_high_trust_adjustment,
        cfg.renter_low_trust_adjustment,
        cfg,
    )
    score += _trust_adjustment(
        inp.owner_trust_score,
        cfg.owner_high_trust_adjustment,
        cfg.owner_low_trust_adjustment,
        cfg,
    )

    score += incident_points(inp.renter_incidents, inp.item_incidents, cfg)

    if inp.rental_days > cfg.long_rental_threshold_days:
        score += cfg.long_rental_score_points

    if inp.location_risk_index is not None:
        score += inp.location_risk_index * cfg.location_weight

    return float(np.clip(score, 0.0, 100.0))


def assign_risk_band(score: float, cfg: Optional[RiskConfig] = None) -> str:
    """
    Fixed thresholds:

    - low    : score < 40
    - medium : 40 <= score < 70
    - high   : score >= 70
    """
    cfg = cfg or RiskConfig()
    if score < cfg.band_medium:
        return "low"
    if score < cfg.band_high:
        return "medium"
    return "high"
