# lendly_risk/pricing/config.py
"""
Risk & deposit pricing configuration.

Every constant the engine uses lives here so the whole table can be swapped
(e.g. for an external insurance provider's rates) without touching logic:
- category risk factors and score weights
- risk band thresholds
- deposit ratios, bounds and rounding
- protection fee rates and coverage ratio

Defaults reproduce the production constants exactly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

ITEM_CATEGORIES: Tuple[str, ...] = ("camera", "drone", "dj", "tools", "camping", "sports", "other")

# Ordinal: index in this tuple is the band's rank.
RISK_BANDS: Tuple[str, ...] = ("low", "medium", "high")


def _default_category_factors() -> Dict[str, float]:
    return {
        "camera": 1.1,
        "drone": 1.3,
        "dj": 1.2,
        "tools": 1.0,
        "camping": 0.9,
        "sports": 1.0,
        "other": 1.0,
    }


@dataclass(frozen=True)
class RiskConfig:
    # --- risk score ---
    category_factors: Dict[str, float] = field(default_factory=_default_category_factors)
    base_score: float = 50.0
    category_weight: float = 40.0

    high_trust_threshold: int = 80
    low_trust_threshold: int = 50
    renter_high_trust_adjustment: float = -10.0
    renter_low_trust_adjustment: float = 15.0
    owner_high_trust_adjustment: float = -5.0
    owner_low_trust_adjustment: float = 10.0

    renter_incident_points: float = 8.0
    item_incident_points: float = 5.0
    incident_points_cap: float = 25.0

    long_rental_threshold_days: int = 7
    long_rental_score_points: float = 10.0
    location_weight: float = 10.0

    # --- risk bands: score < band_medium -> low, score < band_high -> medium ---
    band_medium: float = 40.0
    band_high: float = 70.0

    # --- security deposit ---
    base_deposit_ratio: float = 0.35
    deposit_multiplier_low: float = 0.8
    deposit_multiplier_medium: float = 1.0
    deposit_multiplier_high: float = 1.3
    long_rental_deposit_surcharge: float = 0.15
    min_deposit_days: float = 2.0
    max_deposit_ratio: float = 0.8
    rounding_unit: float = 10.0

    # --- protection ---
    protection_fee_rate_low: float = 0.03
    protection_fee_rate_medium: float = 0.05
    protection_fee_rate_high: float = 0.08
    coverage_ratio: float = 0.6

    # --- presentation ---
    currency_symbol: str = "₪"

    def category_factor(self, category: str) -> float:
        return float(self.category_factors.get(category, 1.0))

    def deposit_multiplier(self, band: str) -> float:
        return {
            "low": self.deposit_multiplier_low,
            "medium": self.deposit_multiplier_medium,
            "high": self.deposit_multiplier_high,
        }[band]

    def protection_fee_rate(self, band: str) -> float:
        return {
            "low": self.protection_fee_rate_low,
            "medium": self.protection_fee_rate_medium,
            "high": self.protection_fee_rate_high,
        }[band]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def band_rank(band: str) -> int:
    """Ordinal position of a risk band (low=0 < medium=1 < high=2)."""
    return RISK_BANDS.index(band)


def merge_overrides(overrides: Mapping[str, Any], base: Optional[RiskConfig] = None) -> RiskConfig:
    """
    Apply overrides to a RiskConfig.

    - None values are ignored (so optional request fields can be passed straight through)
    - category_factors merges per category instead of replacing the table
    - unknown keys, a non-mapping category_factors and band_medium >= band_high raise ValueError
    """
    base = base or RiskConfig()
    known = {f.name for f in fields(RiskConfig)}

    cfg_dict = asdict(base)
    for k, v in overrides.items():
        if v is None:
            continue
        if k not in known:
            raise ValueError(f"Unknown risk config key: {k}")
        if k == "category_factors":
            if not isinstance(v, Mapping):
                raise ValueError("category_factors must be a mapping of item category to factor")
            unknown = set(v) - set(ITEM_CATEGORIES)
            if unknown:
                raise ValueError(f"Unknown item categories in category_factors: {sorted(unknown)}")
            merged = dict(cfg_dict["category_factors"])
            merged.update({c: float(f) for c, f in v.items()})
            cfg_dict["category_factors"] = merged
            continue
        cfg_dict[k] = v

    if not cfg_dict["band_medium"] < cfg_dict["band_high"]:
        raise ValueError(
            f"band_medium ({cfg_dict['band_medium']}) must be below band_high ({cfg_dict['band_high']})"
        )
    return RiskConfig(**cfg_dict)
