# lendly_risk/quoting/schemas.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from lendly_risk.pricing.config import ITEM_CATEGORIES
from lendly_risk.quoting.validation import ValidationError

# snake_case field -> camelCase wire name used by the marketplace apps
CAMEL_ALIASES: Dict[str, str] = {
    "item_id": "itemId",
    "item_category": "itemCategory",
    "item_value": "itemValue",
    "daily_price": "dailyPrice",
    "rental_days": "rentalDays",
    "renter_trust_score": "renterTrustScore",
    "owner_trust_score": "ownerTrustScore",
    "renter_completed_rentals": "renterCompletedRentals",
    "renter_incidents": "renterIncidents",
    "item_incidents": "itemIncidents",
    "location_risk_index": "locationRiskIndex",
}

_FLOAT_FIELDS = ("item_value", "daily_price")
_INT_FIELDS = (
    "rental_days",
    "renter_trust_score",
    "owner_trust_score",
    "renter_completed_rentals",
    "renter_incidents",
    "item_incidents",
)


@dataclass(frozen=True)
class InsuranceInput:
    item_category: str
    item_value: float
    daily_price: float
    rental_days: int
    renter_trust_score: int
    owner_trust_score: int
    renter_completed_rentals: int  # carried for forward compatibility; not weighted
    renter_incidents: int
    item_incidents: int
    location_risk_index: Optional[float] = None  # None = unknown, contributes 0
    item_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "InsuranceInput":
        """
        Build an input from a raw record (snake_case or camelCase keys).

        Only structure is checked here: required keys, known category,
        numeric coercion. Value bounds are checked by validate_input.
        """
        values: Dict[str, Any] = {}
        for name, camel in CAMEL_ALIASES.items():
            v = raw.get(name, raw.get(camel))
            if _is_missing(v):
                v = None
            values[name] = v

        for name in ("item_category",) + _FLOAT_FIELDS + _INT_FIELDS:
            if values[name] is None:
                raise ValidationError(name, f"Missing required field: {CAMEL_ALIASES[name]}")

        category = str(values["item_category"]).strip().lower()
        if category not in ITEM_CATEGORIES:
            raise ValidationError(
                "item_category",
                f"Unknown item category: {values['item_category']}",
            )
        values["item_category"] = category

        for name in _FLOAT_FIELDS:
            values[name] = _to_float(name, values[name])
        for name in _INT_FIELDS:
            values[name] = _to_int(name, values[name])
        if values["location_risk_index"] is not None:
            values["location_risk_index"] = _to_float("location_risk_index", values["location_risk_index"])
        if values["item_id"] is not None:
            values["item_id"] = str(values["item_id"])

        return cls(**values)


@dataclass(frozen=True)
class InsuranceQuote:
    risk_band: str
    security_deposit: int
    protection_fee: int
    max_coverage: int
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _is_missing(v: Any) -> bool:
    # NaN != NaN; covers empty cells coming from pandas
    return v is None or (isinstance(v, float) and v != v) or (isinstance(v, str) and not v.strip())


def _to_float(name: str, v: Any) -> float:
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ValidationError(name, f"{CAMEL_ALIASES[name]} must be a number") from e


def _to_int(name: str, v: Any) -> int:
    f = _to_float(name, v)
    if not f.is_integer():
        raise ValidationError(name, f"{CAMEL_ALIASES[name]} must be a whole number")
    return int(f)
