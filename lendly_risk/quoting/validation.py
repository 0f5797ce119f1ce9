# lendly_risk/quoting/validation.py
"""Input validation for insurance quote requests."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lendly_risk.quoting.schemas import InsuranceInput


class ValidationError(ValueError):
    """Raised when a quote input violates one of its bounds."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def validate_positive(value: float, field: str, message: str) -> float:
    if not math.isfinite(value) or not value > 0:
        raise ValidationError(field, message)
    return value


def validate_range(value: float, low: float, high: float, field: str, message: str) -> float:
    if not math.isfinite(value) or not low <= value <= high:
        raise ValidationError(field, message)
    return value


def validate_non_negative(value: int, field: str, message: str) -> int:
    if not math.isfinite(value) or value < 0:
        raise ValidationError(field, message)
    return value


def validate_input(inp: "InsuranceInput") -> "InsuranceInput":
    """Check bounds in fixed order; the first violation is raised."""
    validate_positive(inp.item_value, "item_value", "Item value must be greater than 0")
    validate_positive(inp.daily_price, "daily_price", "Daily price must be greater than 0")
    validate_positive(inp.rental_days, "rental_days", "Rental days must be greater than 0")
    validate_range(
        inp.renter_trust_score, 0, 100, "renter_trust_score",
        "Renter trust score must be between 0 and 100",
    )
    validate_range(
        inp.owner_trust_score, 0, 100, "owner_trust_score",
        "Owner trust score must be between 0 and 100",
    )
    if inp.location_risk_index is not None:
        validate_range(
            inp.location_risk_index, 0, 1, "location_risk_index",
            "Location risk index must be between 0 and 1",
        )
    validate_non_negative(
        inp.renter_completed_rentals, "renter_completed_rentals",
        "Completed rentals cannot be negative",
    )
    validate_non_negative(inp.renter_incidents, "renter_incidents", "Renter incidents cannot be negative")
    validate_non_negative(inp.item_incidents, "item_incidents", "Item incidents cannot be negative")
    return inp
