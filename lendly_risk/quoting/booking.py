# lendly_risk/quoting/booking.py
"""
Booking adapter: turns marketplace booking data into a quote input and a
price breakdown.

- listing catalogue codes (CAMERA, DJ_GEAR, ...) -> item categories
- start/end dates -> rental days (partial days count as a full day)
- listings without a declared item value -> estimated from the daily price
- totals: rental subtotal + protection fee when the renter opts in

The security deposit is a refundable hold and never part of total_price.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Union

from lendly_risk.pricing.config import ITEM_CATEGORIES, RiskConfig
from lendly_risk.quoting.schemas import InsuranceInput, InsuranceQuote
from lendly_risk.quoting.service import calculate_insurance_quote
from lendly_risk.quoting.validation import ValidationError, validate_positive

LISTING_CATEGORY_MAP: Dict[str, str] = {
    "CAMERA": "camera",
    "DRONE": "drone",
    "TOOLS": "tools",
    "DJ_GEAR": "dj",
    "CAMPING": "camping",
    "SPORT": "sports",
    "MUSIC": "other",
    "OTHER": "other",
}

ITEM_VALUE_DAYS_ESTIMATE = 20
DEFAULT_TRUST_SCORE = 50

DateLike = Union[date, datetime]


def map_listing_category(raw: Optional[str]) -> str:
    if not raw:
        return "other"
    key = raw.strip()
    if key.lower() in ITEM_CATEGORIES:
        return key.lower()
    return LISTING_CATEGORY_MAP.get(key.upper(), "other")


def _as_datetime(d: DateLike) -> datetime:
    # naive values are taken as UTC; aware values are converted to UTC
    if isinstance(d, datetime):
        if d.tzinfo is not None:
            return d.astimezone(timezone.utc).replace(tzinfo=None)
        return d
    return datetime(d.year, d.month, d.day)


def rental_days_between(start: DateLike, end: DateLike) -> int:
    seconds = (_as_datetime(end) - _as_datetime(start)).total_seconds()
    days = math.ceil(seconds / 86400)
    if days <= 0:
        raise ValidationError("rental_days", "Rental days must be greater than 0")
    return days


def estimate_item_value(daily_price: float) -> float:
    return daily_price * ITEM_VALUE_DAYS_ESTIMATE


@dataclass(frozen=True)
class BookingQuoteRequest:
    listing_category: str
    daily_price: float
    start: DateLike
    end: DateLike
    owner_trust_score: int
    renter_trust_score: Optional[int] = None  # unknown renter -> neutral 50
    renter_completed_rentals: int = 0
    renter_incidents: int = 0
    item_incidents: int = 0
    item_value: Optional[float] = None
    location_risk_index: Optional[float] = None
    protection_added: bool = False
    listing_id: Optional[str] = None

    def to_insurance_input(self) -> InsuranceInput:
        renter_trust = DEFAULT_TRUST_SCORE if self.renter_trust_score is None else self.renter_trust_score
        item_value = self.item_value
        if item_value is None:
            validate_positive(self.daily_price, "daily_price", "Daily price must be greater than 0")
            item_value = estimate_item_value(self.daily_price)
        return InsuranceInput(
            item_id=self.listing_id,
            item_category=map_listing_category(self.listing_category),
            item_value=float(item_value),
            daily_price=float(self.daily_price),
            rental_days=rental_days_between(self.start, self.end),
            renter_trust_score=int(renter_trust),
            owner_trust_score=int(self.owner_trust_score),
            renter_completed_rentals=int(self.renter_completed_rentals),
            renter_incidents=int(self.renter_incidents),
            item_incidents=int(self.item_incidents),
            location_risk_index=self.location_risk_index,
        )


@dataclass(frozen=True)
class BookingQuote:
    quote: InsuranceQuote
    rental_days: int
    rental_subtotal: float
    protection_added: bool
    protection_charge: int
    total_price: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def quote_booking(req: BookingQuoteRequest, cfg: Optional[RiskConfig] = None) -> BookingQuote:
    inp = req.to_insurance_input()
    quote = calculate_insurance_quote(inp, cfg)

    subtotal = inp.daily_price * inp.rental_days
    charge = quote.protection_fee if req.protection_added else 0

    return BookingQuote(
        quote=quote,
        rental_days=inp.rental_days,
        rental_subtotal=subtotal,
        protection_added=req.protection_added,
        protection_charge=charge,
        total_price=subtotal + charge,
    )
