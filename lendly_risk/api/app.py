# lendly_risk/api/app.py
"""
FastAPI service for the rental risk engine (thin API wrapper).

Endpoints:
- GET  /health
- GET  /config         -> active risk configuration
- POST /quote          -> risk band, deposit, protection fee, coverage
- POST /booking-quote  -> quote + rental totals for a booking

The API layer stays thin:
- parses input (camelCase or snake_case)
- calls lendly_risk.quoting.service / booking
- maps ValidationError -> 422
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from lendly_risk.quoting.booking import BookingQuoteRequest, quote_booking
from lendly_risk.quoting.schemas import InsuranceInput
from lendly_risk.quoting.service import calculate_insurance_quote, get_risk_config, resolve_config
from lendly_risk.quoting.validation import ValidationError
from lendly_risk.utils.config import configure_logging

app = FastAPI(title="Lendly Risk Engine", version="0.1.0")


@app.on_event("startup")
def _startup() -> None:
    configure_logging()
    get_risk_config()  # caches config


@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


# -----------------------------
# Schemas
# -----------------------------
class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PricingOverrides(_CamelModel):
    category_factors: Optional[Dict[str, float]] = None
    band_medium: Optional[float] = None
    band_high: Optional[float] = None
    base_deposit_ratio: Optional[float] = None
    max_deposit_ratio: Optional[float] = None
    min_deposit_days: Optional[float] = None
    protection_fee_rate_low: Optional[float] = None
    protection_fee_rate_medium: Optional[float] = None
    protection_fee_rate_high: Optional[float] = None
    coverage_ratio: Optional[float] = None


class QuoteRequest(_CamelModel):
    item_id: Optional[str] = None
    item_category: str
    item_value: float
    daily_price: float
    rental_days: int
    renter_trust_score: int
    owner_trust_score: int
    renter_completed_rentals: int
    renter_incidents: int
    item_incidents: int
    location_risk_index: Optional[float] = None

    overrides: Optional[PricingOverrides] = None


class QuoteResponse(_CamelModel):
    risk_band: str
    security_deposit: int
    protection_fee: int
    max_coverage: int
    explanation: str


class BookingRequest(_CamelModel):
    listing_id: Optional[str] = None
    listing_category: str
    daily_price: float
    start_date: datetime
    end_date: datetime
    owner_trust_score: int
    renter_trust_score: Optional[int] = None
    renter_completed_rentals: int = 0
    renter_incidents: int = 0
    item_incidents: int = 0
    item_value: Optional[float] = None
    location_risk_index: Optional[float] = None
    protection_added: bool = False


class BookingResponse(_CamelModel):
    quote: QuoteResponse
    rental_days: int
    rental_subtotal: float
    protection_added: bool
    protection_charge: int
    total_price: float


# -----------------------------
# Routes
# -----------------------------
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/config")
def risk_config() -> Dict[str, Any]:
    return get_risk_config().to_dict()


@app.post("/quote", response_model=QuoteResponse, response_model_by_alias=True)
def quote(req: QuoteRequest) -> QuoteResponse:
    raw = req.model_dump(exclude={"overrides"})
    overrides = req.overrides.model_dump() if req.overrides else None

    inp = InsuranceInput.from_dict(raw)
    try:
        cfg = resolve_config(overrides)
    except ValueError as e:
        raise ValidationError("overrides", str(e)) from e
    q = calculate_insurance_quote(inp, cfg)
    return QuoteResponse(**q.to_dict())


@app.post("/booking-quote", response_model=BookingResponse, response_model_by_alias=True)
def booking_quote(req: BookingRequest) -> BookingResponse:
    booking = BookingQuoteRequest(
        listing_id=req.listing_id,
        listing_category=req.listing_category,
        daily_price=req.daily_price,
        start=req.start_date,
        end=req.end_date,
        owner_trust_score=req.owner_trust_score,
        renter_trust_score=req.renter_trust_score,
        renter_completed_rentals=req.renter_completed_rentals,
        renter_incidents=req.renter_incidents,
        item_incidents=req.item_incidents,
        item_value=req.item_value,
        location_risk_index=req.location_risk_index,
        protection_added=req.protection_added,
    )
    out = quote_booking(booking, get_risk_config())
    return BookingResponse(
        quote=QuoteResponse(**out.quote.to_dict()),
        rental_days=out.rental_days,
        rental_subtotal=out.rental_subtotal,
        protection_added=out.protection_added,
        protection_charge=out.protection_charge,
        total_price=out.total_price,
    )
