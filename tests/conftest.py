"""Shared fixtures for risk engine tests."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from lendly_risk.quoting.schemas import InsuranceInput
from lendly_risk.quoting.service import get_risk_config

BASE_INPUT: Dict[str, Any] = {
    "item_category": "tools",
    "item_value": 2000,
    "daily_price": 100,
    "rental_days": 3,
    "renter_trust_score": 70,
    "owner_trust_score": 70,
    "renter_completed_rentals": 5,
    "renter_incidents": 0,
    "item_incidents": 0,
}


def build_input(**overrides: Any) -> InsuranceInput:
    values = dict(BASE_INPUT)
    values.update(overrides)
    return InsuranceInput(**values)


@pytest.fixture
def make_input():
    return build_input


@pytest.fixture(autouse=True)
def default_risk_config(monkeypatch):
    monkeypatch.delenv("LENDLY_RISK_CONFIG", raising=False)
    get_risk_config(force_reload=True)
    yield
    monkeypatch.delenv("LENDLY_RISK_CONFIG", raising=False)
    get_risk_config(force_reload=True)
