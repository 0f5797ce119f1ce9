"""Tests for the HTTP wrapper."""

from __future__ import annotations

import json

from fastapi.testclient import TestClient

from lendly_risk.api.app import app

client = TestClient(app)

DRONE_BODY = {
    "itemId": "item-2",
    "itemCategory": "drone",
    "itemValue": 10000,
    "dailyPrice": 500,
    "rentalDays": 5,
    "renterTrustScore": 30,
    "ownerTrustScore": 60,
    "renterCompletedRentals": 0,
    "renterIncidents": 2,
    "itemIncidents": 1,
    "locationRiskIndex": 0.8,
}


def test_health() -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_config_exposes_constant_table() -> None:
    body = client.get("/config").json()
    assert body["category_factors"]["drone"] == 1.3
    assert body["coverage_ratio"] == 0.6


def test_quote_returns_camel_case_quote() -> None:
    resp = client.post("/quote", json=DRONE_BODY)
    assert resp.status_code == 200

    body = resp.json()
    assert body["riskBand"] == "high"
    assert body["securityDeposit"] == 4550
    assert body["protectionFee"] == 800
    assert body["maxCoverage"] == 6000
    assert body["explanation"].startswith("High risk booking.")


def test_quote_accepts_snake_case_and_overrides() -> None:
    body = {
        "item_category": "drone",
        "item_value": 10000,
        "daily_price": 500,
        "rental_days": 5,
        "renter_trust_score": 30,
        "owner_trust_score": 60,
        "renter_completed_rentals": 0,
        "renter_incidents": 2,
        "item_incidents": 1,
        "overrides": {"coverageRatio": 0.5},
    }
    resp = client.post("/quote", json=body)
    assert resp.status_code == 200
    assert resp.json()["maxCoverage"] == 5000


def test_validation_error_maps_to_422() -> None:
    resp = client.post("/quote", json={**DRONE_BODY, "itemValue": 0})
    assert resp.status_code == 422
    assert resp.json() == {"detail": "Item value must be greater than 0", "field": "item_value"}


def test_unknown_category_maps_to_422() -> None:
    resp = client.post("/quote", json={**DRONE_BODY, "itemCategory": "boat"})
    assert resp.status_code == 422
    assert resp.json()["field"] == "item_category"


def test_bad_override_maps_to_422() -> None:
    resp = client.post("/quote", json={**DRONE_BODY, "overrides": {"categoryFactors": {"boat": 2.0}}})
    assert resp.status_code == 422
    assert resp.json()["field"] == "overrides"


def test_booking_quote_totals() -> None:
    body = {
        "listingId": "listing-7",
        "listingCategory": "CAMERA",
        "dailyPrice": 100,
        "startDate": "2025-06-01T10:00:00",
        "endDate": "2025-06-04T10:00:00",
        "ownerTrustScore": 75,
        "protectionAdded": True,
    }
    resp = client.post("/booking-quote", json=body)
    assert resp.status_code == 200

    out = resp.json()
    assert out["rentalDays"] == 3
    assert out["quote"]["riskBand"] == "medium"
    assert out["quote"]["securityDeposit"] == 700
    assert out["protectionCharge"] == 100
    assert out["totalPrice"] == 400


def test_booking_quote_rejects_reversed_dates() -> None:
    body = {
        "listingCategory": "DRONE",
        "dailyPrice": 100,
        "startDate": "2025-06-04T10:00:00",
        "endDate": "2025-06-01T10:00:00",
        "ownerTrustScore": 75,
    }
    resp = client.post("/booking-quote", json=body)
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Rental days must be greater than 0"


def test_infinite_item_value_maps_to_422() -> None:
    body = json.dumps({**DRONE_BODY, "itemValue": float("inf")})
    assert "Infinity" in body

    resp = client.post("/quote", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 422
    assert resp.json() == {"detail": "Item value must be greater than 0", "field": "item_value"}


def test_missing_incident_history_is_rejected() -> None:
    body = {k: v for k, v in DRONE_BODY.items() if k != "renterIncidents"}
    resp = client.post("/quote", json=body)
    assert resp.status_code == 422


def test_booking_quote_mixes_aware_and_naive_dates() -> None:
    body = {
        "listingCategory": "CAMERA",
        "dailyPrice": 100,
        "startDate": "2025-01-01T00:00:00Z",
        "endDate": "2025-01-03T00:00:00",
        "ownerTrustScore": 75,
    }
    resp = client.post("/booking-quote", json=body)
    assert resp.status_code == 200
    assert resp.json()["rentalDays"] == 2
