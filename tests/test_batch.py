"""Tests for batch quoting."""

from __future__ import annotations

import json

import pandas as pd

from lendly_risk.batch.quote_batch import QUOTE_COLUMNS, main, quote_frame, summarize


def bookings_frame() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "itemId": "tent-1",
                "itemCategory": "camping",
                "itemValue": 500,
                "dailyPrice": 50,
                "rentalDays": 3,
                "renterTrustScore": 95,
                "ownerTrustScore": 90,
                "renterCompletedRentals": 20,
                "renterIncidents": 0,
                "itemIncidents": 0,
                "locationRiskIndex": 0.1,
            },
            {
                "itemId": "drone-1",
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
            },
            {
                "itemId": "broken-1",
                "itemCategory": "tools",
                "itemValue": 0,
                "dailyPrice": 100,
                "rentalDays": 3,
                "renterTrustScore": 70,
                "ownerTrustScore": 70,
                "renterCompletedRentals": 1,
                "renterIncidents": 0,
                "itemIncidents": 0,
                "locationRiskIndex": None,
            },
        ]
    )


def test_quote_frame_appends_quote_columns() -> None:
    df = bookings_frame()
    quoted = quote_frame(df)

    assert list(quoted.columns) == list(df.columns) + QUOTE_COLUMNS
    assert len(quoted) == 3
    assert quoted.loc[0, "risk_band"] == "low"
    assert quoted.loc[0, "security_deposit"] == 140
    assert quoted.loc[1, "risk_band"] == "high"
    assert quoted.loc[1, "max_coverage"] == 6000
    assert quoted.loc[1, "risk_score"] == 100.0


def test_invalid_rows_carry_error_and_do_not_stop_batch() -> None:
    quoted = quote_frame(bookings_frame())

    assert quoted.loc[2, "error"] == "Item value must be greater than 0"
    assert pd.isna(quoted.loc[2, "security_deposit"])
    assert quoted["error"].isna().sum() == 2


def test_summarize_counts_bands_and_errors() -> None:
    summary = summarize(quote_frame(bookings_frame()))

    assert summary.rows == 3
    assert summary.quoted == 2
    assert summary.failed == 1
    assert summary.band_counts == {"low": 1, "medium": 0, "high": 1}
    assert summary.total_security_deposit == 140 + 4550
    assert summary.errors == {"Item value must be greater than 0": 1}


def test_cli_round_trip_csv(tmp_path, capsys) -> None:
    in_path = tmp_path / "bookings.csv"
    out_path = tmp_path / "out" / "quotes.csv"
    bookings_frame().to_csv(in_path, index=False)

    assert main(["--in_path", str(in_path), "--out_path", str(out_path)]) == 0

    result = pd.read_csv(out_path)
    assert list(result["risk_band"].fillna("")) == ["low", "high", ""]

    summary = json.loads((tmp_path / "out" / "quotes_summary.json").read_text(encoding="utf-8"))
    assert summary["quoted"] == 2
    assert summary["failed"] == 1

    assert "Quoted: 2 | Failed: 1" in capsys.readouterr().out


def test_cli_applies_config_overrides(tmp_path) -> None:
    in_path = tmp_path / "bookings.jsonl"
    out_path = tmp_path / "quotes.jsonl"
    config_path = tmp_path / "risk.json"
    bookings_frame().iloc[:2].to_json(in_path, orient="records", lines=True)
    config_path.write_text(json.dumps({"coverage_ratio": 0.5}), encoding="utf-8")

    main(["--in_path", str(in_path), "--out_path", str(out_path), "--config", str(config_path)])

    result = pd.read_json(out_path, lines=True)
    assert list(result["max_coverage"]) == [250, 5000]


def test_non_finite_row_is_reported_not_raised() -> None:
    df = bookings_frame()
    df.loc[2, "itemValue"] = float("inf")
    df.loc[0, "locationRiskIndex"] = float("inf")

    quoted = quote_frame(df)

    assert quoted.loc[0, "error"] == "Location risk index must be between 0 and 1"
    assert quoted.loc[1, "risk_band"] == "high"
    assert quoted.loc[2, "error"] == "Item value must be greater than 0"
    assert summarize(quoted).failed == 2
