# lendly_risk/scripts/check_scenarios.py
"""
Run the reference booking scenarios through the risk engine and check each
against its expected band, deposit range and protection fee range.

Usage:
  python -m lendly_risk.scripts.check_scenarios

Exit code 1 when any scenario is off.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from lendly_risk.pricing.config import RiskConfig
from lendly_risk.quoting.schemas import InsuranceInput
from lendly_risk.quoting.service import calculate_insurance_quote
from lendly_risk.quoting.validation import ValidationError
from lendly_risk.utils.config import configure_logging


@dataclass(frozen=True)
class Scenario:
    name: str
    inp: InsuranceInput
    expected_band: str
    deposit_range: Tuple[int, int]
    fee_range: Tuple[int, int]


SCENARIOS: List[Scenario] = [
    Scenario(
        name="Low risk: trusted renter, cheap camping item",
        inp=InsuranceInput(
            item_id="scenario-1", item_category="camping", item_value=500, daily_price=50,
            rental_days=3, renter_trust_score=95, owner_trust_score=90,
            renter_completed_rentals=20, renter_incidents=0, item_incidents=0,
            location_risk_index=0.1,
        ),
        expected_band="low",
        deposit_range=(100, 200),
        fee_range=(10, 20),
    ),
    Scenario(
        name="High risk: new renter, expensive drone",
        inp=InsuranceInput(
            item_id="scenario-2", item_category="drone", item_value=10000, daily_price=500,
            rental_days=5, renter_trust_score=30, owner_trust_score=60,
            renter_completed_rentals=0, renter_incidents=2, item_incidents=1,
            location_risk_index=0.8,
        ),
        expected_band="high",
        deposit_range=(3000, 8000),
        fee_range=(700, 900),
    ),
    Scenario(
        name="Medium risk: average booking",
        inp=InsuranceInput(
            item_id="scenario-3", item_category="tools", item_value=2000, daily_price=150,
            rental_days=4, renter_trust_score=65, owner_trust_score=70,
            renter_completed_rentals=5, renter_incidents=1, item_incidents=0,
        ),
        expected_band="medium",
        deposit_range=(500, 1000),
        fee_range=(90, 110),
    ),
    Scenario(
        name="Long rental: 10 days",
        inp=InsuranceInput(
            item_id="scenario-4", item_category="camera", item_value=5000, daily_price=200,
            rental_days=10, renter_trust_score=75, owner_trust_score=75,
            renter_completed_rentals=10, renter_incidents=0, item_incidents=0,
        ),
        expected_band="medium",
        deposit_range=(1500, 2500),
        fee_range=(240, 260),
    ),
    Scenario(
        name="Minimum deposit: very cheap item",
        inp=InsuranceInput(
            item_id="scenario-5", item_category="camping", item_value=100, daily_price=200,
            rental_days=1, renter_trust_score=95, owner_trust_score=95,
            renter_completed_rentals=50, renter_incidents=0, item_incidents=0,
        ),
        expected_band="low",
        deposit_range=(400, 500),
        fee_range=(0, 10),
    ),
    Scenario(
        name="Maximum deposit: very expensive item",
        inp=InsuranceInput(
            item_id="scenario-6", item_category="drone", item_value=10000, daily_price=10,
            rental_days=30, renter_trust_score=10, owner_trust_score=10,
            renter_completed_rentals=0, renter_incidents=10, item_incidents=10,
            location_risk_index=1.0,
        ),
        expected_band="high",
        deposit_range=(5000, 8000),
        fee_range=(790, 810),
    ),
]


def check_scenario(scenario: Scenario, cfg: Optional[RiskConfig] = None) -> List[str]:
    """Return a list of problems (empty when the scenario holds)."""
    try:
        q = calculate_insurance_quote(scenario.inp, cfg)
    except ValidationError as e:
        return [f"rejected: {e.message}"]

    problems: List[str] = []
    if q.risk_band != scenario.expected_band:
        problems.append(f"risk band: expected {scenario.expected_band}, got {q.risk_band}")
    lo, hi = scenario.deposit_range
    if not lo <= q.security_deposit <= hi:
        problems.append(f"deposit: expected {lo}-{hi}, got {q.security_deposit}")
    lo, hi = scenario.fee_range
    if not lo <= q.protection_fee <= hi:
        problems.append(f"protection fee: expected {lo}-{hi}, got {q.protection_fee}")
    return problems


def main() -> int:
    configure_logging()
    cfg = RiskConfig()
    failed = 0

    print("=" * 80)
    for scenario in SCENARIOS:
        problems = check_scenario(scenario, cfg)
        status = "[OK]  " if not problems else "[FAIL]"
        print(f"{status} {scenario.name}")
        for p in problems:
            print(f"       - {p}")
        if not problems:
            q = calculate_insurance_quote(scenario.inp, cfg)
            print(
                f"       band={q.risk_band} deposit={q.security_deposit} "
                f"fee={q.protection_fee} coverage={q.max_coverage}"
            )
            print(f"       {q.explanation}")
        failed += bool(problems)
    print("=" * 80)
    print(f"Passed: {len(SCENARIOS) - failed}/{len(SCENARIOS)} | Failed: {failed}/{len(SCENARIOS)}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
