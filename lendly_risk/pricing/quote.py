# lendly_risk/pricing/quote.py
"""
Quote assembly.

Provides:
- explanation text for the UI
- generate_quote: score -> band -> deposit -> protection -> explanation

Notes:
- Explanation wording is consumed by the apps and by golden-output tests;
  change it only together with them.
- Amounts are plain numbers in the base currency; the symbol appears in the
  explanation only.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from lendly_risk.pricing.config import RiskConfig
from lendly_risk.pricing.deposit import compute_protection, compute_security_deposit
from lendly_risk.pricing.risk import assign_risk_band, calculate_risk_score

if TYPE_CHECKING:
    from lendly_risk.quoting.schemas import InsuranceInput

_TEMPLATES: Dict[str, str] = {
    "low": "Low risk booking. A reduced deposit of {cur}{deposit} and optional protection up to {cur}{coverage}.",
    "medium": "Standard risk booking. Recommended deposit of {cur}{deposit} and optional protection up to {cur}{coverage}.",
    "high": (
        "High risk booking. Higher deposit of {cur}{deposit} and optional protection up to "
        "{cur}{coverage} due to item value and user history."
    ),
}


def format_amount(amount: float) -> str:
    # he-IL grouping: 12,345 (up to 3 decimals, trailing zeros dropped)
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return text


def explain_quote(
    risk_band: str,
    deposit: float,
    coverage: float,
    cfg: Optional[RiskConfig] = None,
) -> str:
    cfg = cfg or RiskConfig()
    return _TEMPLATES[risk_band].format(
        cur=cfg.currency_symbol,
        deposit=format_amount(deposit),
        coverage=format_amount(coverage),
    )


@dataclass(frozen=True)
class QuoteResult:
    risk_score: float
    risk_band: str
    security_deposit: int
    protection_fee: int
    max_coverage: int
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def generate_quote(inp: "InsuranceInput", cfg: Optional[RiskConfig] = None) -> QuoteResult:
    """
    Price a validated input. Each stage only consumes the previous stage's value.
    """
    cfg = cfg or RiskConfig()

    score = calculate_risk_score(inp, cfg)
    band = assign_risk_band(score, cfg)
    deposit = compute_security_deposit(inp.item_value, inp.daily_price, inp.rental_days, band, cfg)
    protection = compute_protection(inp.item_value, band, cfg)

    return QuoteResult(
        risk_score=score,
        risk_band=band,
        security_deposit=deposit,
        protection_fee=protection.fee,
        max_coverage=protection.coverage,
        explanation=explain_quote(band, deposit, protection.coverage, cfg),
    )
