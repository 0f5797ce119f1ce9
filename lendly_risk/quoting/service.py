# lendly_risk/quoting/service.py
"""
End-to-end quote service for the rental risk engine.

Single source of truth:
- raw record -> InsuranceInput -> validation (fail-fast)
- validated input -> score -> band -> deposit -> protection -> explanation

Validation always completes before any pricing runs, so callers either get a
full quote or a ValidationError, never a partial result.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from lendly_risk.pricing.config import RiskConfig, merge_overrides
from lendly_risk.pricing.quote import QuoteResult, generate_quote
from lendly_risk.quoting.schemas import InsuranceInput, InsuranceQuote
from lendly_risk.quoting.validation import ValidationError, validate_input
from lendly_risk.utils.config import load_risk_config

logger = logging.getLogger(__name__)

# Process default (useful for FastAPI startup + AWS Lambda warm invocations).
# Explicit cfg arguments always take precedence.
_CACHED_CONFIG: Optional[RiskConfig] = None


def get_risk_config(config_path: Optional[str] = None, force_reload: bool = False) -> RiskConfig:
    """
    Load and cache the process-wide RiskConfig (defaults + LENDLY_RISK_CONFIG overrides).
    """
    global _CACHED_CONFIG
    if force_reload or _CACHED_CONFIG is None:
        _CACHED_CONFIG = load_risk_config(config_path)
    return _CACHED_CONFIG


def price_input(inp: InsuranceInput, cfg: Optional[RiskConfig] = None) -> QuoteResult:
    """
    Validate then price. Returns the full pricing result, risk score included.
    """
    cfg = cfg or get_risk_config()
    try:
        validate_input(inp)
    except ValidationError as e:
        logger.info("Rejected quote input item_id=%s field=%s: %s", inp.item_id, e.field, e.message)
        raise

    result = generate_quote(inp, cfg)
    logger.debug(
        "Quoted item_id=%s score=%.1f band=%s deposit=%s fee=%s",
        inp.item_id,
        result.risk_score,
        result.risk_band,
        result.security_deposit,
        result.protection_fee,
    )
    return result


def calculate_insurance_quote(inp: InsuranceInput, cfg: Optional[RiskConfig] = None) -> InsuranceQuote:
    """
    Security deposit, protection fee, coverage and risk band for one booking.

    Raises ValidationError naming the first violated constraint.
    """
    result = price_input(inp, cfg)
    return InsuranceQuote(
        risk_band=result.risk_band,
        security_deposit=result.security_deposit,
        protection_fee=result.protection_fee,
        max_coverage=result.max_coverage,
        explanation=result.explanation,
    )


def resolve_config(
    pricing_overrides: Optional[Mapping[str, Any]] = None,
    cfg: Optional[RiskConfig] = None,
) -> RiskConfig:
    base = cfg or get_risk_config()
    if not pricing_overrides:
        return base
    return merge_overrides(pricing_overrides, base)


def quote_from_dict(
    raw: Mapping[str, Any],
    *,
    pricing_overrides: Optional[Mapping[str, Any]] = None,
    cfg: Optional[RiskConfig] = None,
) -> Dict[str, Any]:
    """
    Convenience: raw record (snake_case or camelCase keys) -> JSON-ready quote dict.
    """
    inp = InsuranceInput.from_dict(raw)
    quote = calculate_insurance_quote(inp, resolve_config(pricing_overrides, cfg))
    return quote.to_dict()
