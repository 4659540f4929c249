from __future__ import annotations

import logging
import math

from contracts.errors import ValidationError
from contracts.schemas import PremiumCalculation
from jurisdiction_registry import JurisdictionSource
from model_risk.scoring import mrs_mapping

logger = logging.getLogger(__name__)


def _as_number(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name}_not_numeric:{value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValidationError(f"{name}_not_finite:{value!r}")
    return number


def calculate_premium(
    limit: float,
    base_rate_pct: float,
    jurisdiction: str,
    mrs: int,
    jurisdictions: JurisdictionSource,
) -> PremiumCalculation:
    """
    Quote a policy for one model score in one jurisdiction.

    premium = limit * (base_rate_pct / 100) * risk_multiplier(mrs) * jurisdiction multiplier

    The premium is left unrounded so quotes scale exactly with the limit.
    """
    policy_limit = _as_number(limit, "limit")
    if policy_limit <= 0:
        raise ValidationError(f"limit_must_be_positive:{limit}")
    rate = _as_number(base_rate_pct, "base_rate_pct")
    if rate < 0:
        raise ValidationError(f"base_rate_pct_negative:{base_rate_pct}")

    code = str(jurisdiction or "").strip().upper()
    profile = jurisdictions.get_jurisdiction(code) if code else None
    if profile is None:
        raise ValidationError(f"unknown_jurisdiction:{code}")

    # Same mapping that produced the model's premium_multiplier; raises on out-of-range mrs.
    terms = mrs_mapping(mrs)

    premium = policy_limit * (rate / 100.0) * terms.premium_multiplier * profile.multiplier
    deductible = None if terms.deductible_pct is None else policy_limit * terms.deductible_pct / 100.0
    max_capacity = policy_limit * terms.max_capacity_pct / 100.0

    logger.debug(
        "premium quote jurisdiction=%s mrs=%s class=%s premium=%.2f",
        profile.code,
        mrs,
        terms.risk_class.value,
        premium,
    )
    return PremiumCalculation(
        premium=premium,
        deductible=deductible,
        max_capacity=max_capacity,
        risk_class=terms.risk_class,
        policy_limit=policy_limit,
        base_rate_pct=rate,
        jurisdiction=profile.code,
        jurisdiction_multiplier=profile.multiplier,
        mrs=int(round(mrs)),
        risk_multiplier=terms.premium_multiplier,
        declined=max_capacity == 0,
    )
