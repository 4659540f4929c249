from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Tuple

from contracts.errors import ValidationError
from contracts.schemas import (
    JurisdictionImpact,
    ModelRiskScore,
    RiskClass,
    RiskFactor,
    ScoreChange,
)

MRS_MIN = 0
MRS_MAX = 100

# (lowest MRS in the class, class); first match wins
RISK_CLASS_FLOORS: Tuple[Tuple[int, RiskClass], ...] = (
    (90, RiskClass.LOW),
    (80, RiskClass.MODERATE),
    (70, RiskClass.GUARDED),
    (55, RiskClass.ELEVATED),
    (40, RiskClass.SEVERE),
)

# The jurisdiction whose impacts feed the score correction term.
ADJUSTMENT_JURISDICTION = "NY"


@dataclass(frozen=True)
class MRSInsuranceMapping:
    risk_class: RiskClass
    premium_multiplier: float
    deductible_pct: Optional[float]  # None: no deductible
    max_capacity_pct: float  # 0: capacity declined


INSURANCE_TERMS: Mapping[RiskClass, MRSInsuranceMapping] = {
    RiskClass.LOW: MRSInsuranceMapping(RiskClass.LOW, 1.0, None, 100.0),
    RiskClass.MODERATE: MRSInsuranceMapping(RiskClass.MODERATE, 1.25, 2.5, 75.0),
    RiskClass.GUARDED: MRSInsuranceMapping(RiskClass.GUARDED, 1.5, 5.0, 50.0),
    RiskClass.ELEVATED: MRSInsuranceMapping(RiskClass.ELEVATED, 1.75, 10.0, 25.0),
    RiskClass.SEVERE: MRSInsuranceMapping(RiskClass.SEVERE, 2.5, 15.0, 10.0),
    RiskClass.CRITICAL: MRSInsuranceMapping(RiskClass.CRITICAL, 4.0, 25.0, 0.0),
}


def clamp_mrs(value: float) -> int:
    return int(max(MRS_MIN, min(MRS_MAX, round(value))))


def _check_mrs(mrs: int) -> int:
    if isinstance(mrs, bool) or not isinstance(mrs, (int, float)):
        raise ValidationError(f"mrs_not_numeric:{mrs!r}")
    if not math.isfinite(mrs):
        raise ValidationError(f"mrs_not_finite:{mrs!r}")
    if mrs < MRS_MIN or mrs > MRS_MAX:
        raise ValidationError(f"mrs_out_of_range:{mrs}")
    # same rounding as clamp_mrs
    return int(round(mrs))


def risk_class_for_mrs(mrs: int) -> RiskClass:
    """Step function: a higher score never maps to a worse class."""
    mrs = _check_mrs(mrs)
    for floor, risk_class in RISK_CLASS_FLOORS:
        if mrs >= floor:
            return risk_class
    return RiskClass.CRITICAL


def insurance_terms(risk_class: RiskClass) -> MRSInsuranceMapping:
    return INSURANCE_TERMS[risk_class]


def mrs_mapping(mrs: int) -> MRSInsuranceMapping:
    return insurance_terms(risk_class_for_mrs(mrs))


def risk_multiplier(mrs: int) -> float:
    """Premium multiplier for a score; the premium calculator uses this too."""
    return mrs_mapping(mrs).premium_multiplier


def compose_final_mrs(base_score: int, risk_factors: Iterable[RiskFactor], ny_adjustment: int) -> int:
    """clamp(base + sum of factor impacts + adjustment, 0, 100)."""
    total = int(base_score) + sum(int(f.score_impact) for f in risk_factors) + int(ny_adjustment)
    return clamp_mrs(total)


def ny_adjustment_for(impacts: Iterable[JurisdictionImpact]) -> int:
    return sum(int(i.score_penalty) for i in impacts if i.jurisdiction == ADJUSTMENT_JURISDICTION)


def build_model_risk_score(
    model_id: str,
    model_name: str,
    base_score: int,
    risk_factors: Iterable[RiskFactor],
    jurisdiction_impacts: Iterable[JurisdictionImpact] = (),
    *,
    ny_adjustment: Optional[int] = None,
    score_history: Iterable[ScoreChange] = (),
    affected_contract_ids: Iterable[str] = (),
    calculated_at: str = "",
) -> ModelRiskScore:
    if not str(model_id).strip():
        raise ValidationError("model_id_required")
    if not MRS_MIN <= int(base_score) <= MRS_MAX:
        raise ValidationError(f"base_score_out_of_range:{base_score}")

    factors = tuple(risk_factors)
    impacts = tuple(jurisdiction_impacts)
    adjustment = ny_adjustment_for(impacts) if ny_adjustment is None else int(ny_adjustment)
    final = compose_final_mrs(base_score, factors, adjustment)
    terms = mrs_mapping(final)

    return ModelRiskScore(
        model_id=str(model_id),
        model_name=model_name,
        base_score=int(base_score),
        ny_adjustment=adjustment,
        final_mrs=final,
        risk_class=terms.risk_class,
        premium_multiplier=terms.premium_multiplier,
        deductible_pct=terms.deductible_pct,
        max_capacity_pct=terms.max_capacity_pct,
        risk_factors=factors,
        jurisdiction_impacts=impacts,
        score_history=tuple(score_history),
        affected_contract_ids=tuple(affected_contract_ids),
        calculated_at=calculated_at,
    )
