from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from contracts.schemas import (
    Effort,
    ModelExplainability,
    RemediationItem,
    RiskFactor,
    RiskFactorStatus,
)

from .catalog import ModelScoreSource, get_model_risk_score
from .scoring import clamp_mrs

logger = logging.getLogger(__name__)


def effort_for_improvement(points: int) -> Effort:
    if points > 10:
        return Effort.HIGH
    if points > 5:
        return Effort.MEDIUM
    return Effort.LOW


def outstanding_factors(factors: Iterable[RiskFactor]) -> Tuple[RiskFactor, ...]:
    return tuple(f for f in factors if f.status != RiskFactorStatus.PASS and int(f.estimated_improvement) > 0)


def build_remediation_roadmap(factors: Iterable[RiskFactor]) -> Tuple[RemediationItem, ...]:
    """
    Prioritized remediation list for a model's unmet controls.

    Order is by estimated improvement (largest first), then by effort (cheapest
    first). sorted() is stable, so equal keys keep the factors' own order and
    repeated calls on the same input give the same list.
    """
    candidates = [
        (f, int(f.estimated_improvement), effort_for_improvement(int(f.estimated_improvement)))
        for f in outstanding_factors(factors)
    ]
    candidates = sorted(candidates, key=lambda c: (-c[1], c[2].rank))

    return tuple(
        RemediationItem(
            priority=idx + 1,
            action=factor.remediation_action,
            estimated_improvement=improvement,
            effort=effort,
            factor_id=factor.id,
        )
        for idx, (factor, improvement, effort) in enumerate(candidates)
    )


def projected_mrs(final_mrs: int, items: Iterable[RemediationItem], limit: Optional[int] = None) -> int:
    """Score after applying the first `limit` roadmap items (all of them by default)."""
    selected = tuple(items)
    if limit is not None:
        selected = selected[: max(0, int(limit))]
    return clamp_mrs(int(final_mrs) + sum(i.estimated_improvement for i in selected))


def get_model_risk_explainability(
    model_id: str,
    source: Optional[ModelScoreSource] = None,
) -> Optional[ModelExplainability]:
    score = get_model_risk_score(model_id, source)
    if score is None:
        logger.debug("no model risk score for %s", model_id)
        return None

    roadmap = build_remediation_roadmap(score.risk_factors)
    return ModelExplainability(
        model=score,
        remediation_roadmap=roadmap,
        projected_mrs=projected_mrs(score.final_mrs, roadmap),
    )
