from __future__ import annotations

import logging
from typing import Iterable, Mapping, Tuple

from contracts.errors import ValidationError
from contracts.schemas import JurisdictionProfile, LawCategory, MultiJurisdictionRisk, RiskClass
from jurisdiction_registry import JurisdictionSource, penalty_ceiling

logger = logging.getLogger(__name__)

CONTENT_TYPE_CATEGORIES: Mapping[str, Tuple[LawCategory, ...]] = {
    "AI-generated ad": (LawCategory.AI_AD_DISCLOSURE,),
    "Synthetic performer": (LawCategory.NIL_RIGHTS,),
    "NIL usage": (LawCategory.NIL_RIGHTS,),
    "Deepfake": (LawCategory.DEEPFAKE,),
    "Mixed": (LawCategory.AI_AD_DISCLOSURE, LawCategory.NIL_RIGHTS, LawCategory.DEEPFAKE),
}

BASELINE_MULTIPLIER = 1.0

# (lower bound on the aggregated multiplier, class); first match wins
MULTIPLIER_RISK_BANDS: Tuple[Tuple[float, RiskClass], ...] = (
    (1.8, RiskClass.ELEVATED),
    (1.4, RiskClass.GUARDED),
    (1.2, RiskClass.MODERATE),
)


def risk_level_for_multiplier(multiplier: float) -> RiskClass:
    for lower, risk_class in MULTIPLIER_RISK_BANDS:
        if multiplier >= lower:
            return risk_class
    return RiskClass.LOW


def format_exposure(amount: int) -> str:
    return f"Up to ${amount:,} aggregate"


def _categories_for(content_type: str) -> Tuple[LawCategory, ...]:
    key = str(content_type or "").strip()
    for name, categories in CONTENT_TYPE_CATEGORIES.items():
        if name.lower() == key.lower():
            return categories
    raise ValidationError(f"unknown_content_type:{key}")


def calculate_multi_state_risk(
    codes: Iterable[str],
    content_type: str,
    jurisdictions: JurisdictionSource,
) -> MultiJurisdictionRisk:
    """
    Combined exposure for a campaign spanning several jurisdictions.

    Unknown codes contribute the baseline multiplier and no penalty, so adding a
    jurisdiction never lowers the multiplier or the exposure.
    """
    requested = [str(c).strip().upper() for c in codes if c is not None and str(c).strip()]
    if not requested:
        raise ValidationError("jurisdiction_codes_required")
    categories = _categories_for(content_type)

    profiles: list[JurisdictionProfile] = []
    seen: set[str] = set()
    for code in requested:
        if code in seen:
            continue
        seen.add(code)
        profile = jurisdictions.get_jurisdiction(code)
        if profile is None:
            logger.warning("no jurisdiction profile for %s; using baseline", code)
            continue
        profiles.append(profile)

    multiplier = round(max([BASELINE_MULTIPLIER] + [p.multiplier for p in profiles]), 2)
    amount = sum(penalty_ceiling(p, categories) for p in profiles)

    return MultiJurisdictionRisk(
        jurisdictions=tuple(profiles),
        combined_penalty_exposure=format_exposure(amount),
        combined_penalty_amount=amount,
        recommended_multiplier=multiplier,
        risk_level=risk_level_for_multiplier(multiplier),
    )
