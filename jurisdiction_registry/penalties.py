from __future__ import annotations

import re
from typing import Iterable

from contracts.schemas import JurisdictionProfile, LawCategory

# Only USD figures are summed; non-USD schedules need an explicit penalty_estimate.
_USD_AMOUNT = re.compile(r"(?:\$|\bUSD\s?)(\d[\d,]*(?:\.\d+)?)(?:\s*([KkMm])\b)?")

_SCALE = {"k": 1_000, "m": 1_000_000}


def parse_penalty_amount(text: str | None) -> int:
    """Largest USD amount quoted in a penalty text, 0 when none is quoted."""
    if not text:
        return 0
    best = 0
    for number, suffix in _USD_AMOUNT.findall(str(text)):
        value = float(number.replace(",", ""))
        if suffix:
            value *= _SCALE[suffix.lower()]
        best = max(best, int(round(value)))
    return best


def penalty_text_for(profile: JurisdictionProfile, category: LawCategory) -> str:
    if category == LawCategory.AI_AD_DISCLOSURE:
        return profile.ai_ad_penalty
    if category == LawCategory.DEEPFAKE:
        return profile.deepfake_penalty
    # NIL, publicity and biometric claims share the likeness schedule
    return profile.nil_penalty


def penalty_ceiling(profile: JurisdictionProfile, categories: Iterable[LawCategory]) -> int:
    return max((parse_penalty_amount(penalty_text_for(profile, c)) for c in categories), default=0)


def estimated_penalty(profile: JurisdictionProfile | None) -> int:
    """Per-market exposure used when an asset has an unresolved issue there."""
    if profile is None:
        return 0
    if profile.penalty_estimate is not None:
        return int(profile.penalty_estimate)
    return penalty_ceiling(
        profile,
        (LawCategory.AI_AD_DISCLOSURE, LawCategory.NIL_RIGHTS, LawCategory.DEEPFAKE),
    )
