from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class LegislationStatus(str, Enum):
    NONE = "NONE"
    PROPOSED = "PROPOSED"
    IN_COMMITTEE = "IN_COMMITTEE"
    ENACTED = "ENACTED"


class LawCategory(str, Enum):
    AI_AD_DISCLOSURE = "AI_AD_DISCLOSURE"
    NIL_RIGHTS = "NIL_RIGHTS"
    RIGHT_OF_PUBLICITY = "RIGHT_OF_PUBLICITY"
    DEEPFAKE = "DEEPFAKE"
    BIOMETRIC_LIKENESS = "BIOMETRIC_LIKENESS"


LIKENESS_LAW_CATEGORIES = frozenset(
    {
        LawCategory.NIL_RIGHTS,
        LawCategory.RIGHT_OF_PUBLICITY,
        LawCategory.DEEPFAKE,
        LawCategory.BIOMETRIC_LIKENESS,
    }
)


class EnforcementIntensity(str, Enum):
    NONE = "None"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"

    @property
    def rank(self) -> int:
        return _ENFORCEMENT_ORDER.index(self)


_ENFORCEMENT_ORDER = (
    EnforcementIntensity.NONE,
    EnforcementIntensity.LOW,
    EnforcementIntensity.MEDIUM,
    EnforcementIntensity.HIGH,
    EnforcementIntensity.VERY_HIGH,
)


class JurisdictionScope(str, Enum):
    US_STATE = "us_state"
    COUNTRY = "country"


@dataclass(frozen=True)
class JurisdictionProfile:
    """
    Read-only legal metadata for one US state or country.

    penalty_estimate, when set, overrides the figure derived from the penalty
    texts (see jurisdiction_registry.penalties.estimated_penalty).
    """

    code: str
    name: str = ""
    scope: JurisdictionScope = JurisdictionScope.US_STATE
    legislation_status: LegislationStatus = LegislationStatus.NONE
    law_categories: frozenset[LawCategory] = frozenset()
    enforcement_intensity: EnforcementIntensity = EnforcementIntensity.NONE
    multiplier: float = 1.0
    ai_ad_penalty: str = "N/A"
    nil_penalty: str = "N/A"
    deepfake_penalty: str = "N/A"
    effective_date: Optional[str] = None
    statute_reference: Optional[str] = None
    summary: Optional[str] = None
    region: Optional[str] = None
    penalty_estimate: Optional[int] = None

    @property
    def enacted(self) -> bool:
        return self.legislation_status == LegislationStatus.ENACTED

    def has_law(self, category: LawCategory) -> bool:
        return category in self.law_categories

    def has_enacted_law(self, category: LawCategory) -> bool:
        return self.enacted and self.has_law(category)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "scope": self.scope.value,
            "legislation_status": self.legislation_status.value,
            "law_categories": sorted(c.value for c in self.law_categories),
            "enforcement_intensity": self.enforcement_intensity.value,
            "multiplier": self.multiplier,
            "ai_ad_penalty": self.ai_ad_penalty,
            "nil_penalty": self.nil_penalty,
            "deepfake_penalty": self.deepfake_penalty,
            "effective_date": self.effective_date,
            "statute_reference": self.statute_reference,
            "region": self.region,
        }


def platform_key(name: Any) -> str:
    """Canonical platform key: googleAds, google_ads and Google Ads all become googleads."""
    return "".join(ch for ch in str(name).lower() if ch.isalnum())


@dataclass(frozen=True)
class AssetRiskInput:
    # Safe defaults: a bare input is unverified and carries no platform flags.
    content_type: Optional[str] = None
    creator_ids: Tuple[str, ...] = ()
    talent_rights_verified: bool = False
    platform_compliance: Optional[Mapping[str, bool]] = None
    ai_disclosure_applied: bool = False

    @property
    def is_ai_generated(self) -> bool:
        return self.content_type == "ai_generated"

    @property
    def has_talent(self) -> bool:
        return len(self.creator_ids) > 0

    def platform_labeled(self, platform: str) -> bool:
        """True only for an explicit true flag; keys compare by platform_key()."""
        flags = self.platform_compliance or {}
        wanted = platform_key(platform)
        return any(v is True and platform_key(k) == wanted for k, v in flags.items())


@dataclass(frozen=True)
class ProjectDistribution:
    primary_use: str = ""
    us_states: Tuple[str, ...] = ()
    countries: Tuple[str, ...] = ()
    platforms: Tuple[str, ...] = ()
    start_date: str = ""
    end_date: Optional[str] = None

    @property
    def is_advertising(self) -> bool:
        return self.primary_use == "advertising"


class MarketRiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    BLOCKED = "blocked"

    @property
    def rank(self) -> int:
        return _MARKET_RISK_ORDER.index(self)


_MARKET_RISK_ORDER = (
    MarketRiskLevel.LOW,
    MarketRiskLevel.MEDIUM,
    MarketRiskLevel.HIGH,
    MarketRiskLevel.BLOCKED,
)


class DistributionStatus(str, Enum):
    CLEAR = "clear"
    NEEDS_REVIEW = "needs_review"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class MarketIssue:
    market: str
    risk_level: MarketRiskLevel
    needed: str
    scope: JurisdictionScope = JurisdictionScope.US_STATE
    penalty_estimate: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "market": self.market,
            "risk_level": self.risk_level.value,
            "needed": self.needed,
            "scope": self.scope.value,
            "penalty_estimate": self.penalty_estimate,
        }


@dataclass(frozen=True)
class AssetDistributionRiskResult:
    status: DistributionStatus = DistributionStatus.CLEAR
    market_issues: Tuple[MarketIssue, ...] = ()
    total_penalty_exposure: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "market_issues": [m.to_dict() for m in self.market_issues],
            "total_penalty_exposure": self.total_penalty_exposure,
        }


class RiskClass(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    GUARDED = "Guarded"
    ELEVATED = "Elevated"
    SEVERE = "Severe"
    CRITICAL = "Critical"

    @property
    def severity(self) -> int:
        """0 for Low up to 5 for Critical."""
        return _RISK_CLASS_ORDER.index(self)


_RISK_CLASS_ORDER = (
    RiskClass.LOW,
    RiskClass.MODERATE,
    RiskClass.GUARDED,
    RiskClass.ELEVATED,
    RiskClass.SEVERE,
    RiskClass.CRITICAL,
)


@dataclass(frozen=True)
class MultiJurisdictionRisk:
    jurisdictions: Tuple[JurisdictionProfile, ...]
    combined_penalty_exposure: str
    combined_penalty_amount: int
    recommended_multiplier: float
    risk_level: RiskClass

    def to_dict(self) -> dict[str, Any]:
        return {
            "jurisdictions": [j.code for j in self.jurisdictions],
            "combined_penalty_exposure": self.combined_penalty_exposure,
            "combined_penalty_amount": self.combined_penalty_amount,
            "recommended_multiplier": self.recommended_multiplier,
            "risk_level": self.risk_level.value,
        }


class RiskFactorCategory(str, Enum):
    CONSENT = "CONSENT"
    PROVENANCE = "PROVENANCE"
    REGULATORY = "REGULATORY"
    TECHNICAL = "TECHNICAL"
    OPERATIONAL = "OPERATIONAL"


class RiskFactorStatus(str, Enum):
    PASS = "PASS"
    WARNING = "WARNING"
    FAIL = "FAIL"


@dataclass(frozen=True)
class RiskFactor:
    id: str
    name: str
    category: RiskFactorCategory
    weight: float
    score_impact: int  # negative = unmet control
    status: RiskFactorStatus
    detail: str = ""
    remediation_action: str = ""
    estimated_improvement: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "weight": self.weight,
            "score_impact": self.score_impact,
            "status": self.status.value,
            "detail": self.detail,
            "remediation_action": self.remediation_action,
            "estimated_improvement": self.estimated_improvement,
        }


class ComplianceStatus(str, Enum):
    COMPLIANT = "compliant"
    PARTIAL = "partial"
    NON_COMPLIANT = "non_compliant"


@dataclass(frozen=True)
class JurisdictionImpact:
    jurisdiction: str
    law_type: str
    compliance_status: ComplianceStatus
    score_penalty: int = 0
    multiplier_impact: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "jurisdiction": self.jurisdiction,
            "law_type": self.law_type,
            "compliance_status": self.compliance_status.value,
            "score_penalty": self.score_penalty,
            "multiplier_impact": self.multiplier_impact,
        }


@dataclass(frozen=True)
class ScoreChange:
    date: str
    old_score: int
    new_score: int
    reason: str
    triggered_by: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "old_score": self.old_score,
            "new_score": self.new_score,
            "reason": self.reason,
            "triggered_by": self.triggered_by,
        }


@dataclass(frozen=True)
class ModelRiskScore:
    model_id: str
    model_name: str
    base_score: int
    ny_adjustment: int
    final_mrs: int
    risk_class: RiskClass
    premium_multiplier: float
    deductible_pct: Optional[float]
    max_capacity_pct: float
    risk_factors: Tuple[RiskFactor, ...] = ()
    jurisdiction_impacts: Tuple[JurisdictionImpact, ...] = ()
    score_history: Tuple[ScoreChange, ...] = ()
    affected_contract_ids: Tuple[str, ...] = ()
    calculated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_id": self.model_id,
            "model_name": self.model_name,
            "base_score": self.base_score,
            "ny_adjustment": self.ny_adjustment,
            "final_mrs": self.final_mrs,
            "risk_class": self.risk_class.value,
            "premium_multiplier": self.premium_multiplier,
            "deductible_pct": self.deductible_pct,
            "max_capacity_pct": self.max_capacity_pct,
            "risk_factors": [f.to_dict() for f in self.risk_factors],
            "jurisdiction_impacts": [j.to_dict() for j in self.jurisdiction_impacts],
            "score_history": [s.to_dict() for s in self.score_history],
            "affected_contract_ids": list(self.affected_contract_ids),
            "calculated_at": self.calculated_at,
        }


class Effort(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return (Effort.LOW, Effort.MEDIUM, Effort.HIGH).index(self)


@dataclass(frozen=True)
class RemediationItem:
    priority: int
    action: str
    estimated_improvement: int
    effort: Effort
    factor_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "priority": self.priority,
            "action": self.action,
            "estimated_improvement": self.estimated_improvement,
            "effort": self.effort.value,
            "factor_id": self.factor_id,
        }


@dataclass(frozen=True)
class ModelExplainability:
    model: ModelRiskScore
    remediation_roadmap: Tuple[RemediationItem, ...] = ()
    projected_mrs: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_id": self.model.model_id,
            "final_mrs": self.model.final_mrs,
            "remediation_roadmap": [r.to_dict() for r in self.remediation_roadmap],
            "projected_mrs": self.projected_mrs,
        }


@dataclass(frozen=True)
class PremiumCalculation:
    premium: float
    deductible: Optional[float]
    max_capacity: float
    risk_class: RiskClass
    policy_limit: float = 0.0
    base_rate_pct: float = 0.0
    jurisdiction: str = ""
    jurisdiction_multiplier: float = 1.0
    mrs: int = 0
    risk_multiplier: float = 1.0
    declined: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "premium": self.premium,
            "deductible": self.deductible,
            "max_capacity": self.max_capacity,
            "risk_class": self.risk_class.value,
            "policy_limit": self.policy_limit,
            "base_rate_pct": self.base_rate_pct,
            "jurisdiction": self.jurisdiction,
            "jurisdiction_multiplier": self.jurisdiction_multiplier,
            "mrs": self.mrs,
            "risk_multiplier": self.risk_multiplier,
            "declined": self.declined,
        }


@dataclass(frozen=True)
class LegislationNewsItem:
    id: str
    headline: str
    code: str
    name: str
    date: str
    category: str
    summary: str = ""
    source_url: str = ""
    scope: JurisdictionScope = JurisdictionScope.US_STATE
    region: Optional[str] = None
