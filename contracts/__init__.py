from .errors import RiskEngineError, UnknownJurisdiction, ValidationError
from .schemas import (
    AssetDistributionRiskResult,
    AssetRiskInput,
    ComplianceStatus,
    DistributionStatus,
    Effort,
    EnforcementIntensity,
    JurisdictionImpact,
    JurisdictionProfile,
    JurisdictionScope,
    LawCategory,
    LegislationNewsItem,
    LegislationStatus,
    MarketIssue,
    MarketRiskLevel,
    ModelExplainability,
    ModelRiskScore,
    MultiJurisdictionRisk,
    PremiumCalculation,
    ProjectDistribution,
    RemediationItem,
    RiskClass,
    RiskFactor,
    RiskFactorCategory,
    RiskFactorStatus,
    ScoreChange,
    platform_key,
)

__all__ = [
    "AssetDistributionRiskResult",
    "AssetRiskInput",
    "ComplianceStatus",
    "DistributionStatus",
    "Effort",
    "EnforcementIntensity",
    "JurisdictionImpact",
    "JurisdictionProfile",
    "JurisdictionScope",
    "LawCategory",
    "LegislationNewsItem",
    "LegislationStatus",
    "MarketIssue",
    "MarketRiskLevel",
    "ModelExplainability",
    "ModelRiskScore",
    "MultiJurisdictionRisk",
    "PremiumCalculation",
    "ProjectDistribution",
    "RemediationItem",
    "RiskClass",
    "RiskEngineError",
    "RiskFactor",
    "RiskFactorCategory",
    "RiskFactorStatus",
    "ScoreChange",
    "UnknownJurisdiction",
    "ValidationError",
    "platform_key",
]
