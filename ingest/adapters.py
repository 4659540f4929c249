"""
Adapters from raw dashboard records (JSON objects) to the engine's canonical types.

Records arrive in camelCase from the dashboard and in snake_case from batch
files; both are accepted. A record may carry "schemaVersion"; only the versions
listed in SUPPORTED_SCHEMA_VERSIONS are read.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from contracts.errors import ValidationError
from contracts.schemas import (
    AssetRiskInput,
    ComplianceStatus,
    EnforcementIntensity,
    JurisdictionImpact,
    JurisdictionProfile,
    JurisdictionScope,
    LawCategory,
    LegislationStatus,
    ModelRiskScore,
    ProjectDistribution,
    RiskFactor,
    RiskFactorCategory,
    RiskFactorStatus,
    ScoreChange,
    platform_key,
)
from model_risk.scoring import build_model_risk_score

SUPPORTED_SCHEMA_VERSIONS = frozenset({"1"})

AI_GENERATED = "ai_generated"
AI_GENERATIVE_METHOD = "AI Generative"

E = TypeVar("E", bound=Enum)


def _check_version(raw: Mapping[str, Any]) -> None:
    version = _get(raw, "schemaVersion", "schema_version")
    if version is not None and str(version) not in SUPPORTED_SCHEMA_VERSIONS:
        raise ValidationError(f"unsupported_schema_version:{version}")


def _record(raw: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{kind}_record_not_object")
    _check_version(raw)
    return raw


def _get(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _str_tuple(values: Any, name: str) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, (list, tuple)):
        raise ValidationError(f"{name}_not_list")
    return tuple(str(v).strip() for v in values if v is not None and str(v).strip())


def _code_tuple(values: Any, name: str) -> Tuple[str, ...]:
    return tuple(v.upper() for v in _str_tuple(values, name))


def _bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValidationError(f"{name}_not_boolean:{value!r}")


def _int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{name}_not_numeric:{value!r}")
    return int(round(value))


def _float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{name}_not_numeric:{value!r}")
    return float(value)


def _enum(cls: Type[E], value: Any, name: str) -> E:
    try:
        return cls(value)
    except ValueError:
        raise ValidationError(f"invalid_{name}:{value!r}") from None


def asset_to_risk_input(raw: Mapping[str, Any]) -> AssetRiskInput:
    raw = _record(raw, "asset")

    content_type = _get(raw, "contentType", "content_type")
    if _get(raw, "aiMethod", "ai_method") == AI_GENERATIVE_METHOD:
        content_type = AI_GENERATED

    platform_raw = _get(raw, "platformCompliance", "platform_compliance")
    platform_compliance: Optional[Mapping[str, bool]] = None
    if platform_raw is not None:
        if not isinstance(platform_raw, Mapping):
            raise ValidationError("platform_compliance_not_object")
        # Only an explicit true counts as compliant.
        platform_compliance = {platform_key(k): v is True for k, v in platform_raw.items()}

    return AssetRiskInput(
        content_type=str(content_type) if content_type is not None else None,
        creator_ids=_str_tuple(_get(raw, "creatorIds", "creator_ids"), "creator_ids"),
        talent_rights_verified=_bool(
            _get(raw, "talentRightsVerified", "talent_rights_verified", default=False),
            "talent_rights_verified",
        ),
        platform_compliance=platform_compliance,
        ai_disclosure_applied=_bool(
            _get(raw, "aiDisclosureApplied", "ai_disclosure_applied", default=False),
            "ai_disclosure_applied",
        ),
    )


def distribution_from_record(raw: Optional[Mapping[str, Any]]) -> Optional[ProjectDistribution]:
    if not raw:
        return None
    raw = _record(raw, "distribution")
    return ProjectDistribution(
        primary_use=str(_get(raw, "primary_use", "primaryUse", default="")).strip().lower(),
        us_states=_code_tuple(_get(raw, "us_states", "usStates"), "us_states"),
        countries=_code_tuple(_get(raw, "countries"), "countries"),
        platforms=tuple(p.lower() for p in _str_tuple(_get(raw, "platforms"), "platforms")),
        start_date=str(_get(raw, "start_date", "startDate", default="")),
        end_date=_get(raw, "end_date", "endDate"),
    )


def jurisdiction_from_record(
    raw: Mapping[str, Any],
    scope: JurisdictionScope = JurisdictionScope.US_STATE,
) -> JurisdictionProfile:
    raw = _record(raw, "jurisdiction")
    code = str(_get(raw, "stateCode", "countryCode", "code", default="")).strip().upper()
    if not code:
        raise ValidationError("jurisdiction_code_required")

    estimate = _get(raw, "penaltyEstimate", "penalty_estimate")
    return JurisdictionProfile(
        code=code,
        name=str(_get(raw, "state", "countryName", "name", default=code)),
        scope=scope,
        legislation_status=_enum(
            LegislationStatus, _get(raw, "legislationStatus", "legislation_status", default="NONE"), "legislation_status"
        ),
        law_categories=frozenset(
            _enum(LawCategory, c, "law_category")
            for c in _str_tuple(_get(raw, "lawCategories", "law_categories"), "law_categories")
        ),
        enforcement_intensity=_enum(
            EnforcementIntensity,
            _get(raw, "enforcementIntensity", "enforcement_intensity", default="None"),
            "enforcement_intensity",
        ),
        multiplier=_float(_get(raw, "multiplier", default=1.0), "multiplier"),
        ai_ad_penalty=str(_get(raw, "aiAdPenalty", "ai_ad_penalty", default="N/A")),
        nil_penalty=str(_get(raw, "nilPenalty", "nil_penalty", default="N/A")),
        deepfake_penalty=str(_get(raw, "deepfakePenalty", "deepfake_penalty", default="N/A")),
        effective_date=_get(raw, "effectiveDate", "effective_date"),
        statute_reference=_get(raw, "statuteReference", "statute_reference"),
        summary=_get(raw, "summary"),
        region=_get(raw, "region"),
        penalty_estimate=None if estimate is None else _int(estimate, "penalty_estimate"),
    )


def risk_factor_from_record(raw: Mapping[str, Any]) -> RiskFactor:
    raw = _record(raw, "risk_factor")
    factor_id = str(_get(raw, "id", default="")).strip()
    if not factor_id:
        raise ValidationError("risk_factor_id_required")
    weight = _float(_get(raw, "weight", default=0.0), "weight")
    if not 0.0 <= weight <= 1.0:
        raise ValidationError(f"weight_out_of_range:{weight}")
    improvement = _int(_get(raw, "estimatedImprovement", "estimated_improvement", default=0), "estimated_improvement")
    if improvement < 0:
        raise ValidationError(f"estimated_improvement_negative:{improvement}")

    return RiskFactor(
        id=factor_id,
        name=str(_get(raw, "name", default=factor_id)),
        category=_enum(RiskFactorCategory, _get(raw, "category"), "risk_factor_category"),
        weight=weight,
        score_impact=_int(_get(raw, "scoreImpact", "score_impact", default=0), "score_impact"),
        status=_enum(RiskFactorStatus, _get(raw, "status"), "risk_factor_status"),
        detail=str(_get(raw, "detail", default="")),
        remediation_action=str(_get(raw, "remediationAction", "remediation_action", default="")),
        estimated_improvement=improvement,
    )


def jurisdiction_impact_from_record(raw: Mapping[str, Any]) -> JurisdictionImpact:
    raw = _record(raw, "jurisdiction_impact")
    return JurisdictionImpact(
        jurisdiction=str(_get(raw, "jurisdiction", default="")).strip().upper(),
        law_type=str(_get(raw, "lawType", "law_type", default="")),
        compliance_status=_enum(
            ComplianceStatus, _get(raw, "complianceStatus", "compliance_status", default="compliant"), "compliance_status"
        ),
        score_penalty=_int(_get(raw, "scorePenalty", "score_penalty", default=0), "score_penalty"),
        multiplier_impact=_float(_get(raw, "multiplierImpact", "multiplier_impact", default=1.0), "multiplier_impact"),
    )


def _score_change(raw: Mapping[str, Any]) -> ScoreChange:
    raw = _record(raw, "score_change")
    return ScoreChange(
        date=str(_get(raw, "date", default="")),
        old_score=_int(_get(raw, "oldScore", "old_score", default=0), "old_score"),
        new_score=_int(_get(raw, "newScore", "new_score", default=0), "new_score"),
        reason=str(_get(raw, "reason", default="")),
        triggered_by=str(_get(raw, "triggeredBy", "triggered_by", default="")),
    )


def _each(values: Any) -> Iterable[Any]:
    return values if isinstance(values, (list, tuple)) else ()


def model_risk_score_from_record(raw: Mapping[str, Any]) -> ModelRiskScore:
    """
    Rebuild a supplied model score through the engine.

    finalMRS, riskClass and the insurance terms in the record are ignored and
    recomputed, so an imported score always satisfies the composition rule.
    """
    raw = _record(raw, "model_risk_score")
    adjustment = _get(raw, "nyAdjustment", "ny_adjustment")
    return build_model_risk_score(
        str(_get(raw, "modelId", "model_id", default="")),
        str(_get(raw, "modelName", "model_name", default="")),
        _int(_get(raw, "baseScore", "base_score"), "base_score"),
        [risk_factor_from_record(f) for f in _each(_get(raw, "riskFactors", "risk_factors"))],
        [jurisdiction_impact_from_record(j) for j in _each(_get(raw, "jurisdictionImpacts", "jurisdiction_impacts"))],
        ny_adjustment=None if adjustment is None else _int(adjustment, "ny_adjustment"),
        score_history=[_score_change(s) for s in _each(_get(raw, "scoreHistory", "score_history"))],
        affected_contract_ids=_str_tuple(
            _get(raw, "affectedContractIds", "affected_contract_ids"), "affected_contract_ids"
        ),
        calculated_at=str(_get(raw, "calculatedAt", "calculated_at", default="")),
    )
