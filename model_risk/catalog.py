"""
Reference Model Risk Scores for the AI tools tracked by the dashboard.

Each model is described by a control posture (0-100). The posture decides which
controls are unmet, and every score is then composed by build_model_risk_score,
so the stored scores always satisfy the composition invariant.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Protocol, Tuple

from contracts.schemas import (
    ComplianceStatus,
    JurisdictionImpact,
    ModelRiskScore,
    RiskFactor,
    RiskFactorCategory as Cat,
    RiskFactorStatus as St,
    ScoreChange,
)

from .scoring import build_model_risk_score, clamp_mrs, compose_final_mrs, ny_adjustment_for

logger = logging.getLogger(__name__)

CALCULATED_AT = "2025-02-01T00:00:00Z"


@dataclass(frozen=True)
class ControlSpec:
    key: str
    name: str
    category: Cat
    weight: float
    passes_at: int  # posture at or above which the control is met
    unmet_status: St
    impact: int
    met_detail: str
    unmet_detail: str
    remediation: str


CONTROLS: Tuple[ControlSpec, ...] = (
    ControlSpec("1", "NIL consent status", Cat.CONSENT, 0.15, 80, St.FAIL, -12,
                "All NIL consents verified", "Missing NIL consent for 3 pending athletes",
                "Obtain verified NIL consent for pending athletes"),
    ControlSpec("2", "AI advertising disclosure", Cat.REGULATORY, 0.12, 75, St.WARNING, -8,
                "AI disclosure tags present on all ads", "No AI ad disclosure for NY campaign",
                "Add AI disclosure tags for NY ad campaign"),
    ControlSpec("3", "Training data provenance", Cat.PROVENANCE, 0.15, 85, St.WARNING, -10,
                "Full training data audit complete", "Incomplete training data provenance chain",
                "Complete training data provenance chain"),
    ControlSpec("4", "Output attribution chain", Cat.PROVENANCE, 0.10, 70, St.FAIL, -6,
                "Attribution chain complete", "Output attribution chain has gaps",
                "Document output attribution chain"),
    ControlSpec("6", "Model version audit trail", Cat.OPERATIONAL, 0.08, 80, St.WARNING, -3,
                "Version audit trail complete", "Missing model version documentation",
                "Update model version documentation"),
    ControlSpec("7", "Jurisdiction coverage", Cat.REGULATORY, 0.10, 75, St.FAIL, -5,
                "All target jurisdictions covered", "Coverage gap in NY and CA jurisdictions",
                "Add compliance for NY and CA requirements"),
    ControlSpec("8", "Historical incident count", Cat.OPERATIONAL, 0.05, 70, St.WARNING, -2,
                "No prior incidents", "2 prior compliance incidents",
                "Resolve historical compliance incidents"),
    ControlSpec("9", "Metadata completeness", Cat.PROVENANCE, 0.08, 80, St.FAIL, -4,
                "Metadata 100% complete", "Metadata missing: prompt record, tool version",
                "Complete all metadata fields"),
)

CREDENTIALS_BONUS = 3
CREDENTIALS_POSTURE = 85
AUDIO_CONTENT_IMPACT = -5
NY_NON_COMPLIANT_PENALTY = -3

# (model_id, name, control posture, provenance base score, audio/voice output)
REFERENCE_MODELS: Tuple[Tuple[str, str, int, int, bool], ...] = (
    ("model-1", "Midjourney v6", 78, 100, False),
    ("model-2", "DALL-E 3", 85, 80, False),
    ("model-3", "Stable Diffusion XL", 62, 100, False),
    ("model-4", "Runway Gen-3 Alpha", 72, 100, False),
    ("model-5", "ElevenLabs Voice", 55, 98, True),
    ("model-6", "Suno AI Music", 48, 90, True),
    ("model-7", "GPT-4o Vision", 88, 90, False),
    ("model-8", "Claude 3.5 Sonnet", 91, 94, False),
    ("model-9", "Gemini Ultra", 83, 85, False),
    ("model-10", "Llama 3 70B", 67, 100, False),
)

_HISTORY_REASONS = (
    "Training data audit completed",
    "NIL consent obtained",
    "Jurisdiction gap identified",
    "Model version updated",
    "Compliance review passed",
    "Metadata fields added",
    "New NY regulation applied",
    "Quarterly re-assessment",
)
_HISTORY_ACTORS = ("System", "Compliance Officer", "Auto-scan", "Legal Team")


def _control_factor(model_id: str, control: ControlSpec, posture: int) -> RiskFactor:
    met = posture >= control.passes_at
    return RiskFactor(
        id=f"rf-{model_id}-{control.key}",
        name=control.name,
        category=control.category,
        weight=control.weight,
        score_impact=0 if met else control.impact,
        status=St.PASS if met else control.unmet_status,
        detail=control.met_detail if met else control.unmet_detail,
        remediation_action=control.remediation,
        estimated_improvement=-control.impact,
    )


def reference_risk_factors(model_id: str, posture: int, audio: bool) -> Tuple[RiskFactor, ...]:
    factors = [_control_factor(model_id, control, posture) for control in CONTROLS]
    factors.insert(
        4,
        RiskFactor(
            id=f"rf-{model_id}-5", name="Deepfake detection confidence", category=Cat.TECHNICAL,
            weight=0.10, score_impact=0, status=St.PASS, detail="Deepfake detection confidence >95%",
            remediation_action="N/A", estimated_improvement=0,
        ),
    )
    factors.append(
        RiskFactor(
            id=f"rf-{model_id}-10", name="Content type risk", category=Cat.TECHNICAL, weight=0.07,
            score_impact=AUDIO_CONTENT_IMPACT if audio else 0,
            status=St.WARNING if audio else St.PASS,
            detail="Audio/voice content has elevated risk profile" if audio else "Content type risk within acceptable range",
            remediation_action="Apply enhanced review for audio content",
            estimated_improvement=-AUDIO_CONTENT_IMPACT,
        )
    )
    credentials = posture >= CREDENTIALS_POSTURE
    factors.append(
        RiskFactor(
            id=f"rf-{model_id}-11", name="Content credentials (C2PA)", category=Cat.PROVENANCE, weight=0.05,
            score_impact=CREDENTIALS_BONUS if credentials else 0,
            status=St.PASS if credentials else St.WARNING,
            detail="C2PA manifest embedded in outputs" if credentials else "Outputs carry no content credentials",
            remediation_action="Embed C2PA content credentials in generated outputs",
            estimated_improvement=0 if credentials else CREDENTIALS_BONUS,
        )
    )
    return tuple(factors)


def reference_jurisdiction_impacts(posture: int, audio: bool) -> Tuple[JurisdictionImpact, ...]:
    return (
        JurisdictionImpact(
            "NY", "AI Ad Disclosure",
            ComplianceStatus.COMPLIANT if posture >= 80 else ComplianceStatus.NON_COMPLIANT,
            0 if posture >= 80 else NY_NON_COMPLIANT_PENALTY, 1.8,
        ),
        JurisdictionImpact(
            "CA", "Synthetic Performer",
            ComplianceStatus.COMPLIANT if posture >= 75 else ComplianceStatus.PARTIAL,
            0 if posture >= 75 else -4, 2.0,
        ),
        JurisdictionImpact("IL", "BIPA Biometric", ComplianceStatus.COMPLIANT, 0, 1.7),
        JurisdictionImpact(
            "TN", "ELVIS Act",
            ComplianceStatus.NON_COMPLIANT if audio else ComplianceStatus.COMPLIANT,
            -3 if audio else 0, 1.5,
        ),
    )


def reference_score_history(final_mrs: int, as_of: date) -> Tuple[ScoreChange, ...]:
    """Eight re-assessments, eleven days apart, converging on the current score."""
    history: list[ScoreChange] = []
    for idx, reason in enumerate(_HISTORY_REASONS):
        days_ago = (len(_HISTORY_REASONS) - idx) * 11
        new_score = clamp_mrs(final_mrs - 2 * (len(_HISTORY_REASONS) - 1 - idx))
        history.append(
            ScoreChange(
                date=(as_of - timedelta(days=days_ago)).isoformat(),
                old_score=clamp_mrs(new_score - 2),
                new_score=new_score,
                reason=reason,
                triggered_by=_HISTORY_ACTORS[idx % len(_HISTORY_ACTORS)],
            )
        )
    return tuple(history)


def reference_model_score(model_id: str, name: str, posture: int, base: int, audio: bool) -> ModelRiskScore:
    factors = reference_risk_factors(model_id, posture, audio)
    impacts = reference_jurisdiction_impacts(posture, audio)
    final = compose_final_mrs(base, factors, ny_adjustment_for(impacts))
    number = model_id.rsplit("-", 1)[-1]
    return build_model_risk_score(
        model_id,
        name,
        base,
        factors,
        impacts,
        score_history=reference_score_history(final, date(2025, 2, 1)),
        affected_contract_ids=(f"contract-{number}",) if final < 80 else (),
        calculated_at=CALCULATED_AT,
    )


class ModelScoreSource(Protocol):
    def get_model_risk_scores(self) -> Tuple[ModelRiskScore, ...]: ...

    def get_model_risk_score(self, model_id: str) -> Optional[ModelRiskScore]: ...


class ModelScoreCatalog:
    """Immutable set of model scores keyed by model id."""

    def __init__(self, scores: Iterable[ModelRiskScore]) -> None:
        ordered: dict[str, ModelRiskScore] = {}
        for s in scores:
            ordered.setdefault(s.model_id, s)
        self._scores: Mapping[str, ModelRiskScore] = MappingProxyType(ordered)

    def get_model_risk_scores(self) -> Tuple[ModelRiskScore, ...]:
        return tuple(self._scores.values())

    def get_model_risk_score(self, model_id: str) -> Optional[ModelRiskScore]:
        return self._scores.get(str(model_id))


@lru_cache(maxsize=1)
def default_model_catalog() -> ModelScoreCatalog:
    catalog = ModelScoreCatalog(reference_model_score(*row) for row in REFERENCE_MODELS)
    logger.debug("loaded %d reference model scores", len(catalog.get_model_risk_scores()))
    return catalog


def get_model_risk_scores(source: Optional[ModelScoreSource] = None) -> Tuple[ModelRiskScore, ...]:
    return (source or default_model_catalog()).get_model_risk_scores()


def get_model_risk_score(model_id: str, source: Optional[ModelScoreSource] = None) -> Optional[ModelRiskScore]:
    return (source or default_model_catalog()).get_model_risk_score(model_id)
