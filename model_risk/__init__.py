from .catalog import (
    REFERENCE_MODELS,
    ModelScoreCatalog,
    ModelScoreSource,
    default_model_catalog,
    get_model_risk_score,
    get_model_risk_scores,
)
from .remediation import (
    build_remediation_roadmap,
    effort_for_improvement,
    get_model_risk_explainability,
    projected_mrs,
)
from .scoring import (
    INSURANCE_TERMS,
    RISK_CLASS_FLOORS,
    MRSInsuranceMapping,
    build_model_risk_score,
    clamp_mrs,
    compose_final_mrs,
    insurance_terms,
    mrs_mapping,
    ny_adjustment_for,
    risk_class_for_mrs,
    risk_multiplier,
)

__all__ = [
    "INSURANCE_TERMS",
    "MRSInsuranceMapping",
    "ModelScoreCatalog",
    "ModelScoreSource",
    "REFERENCE_MODELS",
    "RISK_CLASS_FLOORS",
    "build_model_risk_score",
    "build_remediation_roadmap",
    "clamp_mrs",
    "compose_final_mrs",
    "default_model_catalog",
    "effort_for_improvement",
    "get_model_risk_explainability",
    "get_model_risk_score",
    "get_model_risk_scores",
    "insurance_terms",
    "mrs_mapping",
    "ny_adjustment_for",
    "projected_mrs",
    "risk_class_for_mrs",
    "risk_multiplier",
]
