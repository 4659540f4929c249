from .adapters import (
    SUPPORTED_SCHEMA_VERSIONS,
    asset_to_risk_input,
    distribution_from_record,
    jurisdiction_from_record,
    jurisdiction_impact_from_record,
    model_risk_score_from_record,
    risk_factor_from_record,
)

__all__ = [
    "SUPPORTED_SCHEMA_VERSIONS",
    "asset_to_risk_input",
    "distribution_from_record",
    "jurisdiction_from_record",
    "jurisdiction_impact_from_record",
    "model_risk_score_from_record",
    "risk_factor_from_record",
]
