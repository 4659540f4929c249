from .aggregator import (
    CONTENT_TYPE_CATEGORIES,
    MULTIPLIER_RISK_BANDS,
    calculate_multi_state_risk,
    format_exposure,
    risk_level_for_multiplier,
)

__all__ = [
    "CONTENT_TYPE_CATEGORIES",
    "MULTIPLIER_RISK_BANDS",
    "calculate_multi_state_risk",
    "format_exposure",
    "risk_level_for_multiplier",
]
