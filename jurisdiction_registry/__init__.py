from .penalties import estimated_penalty, parse_penalty_amount, penalty_ceiling, penalty_text_for
from .registry import JurisdictionRegistry, JurisdictionSource, default_registry

__all__ = [
    "JurisdictionRegistry",
    "JurisdictionSource",
    "default_registry",
    "estimated_penalty",
    "parse_penalty_amount",
    "penalty_ceiling",
    "penalty_text_for",
]
