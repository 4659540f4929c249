from .calculator import (
    ALL_STATES,
    Market,
    calculate_asset_distribution_risk,
    derive_status,
    evaluate_market,
    resolve_markets,
)
from .summary import DistributionRiskSummary, MarketRiskColor, market_label, state_risk_level, summarize_distribution_risk

__all__ = [
    "ALL_STATES",
    "DistributionRiskSummary",
    "Market",
    "MarketRiskColor",
    "calculate_asset_distribution_risk",
    "derive_status",
    "evaluate_market",
    "market_label",
    "resolve_markets",
    "state_risk_level",
    "summarize_distribution_risk",
]
