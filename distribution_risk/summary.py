from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple

from contracts.schemas import AssetDistributionRiskResult, DistributionStatus, JurisdictionScope, MarketIssue, MarketRiskLevel


class MarketRiskColor(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


def state_risk_level(issue_count: int, has_high: bool) -> MarketRiskColor:
    """Map-level bucket for one market across a project's assets."""
    if issue_count <= 0:
        return MarketRiskColor.GREEN
    if has_high or issue_count >= 2:
        return MarketRiskColor.RED
    return MarketRiskColor.YELLOW


def market_label(issue: MarketIssue) -> str:
    """State codes stay bare; countries are prefixed so CA (California) and country:CA (Canada) differ."""
    if issue.scope == JurisdictionScope.US_STATE:
        return issue.market
    return f"{issue.scope.value}:{issue.market}"


@dataclass(frozen=True)
class DistributionRiskSummary:
    assets_evaluated: int
    assets_at_risk: int
    markets_with_issues: Tuple[str, ...]
    total_penalty_exposure: int
    market_levels: Tuple[Tuple[str, MarketRiskColor], ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "assets_evaluated": self.assets_evaluated,
            "assets_at_risk": self.assets_at_risk,
            "markets_with_issues": list(self.markets_with_issues),
            "total_penalty_exposure": self.total_penalty_exposure,
            "market_levels": {m: c.value for m, c in self.market_levels},
        }


def summarize_distribution_risk(results: Mapping[str, AssetDistributionRiskResult]) -> DistributionRiskSummary:
    counts: dict[str, int] = {}
    high: dict[str, bool] = {}
    at_risk = 0
    total = 0

    for asset_id in sorted(results):
        result = results[asset_id]
        total += result.total_penalty_exposure
        if result.status != DistributionStatus.CLEAR:
            at_risk += 1
        for issue in result.market_issues:
            label = market_label(issue)
            counts[label] = counts.get(label, 0) + 1
            if issue.risk_level.rank >= MarketRiskLevel.HIGH.rank:
                high[label] = True

    markets = tuple(sorted(counts))
    return DistributionRiskSummary(
        assets_evaluated=len(results),
        assets_at_risk=at_risk,
        markets_with_issues=markets,
        total_penalty_exposure=total,
        market_levels=tuple((m, state_risk_level(counts[m], high.get(m, False))) for m in markets),
    )
