from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from contracts.schemas import (
    LIKENESS_LAW_CATEGORIES,
    AssetDistributionRiskResult,
    AssetRiskInput,
    DistributionStatus,
    EnforcementIntensity,
    JurisdictionProfile,
    JurisdictionScope,
    LawCategory,
    MarketIssue,
    MarketRiskLevel,
    ProjectDistribution,
)
from jurisdiction_registry import JurisdictionSource, estimated_penalty

logger = logging.getLogger(__name__)

ALL_STATES = "ALL"

AI_DISCLOSURE_NEEDED = "AI disclosure required for this market"
NILP_AD_CONSENT_NEEDED = "NILP consent required when talent is featured in ads"
LIKENESS_CONSENT_NEEDED = "Talent/likeness consent verification required"

# distribution platform keyword -> (platform_compliance key, label)
PLATFORM_LABELING_POLICIES: Tuple[Tuple[str, str, str], ...] = (
    ("meta", "meta", "Meta"),
    ("tiktok", "tiktok", "TikTok"),
    ("google", "google_ads", "Google Ads"),
)


@dataclass(frozen=True)
class Market:
    code: str
    scope: JurisdictionScope
    profile: Optional[JurisdictionProfile]


@dataclass(frozen=True)
class RuleFinding:
    risk_level: MarketRiskLevel
    needed: str


def _unique(codes: Iterable[str]) -> List[str]:
    out: list[str] = []
    for c in codes:
        s = str(c).strip().upper() if c is not None else ""
        if s and s not in out:
            out.append(s)
    return out


def resolve_markets(distribution: Optional[ProjectDistribution], jurisdictions: JurisdictionSource) -> Tuple[Market, ...]:
    """
    In-scope markets for a distribution.

    "ALL" in us_states expands to every state the registry knows. Countries are
    limited to the supported international markets.
    """
    if distribution is None:
        return ()

    states = _unique(distribution.us_states)
    if ALL_STATES in states:
        states = list(jurisdictions.supported_state_codes)

    markets: list[Market] = []
    for code in states:
        profile = jurisdictions.get_jurisdiction(code, JurisdictionScope.US_STATE)
        if profile is None:
            logger.warning("skipping unknown us state in distribution: %s", code)
            continue
        markets.append(Market(code=code, scope=JurisdictionScope.US_STATE, profile=profile))

    supported = set(jurisdictions.supported_market_codes)
    for code in _unique(distribution.countries):
        if code not in supported:
            logger.debug("country %s is outside the supported market set", code)
            continue
        profile = jurisdictions.get_jurisdiction(code, JurisdictionScope.COUNTRY)
        markets.append(Market(code=code, scope=JurisdictionScope.COUNTRY, profile=profile))

    return tuple(markets)


def _ai_disclosure_rule(asset: AssetRiskInput, distribution: ProjectDistribution, profile: JurisdictionProfile) -> Optional[RuleFinding]:
    if not profile.has_enacted_law(LawCategory.AI_AD_DISCLOSURE):
        return None
    if asset.is_ai_generated and not asset.ai_disclosure_applied:
        return RuleFinding(MarketRiskLevel.MEDIUM, AI_DISCLOSURE_NEEDED)
    return None


def _talent_consent_rule(asset: AssetRiskInput, distribution: ProjectDistribution, profile: JurisdictionProfile) -> Optional[RuleFinding]:
    if asset.talent_rights_verified:
        return None
    if not (asset.has_talent or asset.is_ai_generated):
        return None
    if not any(profile.has_enacted_law(c) for c in LIKENESS_LAW_CATEGORIES):
        return None

    if not distribution.is_advertising:
        return RuleFinding(MarketRiskLevel.MEDIUM, LIKENESS_CONSENT_NEEDED)

    if not asset.has_talent:
        # AI likeness in an ad with no featured talent
        return RuleFinding(MarketRiskLevel.HIGH, LIKENESS_CONSENT_NEEDED)
    if profile.has_enacted_law(LawCategory.NIL_RIGHTS) and profile.enforcement_intensity == EnforcementIntensity.VERY_HIGH:
        return RuleFinding(MarketRiskLevel.BLOCKED, NILP_AD_CONSENT_NEEDED)
    return RuleFinding(MarketRiskLevel.HIGH, NILP_AD_CONSENT_NEEDED)


def _platform_labeling_findings(asset: AssetRiskInput, distribution: ProjectDistribution) -> Tuple[RuleFinding, ...]:
    if not asset.is_ai_generated:
        return ()
    platforms = [str(p).strip().lower() for p in distribution.platforms if p]

    findings: list[RuleFinding] = []
    for keyword, flag_key, label in PLATFORM_LABELING_POLICIES:
        if not any(keyword in p for p in platforms):
            continue
        # a missing compliance map fails closed: no platform counts as labeled
        if asset.platform_labeled(flag_key):
            continue
        findings.append(RuleFinding(MarketRiskLevel.MEDIUM, f"{label}: AI content labeling may be required"))
    return tuple(findings)


def evaluate_market(
    asset: AssetRiskInput,
    distribution: ProjectDistribution,
    market: Market,
    platform_findings: Tuple[RuleFinding, ...] = (),
) -> Optional[MarketIssue]:
    """One MarketIssue for the market, or None when every rule is satisfied."""
    findings: list[RuleFinding] = []
    if market.profile is not None:
        for rule in (_ai_disclosure_rule, _talent_consent_rule):
            finding = rule(asset, distribution, market.profile)
            if finding is not None:
                findings.append(finding)
    findings.extend(platform_findings)

    if not findings:
        return None

    risk_level = max((f.risk_level for f in findings), key=lambda r: r.rank)
    return MarketIssue(
        market=market.code,
        risk_level=risk_level,
        needed="; ".join(f.needed for f in findings),
        scope=market.scope,
        penalty_estimate=estimated_penalty(market.profile),
    )


def derive_status(issues: Iterable[MarketIssue]) -> DistributionStatus:
    issues = tuple(issues)
    if any(i.risk_level == MarketRiskLevel.BLOCKED for i in issues):
        return DistributionStatus.BLOCKED
    if issues:
        return DistributionStatus.NEEDS_REVIEW
    return DistributionStatus.CLEAR


def calculate_asset_distribution_risk(
    asset: AssetRiskInput,
    distribution: Optional[ProjectDistribution],
    jurisdictions: JurisdictionSource,
) -> AssetDistributionRiskResult:
    """
    Distribution compliance risk for one asset against one project's markets.

    Pure: the result depends only on the arguments and the registry snapshot.
    """
    markets = resolve_markets(distribution, jurisdictions)
    if distribution is None or not markets:
        return AssetDistributionRiskResult()

    platform_findings = _platform_labeling_findings(asset, distribution)

    issues: list[MarketIssue] = []
    for market in markets:
        issue = evaluate_market(asset, distribution, market, platform_findings)
        if issue is not None:
            issues.append(issue)

    total = sum(i.penalty_estimate for i in issues)
    status = derive_status(issues)
    logger.debug("distribution risk: %d markets, %d issues, status=%s", len(markets), len(issues), status.value)
    return AssetDistributionRiskResult(status=status, market_issues=tuple(issues), total_penalty_exposure=total)
