"""
Built-in jurisdiction reference data.

Maintained by legal-data review; the engine only reads it. Penalty estimates
for CA, NY, TX, EU and GB are the per-market figures legal signed off on; every
other market derives its estimate from the USD amounts in its penalty texts.
"""

from __future__ import annotations

from typing import Tuple

from contracts.schemas import (
    EnforcementIntensity as EI,
    JurisdictionProfile,
    JurisdictionScope,
    LawCategory as LC,
    LegislationNewsItem,
    LegislationStatus as LS,
)

_ALL_LAWS = frozenset(
    {LC.AI_AD_DISCLOSURE, LC.NIL_RIGHTS, LC.RIGHT_OF_PUBLICITY, LC.DEEPFAKE, LC.BIOMETRIC_LIKENESS}
)


def _state(code: str, name: str, **kw) -> JurisdictionProfile:
    kw["law_categories"] = frozenset(kw.get("law_categories", ()))
    return JurisdictionProfile(code=code, name=name, scope=JurisdictionScope.US_STATE, **kw)


def _country(code: str, name: str, region: str, **kw) -> JurisdictionProfile:
    kw["law_categories"] = frozenset(kw.get("law_categories", ()))
    return JurisdictionProfile(code=code, name=name, scope=JurisdictionScope.COUNTRY, region=region, **kw)


_DETAILED_STATES: Tuple[JurisdictionProfile, ...] = (
    _state(
        "NY", "New York",
        law_categories=_ALL_LAWS,
        ai_ad_penalty="$1,000 first / $5,000 subsequent",
        nil_penalty="$2,000 per unauthorized use",
        deepfake_penalty="$10,000 per incident + injunction",
        enforcement_intensity=EI.VERY_HIGH, multiplier=1.8,
        legislation_status=LS.ENACTED, effective_date="2025-01-01",
        statute_reference="NY S.5959-B / A.8195-A",
        penalty_estimate=1000,
    ),
    _state(
        "CA", "California",
        law_categories=_ALL_LAWS,
        ai_ad_penalty="$2,500 per violation",
        nil_penalty="$5,000 per unauthorized use",
        deepfake_penalty="Up to $150,000 + statutory damages",
        enforcement_intensity=EI.VERY_HIGH, multiplier=2.0,
        legislation_status=LS.ENACTED, effective_date="2024-09-17",
        statute_reference="AB 2602 / AB 1836 / SB 942",
        penalty_estimate=2500,
    ),
    _state(
        "TN", "Tennessee",
        law_categories=(LC.NIL_RIGHTS, LC.RIGHT_OF_PUBLICITY, LC.DEEPFAKE),
        nil_penalty="Actual damages + profits",
        deepfake_penalty="Actual damages + attorney fees",
        enforcement_intensity=EI.HIGH, multiplier=1.5,
        legislation_status=LS.ENACTED, effective_date="2024-07-01",
        statute_reference="ELVIS Act (SB 2096)",
    ),
    _state(
        "TX", "Texas",
        law_categories=(LC.DEEPFAKE, LC.RIGHT_OF_PUBLICITY, LC.BIOMETRIC_LIKENESS),
        nil_penalty="$2,500 per incident",
        deepfake_penalty="Class A misdemeanor + civil liability",
        enforcement_intensity=EI.HIGH, multiplier=1.4,
        legislation_status=LS.ENACTED, effective_date="2024-09-01",
        statute_reference="SB 1361 / HB 2125",
        penalty_estimate=1500,
    ),
    _state(
        "FL", "Florida",
        law_categories=(LC.RIGHT_OF_PUBLICITY, LC.DEEPFAKE, LC.NIL_RIGHTS),
        nil_penalty="$1,000 per violation",
        deepfake_penalty="Third-degree felony for malicious deepfakes",
        enforcement_intensity=EI.HIGH, multiplier=1.3,
        legislation_status=LS.ENACTED, effective_date="2025-07-01",
        statute_reference="HB 919 / SB 1798",
    ),
    _state(
        "IL", "Illinois",
        law_categories=(LC.BIOMETRIC_LIKENESS, LC.AI_AD_DISCLOSURE, LC.NIL_RIGHTS, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="$1,000 per violation",
        nil_penalty="Actual damages or $1,000 per violation",
        deepfake_penalty="N/A (covered under BIPA)",
        enforcement_intensity=EI.VERY_HIGH, multiplier=1.7,
        legislation_status=LS.ENACTED, effective_date="2008-10-03",
        statute_reference="BIPA (740 ILCS 14) + AI Video Interview Act",
    ),
    _state(
        "MA", "Massachusetts",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="$500 per violation",
        nil_penalty="Actual damages",
        enforcement_intensity=EI.MEDIUM, multiplier=1.2,
        legislation_status=LS.ENACTED, effective_date="2025-03-01",
        statute_reference="H.70 / S.31",
    ),
    _state(
        "WA", "Washington",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="$5,000 per violation",
        nil_penalty="Actual damages",
        deepfake_penalty="$10,000 per incident",
        enforcement_intensity=EI.HIGH, multiplier=1.5,
        legislation_status=LS.ENACTED, effective_date="2024-06-06",
        statute_reference="SB 5152 / HB 1999",
    ),
    _state(
        "GA", "Georgia",
        law_categories=(LC.RIGHT_OF_PUBLICITY, LC.DEEPFAKE),
        nil_penalty="Actual damages",
        deepfake_penalty="Proposed: $5,000 per incident",
        enforcement_intensity=EI.MEDIUM, multiplier=1.2,
        legislation_status=LS.PROPOSED,
        statute_reference="SB 321",
    ),
    _state(
        "CO", "Colorado",
        law_categories=(LC.AI_AD_DISCLOSURE,),
        ai_ad_penalty="CPA enforcement actions",
        enforcement_intensity=EI.MEDIUM, multiplier=1.15,
        legislation_status=LS.ENACTED, effective_date="2025-02-01",
        statute_reference="SB 24-205",
    ),
)

_REMAINING_STATES: Tuple[Tuple[str, str], ...] = (
    ("AL", "Alabama"), ("AK", "Alaska"), ("AZ", "Arizona"), ("AR", "Arkansas"),
    ("CT", "Connecticut"), ("DE", "Delaware"), ("HI", "Hawaii"), ("ID", "Idaho"),
    ("IN", "Indiana"), ("IA", "Iowa"), ("KS", "Kansas"), ("KY", "Kentucky"),
    ("LA", "Louisiana"), ("ME", "Maine"), ("MD", "Maryland"), ("MI", "Michigan"),
    ("MN", "Minnesota"), ("MS", "Mississippi"), ("MO", "Missouri"), ("MT", "Montana"),
    ("NE", "Nebraska"), ("NV", "Nevada"), ("NH", "New Hampshire"), ("NJ", "New Jersey"),
    ("NM", "New Mexico"), ("NC", "North Carolina"), ("ND", "North Dakota"), ("OH", "Ohio"),
    ("OK", "Oklahoma"), ("OR", "Oregon"), ("PA", "Pennsylvania"), ("RI", "Rhode Island"),
    ("SC", "South Carolina"), ("SD", "South Dakota"), ("UT", "Utah"), ("VT", "Vermont"),
    ("VA", "Virginia"), ("WV", "West Virginia"), ("WI", "Wisconsin"), ("WY", "Wyoming"),
)

_PROPOSED_STATES = frozenset({"NJ", "PA", "MI", "OH", "VA", "MN", "OR", "NV"})
_IN_COMMITTEE_STATES = frozenset({"AZ", "MD", "NC", "WI"})


def _minimal_state(code: str, name: str) -> JurisdictionProfile:
    if code in _PROPOSED_STATES:
        return _state(code, name, law_categories=(LC.RIGHT_OF_PUBLICITY,), legislation_status=LS.PROPOSED)
    if code in _IN_COMMITTEE_STATES:
        return _state(code, name, legislation_status=LS.IN_COMMITTEE)
    return _state(code, name)


STATE_PROFILES: Tuple[JurisdictionProfile, ...] = _DETAILED_STATES + tuple(
    _minimal_state(code, name) for code, name in _REMAINING_STATES
)


COUNTRY_PROFILES: Tuple[JurisdictionProfile, ...] = (
    _country(
        "EU", "European Union", "Europe",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE, LC.BIOMETRIC_LIKENESS),
        ai_ad_penalty="Up to €35M or 7% global turnover",
        nil_penalty="Member-state dependent",
        deepfake_penalty="Up to €15M or 3% global turnover",
        enforcement_intensity=EI.VERY_HIGH, multiplier=2.2,
        legislation_status=LS.ENACTED, effective_date="2024-08-01",
        statute_reference="EU AI Act (Regulation 2024/1689)",
        penalty_estimate=10000,
    ),
    _country(
        "GB", "United Kingdom", "Europe",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="Up to £18M or 10% turnover (Ofcom)",
        nil_penalty="Civil damages",
        deepfake_penalty="Up to 2 years imprisonment (Online Safety Act)",
        enforcement_intensity=EI.HIGH, multiplier=1.6,
        legislation_status=LS.ENACTED, effective_date="2023-10-26",
        statute_reference="Online Safety Act 2023 / AI Regulation White Paper",
        penalty_estimate=5000,
    ),
    _country(
        "DE", "Germany", "Europe",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.BIOMETRIC_LIKENESS, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="Up to €300,000 (UWG)",
        nil_penalty="Civil damages under personality rights",
        deepfake_penalty="Criminal penalties under personal rights law",
        enforcement_intensity=EI.HIGH, multiplier=1.5,
        legislation_status=LS.ENACTED, effective_date="2024-08-01",
        statute_reference="EU AI Act + BGB §823 / KUG",
    ),
    _country(
        "FR", "France", "Europe",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="Up to €300,000 / 6% digital ad revenue",
        nil_penalty="Civil damages (Code civil Art. 9)",
        deepfake_penalty="Up to 2 years / €60,000 (identity usurpation)",
        enforcement_intensity=EI.HIGH, multiplier=1.5,
        legislation_status=LS.ENACTED, effective_date="2024-08-01",
        statute_reference="EU AI Act + Loi n° 2024-449 (SREN Act)",
    ),
    _country(
        "CN", "China", "Asia-Pacific",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE, LC.NIL_RIGHTS, LC.BIOMETRIC_LIKENESS),
        ai_ad_penalty="Up to ¥100,000 + service suspension",
        nil_penalty="Civil liability + administrative penalties",
        deepfake_penalty="Up to 3 years imprisonment",
        enforcement_intensity=EI.VERY_HIGH, multiplier=1.8,
        legislation_status=LS.ENACTED, effective_date="2023-01-10",
        statute_reference="Deep Synthesis Provisions / Generative AI Measures (2023)",
    ),
    _country(
        "KR", "South Korea", "Asia-Pacific",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="Up to ₩30M",
        nil_penalty="Civil damages + criminal penalties",
        deepfake_penalty="Up to 5 years / ₩50M (deepfake sex crimes)",
        enforcement_intensity=EI.VERY_HIGH, multiplier=1.7,
        legislation_status=LS.ENACTED, effective_date="2024-01-01",
        statute_reference="AI Basic Act / Deepfake Prevention Act (2024)",
    ),
    _country(
        "JP", "Japan", "Asia-Pacific",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="Administrative guidance",
        nil_penalty="Civil damages (publicity rights)",
        deepfake_penalty="Defamation and portrait rights claims",
        enforcement_intensity=EI.MEDIUM, multiplier=1.2,
        legislation_status=LS.PROPOSED,
        statute_reference="AI Guidelines (2024) / Proposed AI Basic Law",
    ),
    _country(
        "AU", "Australia", "Asia-Pacific",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE),
        ai_ad_penalty="Up to AUD 50M (AI in advertising)",
        nil_penalty="Civil damages",
        deepfake_penalty="Up to 7 years (non-consensual deepfakes)",
        enforcement_intensity=EI.HIGH, multiplier=1.5,
        legislation_status=LS.ENACTED, effective_date="2024-08-15",
        statute_reference="Online Safety Act (AI amendments) / Criminal Code deepfake offences",
    ),
    _country(
        "IN", "India", "Asia-Pacific",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE),
        ai_ad_penalty="IT Act penalties",
        nil_penalty="Civil damages",
        deepfake_penalty="Up to 3 years imprisonment (IT Act amendments)",
        enforcement_intensity=EI.MEDIUM, multiplier=1.3,
        legislation_status=LS.ENACTED, effective_date="2024-03-15",
        statute_reference="IT Act Deepfake Rules (2024) / Digital India Act (proposed)",
    ),
    _country(
        "CA", "Canada", "Americas",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE, LC.BIOMETRIC_LIKENESS),
        ai_ad_penalty="Up to CAD 10M or 3% global revenue",
        nil_penalty="Civil damages (personality rights)",
        deepfake_penalty="Criminal Code provisions + AIDA penalties",
        enforcement_intensity=EI.HIGH, multiplier=1.5,
        legislation_status=LS.PROPOSED,
        statute_reference="AIDA (Bill C-27, Part 3) / Proposed Online Harms Act",
    ),
    _country(
        "BR", "Brazil", "Americas",
        law_categories=(LC.AI_AD_DISCLOSURE, LC.DEEPFAKE, LC.RIGHT_OF_PUBLICITY),
        ai_ad_penalty="Up to 2% of revenue (LGPD)",
        nil_penalty="Civil damages",
        deepfake_penalty="Up to BRL 50M per violation",
        enforcement_intensity=EI.HIGH, multiplier=1.4,
        legislation_status=LS.ENACTED, effective_date="2025-01-01",
        statute_reference="Marco Legal da IA (PL 2338/2023)",
    ),
)

# Market codes the distribution form offers outside the US.
INTERNATIONAL_MARKETS: Tuple[str, ...] = ("UK", "EU", "CA", "AU", "JP", "BR", "IN")

COUNTRY_ALIASES = {"UK": "GB"}


def _state_news(news_id: str, headline: str, code: str, name: str, date: str, category: str) -> LegislationNewsItem:
    return LegislationNewsItem(id=news_id, headline=headline, code=code, name=name, date=date, category=category)


def _global_news(news_id: str, headline: str, code: str, name: str, region: str, date: str, category: str) -> LegislationNewsItem:
    return LegislationNewsItem(
        id=news_id, headline=headline, code=code, name=name, date=date, category=category,
        scope=JurisdictionScope.COUNTRY, region=region,
    )


STATE_NEWS: Tuple[LegislationNewsItem, ...] = (
    _state_news("ln-1", "New York enacts comprehensive AI advertising disclosure law", "NY", "New York", "2025-01-15", "NEW_LAW"),
    _state_news("ln-2", "California expands synthetic performer protections under AB 2602", "CA", "California", "2025-01-10", "NEW_LAW"),
    _state_news("ln-3", "Tennessee ELVIS Act enforcement: First major AI voice case filed", "TN", "Tennessee", "2025-02-01", "ENFORCEMENT_ACTION"),
    _state_news("ln-4", "Illinois BIPA amendment addresses AI-generated biometric data", "IL", "Illinois", "2025-01-22", "AMENDMENT"),
    _state_news("ln-5", "Texas expands deepfake criminal penalties for commercial use", "TX", "Texas", "2025-01-28", "NEW_LAW"),
    _state_news("ln-6", "Florida digital likeness protection bill advances to Senate", "FL", "Florida", "2025-02-03", "PROPOSED"),
    _state_news("ln-7", "Massachusetts passes AI ad disclosure requirements", "MA", "Massachusetts", "2025-01-18", "NEW_LAW"),
    _state_news("ln-8", "New Jersey introduces comprehensive AI content bill", "NJ", "New Jersey", "2025-01-30", "PROPOSED"),
    _state_news("ln-15", "NY AG announces AI advertising enforcement initiative", "NY", "New York", "2025-02-04", "ENFORCEMENT_ACTION"),
)

GLOBAL_NEWS: Tuple[LegislationNewsItem, ...] = (
    _global_news("gln-1", "EU AI Act enters into force, phased enforcement begins", "EU", "European Union", "Europe", "2025-02-01", "NEW_LAW"),
    _global_news("gln-2", "China mandates watermarking for all AI-generated content", "CN", "China", "Asia-Pacific", "2025-01-20", "ENFORCEMENT_ACTION"),
    _global_news("gln-3", "UK Online Safety Act: Ofcom issues AI deepfake enforcement guidance", "GB", "United Kingdom", "Europe", "2025-01-15", "ENFORCEMENT_ACTION"),
    _global_news("gln-5", "Brazil's AI regulatory framework signed into law", "BR", "Brazil", "Americas", "2025-01-05", "NEW_LAW"),
    _global_news("gln-6", "Australia criminalizes non-consensual AI deepfakes", "AU", "Australia", "Asia-Pacific", "2025-01-22", "NEW_LAW"),
    _global_news("gln-8", "Canada reintroduces AIDA (Artificial Intelligence and Data Act)", "CA", "Canada", "Americas", "2025-01-28", "PROPOSED"),
    _global_news("gln-13", "Japan proposes AI Basic Law with focus on innovation", "JP", "Japan", "Asia-Pacific", "2025-02-01", "PROPOSED"),
)
