from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Protocol, Tuple

from contracts.errors import UnknownJurisdiction
from contracts.schemas import JurisdictionProfile, JurisdictionScope, LegislationNewsItem

from . import reference_data

logger = logging.getLogger(__name__)


def _norm_code(value: object) -> str:
    return str(value).strip().upper() if value is not None else ""


def _index(profiles: Iterable[JurisdictionProfile]) -> Mapping[str, JurisdictionProfile]:
    out: dict[str, JurisdictionProfile] = {}
    for p in profiles:
        code = _norm_code(p.code)
        if code and code not in out:
            out[code] = p
    return MappingProxyType(out)


def _filter_news(
    items: Iterable[LegislationNewsItem],
    code: Optional[str],
    category: Optional[str],
    limit: Optional[int],
) -> Tuple[LegislationNewsItem, ...]:
    results = list(items)
    if code:
        results = [n for n in results if n.code == _norm_code(code)]
    if category:
        results = [n for n in results if n.category == category]
    if limit:
        results = results[:limit]
    return tuple(results)


class JurisdictionSource(Protocol):
    """Read-only provider of jurisdiction reference data."""

    def get_jurisdiction(
        self, code: str, scope: Optional[JurisdictionScope] = None
    ) -> Optional[JurisdictionProfile]: ...

    def get_jurisdictions(self) -> Tuple[JurisdictionProfile, ...]: ...

    def get_country_jurisdictions(self) -> Tuple[JurisdictionProfile, ...]: ...

    @property
    def supported_state_codes(self) -> Tuple[str, ...]: ...

    @property
    def supported_market_codes(self) -> Tuple[str, ...]: ...


@dataclass(frozen=True)
class JurisdictionRegistry:
    """
    Immutable snapshot of jurisdiction reference data.

    Lookups for codes the registry does not know return None; callers treat
    that as "no jurisdiction-specific rule". Use require() for strict lookups.
    """

    states: Tuple[JurisdictionProfile, ...] = ()
    countries: Tuple[JurisdictionProfile, ...] = ()
    international_markets: Tuple[str, ...] = reference_data.INTERNATIONAL_MARKETS
    country_aliases: Mapping[str, str] = field(default_factory=lambda: dict(reference_data.COUNTRY_ALIASES))
    state_news: Tuple[LegislationNewsItem, ...] = ()
    global_news: Tuple[LegislationNewsItem, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "_states", _index(self.states))
        object.__setattr__(self, "_countries", _index(self.countries))
        object.__setattr__(self, "country_aliases", MappingProxyType(dict(self.country_aliases)))

    @classmethod
    def from_iterables(
        cls,
        *,
        states: Iterable[JurisdictionProfile] = (),
        countries: Iterable[JurisdictionProfile] = (),
        international_markets: Iterable[str] = reference_data.INTERNATIONAL_MARKETS,
        state_news: Iterable[LegislationNewsItem] = (),
        global_news: Iterable[LegislationNewsItem] = (),
    ) -> "JurisdictionRegistry":
        return cls(
            states=tuple(states),
            countries=tuple(countries),
            international_markets=tuple(_norm_code(m) for m in international_markets if _norm_code(m)),
            state_news=tuple(state_news),
            global_news=tuple(global_news),
        )

    def get_state(self, code: str) -> Optional[JurisdictionProfile]:
        return self._states.get(_norm_code(code))  # type: ignore[attr-defined]

    def get_country(self, code: str) -> Optional[JurisdictionProfile]:
        key = _norm_code(code)
        key = self.country_aliases.get(key, key)
        return self._countries.get(key)  # type: ignore[attr-defined]

    def get_jurisdiction(
        self, code: str, scope: Optional[JurisdictionScope] = None
    ) -> Optional[JurisdictionProfile]:
        if scope == JurisdictionScope.US_STATE:
            return self.get_state(code)
        if scope == JurisdictionScope.COUNTRY:
            return self.get_country(code)
        return self.get_state(code) or self.get_country(code)

    def require(self, code: str, scope: Optional[JurisdictionScope] = None) -> JurisdictionProfile:
        profile = self.get_jurisdiction(code, scope)
        if profile is None:
            raise UnknownJurisdiction(_norm_code(code))
        return profile

    def get_jurisdictions(self) -> Tuple[JurisdictionProfile, ...]:
        return self.states

    def get_country_jurisdictions(self) -> Tuple[JurisdictionProfile, ...]:
        return self.countries

    @property
    def supported_state_codes(self) -> Tuple[str, ...]:
        return tuple(self._states)  # type: ignore[attr-defined]

    @property
    def supported_market_codes(self) -> Tuple[str, ...]:
        return tuple(m for m in self.international_markets if self.get_country(m) is not None)

    def get_legislation_news(
        self, state_code: Optional[str] = None, category: Optional[str] = None, limit: Optional[int] = None
    ) -> Tuple[LegislationNewsItem, ...]:
        return _filter_news(self.state_news, state_code, category, limit)

    def get_global_legislation_news(
        self, country_code: Optional[str] = None, category: Optional[str] = None, limit: Optional[int] = None
    ) -> Tuple[LegislationNewsItem, ...]:
        if country_code:
            key = _norm_code(country_code)
            country_code = self.country_aliases.get(key, key)
        return _filter_news(self.global_news, country_code, category, limit)


@lru_cache(maxsize=1)
def default_registry() -> JurisdictionRegistry:
    """The built-in reference snapshot. Immutable, so one instance is shared."""
    registry = JurisdictionRegistry.from_iterables(
        states=reference_data.STATE_PROFILES,
        countries=reference_data.COUNTRY_PROFILES,
        state_news=reference_data.STATE_NEWS,
        global_news=reference_data.GLOBAL_NEWS,
    )
    logger.debug(
        "loaded jurisdiction registry: %d states, %d countries",
        len(registry.states),
        len(registry.countries),
    )
    return registry
