from __future__ import annotations


class RiskEngineError(Exception):
    """Base class for errors raised by the risk scoring engine."""


class ValidationError(RiskEngineError, ValueError):
    """Malformed or missing required input. Never coerced into a zero result."""


class UnknownJurisdiction(RiskEngineError, LookupError):
    """Raised only by strict lookups; engine lookups degrade to "no rule"."""

    def __init__(self, code: str) -> None:
        super().__init__(f"unknown_jurisdiction:{code}")
        self.code = code
