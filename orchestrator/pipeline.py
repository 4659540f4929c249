from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Protocol, Tuple

from audit_log import AuditPolicy, build_audit_event, write_audit_event
from contracts.errors import RiskEngineError, ValidationError
from contracts.schemas import (
    AssetDistributionRiskResult,
    DistributionStatus,
    JurisdictionScope,
    ProjectDistribution,
)
from distribution_risk import (
    ALL_STATES,
    DistributionRiskSummary,
    calculate_asset_distribution_risk,
    summarize_distribution_risk,
)
from ingest import asset_to_risk_input
from jurisdiction_registry import JurisdictionSource

logger = logging.getLogger(__name__)

ENV_AUDIT_LOG_PATH = "RISKENGINE_AUDIT_LOG_PATH"
ENV_STRICT_JURISDICTIONS = "RISKENGINE_STRICT_JURISDICTIONS"

_STATUS_ORDER = (DistributionStatus.CLEAR, DistributionStatus.NEEDS_REVIEW, DistributionStatus.BLOCKED)


class DistributionBlocked(PermissionError):
    """Raised under enforce_clearance when a batch contains blocked assets."""

    def __init__(self, batch: "BatchResult") -> None:
        super().__init__("distribution_blocked:" + ",".join(batch.blocked_asset_ids))
        self.batch = batch


def _bool_env(name: str, default: bool = False) -> bool:
    v = os.getenv(name, "")
    if v == "":
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


class AssetSource(Protocol):
    def list_assets(self, project_id: str) -> Iterable[Mapping[str, Any]]: ...


class InMemoryAssetSource:
    """Raw asset records grouped by project id."""

    def __init__(self, assets_by_project: Mapping[str, Iterable[Mapping[str, Any]]]) -> None:
        self._assets = {str(k): tuple(v) for k, v in assets_by_project.items()}

    def list_assets(self, project_id: str) -> Tuple[Mapping[str, Any], ...]:
        return self._assets.get(str(project_id), ())


@dataclass(frozen=True)
class OrchestratorPolicy:
    audit: AuditPolicy = AuditPolicy()
    audit_log_path: Optional[str] = None
    strict_jurisdictions: bool = False
    enforce_clearance: bool = False

    @classmethod
    def from_env(
        cls,
        audit: AuditPolicy = AuditPolicy(),
        audit_log_path: Optional[str] = None,
        strict_jurisdictions: bool = False,
        enforce_clearance: bool = False,
    ) -> "OrchestratorPolicy":
        """Explicit arguments first; RISKENGINE_* variables fill what is unset."""
        return cls(
            audit=audit,
            audit_log_path=audit_log_path or os.getenv(ENV_AUDIT_LOG_PATH) or None,
            strict_jurisdictions=bool(strict_jurisdictions) or _bool_env(ENV_STRICT_JURISDICTIONS, False),
            enforce_clearance=bool(enforce_clearance),
        )


@dataclass(frozen=True)
class BatchResult:
    project_id: str
    results: Tuple[Tuple[str, AssetDistributionRiskResult], ...]
    errors: Tuple[Tuple[str, str], ...]
    summary: DistributionRiskSummary
    audit_written: int = 0

    @property
    def status(self) -> DistributionStatus:
        statuses = [r.status for _, r in self.results]
        return max(statuses, key=_STATUS_ORDER.index, default=DistributionStatus.CLEAR)

    @property
    def blocked_asset_ids(self) -> Tuple[str, ...]:
        return tuple(a for a, r in self.results if r.status == DistributionStatus.BLOCKED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "status": self.status.value,
            "results": {a: r.to_dict() for a, r in self.results},
            "errors": {a: e for a, e in self.errors},
            "summary": self.summary.to_dict(),
            "audit_written": self.audit_written,
        }


def check_distribution_codes(distribution: Optional[ProjectDistribution], jurisdictions: JurisdictionSource) -> None:
    """Strict mode: every listed state and country must be known to the registry."""
    if distribution is None:
        return
    for code in distribution.us_states:
        if code == ALL_STATES:
            continue
        if jurisdictions.get_jurisdiction(code, JurisdictionScope.US_STATE) is None:
            raise ValidationError(f"unknown_us_state:{code}")
    supported = set(jurisdictions.supported_market_codes)
    for code in distribution.countries:
        if code not in supported:
            raise ValidationError(f"unsupported_market:{code}")


def _asset_id(raw: Any, idx: int) -> str:
    if isinstance(raw, Mapping) and raw.get("id") is not None and str(raw.get("id")).strip():
        return str(raw["id"]).strip()
    return f"#{idx}"


def evaluate_project_assets(
    assets: AssetSource,
    project_id: str,
    distribution: Optional[ProjectDistribution],
    jurisdictions: JurisdictionSource,
    policy: OrchestratorPolicy = OrchestratorPolicy(),
) -> BatchResult:
    """
    Distribution risk for every asset in a project.

    An asset whose record cannot be read is recorded in `errors` and the batch
    continues. With enforce_clearance, a blocked asset raises DistributionBlocked
    once the whole batch (and its audit trail) has been processed.
    """
    if policy.strict_jurisdictions:
        check_distribution_codes(distribution, jurisdictions)

    results: list[Tuple[str, AssetDistributionRiskResult]] = []
    errors: list[Tuple[str, str]] = []
    audit_written = 0

    for idx, raw in enumerate(assets.list_assets(project_id)):
        asset_id = _asset_id(raw, idx)
        result: Optional[AssetDistributionRiskResult] = None
        error: Optional[str] = None
        try:
            result = calculate_asset_distribution_risk(asset_to_risk_input(raw), distribution, jurisdictions)
        except RiskEngineError as e:
            error = str(e)
            logger.warning("asset %s in project %s failed evaluation: %s", asset_id, project_id, error)

        if result is not None:
            results.append((asset_id, result))
        else:
            errors.append((asset_id, error or "evaluation_failed"))

        if policy.audit_log_path:
            event = build_audit_event(project_id, asset_id, result, policy.audit, error=error)
            write_audit_event(policy.audit_log_path, event)
            audit_written += 1

    batch = BatchResult(
        project_id=str(project_id),
        results=tuple(results),
        errors=tuple(errors),
        summary=summarize_distribution_risk(dict(results)),
        audit_written=audit_written,
    )
    logger.debug(
        "project %s: %d assets evaluated, %d errors, status=%s",
        project_id,
        len(results),
        len(errors),
        batch.status.value,
    )

    if policy.enforce_clearance and batch.blocked_asset_ids:
        raise DistributionBlocked(batch)
    return batch
