from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Tuple

from contracts.schemas import AssetDistributionRiskResult


def _unique_sorted(items: Iterable[str]) -> Tuple[str, ...]:
    return tuple(sorted({s for s in items if isinstance(s, str) and s.strip()}))


@dataclass(frozen=True)
class AuditPolicy:
    include_market_issues: bool = True
    redact_fields: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AuditEvent:
    ts_utc: str
    project_id: str
    asset_id: str
    status: str
    markets: Tuple[str, ...]
    total_penalty_exposure: int
    error: Optional[str]
    market_issues: Optional[list[dict[str, Any]]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts_utc": self.ts_utc,
            "project_id": self.project_id,
            "asset_id": self.asset_id,
            "status": self.status,
            "markets": list(self.markets),
            "total_penalty_exposure": self.total_penalty_exposure,
            "error": self.error,
            "market_issues": self.market_issues,
        }


def build_audit_event(
    project_id: str,
    asset_id: str,
    result: Optional[AssetDistributionRiskResult],
    policy: AuditPolicy = AuditPolicy(),
    error: Optional[str] = None,
) -> AuditEvent:
    """One audit record per evaluated asset; a failed evaluation carries the error instead of a result."""
    ts = datetime.now(timezone.utc).isoformat()

    issues: Optional[list[dict[str, Any]]] = None
    if result is not None and policy.include_market_issues:
        redactions = {k for k in policy.redact_fields if isinstance(k, str) and k}
        issues = [
            {k: v for k, v in issue.to_dict().items() if k not in redactions}
            for issue in result.market_issues
        ]

    return AuditEvent(
        ts_utc=ts,
        project_id=str(project_id),
        asset_id=str(asset_id),
        status="error" if result is None else result.status.value,
        markets=() if result is None else _unique_sorted(i.market for i in result.market_issues),
        total_penalty_exposure=0 if result is None else int(result.total_penalty_exposure),
        error=error,
        market_issues=issues,
    )


def write_audit_event(path: str, event: AuditEvent) -> None:
    line = json.dumps(event.to_dict(), sort_keys=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")
