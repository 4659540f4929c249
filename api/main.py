from __future__ import annotations

import os
import uuid
from typing import Any, Optional

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from audit_log import AuditPolicy
from contracts.errors import RiskEngineError
from distribution_risk import calculate_asset_distribution_risk
from ingest import asset_to_risk_input, distribution_from_record
from jurisdiction_registry import default_registry
from model_risk import get_model_risk_explainability, get_model_risk_scores, projected_mrs
from multi_jurisdiction import calculate_multi_state_risk
from orchestrator import InMemoryAssetSource, OrchestratorPolicy, evaluate_project_assets
from premium import calculate_premium


class DistributionRiskRequest(BaseModel):
    asset: dict[str, Any] = Field(default_factory=dict)
    distribution: Optional[dict[str, Any]] = None


class ProjectRiskRequest(BaseModel):
    project_id: str = "project"
    assets: list[dict[str, Any]] = Field(default_factory=list)
    distribution: Optional[dict[str, Any]] = None
    audit_log_path: Optional[str] = None
    strict_jurisdictions: bool = False


class MultiStateRiskRequest(BaseModel):
    codes: list[str] = Field(default_factory=list)
    content_type: str


class PremiumRequest(BaseModel):
    limit: float
    base_rate_pct: float
    jurisdiction: str
    mrs: int


app = FastAPI(title="Compliance Risk Engine API", version="0.1.0")


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


@app.exception_handler(RiskEngineError)
async def handle_engine_error(request: Request, exc: RiskEngineError):
    return JSONResponse(
        status_code=422,
        content={"error": "VALIDATION_ERROR", "detail": str(exc), "request_id": getattr(request.state, "request_id", None)},
    )


def _require_api_key(x_api_key: Optional[str]) -> None:
    required = os.getenv("RISKENGINE_API_KEY", "")
    if not required:
        # no key set => auth disabled (dev-friendly)
        return
    if not x_api_key or x_api_key != required:
        raise HTTPException(status_code=401, detail="Unauthorized")


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/distribution-risk")
def distribution_risk(
    request: Request, req: DistributionRiskRequest, x_api_key: Optional[str] = Header(default=None)
) -> dict[str, Any]:
    _require_api_key(x_api_key)
    result = calculate_asset_distribution_risk(
        asset_to_risk_input(req.asset),
        distribution_from_record(req.distribution),
        default_registry(),
    )
    return {"request_id": getattr(request.state, "request_id", None), **result.to_dict()}


@app.post("/v1/projects/distribution-risk")
def project_distribution_risk(
    request: Request, req: ProjectRiskRequest, x_api_key: Optional[str] = Header(default=None)
) -> dict[str, Any]:
    _require_api_key(x_api_key)
    policy = OrchestratorPolicy.from_env(
        audit=AuditPolicy(),
        audit_log_path=req.audit_log_path,
        strict_jurisdictions=req.strict_jurisdictions,
    )
    batch = evaluate_project_assets(
        InMemoryAssetSource({req.project_id: req.assets}),
        req.project_id,
        distribution_from_record(req.distribution),
        default_registry(),
        policy,
    )
    return {"request_id": getattr(request.state, "request_id", None), **batch.to_dict()}


@app.post("/v1/multi-state-risk")
def multi_state_risk(
    request: Request, req: MultiStateRiskRequest, x_api_key: Optional[str] = Header(default=None)
) -> dict[str, Any]:
    _require_api_key(x_api_key)
    risk = calculate_multi_state_risk(req.codes, req.content_type, default_registry())
    return {"request_id": getattr(request.state, "request_id", None), **risk.to_dict()}


@app.post("/v1/premium")
def premium_quote(request: Request, req: PremiumRequest, x_api_key: Optional[str] = Header(default=None)) -> dict[str, Any]:
    _require_api_key(x_api_key)
    quote = calculate_premium(req.limit, req.base_rate_pct, req.jurisdiction, req.mrs, default_registry())
    return {"request_id": getattr(request.state, "request_id", None), **quote.to_dict()}


@app.get("/v1/models")
def models(x_api_key: Optional[str] = Header(default=None)) -> list[dict[str, Any]]:
    _require_api_key(x_api_key)
    return [s.to_dict() for s in get_model_risk_scores()]


@app.get("/v1/models/{model_id}/explainability")
def model_explainability(
    model_id: str, apply: Optional[int] = None, x_api_key: Optional[str] = Header(default=None)
) -> dict[str, Any]:
    _require_api_key(x_api_key)
    explained = get_model_risk_explainability(model_id)
    if explained is None:
        raise HTTPException(status_code=404, detail=f"unknown_model:{model_id}")
    out = explained.to_dict()
    if apply is not None:
        out["projected_mrs_partial"] = projected_mrs(explained.model.final_mrs, explained.remediation_roadmap, apply)
    return out
