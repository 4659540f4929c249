from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

from audit_log import AuditPolicy
from contracts.errors import RiskEngineError
from contracts.schemas import DistributionStatus, JurisdictionScope
from ingest import distribution_from_record, jurisdiction_from_record
from jurisdiction_registry import JurisdictionRegistry, JurisdictionSource, default_registry
from model_risk import (
    get_model_risk_explainability,
    get_model_risk_score,
    get_model_risk_scores,
    projected_mrs,
)
from multi_jurisdiction import calculate_multi_state_risk
from orchestrator import DistributionBlocked, InMemoryAssetSource, OrchestratorPolicy, evaluate_project_assets
from premium import calculate_premium

EXIT_CLEAR = 0
EXIT_NEEDS_REVIEW = 2
EXIT_BLOCKED = 3
EXIT_INVALID = 4

ENV_LOG_LEVEL = "RISKENGINE_LOG_LEVEL"

_STATUS_EXIT = {
    DistributionStatus.CLEAR: EXIT_CLEAR,
    DistributionStatus.NEEDS_REVIEW: EXIT_NEEDS_REVIEW,
    DistributionStatus.BLOCKED: EXIT_BLOCKED,
}


def _load_json(path: str | None) -> Any:
    if path:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    return json.load(sys.stdin)


def _emit(payload: Any) -> None:
    print(json.dumps(payload, sort_keys=True))


def _registry(path: str | None) -> JurisdictionSource:
    """Built-in snapshot, or one loaded from {"states": [...], "countries": [...]}."""
    if not path:
        return default_registry()
    raw = _load_json(path)
    return JurisdictionRegistry.from_iterables(
        states=[jurisdiction_from_record(r, JurisdictionScope.US_STATE) for r in raw.get("states", [])],
        countries=[jurisdiction_from_record(r, JurisdictionScope.COUNTRY) for r in raw.get("countries", [])],
    )


def _cmd_distribution(args: argparse.Namespace) -> int:
    assets_raw = _load_json(args.assets)
    if isinstance(assets_raw, dict):
        assets_raw = [assets_raw]
    distribution = distribution_from_record(_load_json(args.distribution))

    policy = OrchestratorPolicy.from_env(
        audit=AuditPolicy(include_market_issues=not args.no_audit_issues),
        audit_log_path=args.audit_log,
        strict_jurisdictions=args.strict,
        enforce_clearance=args.enforce,
    )
    source = InMemoryAssetSource({args.project_id: assets_raw})

    enforcement_error = False
    try:
        batch = evaluate_project_assets(source, args.project_id, distribution, _registry(args.registry), policy)
    except DistributionBlocked as e:
        enforcement_error = True
        batch = e.batch

    output = batch.to_dict()
    output["enforcement_error"] = enforcement_error
    _emit(output)

    if enforcement_error or batch.status == DistributionStatus.BLOCKED:
        return EXIT_BLOCKED
    if batch.errors:
        return EXIT_INVALID
    return _STATUS_EXIT[batch.status]


def _cmd_multi_state(args: argparse.Namespace) -> int:
    risk = calculate_multi_state_risk(args.codes.split(","), args.content_type, _registry(args.registry))
    _emit(risk.to_dict())
    return EXIT_CLEAR


def _cmd_premium(args: argparse.Namespace) -> int:
    quote = calculate_premium(args.limit, args.rate, args.jurisdiction, args.mrs, _registry(args.registry))
    _emit(quote.to_dict())
    return EXIT_BLOCKED if quote.declined else EXIT_CLEAR


def _cmd_mrs(args: argparse.Namespace) -> int:
    if args.model_id is None:
        _emit([s.to_dict() for s in get_model_risk_scores()])
        return EXIT_CLEAR
    score = get_model_risk_score(args.model_id)
    if score is None:
        _emit({"error": f"unknown_model:{args.model_id}"})
        return EXIT_INVALID
    _emit(score.to_dict())
    return EXIT_CLEAR


def _cmd_explain(args: argparse.Namespace) -> int:
    explained = get_model_risk_explainability(args.model_id)
    if explained is None:
        _emit({"error": f"unknown_model:{args.model_id}"})
        return EXIT_INVALID
    output = explained.to_dict()
    if args.apply is not None:
        output["projected_mrs_partial"] = projected_mrs(
            explained.model.final_mrs, explained.remediation_roadmap, args.apply
        )
    _emit(output)
    return EXIT_CLEAR


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="riskengine")
    parser.add_argument("--log-level", default=os.getenv(ENV_LOG_LEVEL, "WARNING"))
    parser.add_argument("--registry", help="JSON file with jurisdiction profiles (default: built-in snapshot)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("distribution", help="distribution risk for a project's assets")
    p.add_argument("--assets", help="JSON asset record or list of records (default: stdin)")
    p.add_argument("--distribution", required=True)
    p.add_argument("--project-id", default="project")
    p.add_argument("--audit-log")
    p.add_argument("--no-audit-issues", action="store_true")
    p.add_argument("--strict", action="store_true")
    p.add_argument("--enforce", action="store_true")
    p.set_defaults(func=_cmd_distribution)

    p = sub.add_parser("multi-state", help="combined exposure across jurisdictions")
    p.add_argument("--codes", required=True, help="comma separated jurisdiction codes")
    p.add_argument("--content-type", required=True)
    p.set_defaults(func=_cmd_multi_state)

    p = sub.add_parser("premium", help="quote a premium for a model score")
    p.add_argument("--limit", type=float, required=True)
    p.add_argument("--rate", type=float, required=True, help="base rate in percent")
    p.add_argument("--jurisdiction", required=True)
    p.add_argument("--mrs", type=int, required=True)
    p.set_defaults(func=_cmd_premium)

    p = sub.add_parser("mrs", help="model risk scores")
    p.add_argument("--model-id")
    p.set_defaults(func=_cmd_mrs)

    p = sub.add_parser("explain", help="remediation roadmap for one model")
    p.add_argument("--model-id", required=True)
    p.add_argument("--apply", type=int, help="project the score after the first N roadmap items")
    p.set_defaults(func=_cmd_explain)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=str(args.log_level).upper(), stream=sys.stderr)

    try:
        return args.func(args)
    except RiskEngineError as e:
        _emit({"error": str(e)})
        return EXIT_INVALID


if __name__ == "__main__":
    raise SystemExit(main())
