from __future__ import annotations

import json
import os
import tempfile
import unittest
from unittest import mock

from audit_log import AuditPolicy, build_audit_event
from contracts.errors import ValidationError
from contracts.schemas import (
    AssetDistributionRiskResult,
    DistributionStatus,
    MarketIssue,
    MarketRiskLevel,
    ProjectDistribution,
)
from jurisdiction_registry import default_registry
from orchestrator import (
    DistributionBlocked,
    InMemoryAssetSource,
    OrchestratorPolicy,
    evaluate_project_assets,
)

ADS_NY_TX = ProjectDistribution(primary_use="advertising", us_states=("NY", "TX"))


def _source() -> InMemoryAssetSource:
    return InMemoryAssetSource(
        {
            "p-1": [
                {"id": "a-clear", "talentRightsVerified": True},
                {"id": "a-ai", "aiMethod": "AI Generative"},
                {"id": "a-bad", "talentRightsVerified": "unknown"},
            ],
            "p-talent": [{"id": "a-talent", "creatorIds": ["t-1"]}],
        }
    )


class TestLayer8Orchestrator(unittest.TestCase):
    def test_batch_keeps_going_after_bad_asset(self) -> None:
        batch = evaluate_project_assets(_source(), "p-1", ADS_NY_TX, default_registry())

        self.assertEqual(("a-clear", "a-ai"), tuple(a for a, _ in batch.results))
        self.assertEqual("a-bad", batch.errors[0][0])
        self.assertIn("talent_rights_verified", batch.errors[0][1])
        self.assertEqual(DistributionStatus.NEEDS_REVIEW, batch.status)
        self.assertEqual(2, batch.summary.assets_evaluated)
        self.assertEqual(1, batch.summary.assets_at_risk)
        self.assertEqual(0, batch.audit_written)

    def test_scalar_creator_ids_do_not_abort_batch(self) -> None:
        source = InMemoryAssetSource(
            {"p-mixed": [{"id": "a-bad", "creatorIds": 5}, {"id": "a-ok", "talentRightsVerified": True}]}
        )

        batch = evaluate_project_assets(source, "p-mixed", ADS_NY_TX, default_registry())

        self.assertEqual(("a-ok",), tuple(a for a, _ in batch.results))
        self.assertEqual((("a-bad", "creator_ids_not_list"),), batch.errors)
        self.assertEqual(DistributionStatus.CLEAR, batch.status)

    def test_unknown_project_is_empty_and_clear(self) -> None:
        batch = evaluate_project_assets(_source(), "missing", ADS_NY_TX, default_registry())
        self.assertEqual((), batch.results)
        self.assertEqual(DistributionStatus.CLEAR, batch.status)

    def test_audit_event_per_asset(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "audit.jsonl")
            policy = OrchestratorPolicy(audit_log_path=path)
            batch = evaluate_project_assets(_source(), "p-1", ADS_NY_TX, default_registry(), policy)

            self.assertEqual(3, batch.audit_written)
            with open(path, "r", encoding="utf-8") as f:
                events = [json.loads(line) for line in f]

        self.assertEqual(["a-clear", "a-ai", "a-bad"], [e["asset_id"] for e in events])
        self.assertEqual(["clear", "needs_review", "error"], [e["status"] for e in events])
        self.assertEqual(["NY", "TX"], events[1]["markets"])
        self.assertIsNotNone(events[2]["error"])
        self.assertTrue(all(e["project_id"] == "p-1" for e in events))

    def test_strict_mode_rejects_unknown_codes(self) -> None:
        policy = OrchestratorPolicy(strict_jurisdictions=True)
        with self.assertRaises(ValidationError):
            evaluate_project_assets(_source(), "p-1", ProjectDistribution(us_states=("ZZ",)), default_registry(), policy)
        with self.assertRaises(ValidationError):
            evaluate_project_assets(_source(), "p-1", ProjectDistribution(countries=("DE",)), default_registry(), policy)

        lenient = evaluate_project_assets(_source(), "p-1", ProjectDistribution(us_states=("ZZ",)), default_registry())
        self.assertEqual(DistributionStatus.CLEAR, lenient.status)

    def test_enforce_clearance_raises_with_batch(self) -> None:
        policy = OrchestratorPolicy(enforce_clearance=True)
        with self.assertRaises(DistributionBlocked) as ctx:
            evaluate_project_assets(_source(), "p-talent", ADS_NY_TX, default_registry(), policy)

        self.assertIsInstance(ctx.exception, PermissionError)
        self.assertEqual(("a-talent",), ctx.exception.batch.blocked_asset_ids)
        self.assertEqual(DistributionStatus.BLOCKED, ctx.exception.batch.status)

    def test_policy_from_env(self) -> None:
        env = {"RISKENGINE_AUDIT_LOG_PATH": "/tmp/x.jsonl", "RISKENGINE_STRICT_JURISDICTIONS": "yes"}
        with mock.patch.dict(os.environ, env, clear=False):
            policy = OrchestratorPolicy.from_env()
            explicit = OrchestratorPolicy.from_env(audit_log_path="/tmp/y.jsonl")
        self.assertEqual("/tmp/x.jsonl", policy.audit_log_path)
        self.assertTrue(policy.strict_jurisdictions)
        self.assertEqual("/tmp/y.jsonl", explicit.audit_log_path)

    def test_batch_to_dict(self) -> None:
        d = evaluate_project_assets(_source(), "p-1", ADS_NY_TX, default_registry()).to_dict()
        self.assertEqual("needs_review", d["status"])
        self.assertEqual({"a-bad"}, set(d["errors"]))
        self.assertEqual("clear", d["results"]["a-clear"]["status"])


class TestLayer8Audit(unittest.TestCase):
    def test_redacts_issue_fields(self) -> None:
        result = AssetDistributionRiskResult(
            DistributionStatus.NEEDS_REVIEW,
            (MarketIssue("NY", MarketRiskLevel.MEDIUM, "AI disclosure required", penalty_estimate=1000),),
            1000,
        )
        event = build_audit_event("p-1", "a-1", result, AuditPolicy(redact_fields=("needed",)))
        d = event.to_dict()
        self.assertNotIn("needed", d["market_issues"][0])
        self.assertEqual(1000, d["total_penalty_exposure"])
        self.assertTrue(d["ts_utc"])

    def test_issues_can_be_omitted(self) -> None:
        event = build_audit_event("p-1", "a-1", AssetDistributionRiskResult(), AuditPolicy(include_market_issues=False))
        self.assertIsNone(event.market_issues)
        self.assertEqual("clear", event.status)


if __name__ == "__main__":
    unittest.main()
