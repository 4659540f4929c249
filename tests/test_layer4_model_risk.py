from __future__ import annotations

import unittest

from contracts.errors import ValidationError
from contracts.schemas import (
    ComplianceStatus,
    JurisdictionImpact,
    RiskClass,
    RiskFactor,
    RiskFactorCategory,
    RiskFactorStatus,
)
from model_risk import (
    INSURANCE_TERMS,
    ModelScoreCatalog,
    build_model_risk_score,
    clamp_mrs,
    compose_final_mrs,
    get_model_risk_score,
    get_model_risk_scores,
    mrs_mapping,
    ny_adjustment_for,
    risk_class_for_mrs,
    risk_multiplier,
)

_CLASS_ORDER = (
    RiskClass.LOW,
    RiskClass.MODERATE,
    RiskClass.GUARDED,
    RiskClass.ELEVATED,
    RiskClass.SEVERE,
    RiskClass.CRITICAL,
)


def _factor(fid: str, impact: int, status: RiskFactorStatus = RiskFactorStatus.FAIL, improvement: int = 0) -> RiskFactor:
    return RiskFactor(
        id=fid,
        name=fid,
        category=RiskFactorCategory.CONSENT,
        weight=0.1,
        score_impact=impact,
        status=status,
        estimated_improvement=improvement,
    )


class TestLayer4RiskClass(unittest.TestCase):
    def test_class_boundaries(self) -> None:
        cases = {
            100: RiskClass.LOW,
            90: RiskClass.LOW,
            89: RiskClass.MODERATE,
            80: RiskClass.MODERATE,
            79: RiskClass.GUARDED,
            70: RiskClass.GUARDED,
            69: RiskClass.ELEVATED,
            55: RiskClass.ELEVATED,
            54: RiskClass.SEVERE,
            40: RiskClass.SEVERE,
            39: RiskClass.CRITICAL,
            0: RiskClass.CRITICAL,
        }
        for mrs, expected in cases.items():
            self.assertEqual(expected, risk_class_for_mrs(mrs), mrs)

    def test_out_of_range_rejected(self) -> None:
        for bad in (-1, 101, True, "90", None, float("nan"), float("inf"), float("-inf")):
            with self.assertRaises(ValidationError):
                risk_class_for_mrs(bad)

    def test_fractional_scores_round_like_composition(self) -> None:
        self.assertEqual(90, clamp_mrs(89.6))
        self.assertEqual(RiskClass.LOW, risk_class_for_mrs(89.6))
        self.assertEqual(RiskClass.MODERATE, risk_class_for_mrs(89.4))
        self.assertEqual(RiskClass.ELEVATED, risk_class_for_mrs(54.6))

    def test_insurance_terms_monotonic_in_class(self) -> None:
        terms = [INSURANCE_TERMS[c] for c in _CLASS_ORDER]
        for better, worse in zip(terms, terms[1:]):
            self.assertLess(better.premium_multiplier, worse.premium_multiplier)
            self.assertGreater(better.max_capacity_pct, worse.max_capacity_pct)
            if better.deductible_pct is not None:
                self.assertLess(better.deductible_pct, worse.deductible_pct)
        self.assertIsNone(INSURANCE_TERMS[RiskClass.LOW].deductible_pct)
        self.assertEqual(0.0, INSURANCE_TERMS[RiskClass.CRITICAL].max_capacity_pct)

    def test_risk_multiplier_is_the_mapping_multiplier(self) -> None:
        for mrs in range(0, 101):
            self.assertEqual(mrs_mapping(mrs).premium_multiplier, risk_multiplier(mrs))
        self.assertEqual(1.0, risk_multiplier(95))
        self.assertEqual(4.0, risk_multiplier(10))


class TestLayer4Composition(unittest.TestCase):
    def test_compose_clamps(self) -> None:
        self.assertEqual(0, compose_final_mrs(10, [_factor("a", -30)], 0))
        self.assertEqual(100, compose_final_mrs(98, [_factor("a", 5, RiskFactorStatus.PASS)], 0))
        self.assertEqual(83, compose_final_mrs(100, [_factor("a", -12), _factor("b", -2)], -3))
        self.assertEqual(0, clamp_mrs(-4))

    def test_ny_adjustment_sums_ny_impacts_only(self) -> None:
        impacts = (
            JurisdictionImpact("NY", "AI Ad Disclosure", ComplianceStatus.NON_COMPLIANT, -3, 1.8),
            JurisdictionImpact("NY", "NIL", ComplianceStatus.PARTIAL, -2, 1.8),
            JurisdictionImpact("CA", "Synthetic Performer", ComplianceStatus.PARTIAL, -4, 2.0),
        )
        self.assertEqual(-5, ny_adjustment_for(impacts))

    def test_build_score_derives_class_and_terms(self) -> None:
        score = build_model_risk_score(
            "m-x",
            "Example",
            90,
            [_factor("a", -12), _factor("b", 3, RiskFactorStatus.PASS)],
            [JurisdictionImpact("NY", "AI Ad Disclosure", ComplianceStatus.NON_COMPLIANT, -3)],
        )
        self.assertEqual(-3, score.ny_adjustment)
        self.assertEqual(78, score.final_mrs)
        self.assertEqual(RiskClass.GUARDED, score.risk_class)
        self.assertEqual(1.5, score.premium_multiplier)
        self.assertEqual(5.0, score.deductible_pct)
        self.assertEqual(50.0, score.max_capacity_pct)

    def test_explicit_adjustment_overrides_impacts(self) -> None:
        score = build_model_risk_score("m-x", "Example", 80, [], ny_adjustment=-10)
        self.assertEqual(70, score.final_mrs)

    def test_build_rejects_bad_input(self) -> None:
        with self.assertRaises(ValidationError):
            build_model_risk_score("", "x", 50, [])
        with self.assertRaises(ValidationError):
            build_model_risk_score("m", "x", 120, [])


class TestLayer4Catalog(unittest.TestCase):
    def test_reference_scores_satisfy_composition(self) -> None:
        scores = get_model_risk_scores()
        self.assertEqual(10, len(scores))
        for s in scores:
            expected = clamp_mrs(s.base_score + sum(f.score_impact for f in s.risk_factors) + s.ny_adjustment)
            self.assertEqual(expected, s.final_mrs, s.model_id)
            self.assertEqual(ny_adjustment_for(s.jurisdiction_impacts), s.ny_adjustment)
            self.assertEqual(risk_class_for_mrs(s.final_mrs), s.risk_class)
            self.assertEqual(risk_multiplier(s.final_mrs), s.premium_multiplier)
            for f in s.risk_factors:
                self.assertTrue(0.0 <= f.weight <= 1.0)
                self.assertGreaterEqual(f.estimated_improvement, 0)

    def test_reference_scores_span_classes(self) -> None:
        classes = {s.risk_class for s in get_model_risk_scores()}
        self.assertIn(RiskClass.LOW, classes)
        self.assertIn(RiskClass.CRITICAL, classes)

    def test_lookup_by_id(self) -> None:
        score = get_model_risk_score("model-1")
        self.assertEqual("Midjourney v6", score.model_name)
        self.assertEqual(68, score.final_mrs)
        self.assertEqual(("contract-1",), score.affected_contract_ids)
        self.assertEqual(8, len(score.score_history))
        self.assertEqual(score.final_mrs, score.score_history[-1].new_score)
        self.assertIsNone(get_model_risk_score("model-404"))

    def test_injected_catalog(self) -> None:
        custom = build_model_risk_score("m-a", "Custom", 95, [])
        catalog = ModelScoreCatalog([custom])
        self.assertEqual((custom,), get_model_risk_scores(catalog))
        self.assertIs(custom, get_model_risk_score("m-a", catalog))
        self.assertIsNone(get_model_risk_score("model-1", catalog))

    def test_to_dict_serializes_enums(self) -> None:
        d = get_model_risk_score("model-8").to_dict()
        self.assertEqual("Low", d["risk_class"])
        self.assertIsNone(d["deductible_pct"])
        self.assertEqual("PASS", d["risk_factors"][0]["status"])


if __name__ == "__main__":
    unittest.main()
