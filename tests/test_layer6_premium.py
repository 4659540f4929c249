from __future__ import annotations

import unittest

from contracts.errors import ValidationError
from contracts.schemas import RiskClass
from jurisdiction_registry import default_registry
from model_risk import risk_multiplier
from premium import calculate_premium


class TestLayer6Premium(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = default_registry()

    def test_low_risk_ny_quote(self) -> None:
        quote = calculate_premium(1_000_000, 2, "NY", 95, self.registry)
        ny = self.registry.get_jurisdiction("NY").multiplier

        self.assertEqual(RiskClass.LOW, quote.risk_class)
        self.assertEqual(1.0, quote.risk_multiplier)
        self.assertAlmostEqual(1_000_000 * 0.02 * 1.0 * ny, quote.premium)
        self.assertIsNone(quote.deductible)
        self.assertEqual(1_000_000, quote.max_capacity)
        self.assertFalse(quote.declined)
        self.assertEqual("NY", quote.jurisdiction)
        self.assertEqual(ny, quote.jurisdiction_multiplier)

    def test_linear_in_limit(self) -> None:
        for mrs in (95, 72, 30):
            one = calculate_premium(250_000, 3.5, "CA", mrs, self.registry)
            two = calculate_premium(500_000, 3.5, "CA", mrs, self.registry)
            self.assertAlmostEqual(2 * one.premium, two.premium)

    def test_uses_mrs_engine_multiplier(self) -> None:
        for mrs in (0, 39, 40, 55, 70, 80, 90, 100):
            quote = calculate_premium(100_000, 1, "TX", mrs, self.registry)
            self.assertEqual(risk_multiplier(mrs), quote.risk_multiplier)

    def test_deductible_and_capacity_follow_class(self) -> None:
        quote = calculate_premium(1_000_000, 2, "CA", 72, self.registry)
        self.assertEqual(RiskClass.GUARDED, quote.risk_class)
        self.assertAlmostEqual(50_000, quote.deductible)
        self.assertAlmostEqual(500_000, quote.max_capacity)

    def test_critical_is_declined(self) -> None:
        quote = calculate_premium(1_000_000, 2, "NY", 30, self.registry)
        self.assertEqual(RiskClass.CRITICAL, quote.risk_class)
        self.assertEqual(0, quote.max_capacity)
        self.assertTrue(quote.declined)
        self.assertAlmostEqual(250_000, quote.deductible)

    def test_country_and_alias_jurisdictions(self) -> None:
        quote = calculate_premium(100_000, 1, "uk", 85, self.registry)
        self.assertEqual("GB", quote.jurisdiction)
        self.assertEqual(1.6, quote.jurisdiction_multiplier)

    def test_zero_rate_is_zero_premium(self) -> None:
        self.assertEqual(0, calculate_premium(100_000, 0, "NY", 85, self.registry).premium)

    def test_invalid_inputs_rejected(self) -> None:
        bad = (
            (0, 2, "NY", 90),
            (-100, 2, "NY", 90),
            (float("nan"), 2, "NY", 90),
            (100_000, -1, "NY", 90),
            (100_000, 2, "ZZ", 90),
            (100_000, 2, "", 90),
            (100_000, 2, "NY", 101),
            (100_000, 2, "NY", -1),
            (100_000, 2, "NY", float("nan")),
            (100_000, 2, "NY", float("inf")),
            ("100000", 2, "NY", 90),
        )
        for limit, rate, jurisdiction, mrs in bad:
            with self.assertRaises(ValidationError):
                calculate_premium(limit, rate, jurisdiction, mrs, self.registry)

    def test_fractional_mrs_is_rounded(self) -> None:
        quote = calculate_premium(1_000_000, 2, "NY", 89.6, self.registry)
        self.assertEqual(RiskClass.LOW, quote.risk_class)
        self.assertEqual(90, quote.mrs)
        self.assertIsNone(quote.deductible)

    def test_to_dict(self) -> None:
        d = calculate_premium(1_000_000, 2, "NY", 95, self.registry).to_dict()
        self.assertEqual("Low", d["risk_class"])
        self.assertIsNone(d["deductible"])


if __name__ == "__main__":
    unittest.main()
