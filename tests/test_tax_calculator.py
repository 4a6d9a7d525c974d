"""Unit tests for Wage Income Tax withholding."""

from decimal import Decimal

import pytest

from tl_payroll_engine.calculators.tax_calculator import WageIncomeTaxCalculator


@pytest.fixture
def calc(policy):
    return WageIncomeTaxCalculator(policy)


class TestResidentTax:
    """10% above the pro-rated $500 threshold."""

    def test_above_threshold(self, calc):
        assert calc.calculate(Decimal("800"), is_resident=True) == Decimal("30.00")

    def test_at_threshold(self, calc):
        result = calc.calculate(Decimal("500"), is_resident=True)
        assert result == Decimal("0.00")
        assert str(result) == "0.00"

    def test_below_threshold(self, calc):
        assert calc.calculate(Decimal("115"), is_resident=True) == Decimal("0.00")

    def test_weekly_threshold(self, calc):
        assert calc.period_threshold(Decimal("4")) == Decimal("125.00")
        assert calc.calculate(
            Decimal("200"), is_resident=True, periods_per_month=Decimal("4")
        ) == Decimal("7.50")

    def test_biweekly_threshold(self, calc):
        assert calc.period_threshold(Decimal("2")) == Decimal("250.00")
        assert calc.calculate(
            Decimal("400"), is_resident=True, periods_per_month=Decimal("2")
        ) == Decimal("15.00")

    def test_rounding(self, calc):
        # (1618.05 - 500) x 10% = 111.805
        assert calc.calculate(Decimal("1618.05"), is_resident=True) == Decimal("111.81")


class TestNonResidentTax:
    """10% from the first dollar."""

    def test_flat_rate(self, calc):
        assert calc.calculate(Decimal("600"), is_resident=False) == Decimal("60.00")

    def test_no_threshold(self, calc):
        assert calc.calculate(Decimal("100"), is_resident=False) == Decimal("10.00")


class TestExemptionsAndEdges:
    """Exempt employees and non-positive income."""

    def test_exemption_uses_exempt_rate(self, calc):
        assert calc.calculate(
            Decimal("5000"), is_resident=False, has_tax_exemption=True
        ) == Decimal("0.00")

    @pytest.mark.parametrize("income", ["0", "-25"])
    def test_non_positive_income(self, calc, income):
        assert calc.calculate(Decimal(income), is_resident=False) == Decimal("0.00")
