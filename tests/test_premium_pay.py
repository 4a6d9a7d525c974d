"""Unit tests for hourly rate derivation and premium pay."""

from decimal import Decimal

import pytest

from tl_payroll_engine.calculators.premium_pay import PremiumPayCalculator, hourly_rate_for


class TestHourlyRate:
    """Monthly salary / (44 x 52 / 12)."""

    @pytest.mark.parametrize(
        "salary,expected",
        [
            ("1500", "7.87"),
            ("1000", "5.24"),
            ("800", "4.20"),
            ("115", "0.60"),
            ("0", "0.00"),
        ],
    )
    def test_hourly_rate(self, salary, expected):
        assert hourly_rate_for(Decimal(salary)) == Decimal(expected)


class TestPremiumPay:
    """Premium multipliers applied to the hourly rate."""

    def test_overtime(self, policy):
        calc = PremiumPayCalculator(policy)
        result = calc.calculate(Decimal("7.87"), overtime_hours=Decimal("10"))
        assert result.overtime == Decimal("118.05")
        assert result.night_shift == Decimal("0.00")

    def test_all_premiums(self, policy):
        calc = PremiumPayCalculator(policy)
        result = calc.calculate(
            Decimal("7.87"),
            overtime_hours=Decimal("10"),
            night_shift_hours=Decimal("8"),
            holiday_hours=Decimal("8"),
            rest_day_hours=Decimal("4"),
        )
        assert result.night_shift == Decimal("78.70")
        assert result.holiday == Decimal("125.92")
        assert result.rest_day == Decimal("62.96")
        assert result.total == Decimal("385.63")

    def test_no_cap_applied(self, policy):
        calc = PremiumPayCalculator(policy)
        result = calc.calculate(Decimal("10"), overtime_hours=Decimal("100"))
        assert result.overtime == Decimal("1500.00")

    def test_rounding_half_up(self, policy):
        calc = PremiumPayCalculator(policy)
        # 1.01 x 1.25 x 1 = 1.2625
        assert calc.premium(Decimal("1.01"), Decimal("1.25"), Decimal("1")) == Decimal("1.26")
        # 0.33 x 1.5 x 1 = 0.495
        assert calc.premium(Decimal("0.33"), Decimal("1.5"), Decimal("1")) == Decimal("0.50")
