"""Unit tests for tiered sick leave pay."""

from decimal import Decimal

from tl_payroll_engine.calculators.sick_leave import SickLeaveCalculator

DAILY_RATE = Decimal("62.96")


class TestSickPayTiers:
    """6 days at 100%, 6 days at 50%, then unpaid."""

    def test_daily_rate(self, policy):
        assert SickLeaveCalculator(policy).daily_rate(Decimal("7.87")) == DAILY_RATE

    def test_within_full_pay_tier(self, policy):
        result = SickLeaveCalculator(policy).calculate(DAILY_RATE, 4, 2)
        assert result.full_pay_days == 4
        assert result.reduced_pay_days == 0
        assert result.amount == Decimal("251.84")

    def test_within_reduced_tier(self, policy):
        result = SickLeaveCalculator(policy).calculate(DAILY_RATE, 3, 6)
        assert result.full_pay_days == 0
        assert result.reduced_pay_days == 3
        assert result.amount == Decimal("94.44")

    def test_period_straddles_tier_boundary(self, policy):
        result = SickLeaveCalculator(policy).calculate(DAILY_RATE, 4, 4)
        assert result.full_pay_days == 2
        assert result.reduced_pay_days == 2
        assert result.amount == Decimal("125.92") + Decimal("62.96")

    def test_days_beyond_allowance_unpaid(self, policy):
        result = SickLeaveCalculator(policy).calculate(DAILY_RATE, 3, 11)
        assert result.reduced_pay_days == 1
        assert result.unpaid_days == 2
        assert result.total_days == 3
        assert result.amount == Decimal("31.48")

    def test_allowance_exhausted(self, policy):
        result = SickLeaveCalculator(policy).calculate(DAILY_RATE, 2, 12)
        assert result.unpaid_days == 2
        assert result.amount == Decimal("0.00")

    def test_no_sick_days(self, policy):
        result = SickLeaveCalculator(policy).calculate(DAILY_RATE, 0, 5)
        assert result.total_days == 0
        assert result.amount == Decimal("0.00")
