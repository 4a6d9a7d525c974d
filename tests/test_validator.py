"""Unit tests for payroll input validation."""

from decimal import Decimal

import pytest

from tl_payroll_engine.calculators.types import PayFrequency, YtdTotals
from tl_payroll_engine.calculators.validator import (
    Severity,
    has_blocking_errors,
    validate,
    validate_detailed,
)


class TestValidInput:
    """Inputs that need no attention."""

    def test_ordinary_employee_is_valid(self, make_input):
        assert validate(make_input()) == []

    def test_validation_does_not_mutate_input(self, make_input):
        payroll_input = make_input(overtime_hours=Decimal("80"))
        before = repr(payroll_input)
        validate(payroll_input)
        assert repr(payroll_input) == before


class TestBlockingErrors:
    """Inputs that make computation meaningless."""

    def test_negative_salary(self, make_input):
        messages = validate(make_input(monthly_salary=Decimal("-1")))
        assert messages[0] == "Monthly salary cannot be negative."

    def test_negative_salary_is_not_also_below_minimum(self, make_input):
        issues = validate_detailed(make_input(monthly_salary=Decimal("-1")))
        assert [i.code for i in issues] == ["negative_salary"]

    def test_hourly_without_rate(self, make_input):
        issues = validate_detailed(make_input(is_hourly=True))
        assert "missing_hourly_rate" in [i.code for i in issues]

    @pytest.mark.parametrize(
        "field,message",
        [
            ("regular_hours", "Regular hours cannot be negative."),
            ("overtime_hours", "Overtime hours cannot be negative."),
            ("night_shift_hours", "Night shift hours cannot be negative."),
            ("holiday_hours", "Holiday hours cannot be negative."),
            ("rest_day_hours", "Rest day hours cannot be negative."),
            ("absence_hours", "Absence hours cannot be negative."),
            ("late_arrival_minutes", "Late arrival minutes cannot be negative."),
        ],
    )
    def test_negative_hours(self, make_input, field, message):
        assert message in validate(make_input(**{field: Decimal("-1")}))

    def test_negative_sick_days(self, make_input):
        issues = validate_detailed(make_input(sick_days_used=-1))
        assert issues[0].code == "negative_sick_days_used"

    def test_negative_loan(self, make_input):
        assert "Loan repayment cannot be negative." in validate(
            make_input(loan_repayment=Decimal("-10"))
        )

    def test_negative_ytd(self, make_input):
        issues = validate_detailed(make_input(ytd=YtdTotals(gross_pay=Decimal("-1"))))
        assert [i.code for i in issues] == ["negative_ytd"]

    def test_zero_periods_per_month(self, make_input):
        issues = validate_detailed(
            make_input(pay_frequency=PayFrequency.WEEKLY, periods_per_month=Decimal("0"))
        )
        assert [i.code for i in issues] == ["invalid_periods_per_month"]

    def test_periods_ignored_for_monthly_pay(self, make_input):
        assert validate(make_input(periods_per_month=Decimal("0"))) == []

    @pytest.mark.parametrize("months", [-1, 13])
    def test_months_worked_out_of_range(self, make_input, months):
        issues = validate_detailed(make_input(months_worked_this_year=months))
        assert [i.code for i in issues] == ["invalid_months_worked"]

    def test_blocking_flag(self, make_input):
        issues = validate_detailed(make_input(monthly_salary=Decimal("-1")))
        assert has_blocking_errors(issues)
        assert issues[0].severity == Severity.ERROR


class TestPolicyWarnings:
    """Legal but questionable inputs."""

    def test_below_minimum_wage(self, make_input):
        issues = validate_detailed(make_input(monthly_salary=Decimal("100")))
        assert len(issues) == 1
        assert issues[0].severity == Severity.WARNING
        assert issues[0].message == "Monthly salary ($100.00) is below minimum wage ($115.00)."
        assert not has_blocking_errors(issues)

    def test_minimum_wage_not_checked_for_hourly(self, make_input):
        issues = validate_detailed(
            make_input(monthly_salary=Decimal("0"), is_hourly=True, hourly_rate=Decimal("3"))
        )
        assert issues == []

    def test_overtime_over_monthly_cap(self, make_input):
        messages = validate(make_input(overtime_hours=Decimal("70")))
        assert messages == ["Overtime hours (70) exceed maximum allowed per pay period (64)."]

    def test_overtime_at_cap_is_fine(self, make_input):
        assert validate(make_input(overtime_hours=Decimal("64"))) == []

    def test_overtime_cap_for_weekly_pay(self, make_input):
        messages = validate(
            make_input(pay_frequency=PayFrequency.WEEKLY, overtime_hours=Decimal("17"))
        )
        assert messages == ["Overtime hours (17) exceed maximum allowed per pay period (16)."]

    def test_sick_days_over_allowance(self, make_input):
        issues = validate_detailed(make_input(sick_days_used=3, ytd_sick_days_used=11))
        assert [i.code for i in issues] == ["sick_days_over_allowance"]
        assert issues[0].message.startswith("Total sick days (14) exceed annual limit (12)")

    def test_errors_precede_warnings(self, make_input):
        issues = validate_detailed(
            make_input(overtime_hours=Decimal("70"), bonus=Decimal("-5"))
        )
        assert [i.severity for i in issues] == [Severity.ERROR, Severity.WARNING]
