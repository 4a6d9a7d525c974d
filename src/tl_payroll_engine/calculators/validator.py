"""Payroll input validation.

The validator is advisory: it never mutates the input and never runs the
computation. Callers run it before ``compute_payroll`` and decide what to
block on. The policy checks that are merely questionable (minimum wage,
overtime, sick allowance) are also re-emitted by the engine as warnings,
using the same check functions so the wording never drifts.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from tl_payroll_engine.calculators.periods import effective_periods_per_month
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY, PayrollPolicy
from tl_payroll_engine.calculators.types import PayFrequency, PayrollInput


class Severity(str, Enum):
    """How serious a validation finding is."""

    ERROR = "error"  # computation would be meaningless
    WARNING = "warning"  # legal but policy-questionable


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation finding."""

    severity: Severity
    code: str
    message: str

    @property
    def is_blocking(self) -> bool:
        return self.severity == Severity.ERROR


_HOUR_FIELDS = (
    ("regular_hours", "Regular hours"),
    ("overtime_hours", "Overtime hours"),
    ("night_shift_hours", "Night shift hours"),
    ("holiday_hours", "Holiday hours"),
    ("rest_day_hours", "Rest day hours"),
    ("absence_hours", "Absence hours"),
    ("late_arrival_minutes", "Late arrival minutes"),
)

_AMOUNT_FIELDS = (
    ("bonus", "Bonus"),
    ("commission", "Commission"),
    ("per_diem", "Per diem"),
    ("food_allowance", "Food allowance"),
    ("transport_allowance", "Transport allowance"),
    ("other_earnings", "Other earnings"),
    ("loan_repayment", "Loan repayment"),
    ("advance_repayment", "Advance repayment"),
    ("court_orders", "Court orders"),
    ("other_deductions", "Other deductions"),
)


def _format_amount(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def check_minimum_wage(
    payroll_input: PayrollInput, policy: PayrollPolicy
) -> ValidationIssue | None:
    """Salaried employee paid below the statutory minimum wage."""
    if payroll_input.is_hourly:
        return None
    salary = payroll_input.monthly_salary
    if 0 <= salary < policy.minimum_wage:
        return ValidationIssue(
            severity=Severity.WARNING,
            code="below_minimum_wage",
            message=(
                f"Monthly salary ({_format_amount(salary)}) is below minimum wage "
                f"({_format_amount(policy.minimum_wage)})."
            ),
        )
    return None


def check_overtime_cap(
    payroll_input: PayrollInput, policy: PayrollPolicy
) -> ValidationIssue | None:
    """Overtime above the legal ceiling for the pay period."""
    periods = effective_periods_per_month(payroll_input, policy)
    cap = policy.working_time.overtime_cap_for_period(periods)
    if payroll_input.overtime_hours > cap:
        return ValidationIssue(
            severity=Severity.WARNING,
            code="overtime_over_cap",
            message=(
                f"Overtime hours ({payroll_input.overtime_hours}) exceed maximum allowed "
                f"per pay period ({cap.quantize(Decimal('0.01')).normalize():f})."
            ),
        )
    return None


def check_sick_allowance(
    payroll_input: PayrollInput, policy: PayrollPolicy
) -> ValidationIssue | None:
    """Sick days this period plus YTD run past the annual tiered allowance."""
    if payroll_input.sick_days_used <= 0:
        return None
    total = payroll_input.ytd_sick_days_used + payroll_input.sick_days_used
    if total > policy.sick_leave.total_days:
        return ValidationIssue(
            severity=Severity.WARNING,
            code="sick_days_over_allowance",
            message=(
                f"Total sick days ({total}) exceed annual limit "
                f"({policy.sick_leave.total_days}); days beyond the limit are unpaid."
            ),
        )
    return None


def validate_detailed(
    payroll_input: PayrollInput, policy: PayrollPolicy | None = None
) -> list[ValidationIssue]:
    """Validate a payroll input and return ordered findings with severities."""
    policy = policy or CURRENT_POLICY
    issues: list[ValidationIssue] = []

    def error(code: str, message: str) -> None:
        issues.append(ValidationIssue(Severity.ERROR, code, message))

    if payroll_input.monthly_salary < 0:
        error("negative_salary", "Monthly salary cannot be negative.")

    if payroll_input.is_hourly and (
        payroll_input.hourly_rate is None or payroll_input.hourly_rate <= 0
    ):
        error("missing_hourly_rate", "Hourly employees require a positive hourly rate.")

    for name, label in _HOUR_FIELDS:
        if getattr(payroll_input, name) < 0:
            error(f"negative_{name}", f"{label} cannot be negative.")

    if payroll_input.sick_days_used < 0:
        error("negative_sick_days_used", "Sick days used cannot be negative.")
    if payroll_input.ytd_sick_days_used < 0:
        error("negative_ytd_sick_days_used", "Year-to-date sick days cannot be negative.")

    for name, label in _AMOUNT_FIELDS:
        if getattr(payroll_input, name) < 0:
            error(f"negative_{name}", f"{label} cannot be negative.")

    if payroll_input.subsidio_anual is not None and payroll_input.subsidio_anual < 0:
        error("negative_subsidio_anual", "Subsidio anual cannot be negative.")

    ytd = payroll_input.ytd
    if ytd.gross_pay < 0 or ytd.income_tax < 0 or ytd.inss_employee < 0:
        error("negative_ytd", "Year-to-date totals cannot be negative.")

    if (
        payroll_input.pay_frequency != PayFrequency.MONTHLY
        and payroll_input.periods_per_month is not None
        and payroll_input.periods_per_month <= 0
    ):
        error("invalid_periods_per_month", "Periods per month must be positive.")

    if not 0 <= payroll_input.months_worked_this_year <= 12:
        error("invalid_months_worked", "Months worked this year must be between 0 and 12.")

    for check in (check_minimum_wage, check_overtime_cap, check_sick_allowance):
        issue = check(payroll_input, policy)
        if issue is not None:
            issues.append(issue)

    return issues


def validate(payroll_input: PayrollInput, policy: PayrollPolicy | None = None) -> list[str]:
    """Validate a payroll input.

    Returns an ordered list of human-readable messages; an empty list means
    the input is acceptable for computation.
    """
    return [issue.message for issue in validate_detailed(payroll_input, policy)]


def has_blocking_errors(issues: list[ValidationIssue]) -> bool:
    return any(issue.is_blocking for issue in issues)
