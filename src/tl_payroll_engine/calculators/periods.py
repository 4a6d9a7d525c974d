"""Pay period helpers for weekly and biweekly sub-payrolls."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.rate_tables import PayrollPolicy
from tl_payroll_engine.calculators.types import PayFrequency, PayrollInput, to_decimal

_INTERVAL_DAYS = {
    PayFrequency.WEEKLY: 7,
    PayFrequency.BIWEEKLY: 14,
}


@dataclass(frozen=True)
class WeeklyPayBreakdown:
    """One week's share of a monthly salary."""

    week_number: int
    working_days: int
    amount: Decimal
    is_reconciled: bool  # True for the final week, which absorbs rounding


def effective_periods_per_month(payroll_input: PayrollInput, policy: PayrollPolicy) -> Decimal:
    """Periods the pay frequency divides a month into for this input.

    Monthly pay is always one period. For weekly and biweekly pay the actual
    count supplied on the input wins over the policy default.
    """
    if payroll_input.pay_frequency == PayFrequency.MONTHLY:
        return policy.default_periods_per_month(PayFrequency.MONTHLY)
    if payroll_input.periods_per_month is not None and payroll_input.periods_per_month > 0:
        return payroll_input.periods_per_month
    return policy.default_periods_per_month(payroll_input.pay_frequency)


def pay_periods_in_month(pay_date: date, frequency: PayFrequency | str) -> int | None:
    """Count pay dates on a fixed weekly/biweekly cadence within pay_date's month.

    Returns None for monthly pay, where the question does not apply.
    """
    frequency = PayFrequency(frequency)
    interval_days = _INTERVAL_DAYS.get(frequency)
    if interval_days is None:
        return None

    interval = timedelta(days=interval_days)

    # Walk back to the first pay date of the month
    cursor = pay_date
    while (cursor - interval).month == pay_date.month and (cursor - interval).year == pay_date.year:
        cursor -= interval

    count = 0
    while cursor.month == pay_date.month and cursor.year == pay_date.year:
        count += 1
        cursor += interval
    return count


def split_monthly_salary(
    monthly_salary: Decimal | int | str, weekly_working_days: list[int]
) -> list[WeeklyPayBreakdown]:
    """Split a monthly salary across weeks pro-rata by working days.

    The final week is the remainder (salary minus everything already paid),
    so the weeks always sum to exactly the monthly salary.
    """
    if not weekly_working_days:
        return []

    salary = to_decimal(monthly_salary)
    total_days = sum(weekly_working_days)
    last_index = len(weekly_working_days) - 1

    if total_days == 0:
        return [
            WeeklyPayBreakdown(
                week_number=index + 1,
                working_days=days,
                amount=Decimal("0.00"),
                is_reconciled=index == last_index,
            )
            for index, days in enumerate(weekly_working_days)
        ]

    breakdown: list[WeeklyPayBreakdown] = []
    paid_so_far = Decimal("0")
    for index, days in enumerate(weekly_working_days):
        if index == last_index:
            amount = LineItemBuilder.round_to_cents(salary - paid_so_far)
        else:
            amount = LineItemBuilder.round_to_cents(salary * days / total_days)
            paid_so_far += amount
        breakdown.append(
            WeeklyPayBreakdown(
                week_number=index + 1,
                working_days=days,
                amount=amount,
                is_reconciled=index == last_index,
            )
        )
    return breakdown
