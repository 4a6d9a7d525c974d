"""Tiered sick leave pay."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY, PayrollPolicy


@dataclass(frozen=True)
class SickPayBreakdown:
    """How this period's sick days fall across the annual tiers."""

    full_pay_days: int
    reduced_pay_days: int
    unpaid_days: int
    amount: Decimal

    @property
    def total_days(self) -> int:
        return self.full_pay_days + self.reduced_pay_days + self.unpaid_days


class SickLeaveCalculator:
    """Computes sick pay against the employee's cumulative annual count.

    Day N of the year (counting YTD days first) is paid at the full rate
    while N <= full_pay_days, at the reduced rate while
    N <= full_pay_days + reduced_pay_days, and not at all beyond that.
    A period straddling a tier boundary is split between tiers.
    """

    def __init__(self, policy: PayrollPolicy = CURRENT_POLICY):
        self.policy = policy.sick_leave
        self.daily_hours = policy.working_time.standard_daily_hours

    def daily_rate(self, hourly_rate: Decimal) -> Decimal:
        return LineItemBuilder.round_to_cents(hourly_rate * self.daily_hours)

    def calculate(
        self, daily_rate: Decimal, days_this_period: int, days_used_ytd: int
    ) -> SickPayBreakdown:
        days = max(0, days_this_period)
        start = max(0, days_used_ytd)
        end = start + days

        full_limit = self.policy.full_pay_days
        total_limit = self.policy.total_days

        full_days = max(0, min(end, full_limit) - min(start, full_limit))
        reduced_days = max(0, min(end, total_limit) - max(start, full_limit))
        unpaid_days = days - full_days - reduced_days

        amount = LineItemBuilder.round_to_cents(
            full_days * daily_rate * self.policy.full_pay_rate
        ) + LineItemBuilder.round_to_cents(
            reduced_days * daily_rate * self.policy.reduced_pay_rate
        )

        return SickPayBreakdown(
            full_pay_days=full_days,
            reduced_pay_days=reduced_days,
            unpaid_days=unpaid_days,
            amount=amount,
        )
