"""Hourly rate derivation and premium pay (overtime, night, holiday, rest day)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY, PayrollPolicy


def hourly_rate_for(monthly_salary: Decimal, policy: PayrollPolicy = CURRENT_POLICY) -> Decimal:
    """Monthly salary divided by standard monthly hours, rounded to cents."""
    return LineItemBuilder.round_to_cents(
        monthly_salary / policy.working_time.standard_monthly_hours
    )


@dataclass(frozen=True)
class PremiumPay:
    """Premium earnings for one period."""

    overtime: Decimal
    night_shift: Decimal
    holiday: Decimal
    rest_day: Decimal

    @property
    def total(self) -> Decimal:
        return self.overtime + self.night_shift + self.holiday + self.rest_day


class PremiumPayCalculator:
    """Applies the premium multipliers to an hourly rate.

    No caps are applied here; overtime limits are a validator concern.
    """

    def __init__(self, policy: PayrollPolicy = CURRENT_POLICY):
        self.rates = policy.premiums

    def premium(self, hourly_rate: Decimal, multiplier: Decimal, hours: Decimal) -> Decimal:
        return LineItemBuilder.round_to_cents(hourly_rate * multiplier * hours)

    def calculate(
        self,
        hourly_rate: Decimal,
        overtime_hours: Decimal = Decimal("0"),
        night_shift_hours: Decimal = Decimal("0"),
        holiday_hours: Decimal = Decimal("0"),
        rest_day_hours: Decimal = Decimal("0"),
    ) -> PremiumPay:
        return PremiumPay(
            overtime=self.premium(hourly_rate, self.rates.overtime, overtime_hours),
            night_shift=self.premium(hourly_rate, self.rates.night_shift, night_shift_hours),
            holiday=self.premium(hourly_rate, self.rates.holiday, holiday_hours),
            rest_day=self.premium(hourly_rate, self.rates.rest_day, rest_day_hours),
        )
