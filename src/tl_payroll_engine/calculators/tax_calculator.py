"""Wage Income Tax (WIT) withholding."""

from __future__ import annotations

from decimal import Decimal

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY, PayrollPolicy

ZERO_CENTS = Decimal("0.00")


class WageIncomeTaxCalculator:
    """Calculates WIT for one pay period.

    - Residents: rate x (taxable income - period threshold), floored at zero.
      The monthly threshold is pro-rated by the number of pay periods that
      make up a month.
    - Non-residents: rate x taxable income, no threshold.
    - Exempt employees: the policy's exempt rate x taxable income.
    """

    def __init__(self, policy: PayrollPolicy = CURRENT_POLICY):
        self.policy = policy.income_tax

    def period_threshold(self, periods_per_month: Decimal) -> Decimal:
        """Resident threshold for one pay period."""
        return LineItemBuilder.round_to_cents(
            self.policy.resident_monthly_threshold / periods_per_month
        )

    def calculate(
        self,
        taxable_income: Decimal,
        is_resident: bool,
        periods_per_month: Decimal = Decimal("1"),
        has_tax_exemption: bool = False,
    ) -> Decimal:
        if taxable_income <= 0:
            return ZERO_CENTS

        if has_tax_exemption:
            return LineItemBuilder.round_to_cents(taxable_income * self.policy.exempt_rate)

        if not is_resident:
            return LineItemBuilder.round_to_cents(taxable_income * self.policy.rate)

        excess = taxable_income - self.period_threshold(periods_per_month)
        if excess <= 0:
            return ZERO_CENTS
        return LineItemBuilder.round_to_cents(excess * self.policy.rate)
