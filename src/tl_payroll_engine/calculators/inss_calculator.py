"""Mandatory INSS social-insurance contributions."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY, PayrollPolicy
from tl_payroll_engine.calculators.types import EarningLine, EarningType


@dataclass(frozen=True)
class InssContribution:
    """Employee and employer contributions on one base."""

    base: Decimal
    employee: Decimal
    employer: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee + self.employer


class InssCalculator:
    """Computes the mandatory-registration contribution base and amounts.

    The base is the contributable remuneration: only base-eligible earning
    types count. Overtime and extraordinary pay (holiday, rest day), bonus,
    commission, and allowances are excluded. The optional-registration band
    table is a separate lookup and is never used here.
    """

    def __init__(self, policy: PayrollPolicy = CURRENT_POLICY):
        self.policy = policy.inss

    def is_base_eligible(self, earning_type: EarningType) -> bool:
        return earning_type not in self.policy.excluded_earnings

    def contribution_base(
        self, earnings: Iterable[EarningLine], reductions: Decimal = Decimal("0")
    ) -> Decimal:
        """Sum of base-eligible earnings less absence/lateness, floored at zero."""
        eligible = LineItemBuilder.sum_amounts(
            line.amount for line in earnings if line.is_inss_base
        )
        return max(Decimal("0.00"), LineItemBuilder.round_to_cents(eligible - reductions))

    def calculate(self, base: Decimal) -> InssContribution:
        return InssContribution(
            base=base,
            employee=LineItemBuilder.round_to_cents(base * self.policy.employee_rate),
            employer=LineItemBuilder.round_to_cents(base * self.policy.employer_rate),
        )
