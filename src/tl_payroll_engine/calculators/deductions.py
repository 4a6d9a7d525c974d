"""Deduction aggregation with the voluntary-deduction cap."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_DOWN, Decimal
from typing import Sequence

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY, PayrollPolicy
from tl_payroll_engine.calculators.types import DeductionLine

CENT = Decimal("0.01")


@dataclass(frozen=True)
class DeductionSummary:
    """Deduction lines after the cap, with the totals that produced them."""

    lines: tuple[DeductionLine, ...]
    statutory_total: Decimal
    voluntary_requested: Decimal
    voluntary_total: Decimal
    voluntary_cap: Decimal
    cap_applied: bool
    warnings: tuple[str, ...] = ()

    @property
    def total(self) -> Decimal:
        return self.statutory_total + self.voluntary_total


class DeductionAggregator:
    """Combines statutory and voluntary deductions.

    Statutory lines (WIT, INSS employee) always apply in full. Voluntary
    lines are limited to ``gross_pay x voluntary_cap_fraction``; when the
    requested total exceeds that, every voluntary line is reduced in
    proportion. Shares are floored to cents and the leftover cents go to the
    lines with the largest remainders, so the reduced lines sum to exactly
    the cap and no line rises above its requested amount.
    """

    def __init__(self, policy: PayrollPolicy = CURRENT_POLICY):
        self.cap_policy = policy.deduction_cap

    def voluntary_cap(self, gross_pay: Decimal) -> Decimal:
        return max(
            Decimal("0.00"),
            LineItemBuilder.round_to_cents(gross_pay * self.cap_policy.voluntary_cap_fraction),
        )

    def aggregate(self, gross_pay: Decimal, lines: Sequence[DeductionLine]) -> DeductionSummary:
        statutory_total = LineItemBuilder.sum_deductions(lines, statutory=True)
        voluntary_requested = LineItemBuilder.sum_deductions(lines, statutory=False)
        cap = self.voluntary_cap(gross_pay)

        if voluntary_requested <= cap:
            return DeductionSummary(
                lines=tuple(lines),
                statutory_total=statutory_total,
                voluntary_requested=voluntary_requested,
                voluntary_total=voluntary_requested,
                voluntary_cap=cap,
                cap_applied=False,
            )

        reduced = self._reduce_proportionally(lines, voluntary_requested, cap)
        warning = (
            f"Voluntary deductions (${voluntary_requested:,.2f}) exceed the "
            f"{self.cap_policy.label} cap (${cap:,.2f}). "
            f"Excess deductions have been reduced proportionally."
        )
        return DeductionSummary(
            lines=reduced,
            statutory_total=statutory_total,
            voluntary_requested=voluntary_requested,
            voluntary_total=cap,
            voluntary_cap=cap,
            cap_applied=True,
            warnings=(warning,),
        )

    def _reduce_proportionally(
        self, lines: Sequence[DeductionLine], requested: Decimal, cap: Decimal
    ) -> tuple[DeductionLine, ...]:
        voluntary_indexes = [i for i, line in enumerate(lines) if not line.is_statutory]

        # Floor every share to cents, then hand out the leftover cents by
        # largest remainder. Ties go to the later line.
        floored: dict[int, Decimal] = {}
        remainders: list[tuple[Decimal, int]] = []
        for index in voluntary_indexes:
            share = lines[index].amount * cap / requested
            floored[index] = share.quantize(CENT, rounding=ROUND_DOWN)
            remainders.append((share - floored[index], index))

        leftover_cents = int((cap - sum(floored.values())) / CENT)
        for _, index in sorted(remainders, reverse=True)[:leftover_cents]:
            floored[index] += CENT

        adjusted = list(lines)
        for index, amount in floored.items():
            adjusted[index] = replace(lines[index], amount=amount)
        return tuple(adjusted)
