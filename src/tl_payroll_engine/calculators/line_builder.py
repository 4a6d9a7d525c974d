"""Payslip line builder and the shared cents rounding rule."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from tl_payroll_engine.calculators.types import (
    DeductionLine,
    DeductionType,
    EarningLine,
    EarningType,
)

# English / Tetum descriptions for each line type
EARNING_LABELS: dict[EarningType, tuple[str, str]] = {
    EarningType.REGULAR: ("Regular Salary", "Saláriu Regular"),
    EarningType.OVERTIME: ("Overtime", "Oras Extra"),
    EarningType.NIGHT_SHIFT: ("Night Shift Premium", "Prémiu Turnu Kalan"),
    EarningType.HOLIDAY: ("Public Holiday Pay", "Pagamentu Feriadu"),
    EarningType.REST_DAY: ("Rest Day Pay", "Pagamentu Loron Deskansa"),
    EarningType.SICK_PAY: ("Sick Leave Pay", "Pagamentu Lisensa Moras"),
    EarningType.BONUS: ("Bonus", "Bónus"),
    EarningType.COMMISSION: ("Commission", "Komisaun"),
    EarningType.PER_DIEM: ("Per Diem / Travel", "Per Diem / Viajen"),
    EarningType.FOOD_ALLOWANCE: ("Food Allowance", "Subsidiu Ai-han"),
    EarningType.TRANSPORT_ALLOWANCE: ("Transport Allowance", "Subsidiu Transporte"),
    EarningType.OTHER: ("Other Earnings", "Rendimentu Seluk"),
    EarningType.SUBSIDIO_ANUAL: ("Annual Subsidy (13th Month)", "Subsidiu Anual (13º Mês)"),
}

DEDUCTION_LABELS: dict[DeductionType, tuple[str, str]] = {
    DeductionType.INCOME_TAX: ("Withholding Income Tax (WIT)", "Impostu Retidu (WIT)"),
    DeductionType.INSS_EMPLOYEE: ("INSS Employee", "INSS Trabalhador"),
    DeductionType.ABSENCE: ("Absence Deduction", "Dedusaun Ausensia"),
    DeductionType.LATE_ARRIVAL: ("Late Arrival Deduction", "Dedusaun Tarde Mai"),
    DeductionType.LOAN_REPAYMENT: ("Loan Repayment", "Pagamentu Empréstimu"),
    DeductionType.ADVANCE_REPAYMENT: ("Advance Repayment", "Pagamentu Adiantamentu"),
    DeductionType.COURT_ORDER: ("Court Order", "Ordem Tribunal"),
    DeductionType.OTHER: ("Other Deductions", "Dedusaun Seluk"),
}


class LineItemBuilder:
    """Builds payslip lines.

    Sign conventions:
    - Earning and deduction amounts are both stored as non-negative values.
      Net pay is gross minus the deduction total.

    Rounding:
    - Every currency amount is rounded half-up to 2 decimals as soon as it
      is produced by a multiplication or division.
    """

    OUTPUT_PRECISION = Decimal("0.01")

    @staticmethod
    def round_to_cents(amount: Decimal) -> Decimal:
        """Round amount to 2 decimal places (cents), half-up."""
        return amount.quantize(LineItemBuilder.OUTPUT_PRECISION, rounding=ROUND_HALF_UP)

    @staticmethod
    def create_earning_line(
        earning_type: EarningType,
        amount: Decimal,
        hours: Decimal | None = None,
        rate: Decimal | None = None,
        is_taxable: bool = True,
        is_inss_base: bool = False,
    ) -> EarningLine:
        """Create an earning line with its bilingual description."""
        description, description_tl = EARNING_LABELS[earning_type]
        return EarningLine(
            earning_type=earning_type,
            amount=LineItemBuilder.round_to_cents(amount),
            description=description,
            description_tl=description_tl,
            hours=hours,
            rate=rate,
            is_taxable=is_taxable,
            is_inss_base=is_inss_base,
        )

    @staticmethod
    def create_deduction_line(
        deduction_type: DeductionType,
        amount: Decimal,
        is_statutory: bool,
        description: str | None = None,
    ) -> DeductionLine:
        """Create a deduction line (amount stored positive)."""
        default_description, description_tl = DEDUCTION_LABELS[deduction_type]
        return DeductionLine(
            deduction_type=deduction_type,
            amount=LineItemBuilder.round_to_cents(abs(amount)),
            description=description or default_description,
            description_tl=description_tl,
            is_statutory=is_statutory,
        )

    @staticmethod
    def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
        total = Decimal("0")
        for amount in amounts:
            total += amount
        return LineItemBuilder.round_to_cents(total)

    @staticmethod
    def calculate_gross_from_lines(lines: Iterable[EarningLine]) -> Decimal:
        """GROSS = Σ(EARNING)"""
        return LineItemBuilder.sum_amounts(line.amount for line in lines)

    @staticmethod
    def calculate_taxable_from_lines(lines: Iterable[EarningLine]) -> Decimal:
        return LineItemBuilder.sum_amounts(line.amount for line in lines if line.is_taxable)

    @staticmethod
    def sum_deductions(lines: Iterable[DeductionLine], statutory: bool | None = None) -> Decimal:
        """Sum deduction lines, optionally only statutory or only voluntary ones."""
        return LineItemBuilder.sum_amounts(
            line.amount
            for line in lines
            if statutory is None or line.is_statutory == statutory
        )

    @staticmethod
    def validate_line_signs(
        earnings: Iterable[EarningLine], deductions: Iterable[DeductionLine]
    ) -> list[str]:
        """Check that every earning and deduction amount is non-negative.

        Returns list of error messages (empty if all valid).
        """
        errors: list[str] = []
        for line in earnings:
            if line.amount < 0:
                errors.append(
                    f"Earning line '{line.earning_type.value}' has negative amount {line.amount}"
                )
        for line in deductions:
            if line.amount < 0:
                errors.append(
                    f"Deduction line '{line.deduction_type.value}' has negative amount {line.amount}"
                )
        return errors
