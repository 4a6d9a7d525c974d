"""Subsidio Anual (13th-month salary) pro-ration."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.types import to_decimal

FULL_YEAR_MONTHS = 12


def compute_subsidio_anual(
    monthly_salary: Decimal | int | str,
    months_worked: int,
    hire_date: date | str,
    as_of_date: date | None = None,
) -> Decimal:
    """One month's salary pro-rated by months worked in the year.

    Returns 0.00 when the hire date is after ``as_of_date`` (which defaults
    to today). Months worked are clamped to 0..12.
    """
    if isinstance(hire_date, str):
        hire_date = date.fromisoformat(hire_date)
    if as_of_date is None:
        as_of_date = date.today()

    if hire_date > as_of_date:
        return Decimal("0.00")

    months = min(max(months_worked, 0), FULL_YEAR_MONTHS)
    return LineItemBuilder.round_to_cents(
        to_decimal(monthly_salary) * months / FULL_YEAR_MONTHS
    )
