"""Unit tests for payroll input and YTD types."""

from datetime import date
from decimal import Decimal

import pytest

from tl_payroll_engine.calculators.types import PayFrequency, PayrollInput, YtdTotals, to_decimal


class TestCoercion:
    """Numeric fields become Decimal without float artefacts."""

    def test_to_decimal(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("12.50") == Decimal("12.50")

    def test_input_fields_coerced(self):
        payroll_input = PayrollInput(
            employee_id="E",
            monthly_salary=800,
            overtime_hours="2.5",
            hourly_rate=4.2,
            pay_frequency="biweekly",
            hire_date="2024-03-01",
        )
        assert payroll_input.monthly_salary == Decimal("800")
        assert payroll_input.overtime_hours == Decimal("2.5")
        assert payroll_input.hourly_rate == Decimal("4.2")
        assert payroll_input.pay_frequency is PayFrequency.BIWEEKLY
        assert payroll_input.hire_date == date(2024, 3, 1)
        assert payroll_input.subsidio_anual is None

    def test_unknown_frequency_rejected(self):
        with pytest.raises(ValueError):
            PayrollInput(employee_id="E", monthly_salary=800, pay_frequency="daily")


class TestYtdTotals:
    """The YTD fold step."""

    def test_add_returns_new_snapshot(self):
        start = YtdTotals(gross_pay="100", income_tax=5, inss_employee="4")
        nxt = start.add(Decimal("800.00"), Decimal("30.00"), Decimal("32.00"))

        assert nxt == YtdTotals(Decimal("900.00"), Decimal("35.00"), Decimal("36.00"))
        assert start.gross_pay == Decimal("100")
