"""Unit tests for LineItemBuilder."""

from decimal import Decimal

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.types import DeductionType, EarningLine, EarningType


class TestRounding:
    """Test rounding behavior."""

    def test_round_to_cents_half_up(self):
        """Half cents round away from zero."""
        assert LineItemBuilder.round_to_cents(Decimal("2.345")) == Decimal("2.35")
        assert LineItemBuilder.round_to_cents(Decimal("2.344")) == Decimal("2.34")
        assert LineItemBuilder.round_to_cents(Decimal("-2.345")) == Decimal("-2.35")

    def test_round_whole_number(self):
        assert str(LineItemBuilder.round_to_cents(Decimal("800"))) == "800.00"


class TestLineCreation:
    """Earning and deduction line factories."""

    def test_earning_line_has_bilingual_description(self):
        line = LineItemBuilder.create_earning_line(
            EarningType.OVERTIME,
            Decimal("118.049"),
            hours=Decimal("10"),
            rate=Decimal("11.81"),
        )
        assert line.amount == Decimal("118.05")
        assert line.description == "Overtime"
        assert line.description_tl == "Oras Extra"
        assert line.is_taxable
        assert not line.is_inss_base

    def test_deduction_line_stored_positive(self):
        line = LineItemBuilder.create_deduction_line(
            DeductionType.LOAN_REPAYMENT, Decimal("-50"), is_statutory=False
        )
        assert line.amount == Decimal("50.00")
        assert line.description == "Loan Repayment"

    def test_deduction_description_override(self):
        line = LineItemBuilder.create_deduction_line(
            DeductionType.INSS_EMPLOYEE,
            Decimal("32"),
            is_statutory=True,
            description="INSS Employee (4%)",
        )
        assert line.description == "INSS Employee (4%)"
        assert line.description_tl == "INSS Trabalhador"

    def test_every_type_has_labels(self):
        for earning_type in EarningType:
            assert LineItemBuilder.create_earning_line(earning_type, Decimal("1")).description
        for deduction_type in DeductionType:
            assert LineItemBuilder.create_deduction_line(
                deduction_type, Decimal("1"), is_statutory=False
            ).description_tl


class TestSums:
    """Gross and deduction totals."""

    def test_gross_from_lines(self):
        lines = [
            LineItemBuilder.create_earning_line(EarningType.REGULAR, Decimal("800")),
            LineItemBuilder.create_earning_line(EarningType.BONUS, Decimal("200.50")),
        ]
        assert LineItemBuilder.calculate_gross_from_lines(lines) == Decimal("1000.50")

    def test_sum_deductions_by_kind(self):
        lines = [
            LineItemBuilder.create_deduction_line(
                DeductionType.INCOME_TAX, Decimal("30"), is_statutory=True
            ),
            LineItemBuilder.create_deduction_line(
                DeductionType.LOAN_REPAYMENT, Decimal("100"), is_statutory=False
            ),
        ]
        assert LineItemBuilder.sum_deductions(lines) == Decimal("130.00")
        assert LineItemBuilder.sum_deductions(lines, statutory=True) == Decimal("30.00")
        assert LineItemBuilder.sum_deductions(lines, statutory=False) == Decimal("100.00")


class TestSignValidation:
    """Negative amounts are reported."""

    def test_valid_lines(self):
        earnings = [LineItemBuilder.create_earning_line(EarningType.REGULAR, Decimal("800"))]
        assert LineItemBuilder.validate_line_signs(earnings, []) == []

    def test_negative_earning_reported(self):
        line = EarningLine(
            earning_type=EarningType.REGULAR,
            amount=Decimal("-40.00"),
            description="Regular Salary",
            description_tl="Saláriu Regular",
        )
        errors = LineItemBuilder.validate_line_signs([line], [])
        assert errors == ["Earning line 'regular' has negative amount -40.00"]
