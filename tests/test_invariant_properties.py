"""Property-based tests for payroll invariants.

These tests use hypothesis to generate random employees and verify that the
accounting identities hold for every computed result.
"""

from __future__ import annotations

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from tl_payroll_engine.calculators.deductions import DeductionAggregator
from tl_payroll_engine.calculators.engine import PayrollEngine, compute_payroll
from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY
from tl_payroll_engine.calculators.types import (
    DeductionType,
    PayFrequency,
    PayrollInput,
    TaxInfo,
)


def money(max_value: str = "20000") -> st.SearchStrategy[Decimal]:
    return st.decimals(
        min_value=Decimal("0"),
        max_value=Decimal(max_value),
        places=2,
        allow_nan=False,
        allow_infinity=False,
    )


def hours(max_value: str = "80") -> st.SearchStrategy[Decimal]:
    return st.decimals(
        min_value=Decimal("0"),
        max_value=Decimal(max_value),
        places=1,
        allow_nan=False,
        allow_infinity=False,
    )


@st.composite
def payroll_inputs(draw) -> PayrollInput:
    return PayrollInput(
        employee_id=draw(st.text(min_size=1, max_size=8)),
        monthly_salary=draw(money()),
        pay_frequency=draw(st.sampled_from(list(PayFrequency))),
        overtime_hours=draw(hours()),
        night_shift_hours=draw(hours()),
        holiday_hours=draw(hours("24")),
        absence_hours=draw(hours("40")),
        late_arrival_minutes=draw(hours("300")),
        sick_days_used=draw(st.integers(min_value=0, max_value=15)),
        ytd_sick_days_used=draw(st.integers(min_value=0, max_value=15)),
        bonus=draw(money("5000")),
        loan_repayment=draw(money("5000")),
        advance_repayment=draw(money("5000")),
        court_orders=draw(money("2000")),
        tax_info=TaxInfo(is_resident=draw(st.booleans())),
    )


class TestResultIdentities:
    """Accounting identities on a single result."""

    @given(payroll_inputs())
    @settings(max_examples=200, deadline=None)
    def test_net_pay_identity(self, payroll_input):
        result = compute_payroll(payroll_input)
        assert result.net_pay == result.gross_pay - result.total_deductions
        assert result.net_pay <= result.gross_pay

    @given(payroll_inputs())
    @settings(max_examples=200, deadline=None)
    def test_employer_cost_identity(self, payroll_input):
        result = compute_payroll(payroll_input)
        assert result.total_employer_cost == result.gross_pay + result.inss_employer

    @given(payroll_inputs())
    @settings(max_examples=200, deadline=None)
    def test_deduction_lines_sum_to_total(self, payroll_input):
        result = compute_payroll(payroll_input)
        assert sum(d.amount for d in result.deductions) == result.total_deductions

    @given(payroll_inputs())
    @settings(max_examples=200, deadline=None)
    def test_amounts_non_negative_and_in_cents(self, payroll_input):
        result = compute_payroll(payroll_input)
        for line in (*result.earnings, *result.deductions):
            assert line.amount >= 0
            assert line.amount == LineItemBuilder.round_to_cents(line.amount)
        assert result.income_tax >= 0
        assert result.inss_employee >= 0


class TestStatutoryRules:
    """Tax, INSS and cap rules hold for arbitrary inputs."""

    @given(payroll_inputs())
    @settings(max_examples=200, deadline=None)
    def test_voluntary_deductions_within_cap(self, payroll_input):
        result = compute_payroll(payroll_input)
        cap = LineItemBuilder.round_to_cents(
            result.gross_pay * CURRENT_POLICY.deduction_cap.voluntary_cap_fraction
        )
        assert sum(d.amount for d in result.voluntary_deductions) <= cap

    @given(
        st.lists(money("500"), min_size=1, max_size=6),
        money("2000"),
    )
    @settings(max_examples=200, deadline=None)
    def test_capped_lines_never_exceed_request(self, amounts, gross):
        lines = [
            LineItemBuilder.create_deduction_line(DeductionType.OTHER, amount, is_statutory=False)
            for amount in amounts
        ]
        summary = DeductionAggregator(CURRENT_POLICY).aggregate(gross, lines)

        for before, after in zip(lines, summary.lines):
            assert Decimal("0") <= after.amount <= before.amount
        assert sum((line.amount for line in summary.lines), Decimal("0")) == summary.voluntary_total

    @given(payroll_inputs())
    @settings(max_examples=200, deadline=None)
    def test_inss_rates(self, payroll_input):
        result = compute_payroll(payroll_input)
        assert result.inss_employee == LineItemBuilder.round_to_cents(
            result.inss_base * Decimal("0.04")
        )
        assert result.inss_employer == LineItemBuilder.round_to_cents(
            result.inss_base * Decimal("0.06")
        )

    @given(money(), st.booleans())
    @settings(max_examples=200, deadline=None)
    def test_monthly_wit(self, salary, is_resident):
        result = compute_payroll(
            PayrollInput(
                employee_id="E",
                monthly_salary=salary,
                tax_info=TaxInfo(is_resident=is_resident),
            )
        )
        if is_resident:
            expected = max(Decimal("0"), result.taxable_income - Decimal("500")) * Decimal("0.10")
        else:
            expected = result.taxable_income * Decimal("0.10")
        assert result.income_tax == LineItemBuilder.round_to_cents(expected)

    @given(payroll_inputs())
    @settings(max_examples=100, deadline=None)
    def test_ytd_fold(self, payroll_input):
        result = compute_payroll(payroll_input)
        assert result.ytd.gross_pay == payroll_input.ytd.gross_pay + result.gross_pay
        assert result.ytd.income_tax == payroll_input.ytd.income_tax + result.income_tax
        assert result.ytd.inss_employee == payroll_input.ytd.inss_employee + result.inss_employee


class TestBatchTotals:
    """Batch totals equal the sum of per-employee results."""

    @given(st.lists(payroll_inputs(), min_size=1, max_size=6))
    @settings(max_examples=50, deadline=None)
    def test_totals_are_sums(self, inputs):
        batch = PayrollEngine().calculate_batch(inputs)
        results = list(batch.results.values())

        assert batch.totals.employee_count == len(results)
        assert set(batch.results) == {i.employee_id for i in inputs}
        assert batch.totals.gross_pay == sum((r.gross_pay for r in results), Decimal("0"))
        assert batch.totals.net_pay == sum((r.net_pay for r in results), Decimal("0"))
        assert batch.totals.income_tax == sum((r.income_tax for r in results), Decimal("0"))
