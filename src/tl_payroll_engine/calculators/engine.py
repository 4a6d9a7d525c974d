"""Payroll calculation engine - main orchestrator."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from tl_payroll_engine.calculators.deductions import DeductionAggregator
from tl_payroll_engine.calculators.inss_calculator import InssCalculator
from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.periods import effective_periods_per_month
from tl_payroll_engine.calculators.premium_pay import PremiumPayCalculator, hourly_rate_for
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY, PayrollPolicy
from tl_payroll_engine.calculators.sick_leave import SickLeaveCalculator
from tl_payroll_engine.calculators.tax_calculator import WageIncomeTaxCalculator
from tl_payroll_engine.calculators.types import (
    DeductionLine,
    DeductionType,
    EarningLine,
    EarningType,
    PayFrequency,
    PayrollInput,
    PayrollResult,
)
from tl_payroll_engine.calculators.validator import (
    check_minimum_wage,
    check_overtime_cap,
    check_sick_allowance,
    validate_detailed,
)

logger = logging.getLogger(__name__)

ZERO_CENTS = Decimal("0.00")

# Supplemental earnings copied straight from the input, in payslip order
_SUPPLEMENTAL_EARNINGS = (
    ("bonus", EarningType.BONUS),
    ("commission", EarningType.COMMISSION),
    ("per_diem", EarningType.PER_DIEM),
    ("food_allowance", EarningType.FOOD_ALLOWANCE),
    ("transport_allowance", EarningType.TRANSPORT_ALLOWANCE),
    ("other_earnings", EarningType.OTHER),
)

_VOLUNTARY_DEDUCTIONS = (
    ("loan_repayment", DeductionType.LOAN_REPAYMENT),
    ("advance_repayment", DeductionType.ADVANCE_REPAYMENT),
    ("court_orders", DeductionType.COURT_ORDER),
    ("other_deductions", DeductionType.OTHER),
)


@dataclass
class PayrollTotals:
    """Aggregate figures for a batch run."""

    employee_count: int = 0
    gross_pay: Decimal = ZERO_CENTS
    taxable_income: Decimal = ZERO_CENTS
    income_tax: Decimal = ZERO_CENTS
    inss_employee: Decimal = ZERO_CENTS
    inss_employer: Decimal = ZERO_CENTS
    total_deductions: Decimal = ZERO_CENTS
    net_pay: Decimal = ZERO_CENTS
    total_employer_cost: Decimal = ZERO_CENTS
    warning_count: int = 0

    def add(self, result: PayrollResult) -> None:
        self.employee_count += 1
        self.gross_pay += result.gross_pay
        self.taxable_income += result.taxable_income
        self.income_tax += result.income_tax
        self.inss_employee += result.inss_employee
        self.inss_employer += result.inss_employer
        self.total_deductions += result.total_deductions
        self.net_pay += result.net_pay
        self.total_employer_cost += result.total_employer_cost
        self.warning_count += len(result.warnings)


@dataclass
class PayrollBatchResult:
    """Result of running the engine over many employees."""

    results: dict[str, PayrollResult] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    totals: PayrollTotals = field(default_factory=PayrollTotals)

    @property
    def error_count(self) -> int:
        return len(self.errors)


class PayrollEngine:
    """Timor-Leste payroll calculation engine.

    Calculation pipeline (stable order per employee):
    1) Regular pay from salary and pay frequency (or hourly rate x hours)
    2) Premium pay: overtime, night shift, holiday, rest day
    3) Tiered sick pay against the YTD sick-day count
    4) Supplemental earnings and any Subsidio Anual amount
    5) Gross pay = sum of earning lines
    6) Absence and late-arrival deductions
    7) Taxable income and Wage Income Tax
    8) INSS contribution base, employee and employer contributions
    9) Deduction aggregation with the voluntary cap
    10) Net pay and total employer cost
    11) Next YTD snapshot

    The engine is stateless: every call is a pure function of the input and
    the policy tables. It never raises for a well-typed input; problems are
    returned as warnings. Run ``validate`` first to reject meaningless input.
    """

    def __init__(self, policy: PayrollPolicy | None = None):
        self.policy = policy or CURRENT_POLICY
        self.premium_calculator = PremiumPayCalculator(self.policy)
        self.sick_leave_calculator = SickLeaveCalculator(self.policy)
        self.tax_calculator = WageIncomeTaxCalculator(self.policy)
        self.inss_calculator = InssCalculator(self.policy)
        self.deduction_aggregator = DeductionAggregator(self.policy)

    def calculate(self, payroll_input: PayrollInput) -> PayrollResult:
        """Calculate pay for a single employee and period."""
        warnings: list[str] = []
        earnings: list[EarningLine] = []

        periods = self._periods_per_month(payroll_input, warnings)
        hourly_rate = self._hourly_rate(payroll_input)
        daily_rate = self.sick_leave_calculator.daily_rate(hourly_rate)

        # 1) Regular pay
        regular_pay = self._regular_pay(payroll_input, periods)
        earnings.append(
            self._earning(
                EarningType.REGULAR,
                regular_pay,
                hours=payroll_input.regular_hours,
                rate=hourly_rate,
            )
        )

        # 2) Premiums
        premiums = self.premium_calculator.calculate(
            hourly_rate,
            overtime_hours=payroll_input.overtime_hours,
            night_shift_hours=payroll_input.night_shift_hours,
            holiday_hours=payroll_input.holiday_hours,
            rest_day_hours=payroll_input.rest_day_hours,
        )
        rates = self.policy.premiums
        for earning_type, hours, amount, multiplier in (
            (EarningType.OVERTIME, payroll_input.overtime_hours, premiums.overtime, rates.overtime),
            (EarningType.NIGHT_SHIFT, payroll_input.night_shift_hours, premiums.night_shift, rates.night_shift),
            (EarningType.HOLIDAY, payroll_input.holiday_hours, premiums.holiday, rates.holiday),
            (EarningType.REST_DAY, payroll_input.rest_day_hours, premiums.rest_day, rates.rest_day),
        ):
            if hours > 0:
                earnings.append(
                    self._earning(
                        earning_type,
                        amount,
                        hours=hours,
                        rate=LineItemBuilder.round_to_cents(hourly_rate * multiplier),
                    )
                )

        # 3) Sick pay
        sick = self.sick_leave_calculator.calculate(
            daily_rate, payroll_input.sick_days_used, payroll_input.ytd_sick_days_used
        )
        if sick.amount > 0:
            earnings.append(self._earning(EarningType.SICK_PAY, sick.amount))
        warnings.extend(self._sick_leave_warnings(payroll_input, sick.unpaid_days))

        # 4) Supplemental earnings and Subsidio Anual
        for attribute, earning_type in _SUPPLEMENTAL_EARNINGS:
            amount = getattr(payroll_input, attribute)
            if amount > 0:
                earnings.append(self._earning(earning_type, amount))

        subsidio_anual = ZERO_CENTS
        if payroll_input.subsidio_anual is not None and payroll_input.subsidio_anual > 0:
            subsidio_anual = LineItemBuilder.round_to_cents(payroll_input.subsidio_anual)
            earnings.append(self._earning(EarningType.SUBSIDIO_ANUAL, subsidio_anual))

        # 5) Gross
        gross_pay = LineItemBuilder.calculate_gross_from_lines(earnings)

        # 6) Absence and lateness reduce both taxable income and the INSS base
        absence_deduction = LineItemBuilder.round_to_cents(
            hourly_rate * payroll_input.absence_hours
        )
        late_deduction = self._late_deduction(hourly_rate, payroll_input.late_arrival_minutes)
        time_reductions = absence_deduction + late_deduction

        # 7) Wage Income Tax
        taxable_income = max(
            ZERO_CENTS,
            LineItemBuilder.calculate_taxable_from_lines(earnings) - time_reductions,
        )
        tax_info = payroll_input.tax_info
        income_tax = self.tax_calculator.calculate(
            taxable_income,
            is_resident=tax_info.is_resident,
            periods_per_month=periods,
            has_tax_exemption=tax_info.has_tax_exemption,
        )
        warnings.extend(self._tax_warnings(payroll_input, taxable_income, periods))

        # 8) INSS
        if payroll_input.inss_contribution_base is not None:
            inss_base = LineItemBuilder.round_to_cents(payroll_input.inss_contribution_base)
        else:
            inss_base = self.inss_calculator.contribution_base(earnings, time_reductions)
        inss = self.inss_calculator.calculate(inss_base)

        # 9) Deductions
        deduction_lines = self._deduction_lines(
            payroll_input, absence_deduction, late_deduction, income_tax, inss.employee
        )
        summary = self.deduction_aggregator.aggregate(gross_pay, deduction_lines)
        warnings.extend(summary.warnings)

        # 10) Net and employer cost
        total_deductions = summary.total
        net_pay = gross_pay - total_deductions
        total_employer_cost = gross_pay + inss.employer

        if net_pay < 0:
            warnings.append("Net pay is negative. Please review deductions.")
        warnings.extend(LineItemBuilder.validate_line_signs(earnings, summary.lines))

        for check in (check_minimum_wage, check_overtime_cap):
            issue = check(payroll_input, self.policy)
            if issue is not None:
                warnings.append(issue.message)

        # 11) YTD fold
        ytd = payroll_input.ytd.add(gross_pay, income_tax, inss.employee)

        logger.debug(
            "Calculated payroll for %s: gross=%s deductions=%s net=%s warnings=%d",
            payroll_input.employee_id,
            gross_pay,
            total_deductions,
            net_pay,
            len(warnings),
        )

        return PayrollResult(
            employee_id=payroll_input.employee_id,
            hourly_rate=hourly_rate,
            daily_rate=daily_rate,
            regular_pay=regular_pay,
            overtime_pay=premiums.overtime,
            night_shift_pay=premiums.night_shift,
            holiday_pay=premiums.holiday,
            rest_day_pay=premiums.rest_day,
            sick_pay=sick.amount,
            subsidio_anual=subsidio_anual,
            gross_pay=gross_pay,
            taxable_income=taxable_income,
            inss_base=inss_base,
            income_tax=income_tax,
            inss_employee=inss.employee,
            inss_employer=inss.employer,
            absence_deduction=absence_deduction,
            late_deduction=late_deduction,
            total_deductions=total_deductions,
            net_pay=net_pay,
            total_employer_cost=total_employer_cost,
            earnings=tuple(earnings),
            deductions=summary.lines,
            ytd=ytd,
            warnings=tuple(warnings),
        )

    def calculate_batch(
        self, inputs: Iterable[PayrollInput], skip_invalid: bool = False
    ) -> PayrollBatchResult:
        """Calculate pay for many employees.

        Employees are independent; an unexpected failure for one is recorded
        against that employee and the rest of the batch still runs. With
        ``skip_invalid`` the validator runs first and employees with blocking
        errors are reported in ``errors`` instead of being computed.

        Results are keyed by employee ID, so only the first input for an ID
        is computed; later inputs with the same ID are reported as errors.
        """
        batch = PayrollBatchResult()
        seen: set[str] = set()

        for payroll_input in inputs:
            if payroll_input.employee_id in seen:
                logger.warning("Skipping duplicate employee %s", payroll_input.employee_id)
                batch.errors.setdefault(
                    payroll_input.employee_id,
                    f"Duplicate employee ID {payroll_input.employee_id}; "
                    f"only the first entry was processed.",
                )
                continue
            seen.add(payroll_input.employee_id)

            if skip_invalid:
                blocking = [
                    issue.message
                    for issue in validate_detailed(payroll_input, self.policy)
                    if issue.is_blocking
                ]
                if blocking:
                    logger.warning(
                        "Skipping %s: %d validation error(s)",
                        payroll_input.employee_id,
                        len(blocking),
                    )
                    batch.errors[payroll_input.employee_id] = " ".join(blocking)
                    continue

            try:
                result = self.calculate(payroll_input)
            except Exception as e:
                logger.exception(
                    "Unexpected error calculating payroll for %s", payroll_input.employee_id
                )
                batch.errors[payroll_input.employee_id] = f"Unexpected error: {e}"
                continue

            batch.results[payroll_input.employee_id] = result
            batch.totals.add(result)

        logger.info(
            "Payroll batch complete: employees=%d errors=%d gross=%s net=%s",
            batch.totals.employee_count,
            batch.error_count,
            batch.totals.gross_pay,
            batch.totals.net_pay,
        )
        return batch

    # === Calculation steps ===

    def _periods_per_month(self, payroll_input: PayrollInput, warnings: list[str]) -> Decimal:
        requested = payroll_input.periods_per_month
        if (
            payroll_input.pay_frequency != PayFrequency.MONTHLY
            and requested is not None
            and requested <= 0
        ):
            default = self.policy.default_periods_per_month(payroll_input.pay_frequency)
            warnings.append(
                f"Invalid periods per month ({requested}); "
                f"using the {payroll_input.pay_frequency.value} default ({default})."
            )
        return effective_periods_per_month(payroll_input, self.policy)

    def _hourly_rate(self, payroll_input: PayrollInput) -> Decimal:
        if payroll_input.is_hourly and payroll_input.hourly_rate:
            return LineItemBuilder.round_to_cents(payroll_input.hourly_rate)
        return hourly_rate_for(payroll_input.monthly_salary, self.policy)

    def _regular_pay(self, payroll_input: PayrollInput, periods: Decimal) -> Decimal:
        if payroll_input.is_hourly and payroll_input.hourly_rate:
            return LineItemBuilder.round_to_cents(
                payroll_input.hourly_rate * payroll_input.regular_hours
            )
        return LineItemBuilder.round_to_cents(payroll_input.monthly_salary / periods)

    def _late_deduction(self, hourly_rate: Decimal, late_minutes: Decimal) -> Decimal:
        """Late minutes are rounded up to the policy's block size before pricing."""
        if late_minutes <= 0:
            return ZERO_CENTS
        block = self.policy.working_time.late_rounding_minutes
        rounded_minutes = math.ceil(late_minutes / block) * block
        return LineItemBuilder.round_to_cents(hourly_rate * rounded_minutes / 60)

    def _earning(
        self,
        earning_type: EarningType,
        amount: Decimal,
        hours: Decimal | None = None,
        rate: Decimal | None = None,
    ) -> EarningLine:
        return LineItemBuilder.create_earning_line(
            earning_type,
            amount,
            hours=hours,
            rate=rate,
            is_taxable=True,
            is_inss_base=self.inss_calculator.is_base_eligible(earning_type),
        )

    def _deduction_lines(
        self,
        payroll_input: PayrollInput,
        absence_deduction: Decimal,
        late_deduction: Decimal,
        income_tax: Decimal,
        inss_employee: Decimal,
    ) -> list[DeductionLine]:
        lines: list[DeductionLine] = []

        if absence_deduction > 0:
            lines.append(
                LineItemBuilder.create_deduction_line(
                    DeductionType.ABSENCE, absence_deduction, is_statutory=False
                )
            )
        if late_deduction > 0:
            lines.append(
                LineItemBuilder.create_deduction_line(
                    DeductionType.LATE_ARRIVAL, late_deduction, is_statutory=False
                )
            )
        if income_tax > 0:
            lines.append(
                LineItemBuilder.create_deduction_line(
                    DeductionType.INCOME_TAX, income_tax, is_statutory=True
                )
            )
        if inss_employee > 0:
            rate_label = (self.policy.inss.employee_rate * 100).normalize()
            lines.append(
                LineItemBuilder.create_deduction_line(
                    DeductionType.INSS_EMPLOYEE,
                    inss_employee,
                    is_statutory=True,
                    description=f"INSS Employee ({rate_label:f}%)",
                )
            )

        court_orders_exempt = self.policy.deduction_cap.court_orders_exempt
        for attribute, deduction_type in _VOLUNTARY_DEDUCTIONS:
            amount = getattr(payroll_input, attribute)
            if amount > 0:
                lines.append(
                    LineItemBuilder.create_deduction_line(
                        deduction_type,
                        amount,
                        is_statutory=(
                            deduction_type == DeductionType.COURT_ORDER and court_orders_exempt
                        ),
                    )
                )
        return lines

    # === Warnings ===

    def _sick_leave_warnings(self, payroll_input: PayrollInput, unpaid_days: int) -> list[str]:
        if payroll_input.sick_days_used <= 0:
            return []
        issue = check_sick_allowance(payroll_input, self.policy)
        if issue is not None:
            return [issue.message, f"{unpaid_days} sick day(s) this period were not paid."]

        sick_policy = self.policy.sick_leave
        total = payroll_input.ytd_sick_days_used + payroll_input.sick_days_used
        if total >= sick_policy.warning_threshold_days:
            return [f"Employee has used {total} of {sick_policy.total_days} annual sick days."]
        return []

    def _tax_warnings(
        self, payroll_input: PayrollInput, taxable_income: Decimal, periods: Decimal
    ) -> list[str]:
        tax_info = payroll_input.tax_info
        if tax_info.has_tax_exemption:
            return ["Tax exemption applied - withholding computed at the exempt rate."]
        if tax_info.is_resident:
            threshold = self.tax_calculator.period_threshold(periods)
            if 0 < taxable_income <= threshold:
                return [
                    f"Income at or below the ${threshold:,.2f} period threshold - "
                    f"no income tax applied."
                ]
        return []


def compute_payroll(
    payroll_input: PayrollInput, policy: PayrollPolicy | None = None
) -> PayrollResult:
    """Compute one employee's payroll with the given (or current) policy."""
    return PayrollEngine(policy).calculate(payroll_input)
