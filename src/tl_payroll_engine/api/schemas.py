"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tl_payroll_engine.calculators.engine import PayrollBatchResult
from tl_payroll_engine.calculators.rate_tables import ContributionBand, PayrollPolicy
from tl_payroll_engine.calculators.types import (
    DeductionType,
    EarningType,
    PayFrequency,
    PayrollInput,
    PayrollResult,
    TaxInfo,
    YtdTotals,
)
from tl_payroll_engine.calculators.validator import Severity, ValidationIssue

ZERO = Decimal("0")


# ============================================================================
# Input schemas
# ============================================================================


class TaxInfoSchema(BaseModel):
    """Employee tax classification."""

    is_resident: bool = True
    has_tax_exemption: bool = False


class YtdTotalsSchema(BaseModel):
    """Year-to-date totals carried between periods."""

    model_config = ConfigDict(from_attributes=True)

    gross_pay: Decimal = ZERO
    income_tax: Decimal = ZERO
    inss_employee: Decimal = ZERO


class PayrollInputRequest(BaseModel):
    """One employee's pay-period input.

    Amounts are not range-checked here; negative values reach the validator
    so callers get the same messages from every entry point.
    """

    employee_id: str = Field(min_length=1)
    monthly_salary: Decimal

    pay_frequency: PayFrequency = PayFrequency.MONTHLY
    periods_per_month: Decimal | None = None

    is_hourly: bool = False
    hourly_rate: Decimal | None = None

    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    night_shift_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    rest_day_hours: Decimal = ZERO
    absence_hours: Decimal = ZERO
    late_arrival_minutes: Decimal = ZERO

    sick_days_used: int = 0
    ytd_sick_days_used: int = 0

    bonus: Decimal = ZERO
    commission: Decimal = ZERO
    per_diem: Decimal = ZERO
    food_allowance: Decimal = ZERO
    transport_allowance: Decimal = ZERO
    other_earnings: Decimal = ZERO
    subsidio_anual: Decimal | None = None

    tax_info: TaxInfoSchema = Field(default_factory=TaxInfoSchema)
    inss_contribution_base: Decimal | None = None

    loan_repayment: Decimal = ZERO
    advance_repayment: Decimal = ZERO
    court_orders: Decimal = ZERO
    other_deductions: Decimal = ZERO

    ytd: YtdTotalsSchema = Field(default_factory=YtdTotalsSchema)

    months_worked_this_year: int = 12
    hire_date: date | None = None

    def to_domain(self) -> PayrollInput:
        """Convert to the engine's input dataclass."""
        values = self.model_dump(exclude={"tax_info", "ytd"})
        return PayrollInput(
            **values,
            tax_info=TaxInfo(**self.tax_info.model_dump()),
            ytd=YtdTotals(**self.ytd.model_dump()),
        )


class PayrollBatchRequest(BaseModel):
    """Several employees for the same pay period."""

    employees: list[PayrollInputRequest] = Field(min_length=1)


class SubsidioAnualRequest(BaseModel):
    """Inputs for the 13th-month salary calculation."""

    monthly_salary: Decimal = Field(ge=0)
    months_worked: int
    hire_date: date
    as_of_date: date | None = None


# ============================================================================
# Result schemas
# ============================================================================


class EarningLineResponse(BaseModel):
    """An earning line on the payslip."""

    model_config = ConfigDict(from_attributes=True)

    earning_type: EarningType
    amount: Decimal
    description: str
    description_tl: str
    hours: Decimal | None = None
    rate: Decimal | None = None
    is_taxable: bool
    is_inss_base: bool


class DeductionLineResponse(BaseModel):
    """A deduction line on the payslip."""

    model_config = ConfigDict(from_attributes=True)

    deduction_type: DeductionType
    amount: Decimal
    description: str
    description_tl: str
    is_statutory: bool


class PayrollResultResponse(BaseModel):
    """Computed pay for one employee."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    hourly_rate: Decimal
    daily_rate: Decimal

    regular_pay: Decimal
    overtime_pay: Decimal
    night_shift_pay: Decimal
    holiday_pay: Decimal
    rest_day_pay: Decimal
    sick_pay: Decimal
    subsidio_anual: Decimal

    gross_pay: Decimal
    taxable_income: Decimal
    inss_base: Decimal

    income_tax: Decimal
    inss_employee: Decimal
    inss_employer: Decimal
    absence_deduction: Decimal
    late_deduction: Decimal

    total_deductions: Decimal
    net_pay: Decimal
    total_employer_cost: Decimal

    earnings: list[EarningLineResponse]
    deductions: list[DeductionLineResponse]
    ytd: YtdTotalsSchema
    warnings: list[str]

    @classmethod
    def from_result(cls, result: PayrollResult) -> "PayrollResultResponse":
        return cls.model_validate(result, from_attributes=True)


class PayrollTotalsResponse(BaseModel):
    """Batch totals."""

    model_config = ConfigDict(from_attributes=True)

    employee_count: int
    gross_pay: Decimal
    taxable_income: Decimal
    income_tax: Decimal
    inss_employee: Decimal
    inss_employer: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    total_employer_cost: Decimal
    warning_count: int


class PayrollBatchResponse(BaseModel):
    """Per-employee results, per-employee errors and totals."""

    results: list[PayrollResultResponse]
    errors: dict[str, str]
    totals: PayrollTotalsResponse

    @classmethod
    def from_batch(cls, batch: PayrollBatchResult) -> "PayrollBatchResponse":
        return cls(
            results=[PayrollResultResponse.from_result(r) for r in batch.results.values()],
            errors=dict(batch.errors),
            totals=PayrollTotalsResponse.model_validate(batch.totals, from_attributes=True),
        )


class ValidationIssueResponse(BaseModel):
    """A single validation finding."""

    model_config = ConfigDict(from_attributes=True)

    severity: Severity
    code: str
    message: str


class ValidationResponse(BaseModel):
    """Validator output."""

    is_valid: bool
    has_blocking_errors: bool
    messages: list[str]
    issues: list[ValidationIssueResponse]

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> "ValidationResponse":
        return cls(
            is_valid=not issues,
            has_blocking_errors=any(issue.is_blocking for issue in issues),
            messages=[issue.message for issue in issues],
            issues=[ValidationIssueResponse.model_validate(i, from_attributes=True) for i in issues],
        )


class SubsidioAnualResponse(BaseModel):
    """13th-month salary amount."""

    monthly_salary: Decimal
    months_worked: int
    subsidio_anual: Decimal


class OptionalBandResponse(BaseModel):
    """Optional-registration INSS band for a declared income."""

    income: Decimal
    band: int | None = None
    multiplier: Decimal | None = None
    contribution_base: Decimal

    @classmethod
    def from_band(cls, income: Decimal, band: ContributionBand | None) -> "OptionalBandResponse":
        if band is None:
            return cls(income=income, contribution_base=ZERO)
        return cls(
            income=income,
            band=band.band,
            multiplier=band.multiplier,
            contribution_base=band.base,
        )


class PublicHolidayResponse(BaseModel):
    """A TL public holiday."""

    model_config = ConfigDict(from_attributes=True)

    day: date
    name: str
    name_tl: str
    is_movable: bool


class PayDateResponse(BaseModel):
    """A requested pay date and the business day it moves to."""

    requested: date
    pay_date: date
    adjusted: bool


class PolicyResponse(BaseModel):
    """The rate tables in force."""

    version: str
    effective_start: date
    effective_end: date | None = None
    minimum_wage: Decimal
    income_tax_rate: Decimal
    resident_monthly_threshold: Decimal
    inss_employee_rate: Decimal
    inss_employer_rate: Decimal
    premiums: dict[str, Decimal]
    standard_weekly_hours: Decimal
    max_overtime_per_week: Decimal
    sick_leave_full_pay_days: int
    sick_leave_reduced_pay_days: int
    voluntary_deduction_cap: Decimal
    court_orders_exempt: bool
    periods_per_month: dict[str, Decimal]

    @classmethod
    def from_policy(cls, policy: PayrollPolicy) -> "PolicyResponse":
        premiums = policy.premiums
        return cls(
            version=policy.version,
            effective_start=policy.effective_start,
            effective_end=policy.effective_end,
            minimum_wage=policy.minimum_wage,
            income_tax_rate=policy.income_tax.rate,
            resident_monthly_threshold=policy.income_tax.resident_monthly_threshold,
            inss_employee_rate=policy.inss.employee_rate,
            inss_employer_rate=policy.inss.employer_rate,
            premiums={
                "overtime": premiums.overtime,
                "night_shift": premiums.night_shift,
                "holiday": premiums.holiday,
                "rest_day": premiums.rest_day,
            },
            standard_weekly_hours=policy.working_time.standard_weekly_hours,
            max_overtime_per_week=policy.working_time.max_overtime_per_week,
            sick_leave_full_pay_days=policy.sick_leave.full_pay_days,
            sick_leave_reduced_pay_days=policy.sick_leave.reduced_pay_days,
            voluntary_deduction_cap=policy.deduction_cap.voluntary_cap_fraction,
            court_orders_exempt=policy.deduction_cap.court_orders_exempt,
            periods_per_month={
                frequency.value: periods
                for frequency, periods in policy.periods_per_month.items()
            },
        )


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None


class ValidationErrorDetail(BaseModel):
    """Blocking validation messages that stopped a calculation."""

    code: str
    messages: list[str]


class ValidationErrorResponse(BaseModel):
    """Schema for the 422 returned when input fails validation."""

    detail: ValidationErrorDetail
