"""Type definitions for the TL payroll calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric value to Decimal without going through float repr."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class PayFrequency(str, Enum):
    """How often an employee is paid."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"


class EarningType(str, Enum):
    """Earning line types."""

    REGULAR = "regular"
    OVERTIME = "overtime"
    NIGHT_SHIFT = "night_shift"
    HOLIDAY = "holiday"
    REST_DAY = "rest_day"
    SICK_PAY = "sick_pay"
    BONUS = "bonus"
    COMMISSION = "commission"
    PER_DIEM = "per_diem"
    FOOD_ALLOWANCE = "food_allowance"
    TRANSPORT_ALLOWANCE = "transport_allowance"
    OTHER = "other"
    SUBSIDIO_ANUAL = "subsidio_anual"


class DeductionType(str, Enum):
    """Deduction line types."""

    INCOME_TAX = "income_tax"
    INSS_EMPLOYEE = "inss_employee"
    ABSENCE = "absence"
    LATE_ARRIVAL = "late_arrival"
    LOAN_REPAYMENT = "loan_repayment"
    ADVANCE_REPAYMENT = "advance_repayment"
    COURT_ORDER = "court_order"
    OTHER = "other"


@dataclass(frozen=True)
class TaxInfo:
    """Tax classification of an employee."""

    is_resident: bool = True
    has_tax_exemption: bool = False


@dataclass(frozen=True)
class YtdTotals:
    """Year-to-date accumulator threaded through consecutive pay periods.

    The engine never stores these; each result carries the next snapshot
    and the caller feeds it back into the following period's input.
    """

    gross_pay: Decimal = ZERO
    income_tax: Decimal = ZERO
    inss_employee: Decimal = ZERO

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(self, f.name, to_decimal(getattr(self, f.name)))

    def add(
        self, gross_pay: Decimal, income_tax: Decimal, inss_employee: Decimal
    ) -> YtdTotals:
        """Return the snapshot after one more period."""
        return YtdTotals(
            gross_pay=self.gross_pay + gross_pay,
            income_tax=self.income_tax + income_tax,
            inss_employee=self.inss_employee + inss_employee,
        )


# Fields of PayrollInput that carry amounts or hours and are coerced to Decimal
_DECIMAL_FIELDS = (
    "monthly_salary",
    "regular_hours",
    "overtime_hours",
    "night_shift_hours",
    "holiday_hours",
    "rest_day_hours",
    "absence_hours",
    "late_arrival_minutes",
    "bonus",
    "commission",
    "per_diem",
    "food_allowance",
    "transport_allowance",
    "other_earnings",
    "loan_repayment",
    "advance_repayment",
    "court_orders",
    "other_deductions",
)

_OPTIONAL_DECIMAL_FIELDS = (
    "periods_per_month",
    "hourly_rate",
    "subsidio_anual",
    "inss_contribution_base",
)


@dataclass(frozen=True)
class PayrollInput:
    """Everything needed to compute one employee's pay for one period."""

    employee_id: str
    monthly_salary: Decimal

    pay_frequency: PayFrequency = PayFrequency.MONTHLY
    # Actual pay periods in the pay month; None falls back to the policy default
    periods_per_month: Decimal | None = None

    # Hourly workers are paid hourly_rate x regular_hours instead of salary
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

    tax_info: TaxInfo = field(default_factory=TaxInfo)
    inss_contribution_base: Decimal | None = None

    loan_repayment: Decimal = ZERO
    advance_repayment: Decimal = ZERO
    court_orders: Decimal = ZERO
    other_deductions: Decimal = ZERO

    ytd: YtdTotals = field(default_factory=YtdTotals)

    months_worked_this_year: int = 12
    hire_date: date | None = None

    def __post_init__(self) -> None:
        for name in _DECIMAL_FIELDS:
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        for name in _OPTIONAL_DECIMAL_FIELDS:
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, to_decimal(value))
        if not isinstance(self.pay_frequency, PayFrequency):
            object.__setattr__(self, "pay_frequency", PayFrequency(self.pay_frequency))
        if isinstance(self.hire_date, str):
            object.__setattr__(self, "hire_date", date.fromisoformat(self.hire_date))


@dataclass(frozen=True)
class EarningLine:
    """A single earning line on the payslip."""

    earning_type: EarningType
    amount: Decimal
    description: str
    description_tl: str
    hours: Decimal | None = None
    rate: Decimal | None = None
    is_taxable: bool = True
    is_inss_base: bool = False


@dataclass(frozen=True)
class DeductionLine:
    """A single deduction line on the payslip."""

    deduction_type: DeductionType
    amount: Decimal
    description: str
    description_tl: str
    is_statutory: bool = False


@dataclass(frozen=True)
class PayrollResult:
    """Output of one payroll computation.

    Invariants:
    - net_pay == gross_pay - total_deductions
    - total_employer_cost == gross_pay + inss_employer
    - voluntary deduction lines never sum above the configured cap
    """

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

    earnings: tuple[EarningLine, ...]
    deductions: tuple[DeductionLine, ...]

    ytd: YtdTotals
    warnings: tuple[str, ...] = ()

    @property
    def statutory_deductions(self) -> tuple[DeductionLine, ...]:
        return tuple(d for d in self.deductions if d.is_statutory)

    @property
    def voluntary_deductions(self) -> tuple[DeductionLine, ...]:
        return tuple(d for d in self.deductions if not d.is_statutory)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0
