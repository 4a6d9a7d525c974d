"""Timor-Leste payroll calculation engine."""

from tl_payroll_engine.calculators.deductions import DeductionAggregator, DeductionSummary
from tl_payroll_engine.calculators.engine import (
    PayrollBatchResult,
    PayrollEngine,
    PayrollTotals,
    compute_payroll,
)
from tl_payroll_engine.calculators.holidays import (
    PublicHoliday,
    easter_sunday,
    is_business_day,
    next_business_day,
    public_holidays,
)
from tl_payroll_engine.calculators.inss_calculator import InssCalculator, InssContribution
from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.periods import (
    WeeklyPayBreakdown,
    pay_periods_in_month,
    split_monthly_salary,
)
from tl_payroll_engine.calculators.premium_pay import PremiumPayCalculator, hourly_rate_for
from tl_payroll_engine.calculators.rate_tables import (
    CURRENT_POLICY,
    PayrollPolicy,
    PolicyNotFoundError,
    get_policy,
    select_optional_insurance_band,
)
from tl_payroll_engine.calculators.sick_leave import SickLeaveCalculator
from tl_payroll_engine.calculators.subsidio_anual import compute_subsidio_anual
from tl_payroll_engine.calculators.tax_calculator import WageIncomeTaxCalculator
from tl_payroll_engine.calculators.types import (
    DeductionType,
    EarningType,
    PayFrequency,
    PayrollInput,
    PayrollResult,
    TaxInfo,
    YtdTotals,
)
from tl_payroll_engine.calculators.validator import validate, validate_detailed

__all__ = [
    "CURRENT_POLICY",
    "DeductionAggregator",
    "DeductionSummary",
    "DeductionType",
    "EarningType",
    "InssCalculator",
    "InssContribution",
    "LineItemBuilder",
    "PayFrequency",
    "PayrollBatchResult",
    "PayrollEngine",
    "PayrollInput",
    "PayrollPolicy",
    "PayrollResult",
    "PayrollTotals",
    "PolicyNotFoundError",
    "PremiumPayCalculator",
    "PublicHoliday",
    "SickLeaveCalculator",
    "TaxInfo",
    "WageIncomeTaxCalculator",
    "WeeklyPayBreakdown",
    "YtdTotals",
    "compute_payroll",
    "compute_subsidio_anual",
    "easter_sunday",
    "get_policy",
    "hourly_rate_for",
    "is_business_day",
    "next_business_day",
    "pay_periods_in_month",
    "public_holidays",
    "select_optional_insurance_band",
    "split_monthly_salary",
    "validate",
    "validate_detailed",
]
