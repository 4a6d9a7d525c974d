"""Timor-Leste rate and policy tables.

Single source of truth for every jurisdiction constant the engine uses:

- Wage Income Tax: Decree Law 8/2008 (Taxes and Duties Act), Schedule V.
  Residents pay 10% above $500/month; non-residents pay 10% from the
  first dollar.
- INSS: Decree-Law 19/2016. 4% employee + 6% employer on the contributable
  remuneration; optional registrants contribute on a band that is a
  multiple of the social pension.
- Labour Code (Law 4/2012): 44-hour week, overtime/night/holiday/rest-day
  premiums, 12 sick days a year (6 at full pay, 6 at half pay), $115
  minimum wage.

Regimes are versioned by effective date so a change in the law is a new
``PayrollPolicy`` entry, not an edit to calculation code.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from tl_payroll_engine.calculators.line_builder import LineItemBuilder
from tl_payroll_engine.calculators.types import EarningType, PayFrequency, to_decimal


class PolicyNotFoundError(Exception):
    """Raised when no policy regime matches the requested version or date."""

    def __init__(self, version: str | None = None, as_of_date: date | None = None):
        self.version = version
        self.as_of_date = as_of_date
        if version is not None:
            message = f"Payroll policy version '{version}' not found"
        else:
            message = f"No payroll policy effective {as_of_date}"
        super().__init__(message)


@dataclass(frozen=True)
class IncomeTaxPolicy:
    """Wage Income Tax (WIT / Impostu Retidu)."""

    rate: Decimal = Decimal("0.10")
    resident_monthly_threshold: Decimal = Decimal("500")
    # Rate applied to taxable income when the employee holds an exemption
    exempt_rate: Decimal = Decimal("0")


@dataclass(frozen=True)
class InssPolicy:
    """Mandatory and optional INSS contributions."""

    employee_rate: Decimal = Decimal("0.04")
    employer_rate: Decimal = Decimal("0.06")
    # Earning types left out of the contributable remuneration
    excluded_earnings: frozenset[EarningType] = frozenset(
        {
            EarningType.OVERTIME,
            EarningType.HOLIDAY,
            EarningType.REST_DAY,
            EarningType.BONUS,
            EarningType.COMMISSION,
            EarningType.PER_DIEM,
            EarningType.FOOD_ALLOWANCE,
            EarningType.TRANSPORT_ALLOWANCE,
            EarningType.OTHER,
        }
    )
    social_pension: Decimal = Decimal("60")
    optional_band_multipliers: tuple[Decimal, ...] = tuple(
        Decimal(m)
        for m in (
            "2", "2.5", "3", "4", "5", "6", "7", "8", "9", "10", "12",
            "14", "16", "18", "20", "25", "30", "40", "50", "100", "200",
        )
    )


@dataclass(frozen=True)
class PremiumRates:
    """Pay multipliers for work outside the standard schedule."""

    overtime: Decimal = Decimal("1.5")
    night_shift: Decimal = Decimal("1.25")
    holiday: Decimal = Decimal("2.0")
    rest_day: Decimal = Decimal("2.0")


@dataclass(frozen=True)
class WorkingTimePolicy:
    """Standard working time and overtime limits."""

    standard_weekly_hours: Decimal = Decimal("44")
    standard_daily_hours: Decimal = Decimal("8")
    max_overtime_per_week: Decimal = Decimal("16")
    weeks_per_month: Decimal = Decimal("4")
    late_rounding_minutes: int = 15

    @property
    def standard_monthly_hours(self) -> Decimal:
        """44 h/week x 52 weeks / 12 months (kept unrounded; it is not money)."""
        return self.standard_weekly_hours * Decimal("52") / Decimal("12")

    def overtime_cap_for_period(self, periods_per_month: Decimal) -> Decimal:
        """Legal overtime ceiling for one pay period."""
        return self.max_overtime_per_week * self.weeks_per_month / periods_per_month


@dataclass(frozen=True)
class SickLeavePolicy:
    """Tiered annual sick leave."""

    full_pay_days: int = 6
    full_pay_rate: Decimal = Decimal("1.0")
    reduced_pay_days: int = 6
    reduced_pay_rate: Decimal = Decimal("0.5")
    warning_threshold_days: int = 10

    @property
    def total_days(self) -> int:
        return self.full_pay_days + self.reduced_pay_days


@dataclass(frozen=True)
class DeductionCapPolicy:
    """Ceiling on non-statutory deductions as a fraction of gross pay."""

    voluntary_cap_fraction: Decimal = Decimal("0.30")
    # When set, court orders are treated as statutory and bypass the cap
    court_orders_exempt: bool = False

    def __post_init__(self) -> None:
        fraction = to_decimal(self.voluntary_cap_fraction)
        if fraction < 0 or fraction > 1:
            raise ValueError("voluntary_cap_fraction must be between 0 and 1")
        object.__setattr__(self, "voluntary_cap_fraction", fraction)

    @property
    def label(self) -> str:
        """Human label for warnings, e.g. '30%'."""
        percent = (self.voluntary_cap_fraction * 100).quantize(Decimal("0.01")).normalize()
        return f"{percent:f}%"


@dataclass(frozen=True)
class ContributionBand:
    """One row of the optional-registration INSS band table."""

    band: int
    multiplier: Decimal
    base: Decimal


@dataclass(frozen=True)
class PayrollPolicy:
    """A complete, versioned set of payroll rules."""

    version: str
    effective_start: date
    effective_end: date | None = None

    minimum_wage: Decimal = Decimal("115")
    income_tax: IncomeTaxPolicy = field(default_factory=IncomeTaxPolicy)
    inss: InssPolicy = field(default_factory=InssPolicy)
    premiums: PremiumRates = field(default_factory=PremiumRates)
    working_time: WorkingTimePolicy = field(default_factory=WorkingTimePolicy)
    sick_leave: SickLeavePolicy = field(default_factory=SickLeavePolicy)
    deduction_cap: DeductionCapPolicy = field(default_factory=DeductionCapPolicy)
    periods_per_month: dict[PayFrequency, Decimal] = field(
        default_factory=lambda: {
            PayFrequency.MONTHLY: Decimal("1"),
            PayFrequency.WEEKLY: Decimal("4"),
            PayFrequency.BIWEEKLY: Decimal("2"),
        }
    )

    def is_effective(self, as_of_date: date) -> bool:
        if as_of_date < self.effective_start:
            return False
        return self.effective_end is None or as_of_date <= self.effective_end

    def default_periods_per_month(self, frequency: PayFrequency) -> Decimal:
        return self.periods_per_month[frequency]

    def with_deduction_cap(self, fraction: Decimal | str) -> PayrollPolicy:
        """Return a copy of this policy with a different voluntary cap."""
        return replace(
            self,
            deduction_cap=replace(self.deduction_cap, voluntary_cap_fraction=to_decimal(fraction)),
        )


POLICY_VERSIONS: tuple[PayrollPolicy, ...] = (
    PayrollPolicy(version="TL-2023", effective_start=date(2023, 1, 1)),
)

CURRENT_POLICY = POLICY_VERSIONS[-1]


def get_policy(as_of: date | None = None, version: str | None = None) -> PayrollPolicy:
    """Resolve a policy regime by version label or effective date.

    With neither argument the current regime is returned.
    """
    if version is not None:
        for policy in POLICY_VERSIONS:
            if policy.version == version:
                return policy
        raise PolicyNotFoundError(version=version)

    if as_of is None:
        return CURRENT_POLICY

    matches = [p for p in POLICY_VERSIONS if p.is_effective(as_of)]
    if not matches:
        raise PolicyNotFoundError(as_of_date=as_of)
    return max(matches, key=lambda p: p.effective_start)


def optional_contribution_bands(
    policy: PayrollPolicy = CURRENT_POLICY,
) -> list[ContributionBand]:
    """Optional-registration bands, smallest first."""
    return [
        ContributionBand(
            band=index + 1,
            multiplier=multiplier,
            base=LineItemBuilder.round_to_cents(policy.inss.social_pension * multiplier),
        )
        for index, multiplier in enumerate(policy.inss.optional_band_multipliers)
    ]


def select_optional_contribution_band(
    income: Decimal | int | str, policy: PayrollPolicy = CURRENT_POLICY
) -> ContributionBand | None:
    """Smallest band whose base covers the income, capped at the top band.

    Returns None for zero or negative income.
    """
    amount = to_decimal(income)
    if amount <= 0:
        return None

    bands = optional_contribution_bands(policy)
    for band in bands:
        if band.base >= amount:
            return band
    return bands[-1]


def select_optional_insurance_band(
    income: Decimal | int | str, policy: PayrollPolicy = CURRENT_POLICY
) -> Decimal:
    """Contribution base for a voluntary INSS registrant declaring ``income``."""
    band = select_optional_contribution_band(income, policy)
    if band is None:
        return Decimal("0")
    return band.base
