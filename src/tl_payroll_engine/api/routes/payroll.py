"""Payroll calculation API endpoints.

The HTTP layer is stateless: every request carries the full input and
nothing is stored between calls.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, status

from tl_payroll_engine.api.dependencies import Engine, Policy
from tl_payroll_engine.api.schemas import (
    ErrorResponse,
    OptionalBandResponse,
    PayDateResponse,
    PayrollBatchRequest,
    PayrollBatchResponse,
    PayrollInputRequest,
    PayrollResultResponse,
    PolicyResponse,
    PublicHolidayResponse,
    SubsidioAnualRequest,
    SubsidioAnualResponse,
    ValidationErrorResponse,
    ValidationResponse,
)
from tl_payroll_engine.calculators.holidays import next_business_day, public_holidays
from tl_payroll_engine.calculators.rate_tables import select_optional_contribution_band
from tl_payroll_engine.calculators.subsidio_anual import compute_subsidio_anual
from tl_payroll_engine.calculators.validator import validate_detailed

router = APIRouter(prefix="/payroll", tags=["payroll"])

# Routes that resolve the configured policy 404 when it does not exist
POLICY_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "/calculate",
    response_model=PayrollResultResponse,
    responses={**POLICY_NOT_FOUND, 422: {"model": ValidationErrorResponse}},
)
async def calculate_payroll(
    engine: Engine,
    payload: PayrollInputRequest,
) -> PayrollResultResponse:
    """Validate, then compute one employee's pay for the period."""
    payroll_input = payload.to_domain()

    blocking = [
        issue.message
        for issue in validate_detailed(payroll_input, engine.policy)
        if issue.is_blocking
    ]
    if blocking:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"code": "VALIDATION_FAILED", "messages": blocking},
        )

    return PayrollResultResponse.from_result(engine.calculate(payroll_input))


@router.post("/validate", response_model=ValidationResponse, responses=POLICY_NOT_FOUND)
async def validate_payroll(
    policy: Policy,
    payload: PayrollInputRequest,
) -> ValidationResponse:
    """Run the validator without computing anything."""
    return ValidationResponse.from_issues(validate_detailed(payload.to_domain(), policy))


@router.post("/batch", response_model=PayrollBatchResponse, responses=POLICY_NOT_FOUND)
async def calculate_batch(
    engine: Engine,
    payload: PayrollBatchRequest,
) -> PayrollBatchResponse:
    """Compute many employees; invalid ones are reported, not computed."""
    batch = engine.calculate_batch(
        (employee.to_domain() for employee in payload.employees),
        skip_invalid=True,
    )
    return PayrollBatchResponse.from_batch(batch)


@router.post("/subsidio-anual", response_model=SubsidioAnualResponse)
async def subsidio_anual(payload: SubsidioAnualRequest) -> SubsidioAnualResponse:
    """Pro-rated 13th-month salary."""
    amount = compute_subsidio_anual(
        payload.monthly_salary,
        payload.months_worked,
        payload.hire_date,
        as_of_date=payload.as_of_date,
    )
    return SubsidioAnualResponse(
        monthly_salary=payload.monthly_salary,
        months_worked=payload.months_worked,
        subsidio_anual=amount,
    )


@router.get(
    "/inss/optional-band", response_model=OptionalBandResponse, responses=POLICY_NOT_FOUND
)
async def optional_insurance_band(
    policy: Policy,
    income: Annotated[Decimal, Query()],
) -> OptionalBandResponse:
    """Contribution band for a voluntary INSS registrant."""
    band = select_optional_contribution_band(income, policy)
    return OptionalBandResponse.from_band(income, band)


@router.get("/policy", response_model=PolicyResponse, responses=POLICY_NOT_FOUND)
async def current_policy(policy: Policy) -> PolicyResponse:
    """Rate tables this deployment computes with."""
    return PolicyResponse.from_policy(policy)


@router.get("/holidays/{year}", response_model=list[PublicHolidayResponse])
async def holidays(year: Annotated[int, Path(ge=1, le=9999)]) -> list[PublicHolidayResponse]:
    """TL public holidays for a year."""
    return [PublicHolidayResponse.model_validate(h) for h in public_holidays(year)]


@router.get("/pay-date", response_model=PayDateResponse)
async def pay_date(
    requested: Annotated[date, Query(alias="date")],
    additional: Annotated[list[date], Query(alias="holiday")] = [],
    removed: Annotated[list[date], Query(alias="not_holiday")] = [],
) -> PayDateResponse:
    """Move a pay date forward to the next TL business day."""
    adjusted = next_business_day(requested, additional, removed)
    return PayDateResponse(requested=requested, pay_date=adjusted, adjusted=adjusted != requested)
