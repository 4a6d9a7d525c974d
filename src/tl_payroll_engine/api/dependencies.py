"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from tl_payroll_engine.calculators.engine import PayrollEngine
from tl_payroll_engine.calculators.rate_tables import PayrollPolicy
from tl_payroll_engine.config import get_settings


def get_payroll_policy() -> PayrollPolicy:
    """Rate tables for this deployment (version and cap overrides applied)."""
    return get_settings().resolve_policy()


def get_payroll_engine(
    policy: Annotated[PayrollPolicy, Depends(get_payroll_policy)],
) -> PayrollEngine:
    """A stateless engine bound to the deployment's policy."""
    return PayrollEngine(policy)


# Type aliases for cleaner dependency injection
Policy = Annotated[PayrollPolicy, Depends(get_payroll_policy)]
Engine = Annotated[PayrollEngine, Depends(get_payroll_engine)]
