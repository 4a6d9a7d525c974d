"""Pytest fixtures for TL payroll engine tests."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable

import pytest

from tl_payroll_engine.calculators.engine import PayrollEngine
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY, PayrollPolicy
from tl_payroll_engine.calculators.types import PayrollInput


@pytest.fixture
def policy() -> PayrollPolicy:
    """The current TL rate tables."""
    return CURRENT_POLICY


@pytest.fixture
def engine(policy: PayrollPolicy) -> PayrollEngine:
    """Engine bound to the current rate tables."""
    return PayrollEngine(policy)


@pytest.fixture
def make_input() -> Callable[..., PayrollInput]:
    """Factory for a resident, salaried, monthly-paid employee earning $800."""

    def _make(**overrides: Any) -> PayrollInput:
        values: dict[str, Any] = {
            "employee_id": "EMP-001",
            "monthly_salary": Decimal("800"),
        }
        values.update(overrides)
        return PayrollInput(**values)

    return _make
