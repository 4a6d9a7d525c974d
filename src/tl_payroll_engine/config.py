"""Configuration management for the TL payroll engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from dotenv import load_dotenv

from tl_payroll_engine.calculators.rate_tables import PayrollPolicy, get_policy


def _parse_cap_fraction(raw: str | None) -> Decimal | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        fraction = Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"PAYROLL_DEDUCTION_CAP_FRACTION is not a number: {raw!r}") from None
    if not fraction.is_finite() or fraction < 0 or fraction > 1:
        raise ValueError("PAYROLL_DEDUCTION_CAP_FRACTION must be between 0 and 1")
    return fraction


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    engine_version: str
    host: str
    port: int
    debug: bool
    log_level: str
    policy_version: str | None = None
    deduction_cap_fraction: Decimal | None = None

    @property
    def HOST(self) -> str:
        """Alias for host."""
        return self.host

    @property
    def PORT(self) -> int:
        """Alias for port."""
        return self.port

    @property
    def DEBUG(self) -> bool:
        """Alias for debug."""
        return self.debug

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            engine_version=os.getenv("ENGINE_VERSION", "1.0.0"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            policy_version=os.getenv("PAYROLL_POLICY_VERSION") or None,
            deduction_cap_fraction=_parse_cap_fraction(
                os.getenv("PAYROLL_DEDUCTION_CAP_FRACTION")
            ),
        )

    def resolve_policy(self) -> PayrollPolicy:
        """Rate tables with this deployment's overrides applied.

        Raises PolicyNotFoundError for an unknown policy version.
        """
        policy = get_policy(version=self.policy_version)
        if self.deduction_cap_fraction is not None:
            policy = policy.with_deduction_cap(self.deduction_cap_fraction)
        return policy


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()


settings = get_settings()
