"""TL payroll command line interface.

Provides:
- Payroll calculation for one employee or a batch (JSON file)
- Input validation
- Subsidio Anual (13th-month) calculation
- Optional-registration INSS band lookup
- Pay-date adjustment past weekends and TL public holidays

Usage:
    tl-payroll calculate --input employee.json
    tl-payroll calculate --input employees.json --skip-invalid
    tl-payroll validate --input employee.json
    tl-payroll subsidio --salary 800 --months 6 --hire-date 2024-07-01
    tl-payroll band --income 121
    tl-payroll paydate --date 2024-12-31 --holiday 2024-06-14
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable

from pydantic import TypeAdapter, ValidationError

from tl_payroll_engine.api.schemas import (
    OptionalBandResponse,
    PayDateResponse,
    PayrollBatchResponse,
    PayrollInputRequest,
    PayrollResultResponse,
    ValidationResponse,
)
from tl_payroll_engine.calculators.engine import PayrollEngine
from tl_payroll_engine.calculators.holidays import next_business_day
from tl_payroll_engine.calculators.rate_tables import (
    CURRENT_POLICY,
    PolicyNotFoundError,
    select_optional_contribution_band,
)
from tl_payroll_engine.calculators.subsidio_anual import compute_subsidio_anual
from tl_payroll_engine.calculators.validator import has_blocking_errors, validate_detailed
from tl_payroll_engine.config import get_settings

_INPUT_LIST = TypeAdapter(list[PayrollInputRequest])


def parse_decimal(s: str) -> Decimal:
    """Parse a decimal amount."""
    try:
        return Decimal(s)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {s!r}") from None


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    try:
        return date.fromisoformat(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {s!r}") from None


class PayrollCli:
    """TL payroll command line interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()
        self.policy = CURRENT_POLICY

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="tl-payroll",
            description="Timor-Leste payroll calculations",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # calculate command
        calculate = subparsers.add_parser(
            "calculate",
            help="Compute pay for one employee or a list of employees",
        )
        calculate.add_argument(
            "--input",
            type=Path,
            required=True,
            help="JSON file with one payroll input object or a list of them",
        )
        calculate.add_argument(
            "--skip-invalid",
            action="store_true",
            help="In batch mode, skip and report employees with blocking validation errors",
        )

        # validate command
        validate = subparsers.add_parser(
            "validate",
            help="Validate one payroll input without computing",
        )
        validate.add_argument(
            "--input",
            type=Path,
            required=True,
            help="JSON file with one payroll input object",
        )

        # subsidio command
        subsidio = subparsers.add_parser(
            "subsidio",
            help="Compute the pro-rated Subsidio Anual",
        )
        subsidio.add_argument("--salary", type=parse_decimal, required=True)
        subsidio.add_argument("--months", type=int, required=True)
        subsidio.add_argument("--hire-date", type=parse_date, required=True)
        subsidio.add_argument(
            "--as-of",
            type=parse_date,
            help="Reference date (defaults to today)",
        )

        # band command
        band = subparsers.add_parser(
            "band",
            help="Look up the optional-registration INSS band for an income",
        )
        band.add_argument("--income", type=parse_decimal, required=True)

        # paydate command
        paydate = subparsers.add_parser(
            "paydate",
            help="Move a pay date forward to the next TL business day",
        )
        paydate.add_argument("--date", type=parse_date, required=True)
        paydate.add_argument(
            "--holiday",
            type=parse_date,
            action="append",
            default=[],
            help="Extra holiday, e.g. Eid (repeatable)",
        )
        paydate.add_argument(
            "--not-holiday",
            type=parse_date,
            action="append",
            default=[],
            help="Calendar holiday to treat as a working day (repeatable)",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        settings = get_settings()
        logging.basicConfig(level=settings.log_level, stream=sys.stderr)

        # Dispatch to command handler
        handlers: dict[str, Callable[..., int]] = {
            "calculate": self._cmd_calculate,
            "validate": self._cmd_validate,
            "subsidio": self._cmd_subsidio,
            "band": self._cmd_band,
            "paydate": self._cmd_paydate,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1

        try:
            self.policy = settings.resolve_policy()
            return handler(parsed)
        except PolicyNotFoundError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            print(f"ERROR: could not read input: {e}", file=sys.stderr)
            return 1

    def _emit(self, payload: Any) -> None:
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    def _read_json(self, path: Path) -> Any:
        with path.open(encoding="utf-8") as f:
            return json.load(f)

    def _cmd_calculate(self, args: argparse.Namespace) -> int:
        """Compute pay for one employee or a batch."""
        raw = self._read_json(args.input)
        engine = PayrollEngine(self.policy)

        if isinstance(raw, list):
            requests = _INPUT_LIST.validate_python(raw)
            batch = engine.calculate_batch(
                (r.to_domain() for r in requests), skip_invalid=args.skip_invalid
            )
            self._emit(PayrollBatchResponse.from_batch(batch).model_dump(mode="json"))
            return 1 if batch.errors else 0

        payroll_input = PayrollInputRequest.model_validate(raw).to_domain()
        issues = validate_detailed(payroll_input, self.policy)
        if has_blocking_errors(issues):
            self._emit(ValidationResponse.from_issues(issues).model_dump(mode="json"))
            return 2

        result = engine.calculate(payroll_input)
        self._emit(PayrollResultResponse.from_result(result).model_dump(mode="json"))
        return 0

    def _cmd_validate(self, args: argparse.Namespace) -> int:
        """Validate one payroll input."""
        payroll_input = PayrollInputRequest.model_validate(self._read_json(args.input)).to_domain()
        issues = validate_detailed(payroll_input, self.policy)
        self._emit(ValidationResponse.from_issues(issues).model_dump(mode="json"))
        return 2 if has_blocking_errors(issues) else 0

    def _cmd_subsidio(self, args: argparse.Namespace) -> int:
        """Compute the Subsidio Anual."""
        amount = compute_subsidio_anual(
            args.salary, args.months, args.hire_date, as_of_date=args.as_of
        )
        self._emit(
            {
                "monthly_salary": str(args.salary),
                "months_worked": args.months,
                "subsidio_anual": str(amount),
            }
        )
        return 0

    def _cmd_band(self, args: argparse.Namespace) -> int:
        """Look up the optional INSS band."""
        band = select_optional_contribution_band(args.income, self.policy)
        self._emit(OptionalBandResponse.from_band(args.income, band).model_dump(mode="json"))
        return 0

    def _cmd_paydate(self, args: argparse.Namespace) -> int:
        """Adjust a pay date to a business day."""
        pay_date = next_business_day(args.date, args.holiday, args.not_holiday)
        response = PayDateResponse(
            requested=args.date, pay_date=pay_date, adjusted=pay_date != args.date
        )
        self._emit(response.model_dump(mode="json"))
        return 0


def main() -> int:
    """CLI entry point."""
    cli = PayrollCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
