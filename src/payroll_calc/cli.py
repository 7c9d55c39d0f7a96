"""Payroll Command Line Interface.

Provides:
- Payroll table for a roster file
- Spreadsheet export
- Single-employee payslip

Usage:
    python -m payroll_calc.cli calculate --roster roster.json --scope "All Companies"
    python -m payroll_calc.cli export --roster roster.json --period "October 2026"
    python -m payroll_calc.cli payslip --roster roster.json --employee-id 7
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable

from payroll_calc.calculators.engine import PayrollCalculator
from payroll_calc.calculators.types import Employee
from payroll_calc.config import ALL_COMPANIES, get_settings
from payroll_calc.logging_config import configure_logging
from payroll_calc.reports.excel_exporter import SpreadsheetExporter
from payroll_calc.reports.renderer import ReportRenderer
from payroll_calc.services.pay_run_service import EmptyScopeError, PayrollOrchestrator
from payroll_calc.services.roster_service import RosterFormatError, employee_from_record


def default_period() -> str:
    """Current month, e.g. 'October 2026'."""
    return date.today().strftime("%B %Y")


def load_roster(path: Path) -> list[Employee]:
    """Read a JSON list of roster records."""
    with path.open(encoding="utf-8") as fh:
        records = json.load(fh, parse_float=Decimal)
    if not isinstance(records, list):
        raise RosterFormatError("roster", "expected a JSON list of employee records")
    return [employee_from_record(record) for record in records]


class PayrollCli:
    """Payroll Command Line Interface."""

    def __init__(self) -> None:
        self.settings = get_settings()
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m payroll_calc.cli",
            description="Payroll calculation and export tools",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        def add_roster_args(sub: argparse.ArgumentParser) -> None:
            sub.add_argument(
                "--roster",
                type=Path,
                required=True,
                help="JSON file with the employee roster",
            )
            sub.add_argument(
                "--period",
                type=str,
                default=default_period(),
                help="Pay period label (default: current month)",
            )

        # calculate command
        calculate = subparsers.add_parser(
            "calculate",
            help="Print the payroll table for a scope",
        )
        add_roster_args(calculate)
        calculate.add_argument(
            "--scope",
            type=str,
            default=ALL_COMPANIES,
            help=f"Company to calculate (default: {ALL_COMPANIES})",
        )
        calculate.add_argument(
            "--print",
            dest="with_signature",
            action="store_true",
            help="Add the signature column used on printed sheets",
        )

        # export command
        export = subparsers.add_parser(
            "export",
            help="Write the payroll workbook for a scope",
        )
        add_roster_args(export)
        export.add_argument(
            "--scope",
            type=str,
            default=ALL_COMPANIES,
            help=f"Company to export (default: {ALL_COMPANIES})",
        )
        export.add_argument(
            "--business-name",
            type=str,
            default=self.settings.business_name,
            help="Business name shown under the title",
        )
        export.add_argument(
            "--output-dir",
            type=Path,
            default=Path(self.settings.export_dir),
            help="Directory to write the workbook to",
        )

        # payslip command
        payslip = subparsers.add_parser(
            "payslip",
            help="Print one employee's payslip",
        )
        add_roster_args(payslip)
        payslip.add_argument(
            "--employee-id",
            type=str,
            required=True,
            help="Roster id of the employee",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        configure_logging(self.settings.log_level)

        # Dispatch to command handler
        handlers: dict[str, Callable[..., int]] = {
            "calculate": self._cmd_calculate,
            "export": self._cmd_export,
            "payslip": self._cmd_payslip,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1

        try:
            return handler(parsed)
        except (EmptyScopeError, RosterFormatError, json.JSONDecodeError, OSError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

    def _cmd_calculate(self, args: argparse.Namespace) -> int:
        """Print the payroll table."""
        run = PayrollOrchestrator().run(load_roster(args.roster), args.scope)
        table = ReportRenderer(self.settings.currency_code).render(
            run.results, run.totals, run.scope, args.period
        )
        print(table.to_text(with_signature=args.with_signature))
        return 0

    def _cmd_export(self, args: argparse.Namespace) -> int:
        """Write the payroll workbook."""
        run = PayrollOrchestrator().run(load_roster(args.roster), args.scope)
        exporter = SpreadsheetExporter(currency_code=self.settings.currency_code)
        workbook = exporter.export(
            run.results, run.totals, run.scope, args.period, args.business_name
        )
        path = exporter.save(workbook, args.output_dir, run.scope)
        print(path)
        return 0

    def _cmd_payslip(self, args: argparse.Namespace) -> int:
        """Print one payslip."""
        roster = load_roster(args.roster)
        employee = next((e for e in roster if str(e.id) == args.employee_id), None)
        if employee is None:
            print(f"Employee not found: {args.employee_id}", file=sys.stderr)
            return 1

        result = PayrollCalculator().calculate(employee)
        slip = ReportRenderer(self.settings.currency_code).render_payslip(
            result, args.period, self.settings.business_address
        )
        print(slip.to_text())
        return 0


def main() -> int:
    """CLI entry point."""
    cli = PayrollCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
