"""Pay run orchestration: scope filtering, calculation and totals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from payroll_calc.calculators.engine import PayrollCalculator
from payroll_calc.calculators.types import Employee, PayrollResult, ReportTotals
from payroll_calc.config import ALL_COMPANIES

logger = logging.getLogger(__name__)


class EmptyScopeError(Exception):
    """Raised when no employee in the scope has a gross salary."""

    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(
            f"Please add at least one employee with a gross salary for {scope}."
        )


@dataclass(frozen=True)
class PayRunResult:
    """Result of one payroll run over a scope."""

    scope: str
    results: tuple[PayrollResult, ...]
    totals: ReportTotals

    def __len__(self) -> int:
        return len(self.results)


class PayrollOrchestrator:
    """Runs the calculator over a roster snapshot restricted to a scope.

    Each call is independent: nothing from a previous run is kept, and the
    roster is only read, never modified.
    """

    def __init__(self, calculator: PayrollCalculator | None = None):
        self.calculator = calculator or PayrollCalculator()

    @staticmethod
    def in_scope(employee: Employee, scope: str) -> bool:
        return scope == ALL_COMPANIES or employee.company == scope

    def eligible_employees(
        self, roster: Sequence[Employee], scope: str
    ) -> list[Employee]:
        """Employees in scope with a positive gross salary, roster order kept."""
        scoped = [emp for emp in roster if self.in_scope(emp, scope)]
        eligible = [emp for emp in scoped if emp.gross_salary > 0]

        skipped = len(scoped) - len(eligible)
        if skipped:
            logger.debug(
                "Skipping %d employee(s) without gross salary in %s", skipped, scope
            )
        return eligible

    def run(self, roster: Sequence[Employee], scope: str = ALL_COMPANIES) -> PayRunResult:
        """Calculate payroll for every eligible employee in scope.

        Raises:
            EmptyScopeError: no employee in scope has a positive gross salary.
        """
        employees = self.eligible_employees(roster, scope)
        if not employees:
            logger.info("No payable employees for %s", scope)
            raise EmptyScopeError(scope)

        results = tuple(self.calculator.calculate(emp) for emp in employees)
        totals = ReportTotals.from_results(results)

        logger.info(
            "Calculated payroll for %s: %d of %d roster employee(s)",
            scope,
            len(results),
            len(roster),
        )
        return PayRunResult(scope=scope, results=results, totals=totals)
