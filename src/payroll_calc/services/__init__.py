"""Payroll services."""

from payroll_calc.services.pay_run_service import (
    EmptyScopeError,
    PayrollOrchestrator,
    PayRunResult,
)
from payroll_calc.services.roster_service import (
    RosterFormatError,
    RosterRepository,
    employee_from_record,
)

__all__ = [
    "EmptyScopeError",
    "PayrollOrchestrator",
    "PayRunResult",
    "RosterFormatError",
    "RosterRepository",
    "employee_from_record",
]
