"""Payroll calculator: statutory payroll, reports and spreadsheet export."""

from payroll_calc.calculators import (
    Employee,
    PayrollCalculator,
    PayrollResult,
    ReportTotals,
    income_tax,
    pension,
)
from payroll_calc.config import ALL_COMPANIES
from payroll_calc.reports import ReportRenderer, SpreadsheetExporter, export_filename
from payroll_calc.services import EmptyScopeError, PayrollOrchestrator, PayRunResult

__version__ = "0.1.0"

__all__ = [
    "ALL_COMPANIES",
    "Employee",
    "EmptyScopeError",
    "PayRunResult",
    "PayrollCalculator",
    "PayrollOrchestrator",
    "PayrollResult",
    "ReportRenderer",
    "ReportTotals",
    "SpreadsheetExporter",
    "export_filename",
    "income_tax",
    "pension",
]
