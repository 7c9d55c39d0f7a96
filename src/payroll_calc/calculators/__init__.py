"""Payroll calculation engine."""

from payroll_calc.calculators.engine import PayrollCalculator
from payroll_calc.calculators.pension import pension
from payroll_calc.calculators.rules import STATUTORY_RULES, StatutoryRules, TaxBracket
from payroll_calc.calculators.tax_calculator import TaxCalculator, income_tax
from payroll_calc.calculators.types import (
    Employee,
    PayrollResult,
    PensionShares,
    ReportTotals,
)

__all__ = [
    "PayrollCalculator",
    "TaxCalculator",
    "income_tax",
    "pension",
    "STATUTORY_RULES",
    "StatutoryRules",
    "TaxBracket",
    "Employee",
    "PayrollResult",
    "PensionShares",
    "ReportTotals",
]
