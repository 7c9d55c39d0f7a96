"""Shared currency formatting and report column layout."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
DEFAULT_CURRENCY = "ETB"


def format_currency(amount: Decimal, currency_code: str = DEFAULT_CURRENCY) -> str:
    """Format an amount as ``ETB 1,234.50``.

    Every on-screen, print and payslip value goes through here so the
    views agree to the cent. Negative amounts render as ``-ETB 12.00``.
    """
    rounded = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{currency_code} {abs(rounded):,.2f}"


@dataclass(frozen=True)
class ReportColumn:
    """One column of the payroll table."""

    header: str
    field: str  # PayrollResult attribute


EMPLOYEE_COLUMN = ReportColumn("Employee", "name")

# Fixed column order shared by the table renderer and the spreadsheet
MONEY_COLUMNS: tuple[ReportColumn, ...] = (
    ReportColumn("Gross Salary", "gross_salary"),
    ReportColumn("Pension (11%)", "pension11"),
    ReportColumn("Transport", "transport_allowance"),
    ReportColumn("Phone", "phone_allowance"),
    ReportColumn("House Rent", "house_rent_allowance"),
    ReportColumn("Taxable", "taxable"),
    ReportColumn("Total Gross", "total_gross_pay"),
    ReportColumn("Pension (7%)", "pension7"),
    ReportColumn("Pension (18%)", "pension18"),
    ReportColumn("Income Tax", "income_tax"),
    ReportColumn("Total Deduction", "total_deduction"),
    ReportColumn("Net Pay", "net_pay"),
)

REPORT_COLUMNS: tuple[ReportColumn, ...] = (EMPLOYEE_COLUMN, *MONEY_COLUMNS)

TOTALS_LABEL = "TOTALS"
REPORT_TITLE = "Payroll Report"
