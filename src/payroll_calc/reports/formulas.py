"""Spreadsheet formulas mirroring the payroll calculator.

The exported workbook recomputes every derived column inside the
spreadsheet application. The formulas are built from the same
StatutoryRules object the calculators use, never from their own copy of
the rates.
"""

from __future__ import annotations

from decimal import Decimal

from openpyxl.utils import get_column_letter

from payroll_calc.calculators.rules import STATUTORY_RULES, StatutoryRules
from payroll_calc.reports.formatting import REPORT_COLUMNS


def column_letter(field_name: str) -> str:
    """Spreadsheet column letter of a report field."""
    for index, column in enumerate(REPORT_COLUMNS, start=1):
        if column.field == field_name:
            return get_column_letter(index)
    raise KeyError(field_name)


def number_literal(value: Decimal) -> str:
    """Plain decimal text for a formula, e.g. 0.2 or 2000."""
    return format(value.normalize(), "f")


class RowFormulas:
    """Builds the formulas of one data row.

    Raw inputs (gross salary and allowances) are written as numbers; every
    derived column references them by cell.
    """

    def __init__(self, rules: StatutoryRules = STATUTORY_RULES):
        self.rules = rules

    def cell(self, field_name: str, row: int) -> str:
        return f"{column_letter(field_name)}{row}"

    def _pension(self, rate: Decimal, row: int, eligible: bool) -> str | int:
        # Eligibility is a snapshot taken at export time
        if not eligible:
            return 0
        return f"={self.cell('gross_salary', row)}*{number_literal(rate)}"

    def pension11(self, row: int, eligible: bool) -> str | int:
        return self._pension(self.rules.pension.employee, row, eligible)

    def pension7(self, row: int, eligible: bool) -> str | int:
        return self._pension(self.rules.pension.employer, row, eligible)

    def pension18(self, row: int, eligible: bool) -> str | int:
        return self._pension(self.rules.pension.post_tax, row, eligible)

    def taxable(self, row: int) -> str:
        terms = ("gross_salary", "phone_allowance", "house_rent_allowance")
        return "=" + "+".join(self.cell(name, row) for name in terms)

    def total_gross_pay(self, row: int) -> str:
        terms = (
            "gross_salary",
            "pension11",
            "transport_allowance",
            "phone_allowance",
            "house_rent_allowance",
        )
        return "=" + "+".join(self.cell(name, row) for name in terms)

    def income_tax(self, row: int) -> str:
        """Nested IF over the bracket table, lowest bracket first."""
        taxable = self.cell("taxable", row)

        def amount(bracket) -> str:
            if bracket.rate == 0:
                return "0"
            expr = f"{taxable}*{number_literal(bracket.rate)}"
            if bracket.subtract:
                expr += f"-{number_literal(bracket.subtract)}"
            return expr

        brackets = self.rules.brackets
        formula = amount(brackets[-1])
        for bracket in reversed(brackets[:-1]):
            bound = number_literal(bracket.upper_bound)
            formula = f"IF({taxable}<={bound},{amount(bracket)},{formula})"
        return "=" + formula

    def total_deduction(self, row: int) -> str:
        return f"={self.cell('pension18', row)}+{self.cell('income_tax', row)}"

    def net_pay(self, row: int) -> str:
        return f"={self.cell('total_gross_pay', row)}-{self.cell('total_deduction', row)}"

    def column_sum(self, field_name: str, first_row: int, last_row: int) -> str:
        letter = column_letter(field_name)
        return f"=SUM({letter}{first_row}:{letter}{last_row})"
