"""Spreadsheet export of a payroll run.

Derived cells are written as live formulas (see formulas.RowFormulas) so
the workbook re-derives every figure on recalculation. The totals row is a
SUM over the data rows for the same reason.
"""

from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from payroll_calc.calculators.rules import STATUTORY_RULES, StatutoryRules
from payroll_calc.calculators.types import PayrollResult, ReportTotals
from payroll_calc.reports.formatting import (
    DEFAULT_CURRENCY,
    MONEY_COLUMNS,
    REPORT_COLUMNS,
    REPORT_TITLE,
    TOTALS_LABEL,
    format_currency,
)
from payroll_calc.reports.formulas import RowFormulas

logger = logging.getLogger(__name__)

SHEET_TITLE = "Payroll Results"
FILE_PREFIX = "PayrollReport"
FILE_EXTENSION = "xlsx"
_WHITESPACE = re.compile(r"\s+")

TITLE_ROW = 1
BUSINESS_ROW = 2
SCOPE_ROW = 3
HEADER_ROW = 4
FIRST_DATA_ROW = 5

# Signature blocks sit side by side: payer in column A, approver here
APPROVER_COLUMN = 8
SIGNATURE_LINE = "_" * 20
SIGNATURE_FIELDS = ("Name:", "Signature:", "Date:")

# Shaded as deductions in data rows
DEDUCTION_FIELDS = ("pension11", "pension7", "pension18", "income_tax", "total_deduction")

_THIN_BLACK = Side(style="thin", color="FF000000")
_THIN_GREY = Side(style="thin", color="FFDFE3E8")

TITLE_FONT = Font(name="Arial", size=16, bold=True)
BUSINESS_FONT = Font(name="Arial", size=12, bold=True)
SCOPE_FONT = Font(name="Arial", size=11)
HEADER_FONT = Font(name="Arial", size=11, bold=True, color="FFFFFFFF")
HEADER_FILL = PatternFill(fill_type="solid", start_color="FF4A90E2", end_color="FF4A90E2")
HEADER_BORDER = Border(left=_THIN_BLACK, right=_THIN_BLACK, top=_THIN_BLACK, bottom=_THIN_BLACK)
CELL_FONT = Font(name="Arial", size=10)
CELL_BOLD_FONT = Font(name="Arial", size=10, bold=True)
CELL_BORDER = Border(left=_THIN_GREY, right=_THIN_GREY, top=_THIN_GREY, bottom=_THIN_GREY)
DEDUCTION_FILL = PatternFill(fill_type="solid", start_color="FFFFEBEE", end_color="FFFFEBEE")
NET_PAY_FILL = PatternFill(fill_type="solid", start_color="FFE6F6E6", end_color="FFE6F6E6")
TOTAL_FONT = Font(name="Arial", size=11, bold=True)
TOTAL_BORDER = Border(top=Side(style="medium", color="FF000000"))
SIGNATURE_FONT = Font(name="Arial", size=10, bold=True)
CENTER = Alignment(horizontal="center", vertical="center")


def export_filename(scope: str) -> str:
    """``PayrollReport_<scope>.xlsx`` with whitespace runs replaced by ``_``."""
    return f"{FILE_PREFIX}_{_WHITESPACE.sub('_', scope)}.{FILE_EXTENSION}"


def currency_number_format(currency_code: str) -> str:
    return f'"{currency_code}" #,##0.00'


class SpreadsheetExporter:
    """Builds the payroll workbook."""

    def __init__(
        self,
        rules: StatutoryRules = STATUTORY_RULES,
        currency_code: str = DEFAULT_CURRENCY,
    ):
        self.formulas = RowFormulas(rules)
        self.currency_code = currency_code
        self.number_format = currency_number_format(currency_code)

    def export(
        self,
        results: Sequence[PayrollResult],
        totals: ReportTotals,
        scope: str,
        period: str,
        business_name: str,
    ) -> Workbook | None:
        """Build the workbook, or return None when there is nothing to export."""
        if not results:
            return None

        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE
        last_column = get_column_letter(len(REPORT_COLUMNS))

        self._write_header_block(ws, last_column, scope, period, business_name)

        for offset, result in enumerate(results):
            self._write_data_row(ws, FIRST_DATA_ROW + offset, result)

        last_data_row = FIRST_DATA_ROW + len(results) - 1
        totals_row = last_data_row + 1
        self._write_totals_row(ws, totals_row, last_data_row)
        self._write_signature_blocks(ws, totals_row + 2)
        self._size_columns(ws, results, totals)

        return wb

    def _write_header_block(self, ws, last_column: str, scope: str, period: str, business_name: str) -> None:
        ws.merge_cells(f"A{TITLE_ROW}:{last_column}{TITLE_ROW}")
        title = ws.cell(row=TITLE_ROW, column=1, value=REPORT_TITLE)
        title.font = TITLE_FONT
        title.alignment = CENTER

        ws.merge_cells(f"A{BUSINESS_ROW}:{last_column}{BUSINESS_ROW}")
        business = ws.cell(row=BUSINESS_ROW, column=1, value=business_name)
        business.font = BUSINESS_FONT
        business.alignment = CENTER

        scope_cell = ws.cell(row=SCOPE_ROW, column=1, value=f"For: {scope}")
        scope_cell.font = SCOPE_FONT
        date_cell = ws.cell(row=SCOPE_ROW, column=len(REPORT_COLUMNS), value=f"Date: {period}")
        date_cell.font = SCOPE_FONT
        date_cell.alignment = Alignment(horizontal="right")

        for index, column in enumerate(REPORT_COLUMNS, start=1):
            cell = ws.cell(row=HEADER_ROW, column=index, value=column.header)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.border = HEADER_BORDER
            cell.alignment = CENTER

    def _row_values(self, row: int, result: PayrollResult) -> dict[str, object]:
        f = self.formulas
        eligible = result.has_pension
        return {
            "name": result.name,
            "gross_salary": result.gross_salary,
            "pension11": f.pension11(row, eligible),
            "transport_allowance": result.transport_allowance,
            "phone_allowance": result.phone_allowance,
            "house_rent_allowance": result.house_rent_allowance,
            "taxable": f.taxable(row),
            "total_gross_pay": f.total_gross_pay(row),
            "pension7": f.pension7(row, eligible),
            "pension18": f.pension18(row, eligible),
            "income_tax": f.income_tax(row),
            "total_deduction": f.total_deduction(row),
            "net_pay": f.net_pay(row),
        }

    def _write_data_row(self, ws, row: int, result: PayrollResult) -> None:
        values = self._row_values(row, result)
        for index, column in enumerate(REPORT_COLUMNS, start=1):
            cell = ws.cell(row=row, column=index, value=values[column.field])
            cell.border = CELL_BORDER
            cell.font = CELL_FONT
            if column.field == "name":
                continue

            cell.number_format = self.number_format
            if column.field in DEDUCTION_FIELDS:
                cell.fill = DEDUCTION_FILL
            elif column.field == "total_gross_pay":
                cell.font = CELL_BOLD_FONT
            elif column.field == "net_pay":
                cell.font = CELL_BOLD_FONT
                cell.fill = NET_PAY_FILL

    def _write_totals_row(self, ws, row: int, last_data_row: int) -> None:
        label = ws.cell(row=row, column=1, value=TOTALS_LABEL)
        label.font = TOTAL_FONT
        label.border = TOTAL_BORDER

        for index, column in enumerate(MONEY_COLUMNS, start=2):
            formula = self.formulas.column_sum(column.field, FIRST_DATA_ROW, last_data_row)
            cell = ws.cell(row=row, column=index, value=formula)
            cell.font = TOTAL_FONT
            cell.border = TOTAL_BORDER
            cell.number_format = self.number_format

    def _write_signature_blocks(self, ws, start_row: int) -> None:
        blocks = ((1, "Prepared By (Payer)"), (APPROVER_COLUMN, "Approved By"))
        for column, heading in blocks:
            ws.cell(row=start_row, column=column, value=heading).font = SIGNATURE_FONT
            for offset, label in enumerate(SIGNATURE_FIELDS, start=1):
                cell = ws.cell(row=start_row + offset, column=column, value=f"{label} {SIGNATURE_LINE}")
                cell.font = CELL_FONT

    def _size_columns(self, ws, results: Sequence[PayrollResult], totals: ReportTotals) -> None:
        """Fit each column to its longest formatted value, header included."""
        for index, column in enumerate(REPORT_COLUMNS, start=1):
            texts = [column.header]
            if column.field == "name":
                texts += [result.name for result in results]
                texts.append(TOTALS_LABEL)
            else:
                texts += [
                    format_currency(getattr(result, column.field), self.currency_code)
                    for result in results
                ]
                texts.append(format_currency(getattr(totals, column.field), self.currency_code))
            ws.column_dimensions[get_column_letter(index)].width = max(len(t) for t in texts) + 2

    @staticmethod
    def to_bytes(workbook: Workbook) -> bytes:
        buff = BytesIO()
        workbook.save(buff)
        return buff.getvalue()

    def save(self, workbook: Workbook, directory: str | Path, scope: str) -> Path:
        """Write the workbook under its scope-derived file name."""
        path = Path(directory) / export_filename(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(path)
        logger.info("Wrote payroll workbook %s", path)
        return path
