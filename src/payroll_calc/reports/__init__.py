"""Payroll table, payslip and spreadsheet rendering."""

from payroll_calc.reports.excel_exporter import SpreadsheetExporter, export_filename
from payroll_calc.reports.formatting import REPORT_COLUMNS, format_currency
from payroll_calc.reports.formulas import RowFormulas
from payroll_calc.reports.renderer import Payslip, RenderedTable, ReportRenderer

__all__ = [
    "SpreadsheetExporter",
    "export_filename",
    "REPORT_COLUMNS",
    "format_currency",
    "RowFormulas",
    "Payslip",
    "RenderedTable",
    "ReportRenderer",
]
