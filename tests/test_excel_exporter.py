"""Tests for the spreadsheet export.

Formulas are recalculated with a small evaluator and compared with the
calculator's results to prove both implementations agree.
"""

from dataclasses import replace
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from conftest import make_employee
from payroll_calc.calculators.rules import STATUTORY_RULES, StatutoryRules, TaxBracket
from payroll_calc.calculators.types import ReportTotals
from payroll_calc.config import ALL_COMPANIES
from payroll_calc.reports.excel_exporter import (
    SHEET_TITLE,
    SpreadsheetExporter,
    export_filename,
)
from payroll_calc.reports.formatting import MONEY_COLUMNS
from payroll_calc.reports.formulas import RowFormulas, column_letter
from payroll_calc.services.pay_run_service import PayrollOrchestrator
from spreadsheet_eval import cents, evaluate_cell

PERIOD = "October 2026"
BUSINESS = "Hasset Schools"


@pytest.fixture
def run(roster):
    return PayrollOrchestrator().run(roster, ALL_COMPANIES)


@pytest.fixture
def sheet(run):
    wb = SpreadsheetExporter().export(run.results, run.totals, run.scope, PERIOD, BUSINESS)
    return wb[SHEET_TITLE]


class TestExportFilename:
    """Test the scope-derived file name."""

    @pytest.mark.parametrize(
        "scope, expected",
        [
            ("All Companies", "PayrollReport_All_Companies.xlsx"),
            ("Hasset No. 1", "PayrollReport_Hasset_No._1.xlsx"),
            ("Main  Campus\tEast", "PayrollReport_Main_Campus_East.xlsx"),
            ("Annex", "PayrollReport_Annex.xlsx"),
        ],
    )
    def test_whitespace_replaced(self, scope, expected):
        """Runs of whitespace become one underscore."""
        assert export_filename(scope) == expected


class TestLayout:
    """Test the static blocks of the sheet."""

    def test_nothing_to_export(self):
        """An empty result set produces no workbook."""
        assert SpreadsheetExporter().export([], ReportTotals(), "Annex", PERIOD, BUSINESS) is None

    def test_title_and_business_blocks(self, sheet):
        """Title and business name are merged across every column."""
        merged = {str(r) for r in sheet.merged_cells.ranges}

        assert sheet["A1"].value == "Payroll Report"
        assert sheet["A2"].value == BUSINESS
        assert {"A1:M1", "A2:M2"} <= merged
        assert sheet["A1"].font.bold

    def test_scope_and_date(self, sheet):
        """Scope and period header line."""
        assert sheet["A3"].value == "For: All Companies"
        assert sheet["M3"].value == f"Date: {PERIOD}"

    def test_header_row(self, sheet):
        """Header row in the fixed column order, styled."""
        headers = [sheet.cell(row=4, column=i).value for i in range(1, 14)]

        assert headers == ["Employee", *(col.header for col in MONEY_COLUMNS)]
        assert sheet["A4"].fill.start_color.rgb == "FF4A90E2"
        assert sheet["A4"].font.color.rgb == "FFFFFFFF"

    def test_rows_in_result_order(self, sheet):
        """Data rows start at row 5 and follow the result order."""
        assert [sheet[f"A{r}"].value for r in (5, 6, 7)] == [
            "Abebe Kebede",
            "Sara Tesfaye",
            "Hana Girma",
        ]
        assert sheet["A8"].value == "TOTALS"

    def test_signature_blocks(self, sheet):
        """Payer and approver blocks after a blank row."""
        assert sheet["A9"].value is None
        assert sheet["A10"].value == "Prepared By (Payer)"
        assert sheet["H10"].value == "Approved By"
        assert sheet["A11"].value.startswith("Name:")
        assert sheet["A12"].value.startswith("Signature:")
        assert sheet["H13"].value.startswith("Date:")

    def test_column_widths(self, sheet):
        """Columns fit the longest formatted value plus padding."""
        assert sheet.column_dimensions["A"].width == len("Abebe Kebede") + 2
        assert sheet.column_dimensions["B"].width == len("ETB 22,800.00") + 2
        assert sheet.column_dimensions["L"].width == len("Total Deduction") + 2


class TestFormulas:
    """Test the live formulas written to data and totals rows."""

    def test_raw_inputs_are_numbers(self, sheet):
        """Gross and allowances are literal values."""
        assert sheet["B5"].value == Decimal("5000")
        assert sheet["D5"].value == Decimal("300")
        assert sheet["E5"].value == Decimal("100")
        assert sheet["F5"].value == Decimal("500")

    def test_row_formulas(self, sheet):
        """Derived cells reference the row's own input cells."""
        assert sheet["C5"].value == "=B5*0.11"
        assert sheet["G5"].value == "=B5+E5+F5"
        assert sheet["H5"].value == "=B5+C5+D5+E5+F5"
        assert sheet["I5"].value == "=B5*0.07"
        assert sheet["J5"].value == "=B5*0.18"
        assert sheet["L5"].value == "=J5+K5"
        assert sheet["M5"].value == "=H5-L5"

    def test_income_tax_formula(self, sheet):
        """Nested IF mirrors the bracket table."""
        assert sheet["K6"].value == (
            "=IF(G6<=2000,0,IF(G6<=4000,G6*0.15-300,IF(G6<=7000,G6*0.2-500,"
            "IF(G6<=10000,G6*0.25-850,IF(G6<=14000,G6*0.3-1350,G6*0.35-2050)))))"
        )

    def test_ineligible_pension_is_literal_zero(self, sheet):
        """Eligibility is baked in: no pension formula for ineligible rows."""
        assert sheet["C7"].value == 0
        assert sheet["I7"].value == 0
        assert sheet["J7"].value == 0

    def test_totals_are_sum_formulas(self, sheet):
        """Totals row sums the data range for every money column."""
        for col in MONEY_COLUMNS:
            letter = column_letter(col.field)
            assert sheet[f"{letter}8"].value == f"=SUM({letter}5:{letter}7)"

    def test_formulas_reproduce_calculator(self, run, sheet):
        """Recalculating the sheet gives the calculator's values."""
        for offset, result in enumerate(run.results):
            row = 5 + offset
            for col in MONEY_COLUMNS:
                ref = f"{column_letter(col.field)}{row}"
                assert evaluate_cell(sheet, ref) == getattr(result, col.field), ref

    def test_totals_reproduce_orchestrator(self, run, sheet):
        """Recalculated totals equal the orchestrator's totals."""
        for col in MONEY_COLUMNS:
            ref = f"{column_letter(col.field)}8"
            assert evaluate_cell(sheet, ref) == getattr(run.totals, col.field), ref

    def test_float_recalculation_matches_to_the_cent(self, run, sheet):
        """Recalculating with doubles displays the calculator's cents."""
        for offset, result in enumerate(run.results):
            for col in MONEY_COLUMNS:
                ref = f"{column_letter(col.field)}{5 + offset}"
                actual = evaluate_cell(sheet, ref, number=float)
                assert cents(actual) == cents(getattr(result, col.field)), ref

        for col in MONEY_COLUMNS:
            ref = f"{column_letter(col.field)}8"
            actual = evaluate_cell(sheet, ref, number=float)
            assert cents(actual) == cents(getattr(run.totals, col.field)), ref

    @pytest.mark.parametrize("gross", ["1999", "2000", "2001", "4000", "6800", "9999.99", "14000", "14001", "50000"])
    def test_every_bracket_agrees(self, gross):
        """Engine and formulas agree in every bracket."""
        emp = make_employee(gross=gross, transport="0", phone="0", house_rent="0")
        run = PayrollOrchestrator().run([emp], ALL_COMPANIES)
        wb = SpreadsheetExporter().export(run.results, run.totals, run.scope, PERIOD, BUSINESS)

        ws = wb[SHEET_TITLE]
        assert evaluate_cell(ws, "K5") == run.results[0].income_tax
        assert evaluate_cell(ws, "M5") == run.results[0].net_pay

    def test_eligibility_snapshot(self, employee):
        """A later eligibility change does not alter an exported sheet."""
        run = PayrollOrchestrator().run([employee], ALL_COMPANIES)
        wb = SpreadsheetExporter().export(run.results, run.totals, run.scope, PERIOD, BUSINESS)

        changed = replace(employee, has_pension=False)
        PayrollOrchestrator().run([changed], ALL_COMPANIES)

        assert wb[SHEET_TITLE]["C5"].value == "=B5*0.11"

    def test_formulas_follow_rule_set(self):
        """Formula constants come from the rule set in use."""
        rules = StatutoryRules(
            brackets=(
                TaxBracket(upper_bound=Decimal("1000"), rate=Decimal("0")),
                TaxBracket(upper_bound=None, rate=Decimal("0.1"), subtract=Decimal("100")),
            ),
            pension=replace(STATUTORY_RULES.pension, employee=Decimal("0.12")),
        )
        formulas = RowFormulas(rules)

        assert formulas.income_tax(9) == "=IF(G9<=1000,0,G9*0.1-100)"
        assert formulas.pension11(9, True) == "=B9*0.12"


class TestStyles:
    """Test cell styling."""

    def test_currency_format(self, sheet):
        """Money cells use the currency number format."""
        assert sheet["B5"].number_format == '"ETB" #,##0.00'
        assert sheet["M8"].number_format == '"ETB" #,##0.00'

    def test_highlighted_columns(self, sheet):
        """Deductions shaded, total gross bold, net pay bold and green."""
        assert sheet["K5"].fill.start_color.rgb == "FFFFEBEE"
        assert sheet["H5"].font.bold
        assert sheet["M5"].font.bold
        assert sheet["M5"].fill.start_color.rgb == "FFE6F6E6"

    def test_totals_row_border(self, sheet):
        """Totals row is bold with a medium top border."""
        assert sheet["B8"].font.bold
        assert sheet["B8"].border.top.style == "medium"

    def test_custom_currency(self, run):
        """Number format follows the configured currency."""
        wb = SpreadsheetExporter(currency_code="USD").export(
            run.results, run.totals, run.scope, PERIOD, BUSINESS
        )
        assert wb[SHEET_TITLE]["B5"].number_format == '"USD" #,##0.00'


class TestSave:
    """Test writing the workbook to disk."""

    def test_save_and_reload(self, run, tmp_path):
        """Saved file keeps formulas and uses the scope file name."""
        exporter = SpreadsheetExporter()
        wb = exporter.export(run.results, run.totals, run.scope, PERIOD, BUSINESS)

        path = exporter.save(wb, tmp_path / "exports", run.scope)

        assert path.name == "PayrollReport_All_Companies.xlsx"
        ws = load_workbook(path)[SHEET_TITLE]
        assert ws["K5"].value.startswith("=IF(G5<=2000")
        assert ws["B8"].value == "=SUM(B5:B7)"
        assert evaluate_cell(ws, "M5") == run.results[0].net_pay

    def test_to_bytes(self, run):
        """Workbook serializes to an xlsx (zip) payload."""
        exporter = SpreadsheetExporter()
        wb = exporter.export(run.results, run.totals, run.scope, PERIOD, BUSINESS)

        assert exporter.to_bytes(wb)[:2] == b"PK"
