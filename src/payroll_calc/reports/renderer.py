"""Human-readable payroll table and payslip rendering.

Nothing here recalculates: every figure shown is taken from an already
produced PayrollResult or ReportTotals and passed through format_currency.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from payroll_calc.calculators.types import PayrollResult, ReportTotals
from payroll_calc.reports.formatting import (
    DEFAULT_CURRENCY,
    MONEY_COLUMNS,
    REPORT_COLUMNS,
    REPORT_TITLE,
    TOTALS_LABEL,
    format_currency,
)

SIGNATURE_HEADER = "Signature"


@dataclass(frozen=True)
class RenderedTable:
    """Formatted payroll table ready for screen or print."""

    title: str
    scope: str
    period: str
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    totals_row: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_text(self, with_signature: bool = False) -> str:
        """Render as aligned plain text.

        ``with_signature`` adds the blank signature column used on the
        printed sheet.
        """
        headers = list(self.headers)
        body = [list(row) for row in self.rows]
        totals = list(self.totals_row)
        if with_signature:
            headers.append(SIGNATURE_HEADER)
            for row in body:
                row.append("")
            totals.append("")

        all_rows = [headers, *body, totals]
        widths = [max(len(row[i]) for row in all_rows) for i in range(len(headers))]

        def line(cells: list[str]) -> str:
            # First column is text, the rest are amounts
            parts = [cells[0].ljust(widths[0])]
            parts += [cell.rjust(width) for cell, width in zip(cells[1:], widths[1:])]
            return " | ".join(parts).rstrip()

        rule = "-+-".join("-" * width for width in widths)
        out = [
            self.title,
            f"For: {self.scope}    Date: {self.period}",
            "",
            line(headers),
            rule,
            *(line(row) for row in body),
            rule,
            line(totals),
        ]
        return "\n".join(out)


@dataclass(frozen=True)
class PayslipLine:
    label: str
    amount: str


@dataclass(frozen=True)
class Payslip:
    """Single-employee payslip."""

    company: str
    address: str
    employee: str
    role: str
    period: str
    earnings: tuple[PayslipLine, ...]
    total_earnings: str
    deductions: tuple[PayslipLine, ...]
    total_deductions: str
    net_pay: str
    title: str = field(default="PAYSLIP")

    def to_text(self) -> str:
        labels = [line.label for line in (*self.earnings, *self.deductions)]
        labels += ["Total Gross Pay", "Total Deductions", "Net Pay"]
        width = max(len(label) for label in labels)

        def entry(label: str, amount: str) -> str:
            return f"  {label.ljust(width)}  {amount}"

        out = [
            f"{self.company}    {self.title}",
            self.address,
            "",
            f"Employee: {self.employee}",
            f"Role: {self.role}",
            f"Pay Period: {self.period}",
            "",
            "Earnings",
            *(entry(line.label, line.amount) for line in self.earnings),
            entry("Total Gross Pay", self.total_earnings),
            "",
            "Deductions",
            *(entry(line.label, line.amount) for line in self.deductions),
            entry("Total Deductions", self.total_deductions),
            "",
            entry("Net Pay", self.net_pay),
        ]
        return "\n".join(out)


class ReportRenderer:
    """Formats payroll results for display."""

    def __init__(self, currency_code: str = DEFAULT_CURRENCY):
        self.currency_code = currency_code

    def money(self, amount) -> str:
        return format_currency(amount, self.currency_code)

    def render(
        self,
        results: Sequence[PayrollResult],
        totals: ReportTotals,
        scope: str,
        period_label: str,
    ) -> RenderedTable:
        """Render results and their totals row.

        An empty result set renders headers and a zero totals row.
        """
        rows = tuple(
            (result.name, *(self.money(getattr(result, col.field)) for col in MONEY_COLUMNS))
            for result in results
        )
        totals_row = (
            TOTALS_LABEL,
            *(self.money(getattr(totals, col.field)) for col in MONEY_COLUMNS),
        )
        return RenderedTable(
            title=REPORT_TITLE,
            scope=scope,
            period=period_label,
            headers=tuple(col.header for col in REPORT_COLUMNS),
            rows=rows,
            totals_row=totals_row,
        )

    def render_payslip(
        self,
        result: PayrollResult,
        period_label: str,
        address: str = "",
    ) -> Payslip:
        """Render a single employee's payslip."""
        earnings = (
            PayslipLine("Gross Salary", self.money(result.gross_salary)),
            PayslipLine("Transport Allowance", self.money(result.transport_allowance)),
            PayslipLine("Phone Allowance", self.money(result.phone_allowance)),
            PayslipLine("House Rent Allowance", self.money(result.house_rent_allowance)),
            PayslipLine("Pension (11%)", self.money(result.pension11)),
        )
        deductions = (
            PayslipLine("Income Tax", self.money(result.income_tax)),
            PayslipLine("Pension (18% - Post-Tax)", self.money(result.pension18)),
        )
        return Payslip(
            company=result.company,
            address=address,
            employee=result.name,
            role=result.role,
            period=period_label,
            earnings=earnings,
            total_earnings=self.money(result.total_gross_pay),
            deductions=deductions,
            total_deductions=self.money(result.total_deduction),
            net_pay=self.money(result.net_pay),
        )
