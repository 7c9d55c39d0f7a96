"""Payroll calculation engine - per-employee calculator."""

from __future__ import annotations

from payroll_calc.calculators.pension import pension
from payroll_calc.calculators.rules import STATUTORY_RULES, StatutoryRules
from payroll_calc.calculators.tax_calculator import TaxCalculator
from payroll_calc.calculators.types import Employee, PayrollResult


class PayrollCalculator:
    """Computes one PayrollResult from one Employee.

    Calculation pipeline (stable order):
    1) Pension figures (11% benefit, 7% informational, 18% deduction)
    2) Total gross pay = gross + pension 11% + all allowances
    3) Taxable = gross + phone + house rent (transport is not taxable)
    4) Income tax on the taxable amount
    5) Total deduction = pension 18% + income tax
    6) Net pay = total gross pay - total deduction (no floor)

    The steps mirror the per-row formulas written by the spreadsheet
    exporter; change them together.
    """

    def __init__(self, rules: StatutoryRules = STATUTORY_RULES):
        self.rules = rules
        self.tax_calculator = TaxCalculator(rules)

    def calculate(self, employee: Employee) -> PayrollResult:
        """Calculate pay for a single employee."""
        gross = employee.gross_salary
        shares = pension(gross, employee.has_pension, self.rules)

        total_gross_pay = (
            gross
            + shares.employee_share11
            + employee.transport_allowance
            + employee.phone_allowance
            + employee.house_rent_allowance
        )
        taxable = gross + employee.phone_allowance + employee.house_rent_allowance
        income_tax = self.tax_calculator.income_tax(taxable)
        total_deduction = shares.post_tax_share18 + income_tax

        return PayrollResult(
            id=employee.id,
            name=employee.name,
            role=employee.role,
            company=employee.company,
            has_pension=employee.has_pension,
            gross_salary=gross,
            pension11=shares.employee_share11,
            transport_allowance=employee.transport_allowance,
            phone_allowance=employee.phone_allowance,
            house_rent_allowance=employee.house_rent_allowance,
            taxable=taxable,
            total_gross_pay=total_gross_pay,
            pension7=shares.employer_share7,
            pension18=shares.post_tax_share18,
            income_tax=income_tax,
            total_deduction=total_deduction,
            net_pay=total_gross_pay - total_deduction,
        )
