"""Pension contribution figures."""

from __future__ import annotations

from decimal import Decimal

from payroll_calc.calculators.rules import STATUTORY_RULES, StatutoryRules
from payroll_calc.calculators.types import PensionShares


def pension(
    gross_salary: Decimal,
    eligible: bool,
    rules: StatutoryRules = STATUTORY_RULES,
) -> PensionShares:
    """Compute the 11% / 7% / 18% pension figures for a gross salary.

    All three are zero when the employee is not pension-eligible.
    """
    if not eligible:
        return PensionShares()

    rates = rules.pension
    return PensionShares(
        employee_share11=gross_salary * rates.employee,
        employer_share7=gross_salary * rates.employer,
        post_tax_share18=gross_salary * rates.post_tax,
    )
