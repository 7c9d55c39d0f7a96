"""Income tax from the progressive bracket table."""

from __future__ import annotations

from decimal import Decimal

from payroll_calc.calculators.rules import STATUTORY_RULES, StatutoryRules


class TaxCalculator:
    """Maps a taxable amount to an income-tax liability.

    Brackets use the flat-rate-minus-subtraction form, which keeps the
    function continuous at every boundary:

        <= 2000   0%
        <= 4000  15% - 300
        <= 7000  20% - 500
        <= 10000 25% - 850
        <= 14000 30% - 1350
        >  14000 35% - 2050
    """

    def __init__(self, rules: StatutoryRules = STATUTORY_RULES):
        self.rules = rules

    def income_tax(self, taxable: Decimal) -> Decimal:
        """Calculate income tax for a taxable amount.

        Negative amounts fall into the first bracket and return zero.
        """
        bracket = self.rules.bracket_for(taxable)
        if bracket.rate == 0:
            return Decimal("0")
        return taxable * bracket.rate - bracket.subtract


def income_tax(taxable: Decimal, rules: StatutoryRules = STATUTORY_RULES) -> Decimal:
    """Module-level shortcut for ``TaxCalculator(rules).income_tax``."""
    return TaxCalculator(rules).income_tax(taxable)
