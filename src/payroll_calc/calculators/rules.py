"""Statutory rule set: income-tax brackets and pension rates.

This is the only place the rates live. The in-memory calculators and the
spreadsheet formula builder both read from ``STATUTORY_RULES`` so the two
renderings of the arithmetic cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TaxBracket:
    """Flat-rate-minus-subtraction bracket.

    Tax for an amount in this bracket is ``amount * rate - subtract``.
    """

    upper_bound: Decimal | None  # Inclusive; None = no upper limit
    rate: Decimal  # As decimal, e.g., 0.15 for 15%
    subtract: Decimal = Decimal("0")

    def applies_to(self, amount: Decimal) -> bool:
        return self.upper_bound is None or amount <= self.upper_bound


@dataclass(frozen=True)
class PensionRates:
    """Pension contribution rates as fractions of gross salary."""

    employee: Decimal  # 11%, added to gross pay
    employer: Decimal  # 7%, informational
    post_tax: Decimal  # 18%, deducted


@dataclass(frozen=True)
class StatutoryRules:
    """Canonical rule set consumed by every calculator and formatter."""

    brackets: tuple[TaxBracket, ...]
    pension: PensionRates

    def bracket_for(self, amount: Decimal) -> TaxBracket:
        """Return the first bracket whose inclusive upper bound covers amount."""
        for bracket in self.brackets:
            if bracket.applies_to(amount):
                return bracket
        # The last bracket is open-ended, so this only triggers on a bad table
        raise ValueError(f"No tax bracket covers {amount}")


STATUTORY_RULES = StatutoryRules(
    brackets=(
        TaxBracket(upper_bound=Decimal("2000"), rate=Decimal("0")),
        TaxBracket(upper_bound=Decimal("4000"), rate=Decimal("0.15"), subtract=Decimal("300")),
        TaxBracket(upper_bound=Decimal("7000"), rate=Decimal("0.20"), subtract=Decimal("500")),
        TaxBracket(upper_bound=Decimal("10000"), rate=Decimal("0.25"), subtract=Decimal("850")),
        TaxBracket(upper_bound=Decimal("14000"), rate=Decimal("0.30"), subtract=Decimal("1350")),
        TaxBracket(upper_bound=None, rate=Decimal("0.35"), subtract=Decimal("2050")),
    ),
    pension=PensionRates(
        employee=Decimal("0.11"),
        employer=Decimal("0.07"),
        post_tax=Decimal("0.18"),
    ),
)
