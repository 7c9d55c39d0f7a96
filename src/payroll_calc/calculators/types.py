"""Type definitions for calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Iterable

ZERO = Decimal("0")


@dataclass(frozen=True)
class Employee:
    """Roster entry as supplied by the roster collaborator.

    Monetary fields are non-negative by contract of the upstream validator
    and are not re-validated here.
    """

    id: Any
    name: str
    role: str
    company: str
    gross_salary: Decimal
    transport_allowance: Decimal = ZERO
    phone_allowance: Decimal = ZERO
    house_rent_allowance: Decimal = ZERO
    has_pension: bool = True


@dataclass(frozen=True)
class PensionShares:
    """Three pension figures derived from gross salary."""

    employee_share11: Decimal = ZERO  # Added to gross pay as a benefit
    employer_share7: Decimal = ZERO  # Informational, never totalled into pay
    post_tax_share18: Decimal = ZERO  # Deducted from gross pay


@dataclass(frozen=True)
class PayrollResult:
    """Computed pay for one employee."""

    id: Any
    name: str
    role: str
    company: str
    has_pension: bool
    gross_salary: Decimal
    pension11: Decimal
    transport_allowance: Decimal
    phone_allowance: Decimal
    house_rent_allowance: Decimal
    taxable: Decimal
    total_gross_pay: Decimal
    pension7: Decimal
    pension18: Decimal
    income_tax: Decimal
    total_deduction: Decimal
    net_pay: Decimal


# Every numeric PayrollResult field, in report column order
MONETARY_FIELDS: tuple[str, ...] = (
    "gross_salary",
    "pension11",
    "transport_allowance",
    "phone_allowance",
    "house_rent_allowance",
    "taxable",
    "total_gross_pay",
    "pension7",
    "pension18",
    "income_tax",
    "total_deduction",
    "net_pay",
)


@dataclass(frozen=True)
class ReportTotals:
    """Column-wise sums over a result set."""

    gross_salary: Decimal = ZERO
    pension11: Decimal = ZERO
    transport_allowance: Decimal = ZERO
    phone_allowance: Decimal = ZERO
    house_rent_allowance: Decimal = ZERO
    taxable: Decimal = ZERO
    total_gross_pay: Decimal = ZERO
    pension7: Decimal = ZERO
    pension18: Decimal = ZERO
    income_tax: Decimal = ZERO
    total_deduction: Decimal = ZERO
    net_pay: Decimal = ZERO

    @classmethod
    def from_results(cls, results: Iterable[PayrollResult]) -> ReportTotals:
        """Pointwise sum of every monetary field."""
        sums = {name: ZERO for name in MONETARY_FIELDS}
        for result in results:
            for name in MONETARY_FIELDS:
                sums[name] += getattr(result, name)
        return cls(**sums)

    def as_dict(self) -> dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
