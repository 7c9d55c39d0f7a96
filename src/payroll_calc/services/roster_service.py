"""Roster loading: stored rows and plain records to Employee snapshots."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_calc.calculators.types import Employee
from payroll_calc.config import ALL_COMPANIES
from payroll_calc.models import EmployeeRecord

REQUIRED_FIELDS = ("id", "name", "role", "company", "gross_salary")
ALLOWANCE_FIELDS = ("transport_allowance", "phone_allowance", "house_rent_allowance")


class RosterFormatError(ValueError):
    """Raised when a roster record cannot be read as an employee."""

    def __init__(self, field_name: str, reason: str, record_id: Any = None):
        self.field_name = field_name
        self.record_id = record_id
        where = f" (employee {record_id})" if record_id is not None else ""
        super().__init__(f"Invalid roster field '{field_name}'{where}: {reason}")


def _to_decimal(value: Any, field_name: str, record_id: Any) -> Decimal:
    if isinstance(value, bool):
        raise RosterFormatError(field_name, "expected a number", record_id)
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise RosterFormatError(field_name, f"not a number: {value!r}", record_id) from None
    if not amount.is_finite():
        raise RosterFormatError(field_name, "not a finite number", record_id)
    return amount


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return bool(value)


def employee_from_record(record: Mapping[str, Any]) -> Employee:
    """Build an Employee from a snake_case roster record.

    The pension flag is read from ``has_pension`` or, as stored, from
    ``has_retirement``; it defaults to True. Missing allowances are zero.
    """
    for name in REQUIRED_FIELDS:
        if record.get(name) is None:
            raise RosterFormatError(name, "missing", record.get("id"))

    record_id = record["id"]
    allowances = {
        name: _to_decimal(record.get(name) or 0, name, record_id)
        for name in ALLOWANCE_FIELDS
    }

    if "has_pension" in record:
        has_pension = _to_bool(record["has_pension"])
    else:
        has_pension = _to_bool(record.get("has_retirement", True))

    return Employee(
        id=record_id,
        name=str(record["name"]),
        role=str(record["role"]),
        company=str(record["company"]),
        gross_salary=_to_decimal(record["gross_salary"], "gross_salary", record_id),
        has_pension=has_pension,
        **allowances,
    )


class RosterRepository:
    """Read-only access to the stored employee roster."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_employees(self, company: str | None = None) -> list[Employee]:
        """Return roster snapshots in primary-key order, optionally for one company."""
        stmt = select(EmployeeRecord).order_by(EmployeeRecord.id)
        if company is not None and company != ALL_COMPANIES:
            stmt = stmt.where(EmployeeRecord.company == company)

        result = await self.session.execute(stmt)
        return [employee_from_record(row.to_dict()) for row in result.scalars().all()]

    async def list_companies(self) -> list[str]:
        """Distinct company names present in the roster."""
        result = await self.session.execute(
            select(EmployeeRecord.company).distinct().order_by(EmployeeRecord.company)
        )
        return list(result.scalars().all())
