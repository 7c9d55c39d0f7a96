"""Stored employee roster rows."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_calc.models.base import Base


class EmployeeRecord(Base):
    """Employee row as kept by the roster store.

    The calculator only reads these; maintaining them is the roster
    owner's job.
    """

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False)
    company: Mapped[str] = mapped_column(String, nullable=False, index=True)
    gross_salary: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    transport_allowance: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    phone_allowance: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    house_rent_allowance: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    has_retirement: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("gross_salary >= 0", name="employees_gross_salary_nonneg"),
        CheckConstraint("transport_allowance >= 0", name="employees_transport_nonneg"),
        CheckConstraint("phone_allowance >= 0", name="employees_phone_nonneg"),
        CheckConstraint("house_rent_allowance >= 0", name="employees_house_rent_nonneg"),
    )
