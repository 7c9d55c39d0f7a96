"""ORM models."""

from payroll_calc.models.base import Base
from payroll_calc.models.employee import EmployeeRecord

__all__ = ["Base", "EmployeeRecord"]
