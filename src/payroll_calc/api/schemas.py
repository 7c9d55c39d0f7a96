"""Pydantic schemas for API request/response models."""

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from payroll_calc.calculators.types import Employee
from payroll_calc.config import ALL_COMPANIES


# ============================================================================
# Requests
# ============================================================================


class EmployeeIn(BaseModel):
    """Roster record supplied with a calculation request."""

    id: int | str
    name: str
    role: str
    company: str
    gross_salary: Decimal = Field(ge=0)
    transport_allowance: Decimal = Field(default=Decimal("0"), ge=0)
    phone_allowance: Decimal = Field(default=Decimal("0"), ge=0)
    house_rent_allowance: Decimal = Field(default=Decimal("0"), ge=0)
    has_pension: bool = Field(
        default=True,
        validation_alias=AliasChoices("has_pension", "has_retirement"),
    )

    def to_employee(self) -> Employee:
        return Employee(
            id=self.id,
            name=self.name,
            role=self.role,
            company=self.company,
            gross_salary=self.gross_salary,
            transport_allowance=self.transport_allowance,
            phone_allowance=self.phone_allowance,
            house_rent_allowance=self.house_rent_allowance,
            has_pension=self.has_pension,
        )


class PayrollRequest(BaseModel):
    """Schema for a payroll calculation over a supplied roster."""

    employees: list[EmployeeIn]
    scope: str = ALL_COMPANIES
    period: str = ""

    def roster(self) -> list[Employee]:
        return [emp.to_employee() for emp in self.employees]


class ExportRequest(PayrollRequest):
    """Schema for a spreadsheet export request."""

    business_name: str | None = None


class PayslipRequest(BaseModel):
    """Schema for a single-employee payslip."""

    employee: EmployeeIn
    period: str = ""
    address: str | None = None


# ============================================================================
# Responses
# ============================================================================


class PayrollResultResponse(BaseModel):
    """Computed pay for one employee."""

    model_config = ConfigDict(from_attributes=True)

    id: int | str
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


class TotalsResponse(BaseModel):
    """Column totals over the result set."""

    model_config = ConfigDict(from_attributes=True)

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


class TableResponse(BaseModel):
    """Pre-formatted table for display."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    scope: str
    period: str
    headers: list[str]
    rows: list[list[str]]
    totals_row: list[str]


class PayrollResponse(BaseModel):
    """Schema for a payroll run response."""

    scope: str
    period: str
    results: list[PayrollResultResponse]
    totals: TotalsResponse
    table: TableResponse


class PayslipLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    amount: str


class PayslipResponse(BaseModel):
    """Formatted payslip."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    company: str
    address: str
    employee: str
    role: str
    period: str
    earnings: list[PayslipLineResponse]
    total_earnings: str
    deductions: list[PayslipLineResponse]
    total_deductions: str
    net_pay: str


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None
