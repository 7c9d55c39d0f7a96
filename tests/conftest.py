"""Pytest fixtures for payroll calculator tests."""

from __future__ import annotations

from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from payroll_calc.api.app import create_app
from payroll_calc.api.dependencies import get_db_session
from payroll_calc.calculators.types import Employee
from payroll_calc.models import Base, EmployeeRecord

# Use in-memory SQLite for tests (with async support)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

COMPANY_ONE = "Hasset No. 1"
COMPANY_TWO = "Hasset No. 2"


def make_employee(
    id: int = 1,
    name: str = "Abebe Kebede",
    role: str = "Teacher",
    company: str = COMPANY_ONE,
    gross: str = "5000",
    transport: str = "300",
    phone: str = "100",
    house_rent: str = "500",
    has_pension: bool = True,
) -> Employee:
    """Build a roster employee with string amounts converted to Decimal."""
    return Employee(
        id=id,
        name=name,
        role=role,
        company=company,
        gross_salary=Decimal(gross),
        transport_allowance=Decimal(transport),
        phone_allowance=Decimal(phone),
        house_rent_allowance=Decimal(house_rent),
        has_pension=has_pension,
    )


@pytest.fixture
def employee() -> Employee:
    """The worked example: 5000 gross, 300/100/500 allowances, pensioned."""
    return make_employee()


@pytest.fixture
def roster() -> list[Employee]:
    """Three payable employees across two companies plus one without salary."""
    return [
        make_employee(id=1, name="Abebe Kebede", company=COMPANY_ONE),
        make_employee(
            id=2,
            name="Sara Tesfaye",
            role="Director",
            company=COMPANY_TWO,
            gross="16000",
            transport="600",
            phone="400",
            house_rent="1500",
        ),
        make_employee(id=3, name="Dawit Alemu", role="Janitor", company=COMPANY_ONE, gross="0"),
        make_employee(
            id=4,
            name="Hana Girma",
            role="Keeper",
            company=COMPANY_ONE,
            gross="1800",
            transport="0",
            phone="0",
            house_rent="0",
            has_pension=False,
        ),
    ]


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory roster database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_db(db_session: AsyncSession) -> AsyncSession:
    """Roster database with the standard test employees."""
    db_session.add_all(
        [
            EmployeeRecord(
                id=1,
                name="Abebe Kebede",
                role="Teacher",
                company=COMPANY_ONE,
                gross_salary=Decimal("5000"),
                transport_allowance=Decimal("300"),
                phone_allowance=Decimal("100"),
                house_rent_allowance=Decimal("500"),
                has_retirement=True,
            ),
            EmployeeRecord(
                id=2,
                name="Sara Tesfaye",
                role="Director",
                company=COMPANY_TWO,
                gross_salary=Decimal("16000"),
                transport_allowance=Decimal("600"),
                phone_allowance=Decimal("400"),
                house_rent_allowance=Decimal("1500"),
                has_retirement=True,
            ),
            EmployeeRecord(
                id=3,
                name="Hana Girma",
                role="Keeper",
                company=COMPANY_ONE,
                gross_salary=Decimal("1800"),
                transport_allowance=Decimal("0"),
                phone_allowance=Decimal("0"),
                house_rent_allowance=Decimal("0"),
                has_retirement=False,
            ),
        ]
    )
    await db_session.commit()
    return db_session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with the test database session."""
    app = create_app()

    async def override_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def employee_payload(emp: Employee) -> dict:
    """JSON request body for one roster employee."""
    return {
        "id": emp.id,
        "name": emp.name,
        "role": emp.role,
        "company": emp.company,
        "gross_salary": str(emp.gross_salary),
        "transport_allowance": str(emp.transport_allowance),
        "phone_allowance": str(emp.phone_allowance),
        "house_rent_allowance": str(emp.house_rent_allowance),
        "has_pension": emp.has_pension,
    }
