"""Load a JSON roster file into the roster database.

Usage:
    python -m scripts.load_roster --roster roster.json [--database-url URL]

Creates the employees table when missing and upserts one row per record.
Useful for setting up a development database for the /payroll/run endpoint.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from payroll_calc.cli import load_roster
from payroll_calc.config import get_settings
from payroll_calc.models import Base, EmployeeRecord


async def load_roster_into_db(roster_file: Path, database_url: str) -> int:
    """Upsert every roster record; returns the number of rows written."""
    employees = load_roster(roster_file)

    engine = create_async_engine(database_url, echo=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with AsyncSession(engine) as session:
            for emp in employees:
                await session.merge(
                    EmployeeRecord(
                        id=int(emp.id),
                        name=emp.name,
                        role=emp.role,
                        company=emp.company,
                        gross_salary=emp.gross_salary,
                        transport_allowance=emp.transport_allowance,
                        phone_allowance=emp.phone_allowance,
                        house_rent_allowance=emp.house_rent_allowance,
                        has_retirement=emp.has_pension,
                    )
                )
            await session.commit()
    finally:
        await engine.dispose()

    return len(employees)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Load a JSON roster into the database")
    parser.add_argument(
        "--roster",
        type=Path,
        required=True,
        help="JSON file with a list of employee records",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=get_settings().database_url,
        help="Database URL (default: from settings)",
    )

    args = parser.parse_args()

    try:
        count = asyncio.run(load_roster_into_db(args.roster, args.database_url))
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Loaded {count} employee(s) into {args.database_url}")


if __name__ == "__main__":
    main()
