"""Payroll calculation and export endpoints."""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Query, Response, status

from payroll_calc.api.dependencies import AppSettings, DbSession
from payroll_calc.api.schemas import (
    ErrorResponse,
    ExportRequest,
    PayrollRequest,
    PayrollResponse,
    PayrollResultResponse,
    PayslipRequest,
    PayslipResponse,
    TableResponse,
    TotalsResponse,
)
from payroll_calc.calculators.engine import PayrollCalculator
from payroll_calc.config import ALL_COMPANIES
from payroll_calc.reports.excel_exporter import SpreadsheetExporter, export_filename
from payroll_calc.reports.renderer import ReportRenderer
from payroll_calc.services.pay_run_service import PayrollOrchestrator, PayRunResult
from payroll_calc.services.roster_service import RosterRepository

router = APIRouter(prefix="/payroll", tags=["payroll"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _payroll_response(run: PayRunResult, period: str, currency_code: str) -> PayrollResponse:
    table = ReportRenderer(currency_code).render(run.results, run.totals, run.scope, period)
    return PayrollResponse(
        scope=run.scope,
        period=period,
        results=[PayrollResultResponse.model_validate(r) for r in run.results],
        totals=TotalsResponse.model_validate(run.totals),
        table=TableResponse.model_validate(table),
    )


# ============================================================================
# Calculation
# ============================================================================


@router.post(
    "/calculate",
    response_model=PayrollResponse,
    responses={422: {"model": ErrorResponse}},
)
async def calculate_payroll(payload: PayrollRequest, settings: AppSettings) -> PayrollResponse:
    """Calculate payroll for the supplied roster restricted to a scope."""
    run = PayrollOrchestrator().run(payload.roster(), payload.scope)
    return _payroll_response(run, payload.period, settings.currency_code)


@router.get(
    "/run",
    response_model=PayrollResponse,
    responses={422: {"model": ErrorResponse}},
)
async def run_stored_payroll(
    db: DbSession,
    settings: AppSettings,
    scope: Annotated[str, Query()] = ALL_COMPANIES,
    period: Annotated[str, Query()] = "",
) -> PayrollResponse:
    """Calculate payroll over the stored roster."""
    roster = await RosterRepository(db).list_employees(scope)
    run = PayrollOrchestrator().run(roster, scope)
    return _payroll_response(run, period, settings.currency_code)


@router.get("/companies", response_model=list[str])
async def list_companies(db: DbSession) -> list[str]:
    """Companies present in the stored roster."""
    return await RosterRepository(db).list_companies()


# ============================================================================
# Export and payslip
# ============================================================================


@router.post(
    "/export",
    status_code=status.HTTP_200_OK,
    responses={
        200: {"content": {XLSX_MEDIA_TYPE: {}}},
        422: {"model": ErrorResponse},
    },
)
async def export_payroll(payload: ExportRequest, settings: AppSettings) -> Response:
    """Calculate and return the payroll workbook."""
    run = PayrollOrchestrator().run(payload.roster(), payload.scope)
    exporter = SpreadsheetExporter(currency_code=settings.currency_code)
    workbook = exporter.export(
        run.results,
        run.totals,
        run.scope,
        payload.period,
        payload.business_name or settings.business_name,
    )
    filename = export_filename(run.scope)
    return Response(
        content=exporter.to_bytes(workbook),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.post("/payslip", response_model=PayslipResponse)
async def payslip(payload: PayslipRequest, settings: AppSettings) -> PayslipResponse:
    """Calculate and format one employee's payslip."""
    result = PayrollCalculator().calculate(payload.employee.to_employee())
    slip = ReportRenderer(settings.currency_code).render_payslip(
        result,
        payload.period,
        payload.address if payload.address is not None else settings.business_address,
    )
    return PayslipResponse.model_validate(slip)
