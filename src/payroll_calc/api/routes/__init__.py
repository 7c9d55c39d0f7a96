"""API routes."""

from payroll_calc.api.routes.health import router as health_router
from payroll_calc.api.routes.payroll import router as payroll_router

__all__ = ["health_router", "payroll_router"]
