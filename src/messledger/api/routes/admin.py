"""Administrator maintenance routes."""

from fastapi import APIRouter, Depends

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import MonthClearOut
from messledger.domain.entities import Actor, MonthClearReport
from messledger.domain.services import Services

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def _report_out(report: MonthClearReport) -> MonthClearOut:
    return MonthClearOut(month=report.month, counts=report.counts, total=report.total)


@router.get("/clear-month/preview", response_model=MonthClearOut)
def preview_clear_month(month: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    """Count the records a month clear would delete."""
    return _report_out(services.month_clear.preview(actor, month))


@router.delete("/clear-month", response_model=MonthClearOut)
def clear_month(month: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    """Delete a month's meals, guest meals, expenses and rota records."""
    return _report_out(services.month_clear.clear(actor, month))
