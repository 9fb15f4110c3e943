"""Market duty routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import MarketDecision, MarketDutyIn, MarketDutyOut
from messledger.domain import errors
from messledger.domain.entities import Actor, DutyRequestType
from messledger.domain.services import Services

router = APIRouter(prefix="/api/market", tags=["Market duty"])

DECISIONS = ["approved", "rejected"]


@router.get("", response_model=list[MarketDutyOut])
def list_duties(
    month: Optional[str] = None,
    date: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.duties.list_duties(month=month, date=date)


@router.post("", response_model=MarketDutyOut, status_code=status.HTTP_201_CREATED)
def create_duty(body: MarketDutyIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    """Self-request a date, or (administrator) assign a member directly."""
    if body.request_type == DutyRequestType.MANUAL_ASSIGN:
        if body.member_id is None:
            raise errors.ValidationError("Member ID is required for a manual assignment")
        return services.duties.assign_duty(actor, body.date, body.member_id)
    return services.duties.request_duty(actor, body.date, body.member_id)


@router.put("/id/{duty_id}", response_model=Optional[MarketDutyOut])
def decide_duty(
    duty_id: int,
    body: MarketDecision,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    """Approve or reject a request. A rejected request is deleted."""
    if body.status not in DECISIONS:
        raise errors.ValidationError(errors.invalid_choice("status", body.status, DECISIONS))
    if body.status == "approved":
        return services.duties.approve(actor, duty_id)
    services.duties.reject(actor, duty_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
