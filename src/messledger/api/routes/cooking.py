"""Cooking rota routes."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import CookingRecordIn, CookingRecordOut
from messledger.domain.entities import Actor
from messledger.domain.services import Services

router = APIRouter(prefix="/api/cooking", tags=["Cooking"])


@router.get("", response_model=list[CookingRecordOut])
def list_records(
    month: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.cooking.list_records(month=month)


@router.get("/date/{date}", response_model=list[CookingRecordOut])
def records_for_date(date: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.cooking.records_for_date(date)


@router.post("", response_model=CookingRecordOut, status_code=status.HTTP_201_CREATED)
def assign_cook(body: CookingRecordIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.cooking.assign_cook(actor, body.date, body.member_id)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_record(record_id: int, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    services.cooking.remove_record(actor, record_id)
