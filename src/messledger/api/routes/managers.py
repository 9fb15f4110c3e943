"""Manager rota routes."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import ManagerRecordIn, ManagerRecordOut
from messledger.domain.entities import Actor
from messledger.domain.services import Services

router = APIRouter(prefix="/api/managers", tags=["Managers"])


@router.get("", response_model=list[ManagerRecordOut])
def list_records(
    month: Optional[str] = None,
    date: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    if date is not None:
        return services.managers.records_for_date(date)
    return services.managers.list_records(month=month)


@router.post("", response_model=ManagerRecordOut, status_code=status.HTTP_201_CREATED)
def assign_manager(body: ManagerRecordIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.managers.assign_manager(actor, body.date, body.member_id)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_record(record_id: int, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    services.managers.remove_record(actor, record_id)
