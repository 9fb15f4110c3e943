"""Guest meal routes."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import GuestMealIn, GuestMealOut
from messledger.domain.entities import Actor
from messledger.domain.services import Services

router = APIRouter(prefix="/api/guest-meals", tags=["Guest meals"])


@router.get("", response_model=list[GuestMealOut])
def list_guest_meals(
    date: Optional[str] = None,
    month: Optional[str] = None,
    member_id: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.guest_meals.list_guest_meals(date=date, month=month, member_key=member_id)


@router.post("", response_model=GuestMealOut, status_code=status.HTTP_201_CREATED)
def add_guest_meal(body: GuestMealIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.guest_meals.add_guest_meal(
        actor,
        date=body.date,
        member_key=body.member_id,
        guest_meal_type=body.guest_meal_type.value,
        meal_time=body.meal_time.value,
    )


@router.delete("/{guest_meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_guest_meal(
    guest_meal_id: int, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)
):
    services.guest_meals.remove_guest_meal(actor, guest_meal_id)
