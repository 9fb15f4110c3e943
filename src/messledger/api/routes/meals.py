"""Meal routes."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import MealIn, MealOut, MemberOverviewOut
from messledger.domain.entities import Actor
from messledger.domain.services import Services

router = APIRouter(prefix="/api/meals", tags=["Meals"])


@router.get("", response_model=list[MealOut])
def list_meals(
    date: Optional[str] = None,
    month: Optional[str] = None,
    member_id: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.meals.list_meals(date=date, month=month, member_key=member_id)


@router.get("/overview", response_model=list[MemberOverviewOut])
def meal_overview(
    month: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.members.member_overview(month=month)


@router.post("", response_model=MealOut, status_code=status.HTTP_201_CREATED)
def add_meal(body: MealIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.meals.add_meal(
        actor,
        date=body.date,
        member_key=body.member_id,
        meal_type=body.meal_type.value,
        guest_meal_type=body.guest_meal_type.value if body.guest_meal_type else None,
        meal_time=body.meal_time.value if body.meal_time else None,
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def remove_meal(
    id: Optional[int] = None,
    date: Optional[str] = None,
    member_id: Optional[str] = None,
    meal_type: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    services.meals.remove_meal(actor, meal_id=id, date=date, member_key=member_id, meal_type=meal_type)
