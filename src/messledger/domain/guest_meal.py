"""Guest meal domain service."""

import logging
from typing import Optional

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_self_or_admin
from messledger.domain.entities import Actor, GuestMeal, GuestMealType, MealTime
from messledger.domain.member import MemberService
from messledger.domain.validation import choice, date_key
from messledger.utils.member_resolver import member_reference_keys

logger = logging.getLogger(__name__)


class GuestMealService:
    """Service for meals a member orders for a guest."""

    def __init__(self, db: Database, members: MemberService):
        self.db = db
        self.members = members

    def list_guest_meals(
        self,
        date: Optional[str] = None,
        month: Optional[str] = None,
        member_key: Optional[str] = None,
    ) -> list[GuestMeal]:
        member_ids = None
        if member_key is not None:
            member_ids = member_reference_keys(self.members.require_member(member_key))
        if date is not None:
            date = date_key(date)
        return self.db.list_guest_meals(date=date, month=month, member_ids=member_ids)

    def get_guest_meal(self, guest_meal_id: int) -> GuestMeal:
        guest_meal = self.db.get_guest_meal(guest_meal_id)
        if guest_meal is None:
            raise errors.NotFoundError(errors.guest_meal_not_found(guest_meal_id))
        return guest_meal

    def add_guest_meal(
        self, actor: Actor, date: str, member_key: str, guest_meal_type: str, meal_time: str
    ) -> GuestMeal:
        """Book a guest meal charged to a member."""
        date = date_key(date)
        guest_meal_type = choice("guest meal type", guest_meal_type, GuestMealType)
        meal_time = choice("meal time", meal_time, MealTime)
        member = self.members.require_member(member_key)
        require_self_or_admin(actor, member, "guest meals")

        guest_meal_id = self.db.create_guest_meal(
            date=date,
            member_id=member.key,
            member_name=member.name,
            guest_meal_type=guest_meal_type,
            meal_time=meal_time,
        )
        logger.info("Recorded %s guest meal %s for %s on %s", guest_meal_type, guest_meal_id, member.name, date)

        return self.get_guest_meal(guest_meal_id)

    def remove_guest_meal(self, actor: Actor, guest_meal_id: int) -> None:
        guest_meal = self.get_guest_meal(guest_meal_id)
        if not actor.is_admin:
            member = self.members.require_member(actor.id)
            if not member.matches(guest_meal.member_id):
                raise errors.AuthorizationError(errors.own_records_only("guest meals"))

        self.db.delete_guest_meal(guest_meal_id)
        logger.info("Removed guest meal %s for %s on %s", guest_meal_id, guest_meal.member_name, guest_meal.date)
