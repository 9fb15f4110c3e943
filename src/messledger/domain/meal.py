"""Meal domain service."""

import logging
from typing import Optional

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_self_or_admin
from messledger.domain.entities import Actor, GuestMealType, Meal, MealTime, MealType
from messledger.domain.member import MemberService
from messledger.domain.validation import choice, date_key
from messledger.utils.member_resolver import member_reference_keys

logger = logging.getLogger(__name__)


class MealService:
    """Service for daily meal attendance.

    Guest meals booked through this service are stored as meal rows flagged
    ``is_guest``; the dedicated guest meal store is handled by
    ``GuestMealService``.
    """

    def __init__(self, db: Database, members: MemberService):
        self.db = db
        self.members = members

    def list_meals(
        self,
        date: Optional[str] = None,
        month: Optional[str] = None,
        member_key: Optional[str] = None,
    ) -> list[Meal]:
        """List meals for a date or a month, optionally for one member."""
        member_ids = None
        if member_key is not None:
            member_ids = member_reference_keys(self.members.require_member(member_key))
        if date is not None:
            date = date_key(date)
        return self.db.list_meals(date=date, month=month, member_ids=member_ids)

    def get_meal(self, meal_id: int) -> Meal:
        meal = self.db.get_meal(meal_id)
        if meal is None:
            raise errors.NotFoundError(errors.meal_not_found())
        return meal

    def add_meal(
        self,
        actor: Actor,
        date: str,
        member_key: str,
        meal_type: str,
        guest_meal_type: Optional[str] = None,
        meal_time: Optional[str] = None,
    ) -> Meal:
        """Record a meal.

        Args:
            actor: Caller; members may only record their own meals
            date: Meal date
            member_key: Member reference
            meal_type: 'lunch', 'dinner' or 'guest'
            guest_meal_type: Dish for guest meals
            meal_time: Lunch or dinner, for guest meals

        Returns:
            Created meal

        Raises:
            ConflictError: If the member already has that regular meal on the date
        """
        date = date_key(date)
        meal_type = choice("meal type", meal_type, MealType)
        member = self.members.require_member(member_key)
        require_self_or_admin(actor, member, "meals")

        is_guest = meal_type == MealType.GUEST.value
        if is_guest:
            if guest_meal_type is None or meal_time is None:
                raise errors.ValidationError("Guest meals need a guest meal type and meal time")
            guest_meal_type = choice("guest meal type", guest_meal_type, GuestMealType)
            meal_time = choice("meal time", meal_time, MealTime)
        else:
            guest_meal_type = None
            meal_time = None
            existing = self.db.find_regular_meal(date, member_reference_keys(member), meal_type)
            if existing is not None:
                raise errors.ConflictError("Meal already exists")

        meal_id = self.db.create_meal(
            date=date,
            member_id=member.key,
            member_name=member.name,
            meal_type=meal_type,
            is_guest=is_guest,
            guest_meal_type=guest_meal_type,
            meal_time=meal_time,
        )
        logger.info("Recorded %s meal %s for %s on %s", meal_type, meal_id, member.name, date)

        return self.get_meal(meal_id)

    def remove_meal(
        self,
        actor: Actor,
        meal_id: Optional[int] = None,
        date: Optional[str] = None,
        member_key: Optional[str] = None,
        meal_type: Optional[str] = None,
    ) -> None:
        """Remove a meal by ID, or a regular meal by (date, member, type)."""
        if meal_id is not None:
            meal = self.get_meal(meal_id)
            if not actor.is_admin:
                member = self.members.require_member(actor.id)
                if not member.matches(meal.member_id):
                    raise errors.AuthorizationError(errors.own_records_only("meals"))
        else:
            if date is None or member_key is None or meal_type is None:
                raise errors.ValidationError("Provide a meal ID, or date, member and meal type")
            date = date_key(date)
            meal_type = choice("meal type", meal_type, MealType)
            member = self.members.require_member(member_key)
            require_self_or_admin(actor, member, "meals")
            meal = self.db.find_regular_meal(date, member_reference_keys(member), meal_type)
            if meal is None:
                raise errors.NotFoundError(errors.meal_not_found())

        self.db.delete_meal(meal.id)
        logger.info("Removed %s meal %s for %s on %s", meal.meal_type.value, meal.id, meal.member_name, meal.date)
