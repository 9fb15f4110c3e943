"""Member domain service."""

import logging
from decimal import Decimal
from typing import Any, Optional

from messledger.cache import MemberCache, NullMemberCache
from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_admin
from messledger.domain.entities import Actor, Member, MemberOverview, Role
from messledger.domain.validation import date_key, money
from messledger.utils.member_resolver import find_member, member_reference_keys

logger = logging.getLogger(__name__)


class MemberService:
    """Service for managing mess members."""

    def __init__(self, db: Database, cache: Optional[MemberCache] = None):
        """Initialize member service.

        Args:
            db: Database instance
            cache: Member list cache; defaults to no caching
        """
        self.db = db
        self.cache = cache or NullMemberCache()

    def list_members(self) -> list[Member]:
        """List active members (role 'member' or no role), served from the cache."""
        return self.cache.get(self.db.list_members)

    def get_member(self, key: str | int, by_name: bool = False) -> Optional[Member]:
        """Find a member by canonical key, external user id or (optionally) name.

        Members missing from the cached roster (admins, or rows added by
        another process) are looked up in the database directly.
        """
        member = find_member(self.list_members(), key, by_name=by_name)
        if member is not None:
            return member

        text = str(key).strip()
        if text.isdigit():
            member = self.db.get_member(int(text))
            if member is not None:
                return member
        return self.db.get_member_by_user_id(text)

    def require_member(self, key: str | int, by_name: bool = False) -> Member:
        """Like get_member, but raises NotFoundError when nothing matches."""
        member = self.get_member(key, by_name=by_name)
        if member is None:
            raise errors.NotFoundError(errors.member_not_found(str(key)))
        return member

    def resolve_member_key(self, key: str | int) -> str:
        """Return the canonical key for any stored member reference."""
        return self.require_member(key, by_name=True).key

    def create_member(
        self,
        actor: Actor,
        user_id: str,
        name: str,
        role: Optional[str] = Role.MEMBER.value,
        deposit: Decimal | str | int = Decimal("0"),
        email: Optional[str] = None,
        mobile: Optional[str] = None,
        joined_at: Optional[str] = None,
        date_of_birth: Optional[str] = None,
    ) -> Member:
        """Create a member.

        Raises:
            AuthorizationError: If the actor is not an administrator
            ValidationError: If required fields are missing or malformed
            ConflictError: If the external user id is taken
        """
        require_admin(actor)

        user_id = (user_id or "").strip()
        name = (name or "").strip()
        if not user_id:
            raise errors.ValidationError("User ID is required")
        if not name:
            raise errors.ValidationError("Name is required")
        if role is not None and role not in [r.value for r in Role]:
            raise errors.ValidationError(errors.invalid_choice("role", role, [r.value for r in Role]))

        member_id = self.db.create_member(
            user_id=user_id,
            name=name,
            role=role,
            deposit=self._parse_deposit(deposit),
            email=email,
            mobile=mobile,
            joined_at=date_key(joined_at) if joined_at else None,
            date_of_birth=date_key(date_of_birth) if date_of_birth else None,
        )
        self.cache.invalidate()
        logger.info("Created member %s (%s) as %s", member_id, user_id, name)

        return self.require_member(member_id)

    def update_member(self, actor: Actor, key: str | int, **fields: Any) -> Member:
        """Update member profile fields (name, email, mobile, deposit, date_of_birth)."""
        require_admin(actor)
        member = self.require_member(key)

        if "name" in fields:
            fields["name"] = (fields["name"] or "").strip()
            if not fields["name"]:
                raise errors.ValidationError("Name is required")
        if "deposit" in fields:
            fields["deposit"] = self._parse_deposit(fields["deposit"])
        if fields.get("date_of_birth"):
            fields["date_of_birth"] = date_key(fields["date_of_birth"])

        self.db.update_member(member.id, **fields)
        self.cache.invalidate()
        logger.info("Updated member %s: %s", member.key, ", ".join(sorted(fields)))

        return self.require_member(member.id)

    def delete_member(self, actor: Actor, key: str | int) -> None:
        """Delete a member. Records referencing the member are kept."""
        require_admin(actor)
        member = self.require_member(key)
        self.db.delete_member(member.id)
        self.cache.invalidate()
        logger.info("Deleted member %s (%s)", member.key, member.name)

    def member_overview(self, month: Optional[str] = None) -> list[MemberOverview]:
        """Roster with regular meal counts, optionally within a month."""
        meals = self.db.list_meals(month=month, is_guest=False)
        overview = []
        for member in self.list_members():
            keys = member_reference_keys(member)
            overview.append(
                MemberOverview(
                    member_id=member.key,
                    user_id=member.user_id,
                    name=member.name,
                    total_meals=sum(1 for meal in meals if meal.member_id in keys),
                    deposit=member.deposit,
                )
            )
        return overview

    @staticmethod
    def _parse_deposit(value: Decimal | str | int | None) -> Decimal:
        if value is None or value == "":
            return Decimal("0")
        return money(value)
