"""Utility for resolving stored member references.

Historical rows reference members by internal id, external user id or
display name. New rows store only the canonical key (``str(member.id)``).
"""

from typing import Optional, Sequence

from messledger.domain.entities import Member


def find_member(members: Sequence[Member], candidate: str | int, by_name: bool = True) -> Optional[Member]:
    """Find the member a reference points at.

    Canonical keys win over external ids, which win over names, so a
    member named "2" cannot shadow member 2.

    Args:
        members: Members to search
        candidate: Internal id, external user id or (optionally) name
        by_name: Whether display names are accepted

    Returns:
        Matching member or None
    """
    key = str(candidate).strip()
    for member in members:
        if member.key == key:
            return member
    for member in members:
        if member.user_id == key:
            return member
    if by_name:
        for member in members:
            if member.name == key:
                return member
    return None


def member_reference_keys(member: Member, include_name: bool = False) -> tuple[str, ...]:
    """Return every stored form that may reference the member."""
    keys = [member.key, member.user_id]
    if include_name:
        keys.append(member.name)
    return tuple(dict.fromkeys(keys))
