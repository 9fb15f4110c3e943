"""Tests for the member list cache."""

from messledger.cache import NullMemberCache, TTLMemberCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _counting_loader(result):
    calls = []

    def loader():
        calls.append(1)
        return list(result)

    return loader, calls


def test_ttl_cache_serves_within_ttl():
    clock = FakeClock()
    cache = TTLMemberCache(ttl=60, clock=clock)
    loader, calls = _counting_loader(["a"])

    assert cache.get(loader) == ["a"]
    clock.now = 59
    assert cache.get(loader) == ["a"]
    assert len(calls) == 1


def test_ttl_cache_reloads_after_expiry():
    clock = FakeClock()
    cache = TTLMemberCache(ttl=60, clock=clock)
    loader, calls = _counting_loader(["a"])

    cache.get(loader)
    clock.now = 60
    cache.get(loader)
    assert len(calls) == 2


def test_ttl_cache_invalidate_forces_reload():
    cache = TTLMemberCache(ttl=60, clock=FakeClock())
    loader, calls = _counting_loader(["a"])

    cache.get(loader)
    cache.invalidate()
    cache.get(loader)
    assert len(calls) == 2


def test_ttl_cache_returns_copies():
    cache = TTLMemberCache(ttl=60, clock=FakeClock())
    loader, _ = _counting_loader(["a"])

    first = cache.get(loader)
    first.append("b")
    assert cache.get(loader) == ["a"]


def test_null_cache_always_loads():
    cache = NullMemberCache()
    loader, calls = _counting_loader(["a"])

    cache.get(loader)
    cache.get(loader)
    assert len(calls) == 2


def test_member_writes_invalidate_cache(temp_db, admin):
    from messledger.domain.member import MemberService

    service = MemberService(temp_db, TTLMemberCache(ttl=3600))
    assert service.list_members() == []

    service.create_member(admin, user_id="u1", name="Alice")
    assert [m.name for m in service.list_members()] == ["Alice"]

    service.update_member(admin, "u1", name="Alicia")
    assert [m.name for m in service.list_members()] == ["Alicia"]

    service.delete_member(admin, "u1")
    assert service.list_members() == []
