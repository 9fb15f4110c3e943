"""Shared pytest fixtures for messledger tests."""

import tempfile
import os
from decimal import Decimal

import pytest

from messledger.config import Settings
from messledger.database.factories import create_sqlite_database
from messledger.domain.entities import Actor, Role
from messledger.domain.services import build_services


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def settings():
    """Settings independent of the environment."""
    return Settings(_env_file=None, jwt_secret="test-secret", min_meals_per_month=40)


@pytest.fixture
def services(temp_db, settings):
    """All domain services over the temporary database."""
    return build_services(temp_db, settings=settings)


@pytest.fixture
def admin():
    return Actor.admin()


@pytest.fixture
def sample_members(services, admin):
    """Create three members; returns them keyed by first name."""
    alice = services.members.create_member(admin, user_id="u-alice", name="Alice", deposit=Decimal("1000"))
    bob = services.members.create_member(admin, user_id="u-bob", name="Bob", deposit=Decimal("500"))
    carol = services.members.create_member(admin, user_id="u-carol", name="Carol")
    return {"alice": alice, "bob": bob, "carol": carol}


def member_actor(member):
    """Actor for a member, as the API would build it from a token."""
    return Actor(id=member.key, role=Role.MEMBER, name=member.name)


@pytest.fixture
def alice_actor(sample_members):
    return member_actor(sample_members["alice"])


@pytest.fixture
def bob_actor(sample_members):
    return member_actor(sample_members["bob"])


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
