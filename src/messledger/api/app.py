"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from messledger.api.routes import (
    admin,
    cooking,
    expenses,
    guest_meals,
    managers,
    market,
    meals,
    members,
    notifications,
    summary,
)
from messledger.cache import MemberCache, TTLMemberCache
from messledger.config import Settings, get_settings
from messledger.database.factories import create_sqlite_database
from messledger.database.sqlalchemy_db import SQLAlchemyDatabase
from messledger.domain import errors

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    errors.ValidationError: 400,
    errors.AuthorizationError: 403,
    errors.NotFoundError: 404,
    errors.ConflictError: 409,
}


async def domain_error_handler(request: Request, exc: errors.DomainError) -> JSONResponse:
    """Map domain errors to HTTP status codes."""
    status_code = 400
    for error_type, code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = code
            break
    if status_code == 403:
        logger.warning("%s %s denied: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(
    database: Optional[SQLAlchemyDatabase] = None,
    settings: Optional[Settings] = None,
    member_cache: Optional[MemberCache] = None,
) -> FastAPI:
    """Create the HTTP application.

    Args:
        database: Database whose engine every request shares; defaults to
            the configured SQLite file
        settings: Application settings; defaults to the environment
        member_cache: Member list cache; defaults to a TTL cache
    """
    settings = settings or get_settings()
    if database is None:
        database = create_sqlite_database(settings.db_path)
        database.initialize_schema()

    app = FastAPI(title="messledger", description="Shared mess management API")
    app.state.settings = settings
    app.state.db = database
    app.state.member_cache = member_cache or TTLMemberCache(ttl=settings.member_cache_ttl)

    app.add_exception_handler(errors.DomainError, domain_error_handler)

    app.include_router(expenses.router)
    app.include_router(summary.router)
    app.include_router(meals.router)
    app.include_router(guest_meals.router)
    app.include_router(market.router)
    app.include_router(managers.router)
    app.include_router(cooking.router)
    app.include_router(members.router)
    app.include_router(notifications.router)
    app.include_router(admin.router)

    return app
