"""FastAPI dependencies: per-request database, services and caller."""

import logging
from typing import Iterator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from messledger.api.security import decode_access_token
from messledger.database.sqlalchemy_db import SQLAlchemyDatabase
from messledger.domain.entities import Actor, Role
from messledger.domain.services import Services, build_services

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_db(request: Request) -> Iterator[SQLAlchemyDatabase]:
    """Give each request its own session on the shared engine."""
    db = request.app.state.db.spawn()
    try:
        yield db
    finally:
        db.disconnect()


def get_services(request: Request, db: SQLAlchemyDatabase = Depends(get_db)) -> Services:
    return build_services(db, cache=request.app.state.member_cache, settings=request.app.state.settings)


def get_actor(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Actor:
    """Authenticate the bearer token.

    Raises:
        HTTPException: 401 when the token is missing, invalid or expired
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials, request.app.state.settings)
    except JWTError as e:
        logger.debug("Rejected bearer token: %s", e)
        raise _unauthorized("Invalid token")

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or role not in [r.value for r in Role]:
        raise _unauthorized("Invalid token")
    return Actor(id=str(subject), role=Role(role), name=payload.get("name") or "")
