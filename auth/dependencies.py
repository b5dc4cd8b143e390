"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``require_auth`` and ``AuthenticatedRoute``.
``authenticate`` is the only place an :class:`AuthenticatedUser` is built;
protected routes receive it as an explicit parameter.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncGenerator, Callable, Coroutine, Optional

from fastapi import Depends, Header, Request, Response
from fastapi.routing import APIRoute
from pydantic import ValidationError as ClaimsValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import UnauthorizedError
from auth.jwt import TokenError, verify_token
from database.session import get_db_session
from utils.schemas import AuthenticatedUser

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def authenticate(authorization: Optional[str]) -> AuthenticatedUser:
    """
    Verify a raw ``Authorization`` header value and return the caller's identity.

    The header presence check runs before verification so an empty token
    is never handed to the verifier.
    """
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise UnauthorizedError("User not authorized or token is missing")
    token = authorization[len(_BEARER_PREFIX):].strip()
    if not token:
        raise UnauthorizedError("User not authorized or token is missing")

    try:
        claims = verify_token(token)
        return AuthenticatedUser(**claims)
    except (TokenError, ClaimsValidationError) as exc:
        logger.debug("Rejected token: %s", exc)
        raise UnauthorizedError("User not authorized") from exc


async def require_auth(
    authorization: Optional[str] = Header(None),
) -> AuthenticatedUser:
    """Dependency form of :func:`authenticate`."""
    return authenticate(authorization)


class AuthenticatedRoute(APIRoute):
    """
    Route that rejects unauthenticated requests before the body is read.

    Routers built with ``route_class=AuthenticatedRoute`` never parse or
    validate a payload from a caller without a valid bearer token.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def authenticated_handler(request: Request) -> Response:
            authenticate(request.headers.get("authorization"))
            return await handler(request)

        return authenticated_handler
