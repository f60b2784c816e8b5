"""Bearer-token authentication and role checks for the HTTP API.

Clients send ``Authorization: Bearer <jwt>``. The token is signed with the
configured shared secret and carries the caller's roles:

    {"sub": "ana", "roles": ["ROLE_LIBRARIAN"], "iat": ..., "exp": ...}

Roles may be written with or without the ``ROLE_`` prefix; unknown role
names are ignored. The catalog service has no notion of roles, so every
check happens here, at the route boundary.
"""

import enum
import functools
import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import BaseModel, Field
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..config import get_config

logger = logging.getLogger(__name__)

ROLE_PREFIX = "ROLE_"

Endpoint = Callable[[Request], Awaitable[Response]]


class Role(str, enum.Enum):
    """Roles recognised by the catalog API."""

    LIBRARIAN = "LIBRARIAN"
    USER = "USER"


class Principal(BaseModel):
    """The authenticated caller of a request."""

    subject: str
    roles: frozenset[Role] = Field(default_factory=frozenset)

    def has_any_role(self, roles: Iterable[Role]) -> bool:
        return not self.roles.isdisjoint(roles)


class AuthenticationError(Exception):
    """Raised when a request carries no usable credentials."""


def parse_roles(raw: object) -> frozenset[Role]:
    """Turn a ``roles`` claim into known roles, dropping anything unrecognised."""
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list | tuple):
        return frozenset()

    roles = set()
    for name in raw:
        if not isinstance(name, str):
            continue
        name = name.strip().upper().removeprefix(ROLE_PREFIX)
        try:
            roles.add(Role(name))
        except ValueError:
            logger.debug("Ignoring unknown role %r", name)
    return frozenset(roles)


def create_access_token(
    subject: str,
    roles: Iterable[Role | str],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed bearer token for ``subject`` with the given roles."""
    config = get_config()
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.access_token_expire_minutes)

    now = datetime.now(UTC)
    payload = {
        "sub": subject,
        "roles": [ROLE_PREFIX + Role(r).value for r in roles],
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, config.jwt_secret_key, algorithm=config.jwt_algorithm)


def decode_token(token: str) -> Principal:
    """
    Validate a bearer token and return its principal.

    Raises:
        AuthenticationError: If the token is malformed, expired or badly signed
    """
    config = get_config()
    try:
        payload = jwt.decode(
            token,
            config.jwt_secret_key,
            algorithms=[config.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid authentication credentials") from e

    return Principal(subject=str(payload["sub"]), roles=parse_roles(payload.get("roles")))


def authenticate(request: Request) -> Principal:
    """
    Extract and validate the bearer token of a request.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Not authenticated")
    return decode_token(token.strip())


def require_roles(*roles: Role) -> Callable[[Endpoint], Endpoint]:
    """
    Restrict an endpoint to callers holding at least one of ``roles``.

    Answers 401 without valid credentials and 403 when the caller's roles do
    not qualify. The principal is stored on ``request.state.principal``.
    """
    allowed = frozenset(roles)

    def decorator(endpoint: Endpoint) -> Endpoint:
        @functools.wraps(endpoint)
        async def wrapper(request: Request) -> Response:
            try:
                principal = authenticate(request)
            except AuthenticationError as e:
                return JSONResponse(
                    {"detail": str(e)},
                    status_code=401,
                    headers={"WWW-Authenticate": "Bearer"},
                )

            if not principal.has_any_role(allowed):
                logger.warning(
                    "Forbidden: %s (roles=%s) called %s %s",
                    principal.subject,
                    sorted(r.value for r in principal.roles),
                    request.method,
                    request.url.path,
                )
                return JSONResponse({"detail": "Insufficient permissions"}, status_code=403)

            request.state.principal = principal
            return await endpoint(request)

        return wrapper

    return decorator
