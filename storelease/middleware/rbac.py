from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from storelease.errors import UnauthorizedError, ForbiddenError
from storelease.security import decode_token
from storelease.vars import MESSAGES, ROLE_CAPABILITIES

bearer_scheme = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    """The caller as described by a verified access token."""

    user_id: str
    role: str


def has_capability(role: str | None, capability: str) -> bool:
    return capability in ROLE_CAPABILITIES.get(role or "", frozenset())


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError(MESSAGES["token_required"])
    payload = decode_token(credentials.credentials, request.app.state.settings)
    return Principal(user_id=payload["userId"], role=payload.get("role", ""))


async def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal | None:
    if credentials is None:
        return None
    try:
        payload = decode_token(credentials.credentials, request.app.state.settings)
    except UnauthorizedError:
        # an unusable token on a public route just means an anonymous caller
        return None
    return Principal(user_id=payload["userId"], role=payload.get("role", ""))


def require_capability(capability: str):
    async def capability_dep(user: Principal = Depends(get_current_user)) -> Principal:
        if not has_capability(user.role, capability):
            raise ForbiddenError()
        return user

    return capability_dep
