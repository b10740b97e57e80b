import logging
from dataclasses import dataclass

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.auth import jwt_handler
from backend.core.errors import ForbiddenError, UnauthenticatedError
from backend.models.user import Role

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller as decoded from a bearer token."""

    id: int
    role: Role
    email: str

    @classmethod
    def from_payload(cls, payload: dict) -> "Principal":
        user_id = payload["id"]
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise ValueError("Token id must be an integer")
        return cls(id=user_id, role=Role(payload["role"]), email=str(payload["email"]))


def get_current_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Principal:
    if credentials is None:
        raise UnauthenticatedError("Unauthorized")

    try:
        payload = jwt_handler.decode_access_token(credentials.credentials)
        principal = Principal.from_payload(payload)
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Rejected bearer token for %s: %s", request.url.path, exc)
        raise UnauthenticatedError("Invalid token") from exc

    request.state.principal = principal
    return principal


def require_roles(*roles: Role):
    allowed = frozenset(roles)

    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            raise ForbiddenError("Forbidden")
        return principal

    return dependency


require_admin = require_roles(Role.ADMIN)
require_student = require_roles(Role.STUDENT)
