from __future__ import annotations
import uuid
from dataclasses import dataclass
from typing import Any
import jwt
from captionboard.config import settings


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, passed explicitly into every handler that needs it."""
    id: uuid.UUID
    email: str | None
    access_token: str


def decode_token(token: str) -> dict[str, Any]:
    return jwt.decode(
        token,
        settings.auth_jwt_secret,
        algorithms=[settings.auth_jwt_algorithm],
        audience=settings.auth_jwt_audience,
        options={"require": ["sub", "exp"]},
    )


def principal_from_token(token: str) -> Principal:
    """Raises jwt.InvalidTokenError or ValueError for anything we can't trust."""
    data = decode_token(token)
    return Principal(id=uuid.UUID(str(data["sub"])), email=data.get("email"), access_token=token)
