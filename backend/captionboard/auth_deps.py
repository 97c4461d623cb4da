from __future__ import annotations
import jwt
import structlog
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from captionboard.errors import Unauthenticated
from captionboard.security import Principal, principal_from_token

log = structlog.get_logger()

# auto_error=False: anonymous callers are allowed on read endpoints
security = HTTPBearer(auto_error=False)

async def get_optional_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Principal | None:
    if credentials is None:
        return None
    try:
        principal = principal_from_token(credentials.credentials)
    except (jwt.InvalidTokenError, ValueError) as e:
        log.info("auth_token_rejected", reason=str(e))
        return None
    structlog.contextvars.bind_contextvars(user_id=str(principal.id))
    return principal

async def get_principal(principal: Principal | None = Depends(get_optional_principal)) -> Principal:
    if principal is None:
        raise Unauthenticated()
    return principal
