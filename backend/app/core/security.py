from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.errors import Unauthorized

ALGORITHM = "HS256"

# auto_error=False so a missing header becomes our own 401 body, not FastAPI's 403
token_auth_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, expires_minutes: Optional[int] = None) -> str:
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM, headers={"typ": "JWT"})


def decode_user_id(token: str) -> str:
    """Return the token's subject, or raise Unauthorized if it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        raise Unauthorized()

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise Unauthorized()
    return user_id


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(token_auth_scheme),
) -> str:
    """
    Resolve the caller's user id from the bearer token.

    Route handlers pass the result explicitly into every bookmark operation.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized()
    return decode_user_id(credentials.credentials)
