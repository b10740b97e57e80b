from datetime import datetime, timedelta, timezone

import jwt

from backend.core import config


def create_access_token(
    user_id: int,
    role: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(days=config.JWT_EXPIRES_DAYS))
    payload = {"id": user_id, "role": role, "email": email, "exp": expire, "iat": issued_at}
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        options={"require": ["exp", "id", "role", "email"]},
    )
