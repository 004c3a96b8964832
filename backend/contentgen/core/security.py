from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import InvalidTokenError
from pydantic import ValidationError
from sqlmodel import SQLModel

from contentgen.core.config import settings
from contentgen.errors import Unauthorized


# Contents of a session token
class SessionPayload(SQLModel):
    sub: str
    name: str | None = None
    email: str | None = None
    login_method: str | None = None


def create_session_token(
    open_id: str,
    *,
    name: str | None = None,
    email: str | None = None,
    login_method: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "exp": expire,
        "sub": open_id,
        "name": name,
        "email": email,
        "login_method": login_method,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> SessionPayload:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        session_data = SessionPayload.model_validate(payload)
    except (InvalidTokenError, ValidationError):
        raise Unauthorized("Could not validate credentials")
    if not session_data.sub:
        raise Unauthorized("Could not validate credentials")
    return session_data
