# app/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Header
from jose import jwt, JWTError
from passlib.context import CryptContext

from app.config import settings
from app.errors import AuthError, MISSING_TOKEN, MALFORMED_AUTH, INVALID_TOKEN

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthError("InvalidOrExpiredToken", INVALID_TOKEN, status_code=403)

    user_id = payload.get("id")
    role = payload.get("role")
    if user_id is None or role is None:
        raise AuthError("InvalidOrExpiredToken", INVALID_TOKEN, status_code=403)

    return {"id": user_id, "role": role}


def get_current_user(authorization: Optional[str] = Header(default=None)) -> dict:
    """
    Bearer token gate. Returns the identity embedded in the token without
    looking the user up again; role checks are up to the handler.
    """
    if authorization is None or not authorization.strip():
        raise AuthError("MissingToken", MISSING_TOKEN)

    parts = authorization.strip().split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthError("MalformedAuth", MALFORMED_AUTH)

    return decode_access_token(parts[1])
