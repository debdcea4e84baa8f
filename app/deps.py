# app/deps.py

from app.errors import AuthError, FORBIDDEN


def require_role(user: dict, role: str):
    if user["role"] != role:
        raise AuthError("Forbidden", FORBIDDEN, status_code=403)
