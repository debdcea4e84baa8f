# app/credentials.py

import logging

from sqlalchemy.exc import IntegrityError

from app.auth import hash_password, verify_password, create_access_token
from app.errors import ValidationError, ConflictError, invalid_credentials
from app.models import User
from app.repository import Store
from app.validation import validate_user_data, raise_for_failure

logger = logging.getLogger(__name__)


def _blank(value) -> bool:
    return value is None or not value.strip()


def register_user(store: Store, email, password, name, phone) -> User:
    if any(_blank(v) for v in (email, password, name, phone)):
        raise ValidationError("MissingFields", "Email, password, name and phone are required.")

    failure = validate_user_data(
        {"name": name, "email": email, "phone": phone},
        store.list_users(),
    )
    raise_for_failure(failure)

    try:
        user = store.create_user(
            name=name,
            email=email,
            phone=phone,
            password_hash=hash_password(password),
            role="USER",
        )
    except IntegrityError:
        # lost a race with a concurrent registration
        raise ConflictError("DuplicateField", "Email or phone is already registered.")

    logger.info("Registered user id=%s", user.id)
    return user


def login_user(store: Store, email, password) -> str:
    user = store.find_user_by_email(email) if email else None

    # same error either way, so callers can't tell which emails are registered
    if user is None or not password or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise invalid_credentials()

    token = create_access_token({"sub": str(user.id), "id": user.id, "role": user.role})
    logger.info("User id=%s logged in", user.id)
    return token


def ensure_admin(store: Store, email: str, password: str, name: str, phone: str) -> User:
    user = store.find_user_by_email(email)
    if user is None:
        user = store.create_user(
            name=name,
            email=email,
            phone=phone,
            password_hash=hash_password(password),
            role="ADMIN",
        )
        logger.info("Created admin user id=%s", user.id)
    elif user.role != "ADMIN":
        user = store.update_user(user, role="ADMIN")
        logger.info("Promoted user id=%s to ADMIN", user.id)
    return user
