# app/validation.py

"""User field validation shared by registration and the legacy user store."""

import re
from typing import Any, Iterable, NamedTuple, Optional

from app.errors import ValidationError, ConflictError

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")
PHONE_REGEX = re.compile(r"^\+?(\d[\s\-]?)?(\(?\d{2,3}\)?[\s\-]?)?\d{3,4}[\s\-]?\d{3,4}$")
MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 50
MIN_PHONE_LENGTH = 7
MAX_PHONE_LENGTH = 15


class ValidationFailure(NamedTuple):
    kind: str
    message: str


def _field(record: Any, name: str):
    # users come either as dicts (JSON file) or ORM rows
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def validate_user_data(
    user_data: dict,
    users: Iterable[Any],
    exclude_id: Optional[int] = None,
    id_field: str = "id",
) -> Optional[ValidationFailure]:
    """
    Validate name, email and phone, then their uniqueness among ``users``.

    Args:
        user_data: candidate fields (``name``, ``email``, ``phone``)
        users: every existing user record
        exclude_id: id of the record being updated, ignored by the uniqueness checks
        id_field: attribute/key holding the id on each record

    Returns:
        None when valid, otherwise the first failure found
    """
    name = user_data.get("name")
    email = user_data.get("email")
    phone = user_data.get("phone")

    if not name or not email or not phone:
        return ValidationFailure("MissingFields", "Name, email and phone are required.")

    if not isinstance(name, str) or not (MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH):
        return ValidationFailure(
            "InvalidName",
            f"Name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters.",
        )

    if not isinstance(email, str) or not EMAIL_REGEX.match(email):
        return ValidationFailure("InvalidEmail", "Email format is not valid.")

    digits_only = re.sub(r"\D", "", phone) if isinstance(phone, str) else ""
    if (
        not isinstance(phone, str)
        or not PHONE_REGEX.match(phone)
        or not (MIN_PHONE_LENGTH <= len(digits_only) <= MAX_PHONE_LENGTH)
    ):
        return ValidationFailure(
            "InvalidPhone",
            f"Phone format is not valid or its length is outside "
            f"{MIN_PHONE_LENGTH}-{MAX_PHONE_LENGTH} digits.",
        )

    others = [u for u in users if exclude_id is None or _field(u, id_field) != exclude_id]

    if any(_field(u, "email") == email for u in others):
        return ValidationFailure("DuplicateEmail", "Email is already registered.")

    if any(_field(u, "phone") == phone for u in others):
        return ValidationFailure("DuplicatePhone", "Phone is already registered.")

    return None


def raise_for_failure(failure: Optional[ValidationFailure]) -> None:
    if failure is None:
        return
    if failure.kind in ("DuplicateEmail", "DuplicatePhone"):
        raise ConflictError(failure.kind, failure.message)
    raise ValidationError(failure.kind, failure.message)
