# app/legacy_users.py

"""File-backed user list behind the /users endpoints.

Kept apart from the database: these records have no password and no
relation to reservations. Records keep the key names of the
original file (`numericId`), so an existing users.json stays readable.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import List, Optional

from app.config import settings
from app.errors import NotFoundError, InternalError
from app.validation import validate_user_data, raise_for_failure

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found."


class JsonUserStore:
    def __init__(self, path):
        self.path = Path(path)

    def read_users(self) -> List[dict]:
        if not self.path.exists():
            return []
        text = self.path.read_text(encoding="utf-8")
        try:
            return json.loads(text) if text.strip() else []
        except json.JSONDecodeError:
            logger.error("Users file %s is not valid JSON", self.path)
            raise InternalError("StorageError", "Could not read the users file.")

    def write_users(self, users: List[dict]) -> None:
        self.path.write_text(json.dumps(users, indent=2), encoding="utf-8")

    def find(self, users: List[dict], numeric_id: int) -> Optional[dict]:
        return next((u for u in users if u["numericId"] == numeric_id), None)

    def get(self, numeric_id: int) -> dict:
        user = self.find(self.read_users(), numeric_id)
        if user is None:
            raise NotFoundError("NotFound", USER_NOT_FOUND)
        return user

    def create(self, data: dict) -> dict:
        users = self.read_users()
        raise_for_failure(validate_user_data(data, users, id_field="numericId"))

        numeric_id = max((u["numericId"] for u in users), default=0) + 1
        user = {
            "uuid": str(uuid.uuid4()),
            "numericId": numeric_id,
            "name": data["name"],
            "email": data["email"],
            "phone": data["phone"],
        }
        users.append(user)
        self.write_users(users)

        logger.info("Created legacy user numeric_id=%s", numeric_id)
        return user

    def update(self, numeric_id: int, data: dict) -> dict:
        users = self.read_users()
        existing = self.find(users, numeric_id)
        if existing is None:
            raise NotFoundError("NotFound", USER_NOT_FOUND)

        # blank fields keep their current value
        merged = {
            "name": data.get("name") or existing["name"],
            "email": data.get("email") or existing["email"],
            "phone": data.get("phone") or existing["phone"],
        }
        raise_for_failure(validate_user_data(merged, users, exclude_id=numeric_id, id_field="numericId"))

        existing.update(merged)
        self.write_users(users)
        return existing

    def delete(self, numeric_id: int) -> None:
        users = self.read_users()
        remaining = [u for u in users if u["numericId"] != numeric_id]
        if len(remaining) == len(users):
            raise NotFoundError("NotFound", USER_NOT_FOUND)
        self.write_users(remaining)
        logger.info("Deleted legacy user numeric_id=%s", numeric_id)


def get_user_store() -> JsonUserStore:
    """Dependency injection for JsonUserStore"""
    return JsonUserStore(settings.USERS_FILE)
