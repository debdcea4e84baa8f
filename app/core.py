# app/core.py

import re
from datetime import datetime, timezone
from typing import Optional, Union

from app.errors import ValidationError, INVALID_DATETIME, INVALID_ID, slot_taken


ID_REGEX = re.compile(r"^[+-]?[0-9]+$")

# signed 64-bit, the widest integer column the databases hold
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def parse_id(value: Union[int, str, None]) -> int:
    if isinstance(value, bool):
        raise ValidationError("InvalidId", INVALID_ID)
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and ID_REGEX.match(value.strip()):
        number = int(value.strip())
    else:
        raise ValidationError("InvalidId", INVALID_ID)

    if not (MIN_ID <= number <= MAX_ID):
        raise ValidationError("InvalidId", INVALID_ID)
    return number


def normalize_datetime(value: datetime) -> datetime:
    # aware UTC everywhere; naive input is taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date_time(value: Union[str, datetime, None], message: str = INVALID_DATETIME) -> datetime:
    if isinstance(value, datetime):
        return normalize_datetime(value)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("InvalidDateTime", message)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError("InvalidDateTime", message)
    return normalize_datetime(parsed)


def check_slot_conflict(store, time_block_id: int, date_time: datetime, exclude_id: Optional[int] = None) -> None:
    # Exact (time block, date-time) match only; ranges inside a block are not compared.
    conflict = store.find_reservation_conflict(time_block_id, date_time, exclude_id=exclude_id)
    if conflict is not None:
        raise slot_taken()
