# app/reservations.py

"""Reservation lifecycle: create, read, update and delete appointments.

Every write goes through ``check_slot_conflict`` first. The unique
constraint on (time_block_id, date_time) catches whatever slips between
the check and the commit, and is reported the same way.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError

from app.core import parse_id, parse_date_time, check_slot_conflict
from app.errors import ValidationError, NotFoundError, slot_taken
from app.repository import Store
from app.schemas import (
    ReservationCreate,
    ReservationUpdate,
    ReservationPublic,
    to_reservation_public,
)

logger = logging.getLogger(__name__)


def _missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _get_or_404(store: Store, reservation_id: int):
    appointment = store.get_reservation(reservation_id)
    if appointment is None:
        raise NotFoundError("NotFound", f"Reservation with ID {reservation_id} not found.")
    return appointment


def create_reservation(store: Store, data: ReservationCreate) -> ReservationPublic:
    if _missing(data.user_id) or _missing(data.time_block_id) or _missing(data.date_time):
        raise ValidationError("MissingFields", "Missing required fields: userId, timeBlockId or dateTime.")

    user_id = parse_id(data.user_id)
    time_block_id = parse_id(data.time_block_id)
    date_time = parse_date_time(data.date_time)

    if store.get_user(user_id) is None:
        raise ValidationError("UnknownUser", f"User with ID {user_id} does not exist.")
    if store.get_time_block(time_block_id) is None:
        raise ValidationError("UnknownTimeBlock", f"Time block with ID {time_block_id} does not exist.")

    check_slot_conflict(store, time_block_id, date_time)

    try:
        appointment = store.create_reservation(user_id, time_block_id, date_time)
    except IntegrityError:
        raise slot_taken()

    logger.info("Created reservation id=%s block=%s at %s", appointment.id, time_block_id, date_time)
    return to_reservation_public(appointment)


def get_reservation(store: Store, raw_id) -> ReservationPublic:
    reservation_id = parse_id(raw_id)
    return to_reservation_public(_get_or_404(store, reservation_id))


def list_reservations(store: Store) -> List[ReservationPublic]:
    return [to_reservation_public(a) for a in store.list_reservations()]


def update_reservation(store: Store, raw_id, data: ReservationUpdate) -> ReservationPublic:
    reservation_id = parse_id(raw_id)
    appointment = _get_or_404(store, reservation_id)

    updates = {}
    if not _missing(data.date_time):
        date_time = parse_date_time(
            data.date_time, message="The dateTime value for the update is not a valid date and time."
        )
        if date_time != appointment.date_time:
            updates["date_time"] = date_time
    if not _missing(data.time_block_id):
        time_block_id = parse_id(data.time_block_id)
        if time_block_id != appointment.time_block_id:
            if store.get_time_block(time_block_id) is None:
                raise ValidationError("UnknownTimeBlock", f"Time block with ID {time_block_id} does not exist.")
            updates["time_block_id"] = time_block_id

    if updates:
        check_slot_conflict(
            store,
            updates.get("time_block_id", appointment.time_block_id),
            updates.get("date_time", appointment.date_time),
            exclude_id=reservation_id,
        )
        try:
            appointment = store.update_reservation(appointment, **updates)
        except IntegrityError:
            raise slot_taken()
        logger.info("Updated reservation id=%s fields=%s", reservation_id, sorted(updates))

    return to_reservation_public(appointment)


def delete_reservation(store: Store, raw_id) -> ReservationPublic:
    reservation_id = parse_id(raw_id)
    appointment = _get_or_404(store, reservation_id)

    # snapshot before the row goes away
    deleted = to_reservation_public(appointment)
    store.delete_reservation(appointment)

    logger.info("Deleted reservation id=%s", reservation_id)
    return deleted
