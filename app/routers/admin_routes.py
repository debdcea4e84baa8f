# app/routers/admin_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends

from app.auth import get_current_user
from app.core import parse_date_time
from app.deps import require_role
from app.errors import ValidationError
from app.repository import Store, get_store
from app.reservations import list_reservations
from app.schemas import (
    TimeBlockCreate,
    TimeBlockPublic,
    ReservationPublic,
    UserPublic,
    to_time_block_public,
    to_user_public,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
)


@router.post("/time-blocks", response_model=TimeBlockPublic, status_code=201)
def create_time_block(
    block: TimeBlockCreate,
    store: Store = Depends(get_store),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "ADMIN")  # only admins define bookable blocks

    if not block.start_time or not block.end_time:
        raise ValidationError("MissingFields", "Missing required fields: startTime or endTime.")

    start = parse_date_time(block.start_time, message="The startTime value is not a valid date and time.")
    end = parse_date_time(block.end_time, message="The endTime value is not a valid date and time.")
    if end <= start:
        raise ValidationError("InvalidTimeBlock", "endTime must be after startTime.")

    db_block = store.create_time_block(start, end)
    logger.info("Admin id=%s created time block id=%s", current_user["id"], db_block.id)
    return to_time_block_public(db_block)


@router.get("/time-blocks", response_model=List[TimeBlockPublic])
def get_time_blocks(
    store: Store = Depends(get_store),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "ADMIN")
    return [to_time_block_public(b) for b in store.list_time_blocks()]


@router.get("/reservations", response_model=List[ReservationPublic])
def get_reservations(
    store: Store = Depends(get_store),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "ADMIN")
    reservations = list_reservations(store)
    logger.info("Admin id=%s listed %d reservations", current_user["id"], len(reservations))
    return reservations


@router.get("/users", response_model=List[UserPublic])
def get_users(
    store: Store = Depends(get_store),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "ADMIN")
    return [to_user_public(u) for u in store.list_users()]
