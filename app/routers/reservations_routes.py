# app/routers/reservations_routes.py

from fastapi import APIRouter, Depends

from app.repository import Store, get_store
from app.reservations import (
    create_reservation,
    get_reservation,
    update_reservation,
    delete_reservation,
)
from app.schemas import (
    ReservationCreate,
    ReservationUpdate,
    ReservationPublic,
    ReservationDeleted,
)

router = APIRouter(
    prefix="/reservations",
    tags=["reservations"],
)


@router.post("", response_model=ReservationPublic, status_code=201)
def create(
    body: ReservationCreate,
    store: Store = Depends(get_store),
):
    return create_reservation(store, body)


# ids are taken as strings so a bad one is a 400 InvalidId, not a 422
@router.get("/{reservation_id}", response_model=ReservationPublic)
def read(
    reservation_id: str,
    store: Store = Depends(get_store),
):
    return get_reservation(store, reservation_id)


@router.put("/{reservation_id}", response_model=ReservationPublic)
def update(
    reservation_id: str,
    body: ReservationUpdate,
    store: Store = Depends(get_store),
):
    return update_reservation(store, reservation_id, body)


@router.delete("/{reservation_id}", response_model=ReservationDeleted)
def delete(
    reservation_id: str,
    store: Store = Depends(get_store),
):
    deleted = delete_reservation(store, reservation_id)
    return ReservationDeleted(
        message=f"Reservation with ID {deleted.id} deleted successfully.",
        deleted_reservation=deleted,
    )
