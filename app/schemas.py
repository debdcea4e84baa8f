# app/schemas.py

from enum import Enum
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # JSON bodies use camelCase, Python code uses snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserRole(str, Enum):
    user = "USER"
    admin = "ADMIN"


class Token(BaseModel):
    token: str
    token_type: str = "bearer"


# --- auth ---

class RegisterRequest(BaseModel):
    # everything optional so missing fields come back as 400 MissingFields
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(CamelModel):
    id: int
    uuid: str
    name: str
    email: str
    phone: str
    role: UserRole
    created_at: datetime


class Identity(BaseModel):
    id: int
    role: UserRole


# --- time blocks ---

class TimeBlockCreate(CamelModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class TimeBlockPublic(CamelModel):
    id: int
    start_time: datetime
    end_time: datetime


# --- reservations ---

class ReservationCreate(CamelModel):
    user_id: Optional[Union[int, str]] = None
    time_block_id: Optional[Union[int, str]] = None
    date_time: Optional[str] = None


class ReservationUpdate(CamelModel):
    time_block_id: Optional[Union[int, str]] = None
    date_time: Optional[str] = None


class ReservationPublic(CamelModel):
    id: int
    user_id: int
    time_block_id: int
    date_time: datetime
    user: Optional[UserPublic] = None
    time_block: Optional[TimeBlockPublic] = None


class ReservationDeleted(CamelModel):
    message: str
    deleted_reservation: ReservationPublic


# --- legacy file-backed users ---

class LegacyUserInput(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class LegacyUser(CamelModel):
    uuid: str
    numeric_id: int
    name: str
    email: str
    phone: str


class LegacyUserResponse(BaseModel):
    message: str
    user: LegacyUser


class MessageResponse(BaseModel):
    message: str


def to_user_public(user) -> UserPublic:
    return UserPublic(
        id=user.id,
        uuid=user.uuid,
        name=user.name,
        email=user.email,
        phone=user.phone,
        role=user.role,
        created_at=user.created_at,
    )


def to_time_block_public(block) -> TimeBlockPublic:
    return TimeBlockPublic(id=block.id, start_time=block.start_time, end_time=block.end_time)


def to_reservation_public(appointment) -> ReservationPublic:
    return ReservationPublic(
        id=appointment.id,
        user_id=appointment.user_id,
        time_block_id=appointment.time_block_id,
        date_time=appointment.date_time,
        user=to_user_public(appointment.user) if appointment.user else None,
        time_block=to_time_block_public(appointment.time_block) if appointment.time_block else None,
    )
