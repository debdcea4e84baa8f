# app/models.py

import uuid
from typing import Optional, List
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel, Field, Relationship


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC in Python, plain UTC timestamp in the database.

    Naive values are taken as UTC. SQLite has no timezone support, so the
    offset is dropped on the way in and put back on the way out.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def utc_column() -> Column:
    return Column(UTCDateTime(), nullable=False)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    uuid: str = Field(default_factory=lambda: str(uuid.uuid4()), index=True, unique=True)

    name: str
    email: str = Field(index=True, unique=True)
    phone: str = Field(index=True, unique=True)
    password_hash: str
    role: str = "USER"  # USER or ADMIN
    created_at: datetime = Field(default_factory=utcnow, sa_column=utc_column())

    appointments: List["Appointment"] = Relationship(back_populates="user")


class TimeBlock(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    start_time: datetime = Field(sa_column=utc_column())
    end_time: datetime = Field(sa_column=utc_column())

    appointments: List["Appointment"] = Relationship(back_populates="time_block")


class Appointment(SQLModel, table=True):
    # backstop for the check-then-insert race in the conflict checker
    __table_args__ = (
        UniqueConstraint("time_block_id", "date_time", name="uq_timeblock_datetime"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)
    time_block_id: int = Field(foreign_key="timeblock.id", index=True)
    date_time: datetime = Field(sa_column=utc_column())

    user: Optional[User] = Relationship(back_populates="appointments")
    time_block: Optional[TimeBlock] = Relationship(back_populates="appointments")
