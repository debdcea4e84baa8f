# app/repository.py

"""Store - database operations for users, time blocks and appointments"""

from datetime import datetime
from typing import Optional, List

from fastapi import Depends
from sqlmodel import Session, select

from app.db import get_session
from app.models import User, TimeBlock, Appointment


class Store:
    """Persistence collaborator handed to the services, one per request"""

    def __init__(self, session: Session):
        self.session = session

    # --- users ---

    def list_users(self) -> List[User]:
        return self.session.exec(select(User).order_by(User.id)).all()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def create_user(self, **fields) -> User:
        user = User(**fields)
        self.session.add(user)
        self._commit()
        self.session.refresh(user)  # fills user.id
        return user

    def update_user(self, user: User, **updates) -> User:
        for key, value in updates.items():
            setattr(user, key, value)
        self.session.add(user)
        self._commit()
        self.session.refresh(user)
        return user

    # --- time blocks ---

    def list_time_blocks(self) -> List[TimeBlock]:
        return self.session.exec(select(TimeBlock).order_by(TimeBlock.start_time)).all()

    def get_time_block(self, time_block_id: int) -> Optional[TimeBlock]:
        return self.session.get(TimeBlock, time_block_id)

    def create_time_block(self, start_time: datetime, end_time: datetime) -> TimeBlock:
        block = TimeBlock(start_time=start_time, end_time=end_time)
        self.session.add(block)
        self._commit()
        self.session.refresh(block)
        return block

    # --- appointments ---

    def list_reservations(self) -> List[Appointment]:
        return self.session.exec(select(Appointment).order_by(Appointment.date_time)).all()

    def get_reservation(self, reservation_id: int) -> Optional[Appointment]:
        return self.session.get(Appointment, reservation_id)

    def find_reservation_conflict(
        self,
        time_block_id: int,
        date_time: datetime,
        exclude_id: Optional[int] = None,
    ) -> Optional[Appointment]:
        stmt = (
            select(Appointment)
            .where(Appointment.time_block_id == time_block_id)
            .where(Appointment.date_time == date_time)
        )
        if exclude_id is not None:
            stmt = stmt.where(Appointment.id != exclude_id)
        return self.session.exec(stmt).first()

    def create_reservation(self, user_id: int, time_block_id: int, date_time: datetime) -> Appointment:
        appointment = Appointment(user_id=user_id, time_block_id=time_block_id, date_time=date_time)
        self.session.add(appointment)
        self._commit()
        self.session.refresh(appointment)
        return appointment

    def update_reservation(self, appointment: Appointment, **updates) -> Appointment:
        for key, value in updates.items():
            setattr(appointment, key, value)
        self.session.add(appointment)
        self._commit()
        self.session.refresh(appointment)
        return appointment

    def delete_reservation(self, appointment: Appointment) -> None:
        self.session.delete(appointment)
        self._commit()

    def _commit(self) -> None:
        # IntegrityError propagates to the service, which knows what it means
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise


def get_store(session: Session = Depends(get_session)) -> Store:
    """Dependency injection for Store"""
    return Store(session)
