# app/db.py

from sqlmodel import SQLModel, create_engine, Session

from app.config import settings


def make_engine(url: str):
    # Heroku/Azure style URLs; SQLAlchemy wants postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}  # required for SQLite + FastAPI

    return create_engine(url, echo=False, connect_args=connect_args)


# Engine = connection to the database
engine = make_engine(settings.DATABASE_URL)


def init_db(bind=None):
    # models must be imported so their tables are registered on the metadata
    from app import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
