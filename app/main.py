# app/main.py

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from sqlmodel import Session

from app.config import settings
from app.credentials import ensure_admin
from app.db import engine, init_db
from app.errors import register_error_handlers
from app.repository import Store
from app.routers.admin_routes import router as admin_router
from app.routers.auth_routes import router as auth_router
from app.routers.reservations_routes import router as reservations_router
from app.routers.users_routes import router as users_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# passlib's bcrypt version check is noisy
logging.getLogger("passlib").setLevel(logging.ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    init_db()

    if not settings.is_development and settings.SECRET_KEY == "change-me-later":
        logger.warning("SECRET_KEY is the default value; set it in the environment")

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        with Session(engine) as session:
            ensure_admin(
                Store(session),
                settings.ADMIN_EMAIL,
                settings.ADMIN_PASSWORD,
                settings.ADMIN_NAME,
                settings.ADMIN_PHONE,
            )

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Reservation Booking API", version="0.1.0", lifespan=lifespan)

register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


app.include_router(auth_router)
app.include_router(reservations_router)
app.include_router(admin_router)
app.include_router(users_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}


def run():
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
