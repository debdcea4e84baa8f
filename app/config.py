# app/config.py

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

env_path = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

    DATABASE_URL: str = "sqlite:///./reservations.db"

    SECRET_KEY: str = "change-me-later"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 240  # 4 hours

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # flat file for the legacy /users endpoints
    USERS_FILE: str = "users.json"

    HOST: str = "127.0.0.1"
    PORT: int = 3000

    # optional admin account created/promoted on startup
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_NAME: str = "Administrator"
    ADMIN_PHONE: str = "+1 000-0000"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev")


settings = Settings()
