# site_backend/config.py

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Request
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide configuration, read from the environment (and `.env`).
    DATABASE_URL and JWT_SECRET have no defaults: startup fails without them.
    """

    database_url: str
    jwt_secret: str = Field(..., repr=False)

    host: str = "0.0.0.0"
    port: int = 5000

    upload_dir: Path = Path("uploads")
    access_token_expire_minutes: int = 60
    require_auth_for_writes: bool = False

    log_level: str = "INFO"

    model_config = SettingsConfigDict(extra="ignore")

    @field_validator("database_url", "jwt_secret")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
