"""Application settings and configuration helpers."""
from functools import lru_cache
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    database_url: str = Field(
        default="sqlite+aiosqlite:///./employees.db", alias="DATABASE_URL"
    )
    frontend_url: str = Field(default="http://localhost:5173", alias="FRONTEND_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    default_page_size: int = Field(default=10, ge=1, alias="DEFAULT_PAGE_SIZE")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    defaults = Settings.model_fields
    return Settings(
        database_url=os.getenv("DATABASE_URL", defaults["database_url"].default),
        frontend_url=os.getenv("FRONTEND_URL", defaults["frontend_url"].default),
        log_level=os.getenv("LOG_LEVEL", defaults["log_level"].default),
        default_page_size=int(
            os.getenv("DEFAULT_PAGE_SIZE", defaults["default_page_size"].default)
        ),
        host=os.getenv("HOST", defaults["host"].default),
        port=int(os.getenv("PORT", defaults["port"].default)),
    )
