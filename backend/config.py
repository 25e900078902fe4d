"""Application settings loaded from the environment."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-based application configuration."""

    # Database
    DATABASE_URL: str = "sqlite:///investments.db"
    AUTO_CREATE_TABLES: bool = True

    # Application
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Dashboard
    PROFIT_SIGNAL_WINDOW_DAYS: int = Field(7, gt=0)

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(20, gt=0)
    MAX_PAGE_SIZE: int = Field(100, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
