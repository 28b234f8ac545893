"""
Runtime settings, read from the environment or a local .env file.
"""
from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent.parent / "data"


class Settings(BaseSettings):
    db_path:            Path      = Field(DATA_DIR / "signups.db", alias="SQUADS_DB_PATH")
    default_squad_size: int       = Field(6, alias="SQUADS_DEFAULT_SIZE", ge=1)
    max_squad_size:     int       = Field(50, alias="SQUADS_MAX_SIZE", ge=1)
    log_level:          str       = Field("INFO", alias="SQUADS_LOG_LEVEL")
    cors_origins:       list[str] = Field(["*"], alias="SQUADS_CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value).upper()


settings = Settings()
