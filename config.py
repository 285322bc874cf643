from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_cors_origins() -> List[str]:
    return [
        "http://localhost:3000",
        "http://localhost:5173",
    ]


class Settings(BaseSettings):
    """
    Application settings, read from SCHOOL_* environment variables (or .env).

    store_backend picks the Record Store variant at startup:
      - "memory": process-local dicts, lost on restart
      - "sql":    SQLAlchemy tables at database_url
    """

    app_name: str = "School Admin"
    store_backend: str = Field("memory", pattern="^(memory|sql)$")
    database_url: str = "sqlite:///./school.db"
    log_level: str = "INFO"
    seed_sample_classes: bool = True
    cors_origins: List[str] = Field(default_factory=_default_cors_origins)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="SCHOOL_",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
