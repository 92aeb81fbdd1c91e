"""Application configuration."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SQLITE_MEMORY_DEFAULT = "sqlite+aiosqlite://"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database: accounts live in memory and are re-seeded on every start
    database_url: str = SQLITE_MEMORY_DEFAULT

    # App
    app_name: str = "Energy Billing Service"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 3001

    # Client
    api_url: str = "http://localhost:3001/api"
    request_timeout: float = 10.0

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_db_url(cls, v: str | None) -> str:
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return SQLITE_MEMORY_DEFAULT
        if isinstance(v, str) and not v.startswith("sqlite+aiosqlite://"):
            raise ValueError("Only sqlite+aiosqlite URLs are supported")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


settings = Settings()
