import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv(".env")


def _default_db_url() -> str:
    env_url = os.getenv("APP_DATABASE_URL") or os.getenv("DATABASE_URL")
    if env_url:
        return env_url
    return "sqlite:///./books.db"


def _default_otlp_endpoint() -> str:
    return os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel-collector:4318")


class Settings(BaseSettings):
    app_name: str = "Book Catalog"
    version: str = "1.0.0"
    database_url: str = Field(default_factory=_default_db_url)
    database_echo: bool = False
    templates_dir: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "book-catalog"
    otel_exporter_endpoint: str = Field(default_factory=_default_otlp_endpoint)

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


def get_settings() -> Settings:
    settings = Settings()
    if not settings.database_url.strip():
        raise RuntimeError("APP_DATABASE_URL is empty")
    return settings
