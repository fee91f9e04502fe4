"""Configuration management using Pydantic Settings"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Simulator settings; every field can be overridden from the environment or .env"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    service_name: str = "fico-simulator"
    log_level: str = "INFO"

    # Document analysis service
    analysis_api_base: str = "http://localhost:8001"
    http_timeout_seconds: float = 30.0  # PDF extraction routinely takes tens of seconds

    # Simulation sessions live in memory only
    max_sessions: int = 500

    @field_validator("analysis_api_base")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()


settings = Settings()
