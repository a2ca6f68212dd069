"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from typing import Any, List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

load_dotenv()


class ConfigurationError(Exception):
    """Raised when the environment holds an unusable setting."""


class Settings(BaseModel):
    database_path: str = ":memory:"
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )
    annual_return_rate: float = Field(0.05, gt=0, allow_inf_nan=False)
    seed_demo_data: bool = True
    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


ENVIRONMENT_KEYS = {
    "database_path": "RETIREMENT_DB_PATH",
    "cors_origins": "RETIREMENT_CORS_ORIGINS",
    "annual_return_rate": "RETIREMENT_RETURN_RATE",
    "seed_demo_data": "RETIREMENT_SEED_DEMO",
    "log_level": "RETIREMENT_LOG_LEVEL",
}


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> Settings:
    """Build settings from the environment, with explicit overrides on top."""
    values = {
        field: os.environ[env_key]
        for field, env_key in ENVIRONMENT_KEYS.items()
        if env_key in os.environ
    }
    values.update(overrides or {})
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
