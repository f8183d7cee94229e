"""
Engine configuration.

Settings come from the environment (optionally a ``.env`` file loaded
by python-dotenv). Bad values raise pydantic's ValidationError.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineSettings(BaseModel):
    """Runtime settings.

    Example:
        >>> settings = EngineSettings.from_env({"LOG_LEVEL": "debug"})
        >>> settings.log_level
        'DEBUG'
    """

    model_config = ConfigDict(frozen=True)

    usda_api_key: Optional[str] = None
    kroger_client_id: Optional[str] = None
    kroger_client_secret: Optional[str] = None
    kroger_location_id: Optional[str] = None

    cache_ttl_seconds: float = Field(86400, gt=0)
    enrichment_interval_seconds: float = Field(0.3, ge=0)
    provider_timeout_seconds: float = Field(10, gt=0)
    provider_max_retries: int = Field(3, ge=1)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def kroger_enabled(self) -> bool:
        return bool(self.kroger_client_id and self.kroger_client_secret)

    @property
    def usda_enabled(self) -> bool:
        return bool(self.usda_api_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> EngineSettings:
        """Build settings from ``environ`` (default: process env after ``load_dotenv``)."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        values: dict[str, object] = {
            "usda_api_key": environ.get("USDA_API_KEY") or environ.get("AI_USDA_API_KEY"),
            "kroger_client_id": environ.get("KROGER_CLIENT_ID"),
            "kroger_client_secret": environ.get("KROGER_CLIENT_SECRET"),
            "kroger_location_id": environ.get("KROGER_LOCATION_ID"),
        }

        optional = {
            "cache_ttl_seconds": "NUTRITION_CACHE_TTL_S",
            "enrichment_interval_seconds": "ENRICHMENT_INTERVAL_S",
            "provider_timeout_seconds": "PROVIDER_TIMEOUT_S",
            "provider_max_retries": "PROVIDER_MAX_RETRIES",
            "log_level": "LOG_LEVEL",
        }
        for field_name, env_name in optional.items():
            raw = environ.get(env_name)
            if raw not in (None, ""):
                values[field_name] = raw

        return cls.model_validate(values)
