"""Runtime settings for the bridge engine and its adapters."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .deal_generator import DEFAULT_MAX_ATTEMPTS

ENV_PREFIX = "BRIDGE_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class EngineSettings(BaseModel):
    max_attempts: int = Field(
        DEFAULT_MAX_ATTEMPTS,
        gt=0,
        description="Attempt budget for deal generation when a request does not set one.",
    )
    log_level: str = Field("WARNING", description="Root logging level for the CLI and server.")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:1420"],
        description="Origins allowed to call the HTTP API.",
    )
    host: str = Field("127.0.0.1", description="Interface the HTTP server binds to.")
    port: int = Field(3001, gt=0, lt=65536, description="Port the HTTP server listens on.")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        """Build settings from ``BRIDGE_*`` variables, e.g. ``BRIDGE_MAX_ATTEMPTS``."""
        source = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in source:
                values[name] = source[key]
        return cls(**values)


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
