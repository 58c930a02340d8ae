import logging
import os
from typing import List

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    brokerage_api_url: str = "http://localhost:8080/api"
    brokerage_api_timeout: float = 10.0
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        # Unknown names fall back to INFO so the app still starts
        value = value.strip().upper()
        return value if isinstance(logging.getLevelName(value), int) else "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            brokerage_api_url=os.getenv("BROKERAGE_API_URL", defaults.brokerage_api_url),
            brokerage_api_timeout=float(os.getenv("BROKERAGE_API_TIMEOUT", defaults.brokerage_api_timeout)),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else defaults.cors_origins,
        )
