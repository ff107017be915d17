from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 2048


@dataclass
class Settings:
    model: str
    api_key: Optional[str]
    max_tokens: int
    validate_requests: bool
    log_level: str


def _env(key: str, default: str = "") -> str:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def load_settings() -> Settings:
    """Read settings from the environment. Call ``load_dotenv`` first to pick up ``.env``."""
    return Settings(
        model=_env("GENAPI_MODEL", DEFAULT_MODEL),
        api_key=_env("GENAPI_API_KEY") or None,
        max_tokens=int(_env("GENAPI_MAX_OUTPUT_TOKENS", str(DEFAULT_MAX_TOKENS))),
        validate_requests=_env("GENAPI_VALIDATE_REQUESTS") == "1",
        log_level=_env("GENAPI_LOG_LEVEL", "WARNING").upper(),
    )
