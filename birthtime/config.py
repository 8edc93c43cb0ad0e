"""Configuration loading and basic logging."""

import logging
import os
from typing import Final, Optional

from dotenv import load_dotenv

# Pick up a local .env when present.
load_dotenv()

# Environment variable names
OPENAI_API_KEY_ENV: Final[str] = "OPENAI_API_KEY"
OPENAI_MODEL_ENV: Final[str] = "OPENAI_MODEL"
OPENAI_TIMEOUT_ENV: Final[str] = "OPENAI_TIMEOUT_SECONDS"
SUNRISE_API_URL_ENV: Final[str] = "SUNRISE_API_URL"
SUNRISE_API_TIMEOUT_ENV: Final[str] = "SUNRISE_API_TIMEOUT_SECONDS"
LOG_LEVEL_ENV: Final[str] = "BIRTHTIME_LOG_LEVEL"

# Defaults
DEFAULT_OPENAI_MODEL: str = "gpt-4o"
DEFAULT_OPENAI_TIMEOUT: float = 60.0
DEFAULT_SUNRISE_API_URL: str = "https://api.sunrise-sunset.org/json"
DEFAULT_SUNRISE_API_TIMEOUT: float = 10.0


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_openai_api_key() -> Optional[str]:
    """OpenAI key, if set."""
    return os.getenv(OPENAI_API_KEY_ENV) or None


def get_openai_model() -> str:
    """Chat model; it has to accept image input for photo readings."""
    return os.getenv(OPENAI_MODEL_ENV, DEFAULT_OPENAI_MODEL)


def get_openai_timeout() -> float:
    """Timeout for a single chat-completion call, in seconds."""
    return _get_float(OPENAI_TIMEOUT_ENV, DEFAULT_OPENAI_TIMEOUT)


def get_sunrise_api_url() -> str:
    """Base URL of the sunrise/sunset lookup service."""
    return os.getenv(SUNRISE_API_URL_ENV, DEFAULT_SUNRISE_API_URL)


def get_sunrise_api_timeout() -> float:
    """Timeout for the sunrise/sunset lookup, in seconds."""
    return _get_float(SUNRISE_API_TIMEOUT_ENV, DEFAULT_SUNRISE_API_TIMEOUT)


def setup_logging() -> None:
    """Configure basic logging."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
