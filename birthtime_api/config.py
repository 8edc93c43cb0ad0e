"""Configuration helpers for the FastAPI backend."""

from __future__ import annotations

import os
from typing import List

CORS_ORIGINS_ENV = "CORS_ORIGINS"
DEFAULT_CORS_ORIGINS = "http://localhost:3000"


def get_allowed_origins() -> List[str]:
    """Origins allowed to call the API from a browser."""
    raw = os.getenv(CORS_ORIGINS_ENV, DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
