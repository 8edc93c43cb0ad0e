"""Location → coordinates via the chat model."""

from __future__ import annotations

import logging
import math
from typing import Optional

from birthtime import messages
from birthtime.models import Coordinates
from birthtime.openai_client import ChatClient, extract_json_object

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown location"
DEFAULT_COORDINATES = Coordinates(latitude=0.0, longitude=0.0)

SYSTEM_PROMPT = (
    "You are a helpful assistant that provides geographic coordinates. "
    "Respond with only a JSON object containing latitude and longitude."
)


class GeoError(Exception):
    """Coordinates could not be read from the model reply."""


def build_messages(location: str) -> list:
    return [
        messages.system(SYSTEM_PROMPT),
        messages.user(
            f"What are the latitude and longitude coordinates of {location}? "
            'Respond with only a JSON object in the format: {"latitude": number, "longitude": number}'
        ),
    ]


def _degrees(value) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a coordinate")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite coordinate {value!r}")
    return number


def parse_coordinates(reply: Optional[str]) -> Coordinates:
    """Read ``{"latitude": .., "longitude": ..}`` out of a model reply."""
    try:
        data = extract_json_object(reply)
        return Coordinates(latitude=_degrees(data["latitude"]), longitude=_degrees(data["longitude"]))
    except (ValueError, KeyError, TypeError) as exc:
        raise GeoError(f"Failed to parse coordinates from reply: {reply!r}") from exc


def resolve_coordinates(client: ChatClient, location: Optional[str]) -> Coordinates:
    """Geocode a free-text location; falls back to (0, 0) on any failure."""
    query = (location or "").strip() or UNKNOWN_LOCATION
    try:
        reply = client.complete(build_messages(query), temperature=0, max_tokens=100)
        coordinates = parse_coordinates(reply)
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Geocoding failed for %r, using default coordinates: %s", query, exc)
        return DEFAULT_COORDINATES
    logger.info("Resolved %r to %.4f, %.4f", query, coordinates.latitude, coordinates.longitude)
    return coordinates
