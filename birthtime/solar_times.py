"""Sunrise/sunset lookup with an ordered fallback pipeline.

Strategies run in order: the public sunrise-sunset.org API, then a model
estimate. When every strategy fails the resolver returns a fixed default pair.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import requests
from timezonefinder import TimezoneFinder

from birthtime import config, messages
from birthtime.models import Coordinates, SolarTimes
from birthtime.openai_client import ChatClient, extract_json_object

logger = logging.getLogger(__name__)

DEFAULT_SOLAR_TIMES = SolarTimes(sunrise="6:30 AM", sunset="7:15 PM")

ESTIMATE_SYSTEM_PROMPT = (
    "You are a helpful assistant that provides accurate sunrise and sunset times "
    "based on scientific calculations."
)

tz_finder = TimezoneFinder()

Strategy = Callable[[Coordinates, str], SolarTimes]


class SolarTimeError(Exception):
    """A single solar-time strategy failed."""


def timezone_for(coordinates: Coordinates) -> dt.tzinfo:
    """Time zone at the coordinates, UTC when none is known."""
    tz_str = tz_finder.timezone_at(lat=coordinates.latitude, lng=coordinates.longitude)
    if not tz_str:
        return dt.timezone.utc
    try:
        return ZoneInfo(tz_str)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown time zone %s, falling back to UTC", tz_str)
        return dt.timezone.utc


def format_clock_time(moment: dt.datetime) -> str:
    """12-hour clock without seconds, e.g. ``5:45 AM``."""
    return moment.strftime("%I:%M %p").lstrip("0")


def localize_timestamp(timestamp: str, tz: dt.tzinfo) -> str:
    """Convert an ISO-8601 UTC timestamp to a local 12-hour clock string."""
    moment = dt.datetime.fromisoformat(timestamp)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    return format_clock_time(moment.astimezone(tz))


def fetch_from_api(
    coordinates: Coordinates,
    date: str,
    *,
    url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> SolarTimes:
    """Query sunrise-sunset.org with unformatted (ISO-8601) timestamps."""
    params = {
        "lat": coordinates.latitude,
        "lng": coordinates.longitude,
        "date": date,
        "formatted": 0,
    }
    try:
        resp = requests.get(
            url or config.get_sunrise_api_url(),
            params=params,
            timeout=timeout if timeout is not None else config.get_sunrise_api_timeout(),
        )
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise SolarTimeError(f"sunrise API request failed: {exc}") from exc

    if resp.status_code != 200 or not isinstance(data, dict) or data.get("status") != "OK":
        status = data.get("status") if isinstance(data, dict) else None
        raise SolarTimeError(f"sunrise API returned HTTP {resp.status_code}, status {status!r}")

    try:
        results = data["results"]
        tz = timezone_for(coordinates)
        return SolarTimes(
            sunrise=localize_timestamp(results["sunrise"], tz),
            sunset=localize_timestamp(results["sunset"], tz),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SolarTimeError("malformed sunrise API results") from exc


def estimate_with_llm(client: ChatClient, coordinates: Coordinates, date: str) -> SolarTimes:
    """Ask the model for an estimate of sunrise and sunset."""
    prompt = (
        "Based on scientific calculations, what would be the approximate sunrise and sunset times "
        f"for a location at latitude {coordinates.latitude}, longitude {coordinates.longitude} "
        f"on date {date}? Respond with only a JSON object in the format: "
        '{"sunrise": "HH:MM AM/PM", "sunset": "HH:MM AM/PM"}'
    )
    reply = client.complete(
        [messages.system(ESTIMATE_SYSTEM_PROMPT), messages.user(prompt)],
        temperature=0,
        max_tokens=100,
    )
    try:
        data = extract_json_object(reply)
    except ValueError as exc:
        raise SolarTimeError(f"Failed to parse times from reply: {reply!r}") from exc
    sunrise, sunset = data.get("sunrise"), data.get("sunset")
    if not (isinstance(sunrise, str) and sunrise.strip() and isinstance(sunset, str) and sunset.strip()):
        raise SolarTimeError(f"reply is missing sunrise/sunset: {data!r}")
    return SolarTimes(sunrise=sunrise.strip(), sunset=sunset.strip())


@dataclass
class SolarTimeResolver:
    """Try each named strategy in order; collapse to ``default``."""

    strategies: Sequence[Tuple[str, Strategy]]
    default: SolarTimes = DEFAULT_SOLAR_TIMES

    def resolve(self, coordinates: Coordinates, date: str) -> SolarTimes:
        for name, strategy in self.strategies:
            try:
                times = strategy(coordinates, date)
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Solar times via %s failed: %s", name, exc)
                continue
            logger.info("Solar times via %s: sunrise %s, sunset %s", name, times.sunrise, times.sunset)
            return times
        logger.error("All solar time strategies failed; using default %s/%s", self.default.sunrise, self.default.sunset)
        return self.default


def default_resolver(client: ChatClient) -> SolarTimeResolver:
    """Public API first, then a model estimate."""
    return SolarTimeResolver(
        strategies=[
            ("sunrise-sunset.org", fetch_from_api),
            ("model estimate", lambda coordinates, date: estimate_with_llm(client, coordinates, date)),
        ]
    )
