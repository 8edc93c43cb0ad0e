"""CLI for a quick end-to-end check of the prediction pipeline."""

from __future__ import annotations

import argparse
import mimetypes
import sys
from pathlib import Path

from birthtime import config, reading
from birthtime.models import METHOD_MANUAL, METHOD_UPLOAD, BirthFormData, UploadedPhoto
from birthtime.openai_client import ChatClient, OpenAIError


def main() -> int:
    parser = argparse.ArgumentParser(description="Debug birth time prediction")
    parser.add_argument("--location", required=True, help="Birth place (city, country)")
    parser.add_argument("--date", default=None, help="Birth date YYYY-MM-DD")
    parser.add_argument("--time-of-day", default=None, help="Approximate time of day, e.g. morning")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--description", help="Free-text physical description")
    group.add_argument("--photo", type=Path, help="Path to a photo of the person")
    args = parser.parse_args()

    config.setup_logging()

    photo = None
    if args.photo:
        mime_type = mimetypes.guess_type(args.photo.name)[0]
        photo = UploadedPhoto(content=args.photo.read_bytes(), mime_type=mime_type or "")
    birth = BirthFormData(
        location=args.location,
        date=args.date,
        time_of_day=args.time_of_day,
        method=METHOD_UPLOAD if photo else METHOD_MANUAL,
        physical_description=args.description,
    )

    client = ChatClient.from_env()
    try:
        result = reading.generate_reading(client, birth, photo)
    except OpenAIError as exc:
        print(f"Prediction failed: {exc}", file=sys.stderr)
        return 1

    print(f"Coordinates: {result.coordinates.latitude}, {result.coordinates.longitude}")
    print(f"Sunrise: {result.solar.sunrise}, Sunset: {result.solar.sunset}")
    print(result.prediction)
    return 0


if __name__ == "__main__":
    sys.exit(main())
