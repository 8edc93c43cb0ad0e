"""Full cycle: geocode, solar times, prompt, prediction."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Optional

from birthtime import geo, predictor, prompt_builder, solar_times
from birthtime.messages import message_text
from birthtime.models import BirthFormData, Coordinates, SolarTimes, UploadedPhoto
from birthtime.openai_client import ChatClient

logger = logging.getLogger(__name__)


@dataclass
class ReadingResult:
    coordinates: Coordinates
    solar: SolarTimes
    prediction: str


def generate_reading(
    client: ChatClient,
    birth: BirthFormData,
    photo: Optional[UploadedPhoto] = None,
    resolver: Optional[solar_times.SolarTimeResolver] = None,
) -> ReadingResult:
    """Run the pipeline for one submission.

    Enrichment steps never raise; errors from the prediction call propagate.
    """
    coordinates = geo.resolve_coordinates(client, birth.location)
    date = birth.date or dt.date.today().isoformat()
    resolver = resolver or solar_times.default_resolver(client)
    solar = resolver.resolve(coordinates, date)

    messages = prompt_builder.build_messages(birth, solar, photo)
    logger.info(
        "Requesting prediction (method=%s, photo=%s, prompt_chars=%d)",
        birth.method,
        "yes" if photo is not None else "no",
        sum(len(message_text(message)) for message in messages),
    )
    prediction = predictor.request_prediction(client, messages)
    return ReadingResult(coordinates=coordinates, solar=solar, prediction=prediction)
