"""Request-scoped data: birth form, coordinates, solar times, photo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from birthtime.messages import ImagePart

METHOD_MANUAL = "manual"
METHOD_UPLOAD = "upload"
DEFAULT_PHOTO_MIME = "image/jpeg"


class BirthDataError(Exception):
    """Birth data payload has the wrong shape."""


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


@dataclass
class PhysicalAppearance:
    body_type: Optional[str] = None
    face_shape: Optional[str] = None
    complexion: Optional[str] = None
    eye_features: Optional[str] = None
    body_structure: Optional[str] = None
    additional_features: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PhysicalAppearance":
        return cls(
            body_type=_text(data.get("bodyType")),
            face_shape=_text(data.get("faceShape")),
            complexion=_text(data.get("complexion")),
            eye_features=_text(data.get("eyeFeatures")),
            body_structure=_text(data.get("bodyStructure")),
            additional_features=_text(data.get("additionalFeatures")),
        )


@dataclass
class BirthFormData:
    location: Optional[str] = None
    date: Optional[str] = None
    time_of_day: Optional[str] = None
    method: Optional[str] = None
    physical_description: Optional[str] = None
    physical_appearance: Optional[PhysicalAppearance] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "BirthFormData":
        """Build from the decoded ``birthData`` JSON object (camelCase keys)."""
        if not isinstance(payload, dict):
            raise BirthDataError("birth data must be a JSON object")
        appearance_raw = payload.get("physicalAppearance")
        appearance = (
            PhysicalAppearance.from_dict(appearance_raw) if isinstance(appearance_raw, dict) else None
        )
        return cls(
            location=_text(payload.get("location")),
            date=_text(payload.get("date")),
            time_of_day=_text(payload.get("timeOfDay")),
            method=_text(payload.get("method")),
            physical_description=_text(payload.get("physicalDescription")),
            physical_appearance=appearance,
        )


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class SolarTimes:
    sunrise: str
    sunset: str


@dataclass(frozen=True)
class UploadedPhoto:
    content: bytes
    mime_type: str = DEFAULT_PHOTO_MIME

    def to_image_part(self) -> ImagePart:
        return ImagePart.from_bytes(self.content, self.mime_type or DEFAULT_PHOTO_MIME)
