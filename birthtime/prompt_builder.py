"""Message sequence for the birth time prediction."""

from __future__ import annotations

from typing import List, Optional

from birthtime import messages
from birthtime.messages import Message, PartsMessage, TextPart
from birthtime.models import (
    METHOD_MANUAL,
    METHOD_UPLOAD,
    BirthFormData,
    PhysicalAppearance,
    SolarTimes,
    UploadedPhoto,
)

NOT_SPECIFIED = "Not specified"

SYSTEM_PROMPT = (
    "you are the world best vedic astrologer who knows all the secrets and knowledge of astrology "
    "both known and unknown, also has intuition."
)

PHOTO_INSTRUCTION = (
    "Please analyze the attached photo and extract all physical traits and accurately match them "
    "to ascendants vedic physical traits correctly."
)

RESPONSE_TEMPLATE = """Based on your birth details and physical traits, we've calculated your most probable birth time.

Most Accurate Birth Time & Alternatives:

Best Time: [best time]
Alternate Option 1: [alternate time 1]
Alternate Option 2: [alternate time 2]

These times are our best estimates based on analyzing your physical features. The Best Time has the strongest correlation with your unique characteristics."""

APPEARANCE_FIELDS = (
    ("Body Type", "body_type"),
    ("Face Shape", "face_shape"),
    ("Complexion", "complexion"),
    ("Eye Features", "eye_features"),
    ("Body Structure", "body_structure"),
    ("Additional Features", "additional_features"),
)


def _value(text: Optional[str]) -> str:
    return text.strip() if text and text.strip() else NOT_SPECIFIED


def build_details_text(birth: BirthFormData, solar: SolarTimes) -> str:
    """Fixed-order block with the birth details and solar times."""
    return (
        "Generate a detailed vedic astrological birth time prediction based on the following information:\n"
        f"Location: {_value(birth.location)}\n"
        f"Date: {_value(birth.date)}\n"
        f"Approximate Time of Day: {_value(birth.time_of_day)}\n"
        f"Calculated Sunrise Time: {solar.sunrise}\n"
        f"Calculated Sunset Time: {solar.sunset}\n"
    )


def build_appearance_text(appearance: PhysicalAppearance) -> str:
    lines = ["Physical Appearance:"]
    for label, attr in APPEARANCE_FIELDS:
        lines.append(f"- {label}: {_value(getattr(appearance, attr))}")
    return "\n".join(lines) + "\n"


def build_instructions(solar: SolarTimes) -> str:
    """Output template and methodology constraints."""
    return f"""Based on the information provided, determine the most likely birth time for this person in simple terms that someone without astrological knowledge can understand.

IMPORTANT: Do NOT use sunrise ({solar.sunrise}) in your calculations of ascendants or birth time. The sunrise time is provided only as general background information about when the sun was rising on that day, but should NOT influence your prediction methodology or calculations in any way.

Base your prediction SOLELY on the physical traits described and their correlation with astrological indicators. The physical traits are the primary and most important factor in determining the birth time.

Keep your response to approximately 100 words total, and format it EXACTLY according to this template:

{RESPONSE_TEMPLATE}

IMPORTANT: Keep your response simple, brief (about 100 words total), and focused ONLY on the birth time prediction. DO NOT include technical astrological terms or concepts that would confuse someone without astrological knowledge. Follow the template format EXACTLY as shown above."""


def build_subject_message(
    birth: BirthFormData,
    solar: SolarTimes,
    photo: Optional[UploadedPhoto] = None,
) -> Message:
    """User message with the details plus exactly one appearance branch."""
    details = build_details_text(birth, solar)
    description = (birth.physical_description or "").strip()

    if birth.method == METHOD_MANUAL and description:
        return messages.user(f"{details}\nPhysical Description:\n{birth.physical_description}\n")
    if birth.method == METHOD_MANUAL and birth.physical_appearance is not None:
        return messages.user(f"{details}\n{build_appearance_text(birth.physical_appearance)}")
    if birth.method == METHOD_UPLOAD and photo is not None:
        return PartsMessage(
            role=messages.USER,
            parts=(
                TextPart(text=f"{details}\n\n{PHOTO_INSTRUCTION}"),
                photo.to_image_part(),
            ),
        )
    # No usable appearance input: details only.
    return messages.user(details)


def build_messages(
    birth: BirthFormData,
    solar: SolarTimes,
    photo: Optional[UploadedPhoto] = None,
) -> List[Message]:
    return [
        messages.system(SYSTEM_PROMPT),
        build_subject_message(birth, solar, photo),
        messages.user(build_instructions(solar)),
    ]
