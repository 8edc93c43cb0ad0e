"""Chat messages sent to the completion API.

A message is either plain text or a list of content parts (text and image
references). Both render to the OpenAI wire format with ``to_payload``.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Tuple, Union

SYSTEM = "system"
USER = "user"


@dataclass(frozen=True)
class TextPart:
    text: str

    def to_payload(self) -> dict:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImagePart:
    """Image reference; ``url`` may be an http(s) URL or a data URI."""

    url: str

    @classmethod
    def from_bytes(cls, content: bytes, mime_type: str) -> "ImagePart":
        encoded = base64.b64encode(content).decode("ascii")
        return cls(url=f"data:{mime_type};base64,{encoded}")

    def to_payload(self) -> dict:
        return {"type": "image_url", "image_url": {"url": self.url}}


ContentPart = Union[TextPart, ImagePart]


@dataclass(frozen=True)
class TextMessage:
    role: str
    text: str

    def to_payload(self) -> dict:
        return {"role": self.role, "content": self.text}


@dataclass(frozen=True)
class PartsMessage:
    role: str
    parts: Tuple[ContentPart, ...]

    def to_payload(self) -> dict:
        return {"role": self.role, "content": [part.to_payload() for part in self.parts]}


Message = Union[TextMessage, PartsMessage]


def system(text: str) -> TextMessage:
    return TextMessage(role=SYSTEM, text=text)


def user(text: str) -> TextMessage:
    return TextMessage(role=USER, text=text)


def message_text(message: Message) -> str:
    """Concatenate the text content of a message, skipping image parts."""
    if isinstance(message, TextMessage):
        return message.text
    return "\n".join(part.text for part in message.parts if isinstance(part, TextPart))
