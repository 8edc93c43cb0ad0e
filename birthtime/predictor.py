"""Final chat-completion call that produces the prediction text."""

from __future__ import annotations

from typing import Sequence

from birthtime.messages import Message
from birthtime.openai_client import ChatClient

FALLBACK_PREDICTION = "Unable to generate reading. Please try again."

PREDICTION_PARAMS = {
    "temperature": 1,
    "top_p": 1,
    "frequency_penalty": 0,
    "presence_penalty": 0,
    "max_tokens": 5010,
}


def request_prediction(client: ChatClient, messages: Sequence[Message]) -> str:
    """Return the model's reply; OpenAIError propagates to the caller."""
    content = client.complete(messages, **PREDICTION_PARAMS)
    if not content or not content.strip():
        return FALLBACK_PREDICTION
    return content
