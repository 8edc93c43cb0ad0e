"""Wrapper around the OpenAI Chat Completions API."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

import requests

from birthtime import config
from birthtime.messages import Message

logger = logging.getLogger(__name__)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIError(Exception):
    """Base error for OpenAI API calls."""


class ChatClient:
    """Process-wide chat-completion client.

    Built once from the environment and shared by every request; it keeps no
    per-request state.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = config.DEFAULT_OPENAI_MODEL,
        timeout: float = config.DEFAULT_OPENAI_TIMEOUT,
        url: str = OPENAI_URL,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.url = url

    @classmethod
    def from_env(cls) -> "ChatClient":
        return cls(
            api_key=config.get_openai_api_key(),
            model=config.get_openai_model(),
            timeout=config.get_openai_timeout(),
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def complete(self, messages: Sequence[Message], **params: Any) -> Optional[str]:
        """
        Send messages and return the first choice's content.

        :param messages: ordered chat messages, system message first
        :param params: sampling parameters (temperature, max_tokens, top_p, ...)
        :return: reply text, or None when the first choice carries no content
        """
        if not self.api_key:
            raise OpenAIError("OPENAI_API_KEY is not set")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [message.to_payload() for message in messages],
        }
        payload.update({key: value for key, value in params.items() if value is not None})

        try:
            response = requests.post(self.url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.exception("Network error while calling OpenAI")
            raise OpenAIError(f"Network error: {exc}") from exc

        if response.status_code != 200:
            logger.error("OpenAI returned status %s: %s", response.status_code, response.text)
            raise OpenAIError(f"OpenAI error: {response.status_code}")

        try:
            data = response.json()
            choice = data["choices"][0]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.exception("Unexpected OpenAI response format")
            raise OpenAIError("Unexpected OpenAI response") from exc

        message = choice.get("message") if isinstance(choice, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        return content if isinstance(content, str) else None


def extract_json_object(text: Optional[str]) -> dict:
    """Parse the brace-delimited JSON object embedded in a model reply.

    Decoding starts at the first ``{`` and stops at the end of that object, so
    prose around it and anything after it is ignored. Raises ValueError when
    nothing parses to an object.
    """
    start = (text or "").find("{")
    if start < 0:
        raise ValueError("no JSON object in reply")
    data, _ = json.JSONDecoder().raw_decode(text, start)
    if not isinstance(data, dict):
        raise ValueError("reply JSON is not an object")
    return data
