"""Tests for the chat-completion client (requests mocked)."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

import requests

from birthtime import messages
from birthtime.openai_client import ChatClient, OpenAIError, extract_json_object


def fake_response(status_code=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.json.return_value = payload
    return resp


class ChatClientTest(unittest.TestCase):
    def setUp(self):
        self.client = ChatClient(api_key="sk-test", model="gpt-test", timeout=5)
        self.msgs = [messages.system("sys"), messages.user("hello")]

    def test_complete_sends_payload_and_returns_content(self):
        resp = fake_response(payload={"choices": [{"message": {"content": "hi there"}}]})
        with patch("birthtime.openai_client.requests.post", return_value=resp) as post:
            answer = self.client.complete(self.msgs, temperature=0, max_tokens=100, top_p=None)
        self.assertEqual(answer, "hi there")
        kwargs = post.call_args.kwargs
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer sk-test")
        self.assertEqual(kwargs["timeout"], 5)
        self.assertEqual(kwargs["json"]["model"], "gpt-test")
        self.assertEqual(kwargs["json"]["temperature"], 0)
        self.assertNotIn("top_p", kwargs["json"])
        self.assertEqual(
            kwargs["json"]["messages"],
            [{"role": "system", "content": "sys"}, {"role": "user", "content": "hello"}],
        )

    def test_missing_key(self):
        with self.assertRaises(OpenAIError):
            ChatClient(api_key=None).complete(self.msgs)

    def test_network_error(self):
        with patch("birthtime.openai_client.requests.post", side_effect=requests.ConnectionError("down")):
            with self.assertRaises(OpenAIError):
                self.client.complete(self.msgs)

    def test_bad_status(self):
        with patch("birthtime.openai_client.requests.post", return_value=fake_response(429, text="slow down")):
            with self.assertRaises(OpenAIError):
                self.client.complete(self.msgs)

    def test_no_choices(self):
        with patch("birthtime.openai_client.requests.post", return_value=fake_response(payload={"choices": []})):
            with self.assertRaises(OpenAIError):
                self.client.complete(self.msgs)

    def test_null_content_returns_none(self):
        resp = fake_response(payload={"choices": [{"message": {"content": None}}]})
        with patch("birthtime.openai_client.requests.post", return_value=resp):
            self.assertIsNone(self.client.complete(self.msgs))


class ExtractJsonObjectTest(unittest.TestCase):
    def test_object_inside_prose(self):
        text = 'Sure! Here you go:\n{"latitude": 41.88, "longitude": -87.63}\nAnything else?'
        self.assertEqual(extract_json_object(text), {"latitude": 41.88, "longitude": -87.63})

    def test_only_first_object_is_used(self):
        text = 'First {"latitude": 1, "longitude": 2}, then {"latitude": 3}'
        self.assertEqual(extract_json_object(text), {"latitude": 1, "longitude": 2})

    def test_no_object(self):
        with self.assertRaises(ValueError):
            extract_json_object("no braces here")
        with self.assertRaises(ValueError):
            extract_json_object(None)

    def test_malformed_object(self):
        with self.assertRaises(ValueError):
            extract_json_object("{latitude: 41}")


if __name__ == "__main__":
    unittest.main()
