"""Prompt construction for each submission branch."""

from __future__ import annotations

import base64
import unittest

from birthtime import prompt_builder
from birthtime.messages import ImagePart, PartsMessage, TextMessage, TextPart, message_text
from birthtime.models import BirthDataError, BirthFormData, SolarTimes, UploadedPhoto

SOLAR = SolarTimes(sunrise="5:26 AM", sunset="8:00 PM")


class BirthFormDataTest(unittest.TestCase):
    def test_from_dict_reads_camel_case(self):
        birth = BirthFormData.from_dict(
            {
                "location": "Chicago",
                "date": "1990-05-15",
                "timeOfDay": "morning",
                "method": "manual",
                "physicalAppearance": {"bodyType": "slim", "faceShape": "oval"},
            }
        )
        self.assertEqual(birth.time_of_day, "morning")
        self.assertEqual(birth.physical_appearance.body_type, "slim")
        self.assertIsNone(birth.physical_appearance.complexion)

    def test_from_dict_rejects_non_object(self):
        for payload in ([1, 2], "text", 3):
            with self.subTest(payload=payload):
                with self.assertRaises(BirthDataError):
                    BirthFormData.from_dict(payload)


class BuildMessagesTest(unittest.TestCase):
    def test_manual_description(self):
        birth = BirthFormData(
            location="Chicago",
            date="1990-05-15",
            time_of_day="morning",
            method="manual",
            physical_description="tall, athletic build",
        )
        msgs = prompt_builder.build_messages(birth, SOLAR)
        self.assertEqual([m.role for m in msgs], ["system", "user", "user"])
        text = message_text(msgs[1])
        self.assertIn("Location: Chicago", text)
        self.assertIn("Date: 1990-05-15", text)
        self.assertIn("Approximate Time of Day: morning", text)
        self.assertIn("Calculated Sunrise Time: 5:26 AM", text)
        self.assertIn("Calculated Sunset Time: 8:00 PM", text)
        self.assertIn("Physical Description:\ntall, athletic build", text)
        self.assertLess(text.index("Location:"), text.index("Date:"))
        self.assertLess(text.index("Calculated Sunset Time"), text.index("Physical Description"))

    def test_structured_appearance_uses_placeholders(self):
        birth = BirthFormData.from_dict(
            {
                "location": "Pune",
                "method": "manual",
                "physicalAppearance": {"bodyType": "stocky", "complexion": "wheatish"},
            }
        )
        text = message_text(prompt_builder.build_messages(birth, SOLAR)[1])
        self.assertIn("- Body Type: stocky", text)
        self.assertIn("- Complexion: wheatish", text)
        self.assertIn("- Face Shape: Not specified", text)
        self.assertIn("- Additional Features: Not specified", text)
        self.assertIn("Date: Not specified", text)
        self.assertNotIn("Physical Description", text)

    def test_upload_with_photo(self):
        birth = BirthFormData(location="Paris", date="1985-01-02", time_of_day="night", method="upload")
        photo = UploadedPhoto(content=b"\x89PNG-bytes", mime_type="image/png")
        msg = prompt_builder.build_messages(birth, SOLAR, photo)[1]
        self.assertIsInstance(msg, PartsMessage)
        text_part, image_part = msg.parts
        self.assertIsInstance(text_part, TextPart)
        self.assertIn(prompt_builder.PHOTO_INSTRUCTION, text_part.text)
        self.assertIsInstance(image_part, ImagePart)
        expected = "data:image/png;base64," + base64.b64encode(b"\x89PNG-bytes").decode("ascii")
        self.assertEqual(image_part.url, expected)
        self.assertEqual(msg.to_payload()["content"][1], {"type": "image_url", "image_url": {"url": expected}})

    def test_upload_without_photo_falls_back_to_text(self):
        birth = BirthFormData(location="Paris", method="upload")
        msg = prompt_builder.build_messages(birth, SOLAR, None)[1]
        self.assertIsInstance(msg, TextMessage)
        self.assertTrue(msg.text.startswith("Generate a detailed vedic"))
        self.assertNotIn("Physical", msg.text)

    def test_photo_without_mime_type_defaults_to_jpeg(self):
        part = UploadedPhoto(content=b"abc", mime_type="").to_image_part()
        self.assertTrue(part.url.startswith("data:image/jpeg;base64,"))

    def test_instructions_forbid_sunrise(self):
        birth = BirthFormData(location="Chicago", method="manual", physical_description="short")
        instructions = prompt_builder.build_messages(birth, SOLAR)[2].text
        self.assertIn("Do NOT use sunrise (5:26 AM)", instructions)
        self.assertIn("Best Time: [best time]", instructions)


if __name__ == "__main__":
    unittest.main()
