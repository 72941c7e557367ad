#!/usr/bin/env python3
"""Extract structured JSON from text."""

from llmjson import Translator

schema = {
    "title": "Meeting",
    "type": "object",
    "properties": {
        "person": {"type": "string"},
        "time": {"type": "string", "description": "24h time, e.g. 15:00"},
        "location": {"type": "string"},
    },
}

t = Translator(schema)
t.translate("Meeting with John at 3pm tomorrow in the conference room")
print(f"Extracted: {t.result}")
