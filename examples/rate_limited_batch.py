#!/usr/bin/env python3
"""Translate several inputs while staying under 3 requests per minute."""

from llmjson import Translator, TranslatorConfig

schema = {"type": "object", "properties": {"city": {"type": "string"}, "country": {"type": "string"}}}

t = Translator(schema, config=TranslatorConfig(max_requests_per_window=3, temperature=0))
for text in ["I live in Lyon", "Greetings from Osaka", "Back home in Porto", "Visiting Quito"]:
    print(t.translate(text).result)
