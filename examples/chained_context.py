#!/usr/bin/env python3
"""Refine an extraction with extra context and a worked example."""

import logging

from llmjson import ParseError, Translator

logging.basicConfig(level=logging.INFO)

schema = {
    "title": "Recipe",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "servings": {"type": "integer"},
        "ingredients": {"type": "array", "items": {"type": "string"}},
    },
}

t = Translator(schema, debug=True)
t.add_example("Toast for one: bread and butter", {"name": "Toast", "servings": 1, "ingredients": ["bread", "butter"]})

try:
    (
        t.translate("Pancakes: flour, eggs and milk")
        .process_result(lambda result, _: print(f"First pass: {result}"))
        .add_context("It serves four people and needs a pinch of salt.")
        .process_result(lambda result, _: print(f"Refined: {result}"))
    )
except ParseError as e:
    print(f"Model answered with something other than JSON:\n{e.content}")
