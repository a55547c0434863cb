"""Tolerant extraction of JSON payloads from free-form model output."""

from __future__ import annotations

import json
from typing import Any

from agentic_rag.errors import MalformedOutputError

_DECODER = json.JSONDecoder()


def extract_json_object(text: str) -> dict[str, Any]:
    """Return the first well-formed JSON object embedded in ``text``.

    Prose or markdown fences before and after the object are ignored. Each
    ``{`` is tried in turn as the start of an object, so a malformed fragment
    early in the text does not hide a valid one later.

    Raises:
        MalformedOutputError: No JSON object could be decoded.
    """
    if not text or not text.strip():
        raise MalformedOutputError("Empty model response")

    start = text.find("{")
    while start != -1:
        try:
            payload, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(payload, dict):
            return payload
        start = text.find("{", start + 1)

    raise MalformedOutputError(f"No JSON object found in model response: {text[:200]!r}")
