"""Weather tool — extract location, fetch conditions, format a summary."""

from __future__ import annotations

import logging
import math

from agentic_rag.agent.prompts import (
    LOCATION_EXTRACTION_PROMPT,
    LOCATION_SENTINEL,
    WEATHER_UNAVAILABLE_PROMPT,
)
from agentic_rag.agent.tools.base import Tool
from agentic_rag.errors import ConfigurationError
from agentic_rag.llm.base import LLMProvider
from agentic_rag.weather.base import WeatherReading, WeatherSource

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = "Delhi"

WEATHER_TEMPLATE = """\
Current weather in {location}:
• Temperature: {temperature}°C (feels like {feels_like}°C)
• Conditions: {description}
• Humidity: {humidity:g}%
• Wind: {wind_speed:g} m/s"""


class WeatherTool(Tool):
    """Answer weather questions from a ``WeatherSource``.

    1. Ask the model for the location (or ``unknown``).
    2. Fall back to ``default_location`` when none is found.
    3. Fetch current conditions.
    4. On a failed fetch, let the model write an apology with suggestions.
    5. Otherwise render ``WEATHER_TEMPLATE``.
    """

    name = "weather"
    apology = (
        "I apologize, but I encountered an error while processing your weather query. "
        "Please try again later."
    )

    def __init__(
        self,
        llm_provider: LLMProvider,
        weather_source: WeatherSource,
        default_location: str = DEFAULT_LOCATION,
    ):
        super().__init__(llm_provider)
        self.weather_source = weather_source
        self.default_location = default_location

    def _answer(self, question: str) -> str:
        location = self.extract_location(question)
        logger.info("Extracted location: %s", location)

        reading = self.weather_source.fetch_current(location)
        if reading is None:
            return self._generate(WEATHER_UNAVAILABLE_PROMPT.format(location=location))
        return format_weather(reading)

    def extract_location(self, question: str) -> str:
        """Return the location named in ``question`` or the default location."""
        try:
            raw = self.llm_provider.generate(
                LOCATION_EXTRACTION_PROMPT.format(
                    question=question, sentinel=LOCATION_SENTINEL
                )
            )
        except ConfigurationError:
            raise
        except Exception as exc:
            logger.warning("Error extracting location, using default: %s", exc)
            return self.default_location

        location = _clean_location(raw)
        if not location or location.lower() in (LOCATION_SENTINEL, "current location"):
            return self.default_location
        return location


def format_weather(reading: WeatherReading) -> str:
    return WEATHER_TEMPLATE.format(
        location=reading.location,
        temperature=_round_half_up(reading.temperature),
        feels_like=_round_half_up(reading.feels_like),
        description=reading.description,
        humidity=reading.humidity,
        wind_speed=reading.wind_speed,
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clean_location(raw: str) -> str:
    lines = [line for line in (raw or "").strip().splitlines() if line.strip()]
    if not lines:
        return ""
    location = lines[0].strip()
    if location.lower().startswith("location:"):
        location = location[len("location:"):]
    return location.strip().rstrip(".").strip().strip("\"'`").strip()
