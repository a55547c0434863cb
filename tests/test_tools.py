"""Tests for the specialized tools and citation extraction."""

from __future__ import annotations

import pytest
from conftest import ScriptedLLM, StubWeatherSource

from agentic_rag.agent.citations import extract_citations
from agentic_rag.agent.prompts import RAG_SYSTEM_PROMPT, build_rag_prompt, format_context
from agentic_rag.agent.tools import (
    DEFAULT_APOLOGY,
    GeneralTool,
    MathTool,
    RagTool,
    WeatherTool,
    format_weather,
)
from agentic_rag.errors import ConfigurationError, TransportFailureError
from agentic_rag.retrieval.schemas import RetrievedChunk
from agentic_rag.weather.base import WeatherReading

LOCATION_MARKER = "Extract the location name"
UNAVAILABLE_MARKER = "real-time weather data"


def _chunks() -> list[RetrievedChunk]:
    return [
        RetrievedChunk(text="Refunds within 30 days.", score=0.91, metadata={"source": "refunds.md"}),
        RetrievedChunk(text="Gift cards excluded." * 20, score=0.85, metadata={"title": "Gift cards"}),
    ]


# ---------------------------------------------------------------------------
# Weather
# ---------------------------------------------------------------------------


class TestWeatherTool:
    def test_paris(self, paris_reading: WeatherReading):
        llm = ScriptedLLM(rules=[(LOCATION_MARKER, "Paris")])
        source = StubWeatherSource(paris_reading)

        result = WeatherTool(llm, source).run("What's the weather in Paris?")

        assert result.ok
        assert source.locations == ["Paris"]
        for fragment in ("Paris", "18", "clear sky", "60", "3"):
            assert fragment in result.answer
        assert result.answer == (
            "Current weather in Paris:\n"
            "• Temperature: 18°C (feels like 18°C)\n"
            "• Conditions: clear sky\n"
            "• Humidity: 60%\n"
            "• Wind: 3 m/s"
        )

    @pytest.mark.parametrize("raw", ["unknown", "Unknown.", "", "current location", "  \n"])
    def test_no_location_uses_default(self, raw: str, paris_reading: WeatherReading):
        llm = ScriptedLLM(rules=[(LOCATION_MARKER, raw)])
        source = StubWeatherSource(paris_reading)
        WeatherTool(llm, source).run("Is it cold outside?")
        assert source.locations == ["Delhi"]

    def test_configured_default_location(self, paris_reading: WeatherReading):
        llm = ScriptedLLM(rules=[(LOCATION_MARKER, "unknown")])
        source = StubWeatherSource(paris_reading)
        WeatherTool(llm, source, default_location="Lisbon").run("Weather?")
        assert source.locations == ["Lisbon"]

    def test_location_cleanup(self):
        llm = ScriptedLLM(rules=[(LOCATION_MARKER, 'Location: "New York".\nextra line')])
        assert WeatherTool(llm, StubWeatherSource()).extract_location("q") == "New York"

    def test_extraction_failure_uses_default(self, paris_reading: WeatherReading):
        llm = ScriptedLLM(rules=[(LOCATION_MARKER, TransportFailureError("down"))])
        source = StubWeatherSource(paris_reading)
        assert WeatherTool(llm, source).run("weather in Rome?").ok
        assert source.locations == ["Delhi"]

    def test_fetch_failure_generates_apology(self):
        llm = ScriptedLLM(rules=[
            (LOCATION_MARKER, "Atlantis"),
            (UNAVAILABLE_MARKER, "Sorry, I can't get weather for Atlantis. Try a weather site."),
        ])
        result = WeatherTool(llm, StubWeatherSource(None)).run("weather in Atlantis")

        assert result.ok
        assert result.answer.startswith("Sorry, I can't get weather for Atlantis")
        assert "Atlantis" in llm.prompts[-1]

    def test_fetch_and_apology_failure(self):
        llm = ScriptedLLM(rules=[
            (LOCATION_MARKER, "Atlantis"),
            (UNAVAILABLE_MARKER, TransportFailureError("down")),
        ])
        result = WeatherTool(llm, StubWeatherSource(None)).run("weather in Atlantis")
        assert not result.ok
        assert result.tool == "weather"

    def test_configuration_error_propagates(self):
        llm = ScriptedLLM(rules=[(LOCATION_MARKER, ConfigurationError("no key"))])
        with pytest.raises(ConfigurationError):
            WeatherTool(llm, StubWeatherSource()).run("weather?")

    def test_format_weather_rounds(self):
        reading = WeatherReading("Oslo", -2.6, -7.4, "light snow", 87, 4.5)
        text = format_weather(reading)
        assert "-3°C (feels like -7°C)" in text
        assert "Wind: 4.5 m/s" in text

    def test_format_weather_rounds_halves_up(self):
        reading = WeatherReading("Paris", 18.5, -2.5, "clear sky", 60, 3)
        assert "18.5" not in format_weather(reading)
        assert "19°C (feels like -2°C)" in format_weather(reading)


# ---------------------------------------------------------------------------
# Math / General
# ---------------------------------------------------------------------------


class TestMathTool:
    def test_answer(self):
        llm = ScriptedLLM(default="  x = 4  ")
        result = MathTool(llm).run("Solve 2x = 8")
        assert result.ok
        assert result.answer == "x = 4"
        assert "Solve 2x = 8" in llm.prompts[0]
        assert "step by step" in llm.prompts[0]

    def test_failure(self):
        result = MathTool(ScriptedLLM(default=TransportFailureError("down"))).run("1+1")
        assert not result.ok
        assert result.error
        assert "math query" in MathTool.apology

    def test_empty_output_is_failure(self):
        assert not MathTool(ScriptedLLM(default="   ")).run("1+1").ok


class TestGeneralTool:
    def test_answer_verbatim(self):
        llm = ScriptedLLM(default="The capital of France is Paris.")
        result = GeneralTool(llm).run("What is the capital of France?")
        assert result.answer == "The capital of France is Paris."
        assert result.citations == []

    def test_failure(self):
        result = GeneralTool(ScriptedLLM(default=RuntimeError("boom"))).run("hi")
        assert not result.ok
        assert result.error == "boom"
        assert GeneralTool.apology == DEFAULT_APOLOGY


# ---------------------------------------------------------------------------
# RAG synthesis
# ---------------------------------------------------------------------------


class TestRagTool:
    def test_synthesize_with_citations(self):
        llm = ScriptedLLM(default="You have 30 days [1]. Gift cards are excluded [2][7].")
        result = RagTool(llm).synthesize("What is the refund window?", _chunks())

        assert result.ok
        assert [c.index for c in result.citations] == [1, 2]
        assert result.citations[0].source == "refunds.md"
        assert result.citations[1].source == "Gift cards"
        assert llm.systems[0] == RAG_SYSTEM_PROMPT
        assert "[1] (refunds.md)\nRefunds within 30 days." in llm.prompts[0]
        assert "Question: What is the refund window?" in llm.prompts[0]

    def test_failure(self):
        result = RagTool(ScriptedLLM(default=TransportFailureError("down"))).synthesize("q", _chunks())
        assert not result.ok
        assert result.tool == "rag"


class TestCitations:
    def test_ranges_and_lists(self):
        chunks = _chunks() + [RetrievedChunk(text="third", score=0.5)]
        cites = extract_citations("See [1-2] and [3, 1].", chunks)
        assert [c.index for c in cites] == [1, 2, 3]
        assert cites[2].source == "unknown"

    def test_snippet_truncated(self):
        cites = extract_citations("[2]", _chunks())
        assert cites[0].text.endswith("...")
        assert len(cites[0].text) == 203

    def test_none(self):
        assert extract_citations("No references.", _chunks()) == []


class TestPrompts:
    def test_format_context(self):
        text = format_context(["a", "b"], ["s1", "s2"])
        assert text == "[1] (s1)\na\n\n---\n\n[2] (s2)\nb"

    def test_build_rag_prompt(self):
        prompt = build_rag_prompt("Why?", ["ctx"])
        assert prompt.startswith("Documents:\n[1]\nctx")
        assert prompt.rstrip().endswith("Answer:")
