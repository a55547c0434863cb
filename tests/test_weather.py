"""Tests for the OpenWeatherMap source — mocked transport, no network calls."""

from __future__ import annotations

import httpx
import pytest

from agentic_rag.weather.base import WeatherReading, WeatherSource
from agentic_rag.weather.openweather import OpenWeatherSource

PARIS_PAYLOAD = {
    "name": "Paris",
    "main": {"temp": 18.2, "feels_like": 17.6, "humidity": 60},
    "weather": [{"description": "clear sky"}],
    "wind": {"speed": 3},
}


def _source(handler, api_key: str | None = "test-key") -> OpenWeatherSource:
    source = OpenWeatherSource(api_key=api_key)
    source._client = httpx.Client(
        base_url="https://weather.test/data/2.5", transport=httpx.MockTransport(handler),
    )
    return source


class TestOpenWeatherSource:
    def test_is_weather_source(self):
        assert issubclass(OpenWeatherSource, WeatherSource)

    def test_fetch_current(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            seen["path"] = request.url.path
            return httpx.Response(200, json=PARIS_PAYLOAD)

        reading = _source(handler).fetch_current("Paris")

        assert reading == WeatherReading(
            location="Paris",
            temperature=18.2,
            feels_like=17.6,
            description="clear sky",
            humidity=60,
            wind_speed=3,
        )
        assert seen["path"].endswith("/weather")
        assert seen["q"] == "Paris"
        assert seen["units"] == "metric"
        assert seen["appid"] == "test-key"

    def test_missing_api_key(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert _source(handler, api_key=None).fetch_current("Paris") is None

    @pytest.mark.parametrize("status", [401, 404, 500])
    def test_http_status_error(self, status: int):
        assert _source(lambda r: httpx.Response(status)).fetch_current("Atlantis") is None

    def test_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        assert _source(handler).fetch_current("Paris") is None

    def test_unexpected_payload(self):
        source = _source(lambda r: httpx.Response(200, json={"name": "Paris"}))
        assert source.fetch_current("Paris") is None
