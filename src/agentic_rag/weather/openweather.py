"""OpenWeatherMap current-weather source.

Requires an API key (``OPENWEATHER_API_KEY`` or ``weather.api_key``).
"""

from __future__ import annotations

import logging

import httpx

from agentic_rag.weather.base import WeatherReading, WeatherSource

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"


class OpenWeatherSource(WeatherSource):
    """Fetch current conditions from the OpenWeatherMap ``/weather`` endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        units: str = "metric",
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.units = units
        self._client = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def fetch_current(self, location: str) -> WeatherReading | None:
        if not self.api_key:
            logger.warning("OpenWeatherMap API key not configured")
            return None

        try:
            resp = self._client.get(
                "/weather",
                params={"q": location, "units": self.units, "appid": self.api_key},
            )
            resp.raise_for_status()
            data = resp.json()
            return WeatherReading(
                location=data.get("name") or location,
                temperature=data["main"]["temp"],
                feels_like=data["main"]["feels_like"],
                description=data["weather"][0]["description"],
                humidity=data["main"]["humidity"],
                wind_speed=data["wind"]["speed"],
            )
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Weather API returned %d for %r", exc.response.status_code, location
            )
        except httpx.HTTPError as exc:
            logger.warning("Error fetching weather data for %r: %s", location, exc)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Unexpected weather payload for %r: %s", location, exc)
        return None
