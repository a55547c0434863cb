"""Weather data sources."""

from agentic_rag.weather.base import WeatherReading, WeatherSource
from agentic_rag.weather.openweather import OpenWeatherSource

__all__ = ["OpenWeatherSource", "WeatherReading", "WeatherSource"]
