"""Abstract base class for weather data sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions at a location (metric units)."""

    location: str
    temperature: float
    feels_like: float
    description: str
    humidity: float
    wind_speed: float


class WeatherSource(ABC):
    """Interface for current-conditions lookups."""

    @abstractmethod
    def fetch_current(self, location: str) -> WeatherReading | None:
        """Fetch current conditions for ``location``.

        Returns:
            A ``WeatherReading``, or ``None`` on any failure (unknown
            location, network error, bad or missing credentials).
        """

    @classmethod
    def source_name(cls) -> str:
        """Return human-readable source name."""
        return cls.__name__
