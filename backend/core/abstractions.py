"""Core abstractions for the weather proxy domain."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Protocol


@dataclass(slots=True)
class ForecastWindow:
    """One forecast time slot flattened from the CWA element series.

    Every value field is a display string; an element missing from the
    upstream slot leaves its field empty.
    """

    startTime: str
    endTime: str
    weather: str = ""
    rain: str = ""
    minTemp: str = ""
    maxTemp: str = ""
    comfort: str = ""
    windSpeed: str = ""


@dataclass(slots=True)
class WeatherResult:
    """Normalized forecast for a single location."""

    city: str
    updateTime: str
    forecasts: List[ForecastWindow] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    """Administrative-area name resolved from a coordinate pair."""

    city: str
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)


class ForecastProvider(Protocol):
    """A data source returning normalized forecasts by location name."""

    name: str

    def forecast(self, location_name: str) -> WeatherResult:
        """Return the flattened forecast for ``location_name``."""
        ...


class GeocodeProvider(Protocol):
    """A data source capable of reverse geocoding a coordinate pair."""

    name: str

    def locate_city(self, latitude: str, longitude: str) -> GeocodeResult:
        """Return the administrative-area name for the coordinates."""
        ...


__all__ = [
    "ForecastWindow",
    "WeatherResult",
    "GeocodeResult",
    "ForecastProvider",
    "GeocodeProvider",
]
