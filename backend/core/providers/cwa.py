from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .base import UpstreamClient
from ..abstractions import ForecastWindow, WeatherResult
from ..errors import NotFound, ServerMisconfiguration


def _percent(value: str) -> str:
    return f"{value}%"


def _celsius(value: str) -> str:
    return f"{value}°C"


def _verbatim(value: str) -> str:
    return value


# element code -> (ForecastWindow field, formatter)
ELEMENT_FIELDS: Mapping[str, tuple[str, Callable[[str], str]]] = {
    "Wx": ("weather", _verbatim),
    "PoP": ("rain", _percent),
    "MinT": ("minTemp", _celsius),
    "MaxT": ("maxTemp", _celsius),
    "CI": ("comfort", _verbatim),
    "WS": ("windSpeed", _verbatim),
}


class CWAForecastProvider(UpstreamClient):
    """Integration with the CWA open-data 36 hour forecast dataset."""

    name = "cwa"
    base_url = "https://opendata.cwa.gov.tw/api"
    dataset_id = "F-C0032-001"
    default_error_message = "無法取得天氣資料"
    unreachable_message = "無法取得天氣資料，請稍後再試"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        dataset_id: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = (base_url or self.base_url).rstrip("/")
        self.dataset_id = dataset_id or self.dataset_id
        self._log = logging.getLogger(self.__class__.__name__)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1/rest/datastore/{self.dataset_id}"

    # Public API ---------------------------------------------------------
    def fetch_forecast(self, location_name: str) -> Dict[str, Any]:
        if not self.api_key:
            raise ServerMisconfiguration("請設定 CWA_API_KEY 環境變數")
        params = {"Authorization": self.api_key, "locationName": location_name}
        return self._get_json(self.endpoint, params=params)

    def forecast(self, location_name: str) -> WeatherResult:
        data = self.fetch_forecast(location_name)
        records = data.get("records")
        locations = records.get("location") if isinstance(records, dict) else None
        if not isinstance(locations, list) or not locations:
            self._log.warning("CWA returned no location for %s", location_name)
            raise NotFound(f"無法取得「{location_name}」的天氣資料（可能是城市名稱不符合 CWA 格式）")
        return build_weather_result(records)


def build_weather_result(records: Mapping[str, Any]) -> WeatherResult:
    """Flatten the first location of a CWA ``records`` object."""
    location = records["location"][0]
    return WeatherResult(
        city=location.get("locationName") or "",
        updateTime=records.get("datasetDescription") or "",
        forecasts=extract_forecasts(location.get("weatherElement") or []),
    )


def extract_forecasts(elements: List[Mapping[str, Any]]) -> List[ForecastWindow]:
    """Turn parallel element series into one window per time slot.

    The slot count and time bounds come from the first series; a series
    missing a slot leaves the matching field empty.
    """
    if not elements:
        return []
    series = {element.get("elementName"): element.get("time") or [] for element in elements}
    first = elements[0].get("time") or []

    result: List[ForecastWindow] = []
    for idx, slot in enumerate(first):
        window = ForecastWindow(
            startTime=slot.get("startTime") or "",
            endTime=slot.get("endTime") or "",
        )
        for code, (field_name, formatter) in ELEMENT_FIELDS.items():
            value = _parameter_name(series.get(code), idx)
            if value is not None:
                setattr(window, field_name, formatter(value))
        result.append(window)
    return result


def _parameter_name(times: Optional[List[Mapping[str, Any]]], index: int) -> Optional[str]:
    if not times or index >= len(times):
        return None
    parameter = times[index].get("parameter") or {}
    value = parameter.get("parameterName")
    if value is None:
        return None
    return str(value)


__all__ = ["CWAForecastProvider", "ELEMENT_FIELDS", "build_weather_result", "extract_forecasts"]
