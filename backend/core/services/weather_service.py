"""Services behind the weather and reverse geocoding endpoints."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

import requests

from backend.core.abstractions import ForecastProvider, GeocodeProvider, GeocodeResult, WeatherResult
from backend.core.config import ProxyConfig
from backend.core.errors import InternalError, MissingParameter, ProxyError, ServerMisconfiguration
from backend.core.providers.base import RequestConfig
from backend.core.providers.cwa import CWAForecastProvider
from backend.core.providers.nominatim import NominatimProvider


logger = logging.getLogger(__name__)

T = TypeVar("T")


class WeatherProxyService:
    """Validate inbound parameters and run the single upstream lookup."""

    def __init__(
        self,
        config: ProxyConfig,
        forecast_provider: ForecastProvider,
        geocode_provider: GeocodeProvider,
    ) -> None:
        self._config = config
        self._forecast = forecast_provider
        self._geocode = geocode_provider

    @classmethod
    def from_config(cls, config: ProxyConfig, session: Optional[requests.Session] = None) -> "WeatherProxyService":
        forecast = CWAForecastProvider(
            api_key=config.cwa_api_key,
            base_url=config.cwa_base_url,
            dataset_id=config.cwa_dataset_id,
            session=session,
            request_config=RequestConfig(timeout=config.timeout),
        )
        geocode = NominatimProvider(
            base_url=config.nominatim_url,
            session=session,
            request_config=RequestConfig(timeout=config.timeout, user_agent=config.nominatim_user_agent),
        )
        return cls(config, forecast, geocode)

    @property
    def config(self) -> ProxyConfig:
        return self._config

    def get_weather(self, city: Optional[str]) -> WeatherResult:
        if not self._config.has_cwa_credential:
            raise ServerMisconfiguration("請在環境變數中設定 CWA_API_KEY")
        city = (city or "").strip()
        if not city:
            raise MissingParameter("請在查詢字串提供 city，例如 ?city=高雄市")

        logger.info("Weather lookup for city=%s", city)
        return self._guard("weather", self._forecast.forecast, city)

    def reverse_geocode(self, latitude: Optional[str], longitude: Optional[str]) -> GeocodeResult:
        latitude = (latitude or "").strip()
        longitude = (longitude or "").strip()
        if not latitude or not longitude:
            raise MissingParameter("請提供 lat 和 lng，例如 /api/reverse-geocode?lat=25.0478&lng=121.5319")

        logger.info("Reverse geocode for lat=%s lng=%s", latitude, longitude)
        return self._guard("reverse-geocode", self._geocode.locate_city, latitude, longitude)

    def _guard(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        try:
            return func(*args)
        except ProxyError as exc:
            logger.warning("%s failed with %s (%s): %s", operation, exc.label, exc.status_code, exc.message)
            raise
        except Exception as exc:  # noqa: BLE001 - malformed upstream payloads end up here
            logger.exception("%s failed unexpectedly", operation)
            raise InternalError() from exc


__all__ = ["WeatherProxyService"]
