"""OpenStreetMap Nominatim reverse geocoding provider."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .base import UpstreamClient
from ..abstractions import GeocodeResult
from ..errors import NotFound
from ..normalization import normalize_city_name, select_city_name


class NominatimProvider(UpstreamClient):
    """Resolve coordinates to a Taiwanese county/city name."""

    name = "nominatim"
    base_url = "https://nominatim.openstreetmap.org"
    default_error_message = "無法取得縣市資訊"
    unreachable_message = "無法取得縣市資訊，請稍後再試"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = (base_url or self.base_url).rstrip("/")
        self._log = logging.getLogger(self.__class__.__name__)

    def reverse(self, latitude: str, longitude: str) -> Dict[str, Any]:
        params = {
            "format": "jsonv2",
            "lat": latitude,
            "lon": longitude,
            "accept-language": "zh-TW",
            "addressdetails": 1,
        }
        return self._get_json(f"{self.base_url}/reverse", params=params)

    def locate_city(self, latitude: str, longitude: str) -> GeocodeResult:
        data = self.reverse(latitude, longitude)
        address = data.get("address") or {}
        self._log.debug("Nominatim address for %s,%s: %s", latitude, longitude, address)

        raw_name = select_city_name(address) if isinstance(address, dict) else ""
        if not raw_name:
            self._log.warning("No administrative area in Nominatim address for %s,%s", latitude, longitude)
            raise NotFound("無法從座標取得城市資訊", raw=data)

        city = normalize_city_name(raw_name)
        self._log.info("Reverse geocoded %s -> %s", raw_name, city)
        return GeocodeResult(city=city, raw=data)


__all__ = ["NominatimProvider"]
