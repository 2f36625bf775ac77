"""REST API views for the weather proxy."""
from __future__ import annotations

from datetime import datetime
from functools import lru_cache

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.core.config import ProxyConfig
from backend.core.errors import ProxyError
from backend.core.services.weather_service import WeatherProxyService


KAOHSIUNG = "高雄市"


@lru_cache(maxsize=1)
def get_proxy_service() -> WeatherProxyService:
    return WeatherProxyService.from_config(ProxyConfig.from_settings(settings))


def error_response(exc: ProxyError) -> Response:
    return Response(exc.as_payload(), status=exc.status_code)


class IndexView(APIView):
    """Welcome payload listing the available endpoints."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        return Response(
            {
                "message": "歡迎使用 CWA 天氣預報 API",
                "endpoints": {
                    "weather": "/api/weather?city=高雄市",
                    "health": "/api/health",
                    "kaohsiungShortcut": "/api/weather/kaohsiung",
                    "reverseGeocode": "/api/reverse-geocode?lat=25.0478&lng=121.5319",
                },
            }
        )


class HealthView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        timestamp = datetime.now(tz=settings.DEFAULT_TIMEZONE).isoformat().replace("+00:00", "Z")
        return Response({"status": "OK", "timestamp": timestamp}, status=status.HTTP_200_OK)


class WeatherView(APIView):
    """Provide the normalized 36 hour forecast for a CWA location name."""

    permission_classes = [AllowAny]

    def get_city(self, request) -> str | None:
        return request.query_params.get("city")

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the flattened forecast windows for the requested city."""
        try:
            result = get_proxy_service().get_weather(self.get_city(request))
        except ProxyError as exc:
            return error_response(exc)
        return Response({"success": True, "data": result.as_dict()}, status=status.HTTP_200_OK)


class KaohsiungWeatherView(WeatherView):
    """Shortcut for the fixed 高雄市 forecast."""

    def get_city(self, request) -> str:
        return KAOHSIUNG


class ReverseGeocodeView(APIView):
    """Resolve coordinates to a CWA-compatible county/city name."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        try:
            result = get_proxy_service().reverse_geocode(
                request.query_params.get("lat"),
                request.query_params.get("lng"),
            )
        except ProxyError as exc:
            return error_response(exc)
        return Response({"success": True, "city": result.city, "raw": result.raw}, status=status.HTTP_200_OK)
