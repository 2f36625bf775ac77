"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import HealthView, KaohsiungWeatherView, ReverseGeocodeView, WeatherView

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    path("weather", WeatherView.as_view(), name="weather"),
    path("weather/kaohsiung", KaohsiungWeatherView.as_view(), name="weather-kaohsiung"),
    path("reverse-geocode", ReverseGeocodeView.as_view(), name="reverse-geocode"),
]
