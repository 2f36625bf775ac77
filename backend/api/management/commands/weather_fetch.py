"""Management command to query the proxy services from the command line."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_proxy_service
from backend.core.errors import ProxyError


class Command(BaseCommand):
    help = "Fetch the normalized forecast for a city, or resolve coordinates to a city"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--city", type=str, help="CWA location name, e.g. 高雄市")
        parser.add_argument("--lat", type=str, help="Latitude in decimal degrees")
        parser.add_argument("--lng", type=str, help="Longitude in decimal degrees")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        city = options.get("city")
        latitude = options.get("lat")
        longitude = options.get("lng")
        service = get_proxy_service()

        try:
            if city:
                payload = {"success": True, "data": service.get_weather(city).as_dict()}
            elif latitude is not None or longitude is not None:
                result = service.reverse_geocode(latitude, longitude)
                payload = {"success": True, "city": result.city}
            else:
                raise CommandError("--city or both --lat and --lng are required")
        except ProxyError as exc:
            raise CommandError(f"{exc.label} ({exc.status_code}): {exc.message}") from exc

        self.stdout.write(json.dumps(payload, ensure_ascii=False))
