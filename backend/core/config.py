"""Startup-time configuration handed to the proxy services."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple


@dataclass(frozen=True)
class ProxyConfig:
    """Process-wide settings resolved once from Django settings."""

    cwa_api_key: str = ""
    cwa_base_url: str = "https://opendata.cwa.gov.tw/api"
    cwa_dataset_id: str = "F-C0032-001"
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    nominatim_user_agent: str = "cwa-weather-proxy/1.0"
    timeout: float = 10.0
    port: int = 3000
    allowed_origins: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_cwa_credential(self) -> bool:
        return bool(self.cwa_api_key)

    @classmethod
    def from_settings(cls, settings: Any) -> "ProxyConfig":
        defaults = cls()
        return cls(
            cwa_api_key=getattr(settings, "CWA_API_KEY", defaults.cwa_api_key) or "",
            cwa_base_url=getattr(settings, "CWA_API_BASE_URL", defaults.cwa_base_url),
            cwa_dataset_id=getattr(settings, "CWA_DATASET_ID", defaults.cwa_dataset_id),
            nominatim_url=getattr(settings, "NOMINATIM_URL", defaults.nominatim_url),
            nominatim_user_agent=getattr(settings, "NOMINATIM_USER_AGENT", defaults.nominatim_user_agent),
            timeout=float(getattr(settings, "UPSTREAM_TIMEOUT", defaults.timeout)),
            port=int(getattr(settings, "PORT", defaults.port)),
            allowed_origins=tuple(getattr(settings, "CORS_ALLOWED_ORIGINS", ()) or ()),
        )


__all__ = ["ProxyConfig"]
