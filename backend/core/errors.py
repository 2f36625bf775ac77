"""Error taxonomy shared by the weather and geocoding handlers."""
from __future__ import annotations

from typing import Any, Dict, Optional


class ProxyError(RuntimeError):
    """Base error rendered as a JSON failure payload by the API layer."""

    status_code = 500
    label = "internal_error"
    default_message = "伺服器錯誤，請稍後再試"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None, **extra: Any) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        if status_code is not None:
            self.status_code = status_code
        self.extra: Dict[str, Any] = {key: value for key, value in extra.items() if value is not None}

    def as_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": False, "error": self.label, "message": self.message}
        payload.update(self.extra)
        return payload


class MissingParameter(ProxyError):
    """A required query parameter is absent or empty."""

    status_code = 400
    label = "missing_parameter"
    default_message = "缺少必要的查詢參數"


class ServerMisconfiguration(ProxyError):
    """The proxy itself lacks configuration (e.g. the CWA credential)."""

    status_code = 500
    label = "server_misconfiguration"
    default_message = "伺服器設定錯誤"


class NotFound(ProxyError):
    """The upstream answered but returned no usable match."""

    status_code = 404
    label = "not_found"
    default_message = "查無資料"


class UpstreamError(ProxyError):
    """The upstream answered with a failure status.

    ``status_code`` mirrors the upstream status and ``details`` carries the
    decoded upstream body for diagnostics.
    """

    label = "upstream_error"
    default_message = "上游服務回應錯誤"


class InternalError(ProxyError):
    """No upstream response was received, or a local fault occurred."""

    status_code = 500
    label = "internal_error"


__all__ = [
    "ProxyError",
    "MissingParameter",
    "ServerMisconfiguration",
    "NotFound",
    "UpstreamError",
    "InternalError",
]
