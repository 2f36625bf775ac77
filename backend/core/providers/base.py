from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import Response

from backend.core.errors import InternalError, UpstreamError


@dataclass
class RequestConfig:
    timeout: float = 10.0
    user_agent: Optional[str] = None


class UpstreamClient:
    """Base class for HTTP providers.

    Applies the shared failure classification: an upstream that answered with
    a failure status becomes :class:`UpstreamError` with that status, anything
    that prevented a response becomes :class:`InternalError`.
    """

    name = "upstream"
    default_error_message = "上游服務回應錯誤"
    unreachable_message = "無法連線至上游服務，請稍後再試"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or self._build_session(self.request_config)
        self._log = logging.getLogger(self.__class__.__name__)

    def _build_session(self, config: RequestConfig) -> requests.Session:
        session = requests.Session()
        if config.user_agent:
            session.headers["User-Agent"] = config.user_agent
        return session

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            details = self._decode_body(response)
            self._log.error("%s returned %s: %s", self.name, response.status_code, response.text[:500])
            raise UpstreamError(
                self._upstream_message(details),
                status_code=response.status_code,
                details=details,
            )
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("%s request timed out", self.name, exc_info=exc)
            raise InternalError(self.unreachable_message) from exc
        except requests.RequestException as exc:
            self._log.error("%s request failed", self.name, exc_info=exc)
            raise InternalError(self.unreachable_message) from exc
        return self._handle_response(response)

    def _get_json(self, url: str, **kwargs) -> Dict[str, Any]:
        response = self._request("GET", url, **kwargs)
        try:
            data = response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON from %s", self.name, exc_info=exc)
            raise InternalError(self.unreachable_message) from exc
        return data if isinstance(data, dict) else {}

    # helpers ------------------------------------------------------------
    def _decode_body(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text or None

    def _upstream_message(self, details: Any) -> str:
        if isinstance(details, dict):
            for key in ("message", "error"):
                value = details.get(key)
                if isinstance(value, str) and value:
                    return value
        elif isinstance(details, str) and details.strip():
            return details.strip()
        return self.default_error_message


__all__ = ["UpstreamClient", "RequestConfig"]
