"""JSON error rendering for faults that escape the views."""
from __future__ import annotations

import logging

from django.http import JsonResponse
from rest_framework.response import Response
from rest_framework.views import exception_handler

from backend.core.errors import InternalError, NotFound, ProxyError


logger = logging.getLogger(__name__)


def proxy_exception_handler(exc, context):
    """DRF exception handler keeping every failure in the proxy's JSON shape."""
    if isinstance(exc, ProxyError):
        return Response(exc.as_payload(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        payload = {"success": False, "error": getattr(exc, "default_code", "error"), "message": str(detail or exc)}
        response.data = payload
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view", exc_info=exc)
    error = InternalError()
    return Response(error.as_payload(), status=error.status_code)


def not_found_view(request, exception=None):
    error = NotFound("找不到此路徑")
    return JsonResponse(error.as_payload(), status=error.status_code, json_dumps_params={"ensure_ascii": False})


def server_error_view(request):
    error = InternalError()
    return JsonResponse(error.as_payload(), status=error.status_code, json_dumps_params={"ensure_ascii": False})
