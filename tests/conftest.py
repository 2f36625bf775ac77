from __future__ import annotations

import pathlib
import sys

import pytest

TESTS_DIR = pathlib.Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from backend.api.views import get_proxy_service  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_proxy_service():
    get_proxy_service.cache_clear()
    yield
    get_proxy_service.cache_clear()
