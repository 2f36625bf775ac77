from __future__ import annotations

import pytest
import requests

from backend.core.errors import InternalError, NotFound, ServerMisconfiguration, UpstreamError
from backend.core.providers.base import RequestConfig
from backend.core.providers.cwa import CWAForecastProvider, extract_forecasts
from backend.core.providers.nominatim import NominatimProvider
from helpers import CWA_URL, NOMINATIM_URL, SLOTS, make_cwa_payload, make_element


def test_cwa_forecast_normalization(requests_mock):
    provider = CWAForecastProvider(api_key="secret")
    requests_mock.get(CWA_URL, json=make_cwa_payload("高雄市"))

    result = provider.forecast("高雄市")

    assert result.city == "高雄市"
    assert result.updateTime == "三十六小時天氣預報"
    assert len(result.forecasts) == 2
    first = result.forecasts[0]
    assert first.startTime == SLOTS[0][0]
    assert first.endTime == SLOTS[0][1]
    assert first.weather == "多雲午後短暫雷陣雨"
    assert first.rain == "30%"
    assert first.minTemp == "26°C"
    assert first.maxTemp == "33°C"
    assert first.comfort == "悶熱"
    assert first.windSpeed == "<= 1級"
    assert result.forecasts[1].rain == "10%"


def test_cwa_sends_credential_and_location(requests_mock):
    provider = CWAForecastProvider(api_key="secret")
    requests_mock.get(CWA_URL, json=make_cwa_payload("臺北市"))

    provider.forecast("臺北市")

    query = requests_mock.last_request.qs
    assert query["authorization"] == ["secret"]
    assert query["locationname"] == ["臺北市"]
    assert requests_mock.last_request.timeout == 10.0


def test_cwa_missing_elements_default_to_empty_strings(requests_mock):
    provider = CWAForecastProvider(api_key="secret")
    requests_mock.get(CWA_URL, json=make_cwa_payload(elements={"Wx": ["晴", "陰"], "Foo": ["x", "y"]}))

    result = provider.forecast("高雄市")

    assert len(result.forecasts) == 2
    for window in result.forecasts:
        assert window.rain == ""
        assert window.minTemp == ""
        assert window.maxTemp == ""
        assert window.comfort == ""
        assert window.windSpeed == ""
    assert [window.weather for window in result.forecasts] == ["晴", "陰"]


def test_extract_forecasts_tolerates_short_series():
    elements = [
        make_element("Wx", ["晴", "多雲"]),
        make_element("PoP", ["0"]),
        {"elementName": "MinT", "time": [{"startTime": "a", "endTime": "b"}]},
    ]

    windows = extract_forecasts(elements)

    assert len(windows) == 2
    assert windows[0].rain == "0%"
    assert windows[1].rain == ""
    assert windows[0].minTemp == ""
    assert all(isinstance(getattr(w, name), str) for w in windows for name in ("weather", "rain", "minTemp"))


def test_extract_forecasts_without_elements():
    assert extract_forecasts([]) == []


@pytest.mark.parametrize(
    "payload",
    [
        {"records": {"datasetDescription": "x", "location": []}},
        {"records": {"datasetDescription": "x"}},
        {"success": "true"},
    ],
)
def test_cwa_empty_locations_raise_not_found(requests_mock, payload):
    provider = CWAForecastProvider(api_key="secret")
    requests_mock.get(CWA_URL, json=payload)

    with pytest.raises(NotFound) as excinfo:
        provider.forecast("高雄")

    assert excinfo.value.status_code == 404
    assert "高雄" in excinfo.value.message


def test_cwa_upstream_error_keeps_status_and_message(requests_mock):
    provider = CWAForecastProvider(api_key="bad")
    requests_mock.get(CWA_URL, status_code=401, json={"message": "invalid key"})

    with pytest.raises(UpstreamError) as excinfo:
        provider.forecast("高雄市")

    error = excinfo.value
    assert error.status_code == 401
    assert error.message == "invalid key"
    assert error.extra["details"] == {"message": "invalid key"}


def test_cwa_upstream_error_without_message_uses_default(requests_mock):
    provider = CWAForecastProvider(api_key="secret")
    requests_mock.get(CWA_URL, status_code=503, json={})

    with pytest.raises(UpstreamError) as excinfo:
        provider.forecast("高雄市")

    assert excinfo.value.status_code == 503
    assert excinfo.value.message == CWAForecastProvider.default_error_message


def test_cwa_network_failure_is_internal_error(requests_mock):
    provider = CWAForecastProvider(api_key="secret")
    requests_mock.get(CWA_URL, exc=requests.ConnectionError("unreachable"))

    with pytest.raises(InternalError) as excinfo:
        provider.forecast("高雄市")

    assert excinfo.value.status_code == 500


def test_cwa_timeout_is_internal_error(requests_mock):
    provider = CWAForecastProvider(api_key="secret")
    requests_mock.get(CWA_URL, exc=requests.Timeout)

    with pytest.raises(InternalError):
        provider.forecast("高雄市")


def test_cwa_invalid_json_is_internal_error(requests_mock):
    provider = CWAForecastProvider(api_key="secret")
    requests_mock.get(CWA_URL, text="<html>maintenance</html>")

    with pytest.raises(InternalError):
        provider.forecast("高雄市")


def test_cwa_without_key_never_calls_upstream(requests_mock):
    provider = CWAForecastProvider(api_key="")

    with pytest.raises(ServerMisconfiguration):
        provider.forecast("高雄市")

    assert requests_mock.call_count == 0


def test_nominatim_request_parameters(requests_mock):
    provider = NominatimProvider()
    requests_mock.get(NOMINATIM_URL, json={"address": {"county": "新北市", "town": "板橋區"}})

    result = provider.locate_city("25.0478", "121.5319")

    assert result.city == "新北市"
    query = requests_mock.last_request.qs
    assert query["format"] == ["jsonv2"]
    assert query["lat"] == ["25.0478"]
    assert query["lon"] == ["121.5319"]
    assert query["accept-language"] == ["zh-tw"]
    assert query["addressdetails"] == ["1"]


def test_nominatim_custom_user_agent(requests_mock):
    provider = NominatimProvider(request_config=RequestConfig(user_agent="proxy-test/0.1"))
    requests_mock.get(NOMINATIM_URL, json={"address": {"city": "台北市"}})

    result = provider.locate_city("25.03", "121.56")

    assert result.city == "臺北市"
    assert requests_mock.last_request.headers["User-Agent"] == "proxy-test/0.1"


def test_nominatim_missing_address_raises_not_found(requests_mock):
    provider = NominatimProvider()
    payload = {"error": "Unable to geocode"}
    requests_mock.get(NOMINATIM_URL, json=payload)

    with pytest.raises(NotFound) as excinfo:
        provider.locate_city("0", "0")

    assert excinfo.value.extra["raw"] == payload
