"""Upstream payload builders shared by the test modules."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple


CWA_URL = "https://opendata.cwa.gov.tw/api/v1/rest/datastore/F-C0032-001"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/reverse"

SLOTS: List[Tuple[str, str]] = [
    ("2024-05-01 06:00:00", "2024-05-01 18:00:00"),
    ("2024-05-01 18:00:00", "2024-05-02 06:00:00"),
]

DEFAULT_VALUES: Dict[str, List[str]] = {
    "Wx": ["多雲午後短暫雷陣雨", "多雲"],
    "PoP": ["30", "10"],
    "MinT": ["26", "25"],
    "CI": ["悶熱", "舒適至悶熱"],
    "MaxT": ["33", "29"],
    "WS": ["<= 1級", "2級"],
}


def make_element(code: str, values: Iterable[str], slots: List[Tuple[str, str]] = SLOTS) -> Dict[str, Any]:
    return {
        "elementName": code,
        "time": [
            {"startTime": start, "endTime": end, "parameter": {"parameterName": value}}
            for (start, end), value in zip(slots, values)
        ],
    }


def make_cwa_payload(city: str = "高雄市", elements: Dict[str, List[str]] | None = None) -> Dict[str, Any]:
    elements = DEFAULT_VALUES if elements is None else elements
    return {
        "success": "true",
        "records": {
            "datasetDescription": "三十六小時天氣預報",
            "location": [
                {
                    "locationName": city,
                    "weatherElement": [make_element(code, values) for code, values in elements.items()],
                }
            ],
        },
    }
