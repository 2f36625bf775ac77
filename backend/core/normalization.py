"""City name helpers turning geocoder output into CWA location names."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

# CWA spells these with the traditional 臺 glyph; geocoders usually return 台.
CITY_NAME_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        "台北市": "臺北市",
        "台中市": "臺中市",
        "台南市": "臺南市",
        "台東縣": "臺東縣",
    }
)

# county first so that 新北市 wins over district names such as 板橋區.
ADDRESS_FIELD_ORDER: Sequence[str] = ("county", "city", "town", "city_district", "state")


def normalize_city_name(raw_name: Optional[str]) -> str:
    """Return the CWA spelling for ``raw_name``; unknown names pass through."""
    if not raw_name:
        return ""
    name = raw_name.strip()
    return CITY_NAME_MAPPING.get(name, name)


def select_city_name(address: Mapping[str, Any], order: Sequence[str] = ADDRESS_FIELD_ORDER) -> str:
    """Pick the first non-empty administrative-area field of ``address``."""
    for key in order:
        value = address.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


__all__ = ["CITY_NAME_MAPPING", "ADDRESS_FIELD_ORDER", "normalize_city_name", "select_city_name"]
