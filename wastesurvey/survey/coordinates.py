"""Map-pin coordinate normalisation and navigation links."""

from __future__ import annotations

from typing import Any

from wastesurvey.common.constants import COORDINATE_DECIMALS, DIRECTIONS_URL
from wastesurvey.common.errors import ValidationFailure


def _safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _valid_lat_lng(lat: float, lng: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lng <= 180


def round_coordinate(value: float) -> float:
    return round(float(value), COORDINATE_DECIMALS)


def normalise_lat_lng(lat: Any, lng: Any) -> tuple[float | None, float | None]:
    parsed_lat = _safe_float(lat)
    parsed_lng = _safe_float(lng)
    if parsed_lat is None and parsed_lng is None:
        return None, None
    if parsed_lat is None or parsed_lng is None:
        raise ValidationFailure("Both latitude and longitude are required for a map pin")
    if not _valid_lat_lng(parsed_lat, parsed_lng):
        raise ValidationFailure(f"Coordinate out of range: {parsed_lat}, {parsed_lng}")
    return round_coordinate(parsed_lat), round_coordinate(parsed_lng)


def directions_url(lat: float | None, lng: float | None) -> str | None:
    # A zero or missing axis means no pin was placed.
    if not lat or not lng:
        return None
    return DIRECTIONS_URL.format(lat=lat, lng=lng)
