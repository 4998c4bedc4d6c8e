"""Data models shared by the store client, views and coordinator."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

WIRE_FIELDS = {
    "id": "id",
    "timestamp": "timestamp",
    "address_type": "addressType",
    "address_type_other": "addressTypeOther",
    "community": "community",
    "full_name": "fullName",
    "shop_name": "shopName",
    "address": "address",
    "street": "street",
    "phone": "phone",
    "household_size": "householdSize",
    "waste_methods": "wasteMethods",
    "water_methods": "waterMethods",
    "responsible_person": "responsiblePerson",
    "image_url": "imageUrl",
    "lat": "lat",
    "lng": "lng",
}


def _safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def unique_methods(values: Any) -> tuple[str, ...]:
    """Order-preserving de-duplication of a method selection."""
    if not values:
        return ()
    if isinstance(values, str):
        values = [values]
    seen: dict[str, None] = {}
    for value in values:
        text = str(value)
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


@dataclass(frozen=True)
class Record:
    id: str
    timestamp: str
    address_type: str
    community: str
    full_name: str
    address: str
    street: str
    phone: str
    household_size: int
    waste_methods: tuple[str, ...]
    water_methods: tuple[str, ...]
    responsible_person: str
    address_type_other: str | None = None
    shop_name: str | None = None
    image_url: str | None = None
    lat: float | None = None
    lng: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for attr, wire_name in WIRE_FIELDS.items():
            value = getattr(self, attr)
            if isinstance(value, tuple):
                value = list(value)
            if value is None and attr in {"address_type_other", "shop_name", "lat", "lng"}:
                continue
            payload[wire_name] = "" if value is None else value
        return payload

    @classmethod
    def from_wire(cls, payload: dict[str, Any]) -> "Record":
        return cls(
            id=str(payload.get("id") or ""),
            timestamp=str(payload.get("timestamp") or ""),
            address_type=str(payload.get("addressType") or ""),
            address_type_other=_optional_str(payload.get("addressTypeOther")),
            community=str(payload.get("community") or ""),
            full_name=str(payload.get("fullName") or ""),
            shop_name=_optional_str(payload.get("shopName")),
            address=str(payload.get("address") or ""),
            street=str(payload.get("street") or ""),
            phone=str(payload.get("phone") or ""),
            household_size=_safe_int(payload.get("householdSize")),
            waste_methods=unique_methods(payload.get("wasteMethods")),
            water_methods=unique_methods(payload.get("waterMethods")),
            responsible_person=str(payload.get("responsiblePerson") or ""),
            image_url=_optional_str(payload.get("imageUrl")),
            lat=_safe_float(payload.get("lat")),
            lng=_safe_float(payload.get("lng")),
        )


@dataclass(frozen=True)
class StoreOutcome:
    """Result of a store call whose failures are reported rather than raised."""

    ok: bool
    error: str | None = None
    error_code: str | None = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class ImageUpload:
    content: bytes
    mime_type: str
    filename: str


@dataclass(frozen=True)
class Notice:
    level: str
    title: str
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
