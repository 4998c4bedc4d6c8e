"""Record CSV export."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from wastesurvey.common.fs import write_csv
from wastesurvey.common.models import Record

EXPORT_HEADERS = [
    "id",
    "timestamp",
    "address_type",
    "address_type_other",
    "community",
    "full_name",
    "shop_name",
    "address",
    "street",
    "phone",
    "household_size",
    "waste_methods",
    "water_methods",
    "responsible_person",
    "image_url",
    "lat",
    "lng",
]


def _serialize_row(record: Record) -> dict:
    out = {}
    for key, value in record.to_dict().items():
        if value is None:
            out[key] = ""
        elif isinstance(value, (list, tuple)):
            out[key] = ", ".join(value)
        else:
            out[key] = value
    return out


def export_records_csv(path: Path, records: Iterable[Record]) -> Path:
    write_csv(path, EXPORT_HEADERS, (_serialize_row(record) for record in records))
    return path
