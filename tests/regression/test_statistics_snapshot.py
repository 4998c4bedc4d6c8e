from __future__ import annotations

from pathlib import Path

import pytest

from wastesurvey.store.client import RecordStoreClient
from wastesurvey.survey.export import export_records_csv
from wastesurvey.survey.statistics import compute_statistics

ENVELOPE = {
    "status": "success",
    "data": [
        {
            "id": "r1",
            "timestamp": "2026-01-05T03:00:00.000Z",
            "addressType": "บ้านพักอาศัย",
            "community": "จองคำ",
            "fullName": "Malee",
            "address": "1",
            "street": "ถนนขุนลุมประพาส",
            "phone": "",
            "householdSize": "3",
            "wasteMethods": ["คัดแยกขยะเปียกใส่ถุงเขียว", "นำไปทำปุ๋ย"],
            "waterMethods": ["ถังดักไขมัน มีการติดตั้งแล้ว"],
            "responsiblePerson": "กองช่าง",
        },
        {
            "id": "r2",
            "timestamp": "2026-01-05T04:00:00.000Z",
            "addressType": "ร้านอาหาร",
            "community": "ปางล้อ",
            "fullName": "Somchai",
            "address": "2",
            "street": "ถนนมรรคสันติ",
            "phone": "",
            "householdSize": 6,
            "wasteMethods": ["ทิ้งลงถังขยะเปียกของชุมชน"],
            "waterMethods": ["ปล่อยน้ำเสียลงท่อระบายน้ำสาธารณะ", "ถังดักไขมัน รอการติดตั้ง"],
            "responsiblePerson": "ประธานชุมชน",
        },
        {
            "id": "r3",
            "timestamp": "2026-01-05T05:00:00.000Z",
            "addressType": "อื่นๆ",
            "addressTypeOther": "วัด",
            "community": "จองคำ",
            "fullName": "Wat",
            "address": "3",
            "street": "ถนนขุนลุมประพาส",
            "phone": "",
            "householdSize": "",
            "wasteMethods": ["นำไปเป็นอาหารของสัตว์"],
            "waterMethods": ["ปล่อยน้ำเสียลงบ่อเกรอะ"],
            "responsiblePerson": "กองช่าง",
            "lat": 19.3,
            "lng": 97.96,
        },
    ],
}


class SnapshotHttp:
    def get_json(self, url, *, params=None, headers=None, timeout=None):
        return ENVELOPE

    def close(self):
        pass


def _records():
    client = RecordStoreClient("https://example.test/exec", "sheet", "folder", http=SnapshotHttp())
    return client.fetch_all()


@pytest.mark.regression
def test_statistics_snapshot_is_stable():
    stats = compute_statistics(_records())

    assert stats.to_dict() == {
        "total": 3,
        "waste_buckets": {"green_bag": 1, "wet_bin": 1, "animal_feed": 1, "compost": 1},
        "waste_method_total": 4,
        "water_buckets": {
            "trap_installed": 1,
            "trap_pending": 1,
            "private_area": 0,
            "septic_tank": 1,
            "public_drain": 1,
        },
        "responsible_party_counts": {"กองช่าง": 2, "ประธานชุมชน": 1},
        "average_household_size": 3.0,
    }


@pytest.mark.regression
def test_export_is_byte_stable_for_same_records(tmp_path: Path):
    first = export_records_csv(tmp_path / "first.csv", _records())
    second = export_records_csv(tmp_path / "second.csv", _records())

    assert first.read_bytes() == second.read_bytes()
