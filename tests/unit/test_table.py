from __future__ import annotations

from wastesurvey.common.models import Record
from wastesurvey.survey.table import TableView, filter_records, paginate, waste_badge, water_badge


def _record(index: int, **overrides) -> Record:
    values = {
        "id": f"rec-{index}",
        "timestamp": "2026-01-05T03:00:00.000+00:00",
        "address_type": "บ้านพักอาศัย",
        "community": "จองคำ",
        "full_name": f"Household {index}",
        "address": str(index),
        "street": "ถนนขุนลุมประพาส",
        "phone": "",
        "household_size": 2,
        "waste_methods": ("นำไปทำปุ๋ย",),
        "water_methods": ("ปล่อยน้ำเสียลงบ่อเกรอะ",),
        "responsible_person": "กองช่าง",
    }
    values.update(overrides)
    return Record(**values)


def test_empty_query_returns_all_in_order():
    records = [_record(i) for i in range(5)]

    assert filter_records(records, "") == records


def test_filter_is_case_insensitive_over_search_fields():
    records = [
        _record(1, full_name="Anna Baker"),
        _record(2, community="Abc Village"),
        _record(3, street="ABC Road"),
        _record(4, responsible_person="team abc"),
        _record(5, address="abc lane"),
    ]

    upper = filter_records(records, "ABC")

    assert upper == filter_records(records, "abc")
    assert [record.id for record in upper] == ["rec-2", "rec-3", "rec-4"]


def test_filter_matches_thai_text():
    records = [_record(1, community="ปางล้อ"), _record(2)]

    assert [record.id for record in filter_records(records, "ปาง")] == ["rec-1"]


def test_paginate_reveals_page_size_more():
    records = [_record(i) for i in range(50)]

    page, remaining = paginate(records, 20, 0)
    assert len(page) == 20
    assert remaining == 30

    page, remaining = paginate(records, 20, 20)
    assert len(page) == 40
    assert remaining == 10


def test_paginate_never_exceeds_cap():
    records = [_record(i) for i in range(250)]
    shown = 0
    for _ in range(10):
        page, remaining = paginate(records, 20, shown)
        shown = len(page)
        assert shown <= 100

    assert shown == 100
    assert remaining == 150
    again, _remaining = paginate(records, 20, shown)
    assert again == page


def test_paginate_small_sets():
    records = [_record(i) for i in range(3)]

    page, remaining = paginate(records, 20, 0)

    assert page == records
    assert remaining == 0


def test_table_view_load_more_stops_at_cap():
    records = [_record(i) for i in range(130)]
    view = TableView()

    rows, remaining = view.rows(records)
    assert len(rows) == 20
    assert remaining == 110

    for _ in range(6):
        rows, remaining = view.load_more(records)

    assert len(rows) == 100
    assert view.visible_count == 100
    assert remaining == 30
    assert view.can_load_more(records) is False


def test_table_view_search_applies_to_rows():
    records = [_record(1, full_name="Malee"), _record(2, full_name="Somchai")]
    view = TableView()
    view.search("mal")

    rows, remaining = view.rows(records)

    assert [record.id for record in rows] == ["rec-1"]
    assert remaining == 0


def test_waste_badge_is_first_match():
    assert waste_badge("ถังขยะเปียกในถุงเขียว") == "green_bag"
    assert waste_badge("นำไปเป็นอาหารของสัตว์") == "animal_feed"
    assert waste_badge("ทิ้งรวมกับขยะทั่วไป") == "other"


def test_water_badge_groups_methods():
    assert water_badge("ปล่อยน้ำเสียลงพื้นที่ส่วนตัว") == "ok"
    assert water_badge("ถังดักไขมัน รอการติดตั้ง") == "pending"
    assert water_badge("ปล่อยน้ำเสียลงท่อระบายน้ำสาธารณะ") == "public_drain"
    assert water_badge("ไม่ทราบ") == "other"


def test_table_view_load_more_matches_paginate_under_a_search():
    records = [_record(i, full_name="Malee" if i % 2 else "Somchai") for i in range(60)]
    view = TableView()
    view.search("malee")

    rows, remaining = view.load_more(records)
    expected, expected_remaining = paginate(filter_records(records, "malee"), 20, 20)

    assert rows == expected
    assert remaining == expected_remaining == 0
    assert view.visible_count == 40
