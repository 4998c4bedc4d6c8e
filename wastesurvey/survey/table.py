"""Searchable, incrementally paginated record projection."""

from __future__ import annotations

from typing import Sequence

from wastesurvey.common.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_VISIBLE_ROWS,
    WASTE_BUCKET_CONTAINS,
    WASTE_BUCKET_EQUALS,
)
from wastesurvey.common.models import Record

WATER_BADGE_RULES = (
    ("ok", ("มีการติดตั้ง", "พื้นที่ส่วนตัว", "บ่อเกรอะ")),
    ("pending", ("รอการติดตั้ง",)),
    ("public_drain", ("ท่อระบายน้ำสาธารณะ",)),
)


def _search_fields(record: Record) -> tuple[str, ...]:
    return (record.full_name, record.community, record.street, record.responsible_person)


def filter_records(records: Sequence[Record], query: str) -> list[Record]:
    needle = (query or "").lower()
    if not needle:
        return list(records)
    return [
        record
        for record in records
        if any(needle in value.lower() for value in _search_fields(record))
    ]


def _revealed(already_shown: int, page_size: int, max_visible: int) -> int:
    return min(max(already_shown, 0) + page_size, max_visible)


def paginate(
    filtered: Sequence[Record],
    page_size: int = DEFAULT_PAGE_SIZE,
    already_shown: int = 0,
    *,
    max_visible: int = MAX_VISIBLE_ROWS,
) -> tuple[list[Record], int]:
    """Reveal ``page_size`` more rows; the total revealed never exceeds ``max_visible``."""
    visible = _revealed(already_shown, page_size, max_visible)
    page = list(filtered[:visible])
    return page, len(filtered) - len(page)


class TableView:
    """Query plus visible-row counter behind one records table."""

    def __init__(
        self,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_visible: int = MAX_VISIBLE_ROWS,
    ) -> None:
        self.page_size = page_size
        self.max_visible = max_visible
        self.query = ""
        self.visible_count = min(page_size, max_visible)

    def search(self, query: str) -> None:
        self.query = query

    def rows(self, records: Sequence[Record]) -> tuple[list[Record], int]:
        filtered = filter_records(records, self.query)
        return paginate(filtered, self.visible_count, max_visible=self.max_visible)

    def can_load_more(self, records: Sequence[Record]) -> bool:
        _page, remaining = self.rows(records)
        return remaining > 0 and self.visible_count < self.max_visible

    def load_more(self, records: Sequence[Record]) -> tuple[list[Record], int]:
        self.visible_count = _revealed(self.visible_count, self.page_size, self.max_visible)
        return self.rows(records)


def waste_badge(method: str) -> str:
    for name, marker in WASTE_BUCKET_CONTAINS:
        if marker in method:
            return name
    for name, label in WASTE_BUCKET_EQUALS:
        if method == label:
            return name
    return "other"


def water_badge(method: str) -> str:
    for name, markers in WATER_BADGE_RULES:
        if any(marker in method for marker in markers):
            return name
    return "other"
