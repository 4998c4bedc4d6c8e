"""Aggregate counts and averages over the full record set."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from wastesurvey.common.constants import (
    WASTE_BUCKET_CONTAINS,
    WASTE_BUCKET_EQUALS,
    WASTE_BUCKET_LABELS,
    WATER_BUCKET_LABELS,
    WATER_BUCKET_RULES,
)
from wastesurvey.common.models import Record


@dataclass(frozen=True)
class SurveyStatistics:
    total: int
    waste_buckets: dict[str, int]
    water_buckets: dict[str, int]
    responsible_party_counts: dict[str, int]
    average_household_size: float

    @property
    def waste_method_total(self) -> int:
        return sum(self.waste_buckets.values())

    def labelled_waste_buckets(self) -> list[tuple[str, int]]:
        return [(WASTE_BUCKET_LABELS[key], value) for key, value in self.waste_buckets.items()]

    def labelled_water_buckets(self) -> list[tuple[str, int]]:
        return [(WATER_BUCKET_LABELS[key], value) for key, value in self.water_buckets.items()]

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "waste_buckets": dict(self.waste_buckets),
            "waste_method_total": self.waste_method_total,
            "water_buckets": dict(self.water_buckets),
            "responsible_party_counts": dict(self.responsible_party_counts),
            "average_household_size": self.average_household_size,
        }


def waste_buckets_for(method: str) -> list[str]:
    """Every waste bucket a method label falls in; rules do not exclude each other."""
    buckets = [name for name, marker in WASTE_BUCKET_CONTAINS if marker in method]
    buckets.extend(name for name, label in WASTE_BUCKET_EQUALS if method == label)
    return buckets


def water_bucket_for(method: str) -> str | None:
    for name, marker in WATER_BUCKET_RULES:
        if marker in method:
            return name
    return None


def count_waste_buckets(records: Iterable[Record]) -> dict[str, int]:
    counts = {name: 0 for name in WASTE_BUCKET_LABELS}
    for record in records:
        for method in record.waste_methods:
            for bucket in waste_buckets_for(method):
                counts[bucket] += 1
    return counts


def count_water_buckets(records: Iterable[Record]) -> dict[str, int]:
    counts = {name: 0 for name in WATER_BUCKET_LABELS}
    for record in records:
        for method in record.water_methods:
            bucket = water_bucket_for(method)
            if bucket is not None:
                counts[bucket] += 1
    return counts


def count_responsible_parties(records: Iterable[Record]) -> dict[str, int]:
    return dict(Counter(record.responsible_person for record in records))


def average_household_size(records: list[Record]) -> float:
    if not records:
        return 0.0
    total = sum(record.household_size for record in records)
    return round(total / len(records), 1)


def compute_statistics(records: Iterable[Record]) -> SurveyStatistics:
    rows = list(records)
    return SurveyStatistics(
        total=len(rows),
        waste_buckets=count_waste_buckets(rows),
        water_buckets=count_water_buckets(rows),
        responsible_party_counts=count_responsible_parties(rows),
        average_household_size=average_household_size(rows),
    )
