"""Survey entry drafts: defaults, validation and record construction."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from wastesurvey.common.errors import ValidationFailure
from wastesurvey.common.ids import generate_record_id
from wastesurvey.common.models import WIRE_FIELDS, Record, unique_methods
from wastesurvey.common.time_utils import utc_timestamp_iso
from wastesurvey.survey.coordinates import normalise_lat_lng

DRAFT_FIELDS = tuple(name for name in WIRE_FIELDS if name not in {"id", "timestamp", "image_url"})
SNAKE_BY_WIRE = {wire: attr for attr, wire in WIRE_FIELDS.items()}
TEXT_FIELDS = ("address_type", "community", "full_name", "address", "street", "phone", "responsible_person")
OPTIONAL_TEXT_FIELDS = ("address_type_other", "shop_name")


class DraftValidationFailure(ValidationFailure):
    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


@dataclass(frozen=True)
class RecordDraft:
    """User-editable part of a record, before id and timestamp are minted."""

    address_type: str = ""
    community: str = ""
    full_name: str = ""
    address: str = ""
    street: str = ""
    phone: str = ""
    household_size: int = 1
    waste_methods: tuple[str, ...] = field(default_factory=tuple)
    water_methods: tuple[str, ...] = field(default_factory=tuple)
    responsible_person: str = ""
    address_type_other: str | None = None
    shop_name: str | None = None
    lat: float | None = None
    lng: float | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], *, base: "RecordDraft | None" = None) -> "RecordDraft":
        """Build a draft from snake_case or camelCase keys over an optional base draft."""
        values: dict[str, Any] = {}
        for key, value in payload.items():
            attr = SNAKE_BY_WIRE.get(key, key)
            if attr not in DRAFT_FIELDS:
                raise ValidationFailure(f"Unknown draft field: {key}")
            values[attr] = value
        for name in TEXT_FIELDS:
            if name in values:
                values[name] = "" if values[name] is None else str(values[name])
        for name in OPTIONAL_TEXT_FIELDS:
            if values.get(name) is not None:
                values[name] = str(values[name])
        for name in ("waste_methods", "water_methods"):
            if name in values:
                values[name] = unique_methods(values[name])
        if "household_size" in values:
            try:
                values["household_size"] = int(values["household_size"])
            except (TypeError, ValueError) as exc:
                raise ValidationFailure("household_size must be a whole number") from exc
        return replace(base or cls(), **values)

    @classmethod
    def from_record(cls, record: Record) -> "RecordDraft":
        return cls(**{name: getattr(record, name) for name in DRAFT_FIELDS})


def default_draft(options: dict, default_location: tuple[float, float] | None = None) -> RecordDraft:
    lat, lng = default_location if default_location else (None, None)
    return RecordDraft(
        address_type=options["address_types"][0],
        community=options["communities"][0],
        street=options["streets"][0],
        responsible_person=options["responsible_persons"][0],
        household_size=1,
        lat=lat,
        lng=lng,
    )


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _method_problems(waste_methods: tuple[str, ...], water_methods: tuple[str, ...]) -> list[str]:
    problems = []
    if not waste_methods:
        problems.append("select at least one waste management method")
    if not water_methods:
        problems.append("select at least one wastewater management method")
    return problems


def check_methods(record: Record) -> Record:
    """Refuse a record whose waste or wastewater selection is empty."""
    problems = _method_problems(record.waste_methods, record.water_methods)
    if problems:
        raise DraftValidationFailure(problems)
    return record


def validate_draft(draft: RecordDraft, options: dict | None = None) -> RecordDraft:
    """Return a normalised draft or raise with every problem found."""
    problems: list[str] = []

    if _blank(draft.full_name):
        problems.append("full name is required")
    if _blank(draft.address):
        problems.append("address is required")
    problems.extend(_method_problems(draft.waste_methods, draft.water_methods))
    if draft.household_size < 1:
        problems.append("household size must be at least 1")

    if options is not None:
        if draft.address_type == options["address_type_other"] and _blank(draft.address_type_other):
            problems.append("describe the address type when choosing the other option")
        checks = (
            ("address type", [draft.address_type], options["address_types"]),
            ("community", [draft.community], options["communities"]),
            ("street", [draft.street], options["streets"]),
            ("responsible person", [draft.responsible_person], options["responsible_persons"]),
            ("waste method", draft.waste_methods, options["waste_methods"]),
            ("water method", draft.water_methods, options["water_methods"]),
        )
        for label, values, allowed in checks:
            for value in values:
                if value not in allowed:
                    problems.append(f"unknown {label}: {value}")

    lat, lng = draft.lat, draft.lng
    try:
        lat, lng = normalise_lat_lng(draft.lat, draft.lng)
    except ValidationFailure as exc:
        problems.append(str(exc))

    if problems:
        raise DraftValidationFailure(problems)

    address_type_other = draft.address_type_other
    if options is not None and draft.address_type != options["address_type_other"]:
        address_type_other = None

    return replace(
        draft,
        full_name=draft.full_name.strip(),
        address=draft.address.strip(),
        address_type_other=address_type_other,
        lat=lat,
        lng=lng,
    )


def build_record(
    draft: RecordDraft,
    *,
    original: Record | None = None,
    image_url: str | None = None,
) -> Record:
    """Edits keep the original id, timestamp and image unless a new image was uploaded."""
    if original is None:
        record_id = generate_record_id()
        timestamp = utc_timestamp_iso()
    else:
        record_id = original.id
        timestamp = original.timestamp
        image_url = image_url or original.image_url

    return Record(
        id=record_id,
        timestamp=timestamp,
        image_url=image_url,
        **{name: getattr(draft, name) for name in DRAFT_FIELDS},
    )
