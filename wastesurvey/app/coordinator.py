"""Owns the in-memory record collection and orchestrates store calls."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Awaitable, Callable, Sequence, Union

from wastesurvey.common.constants import CONNECTION_LOADING, CONNECTION_OFFLINE, CONNECTION_ONLINE
from wastesurvey.common.errors import DuplicateDeclined, StoreError, ValidationFailure
from wastesurvey.common.logging import log_event
from wastesurvey.common.models import ImageUpload, Notice, Record, StoreOutcome
from wastesurvey.store.client import RecordStoreClient, load_image
from wastesurvey.survey.forms import RecordDraft, build_record, check_methods, validate_draft
from wastesurvey.survey.statistics import SurveyStatistics, compute_statistics

Notifier = Callable[[Notice], None]
ConfirmDuplicate = Callable[[str, Sequence[Record]], Union[bool, Awaitable[bool]]]


@dataclass(frozen=True)
class SurveyState:
    records: tuple[Record, ...] = ()
    connection_status: str = CONNECTION_LOADING


def logging_notifier(logger: logging.Logger) -> Notifier:
    def _notify(notice: Notice) -> None:
        log_event(
            logger,
            f"{notice.title}: {notice.message}" if notice.message else notice.title,
            operation="notice",
            status="error" if notice.level == "error" else notice.level,
        )

    return _notify


class SurveyCoordinator:
    """Single owner of survey state.

    The record collection is only ever replaced by a full re-read of the
    store. Mutations go to the store first and are followed by a silent
    refresh; nothing is patched locally.
    """

    def __init__(
        self,
        store: RecordStoreClient,
        *,
        options: dict | None = None,
        notifier: Notifier | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.options = options
        self.logger = logger or logging.getLogger("wastesurvey.app")
        self.notifier = notifier or logging_notifier(self.logger)
        self._state = SurveyState()

    @property
    def state(self) -> SurveyState:
        return self._state

    @property
    def records(self) -> tuple[Record, ...]:
        return self._state.records

    @property
    def connection_status(self) -> str:
        return self._state.connection_status

    def statistics(self) -> SurveyStatistics:
        return compute_statistics(self._state.records)

    def find_record(self, record_id: str) -> Record | None:
        for record in self._state.records:
            if record.id == record_id:
                return record
        return None

    def _set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)

    def _notify(self, level: str, title: str, message: str = "", **details: Any) -> None:
        self.notifier(Notice(level=level, title=title, message=message, details=details))

    async def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        return await asyncio.to_thread(fn, *args)

    async def check_connection(self) -> StoreOutcome:
        self._set_state(connection_status=CONNECTION_LOADING)
        outcome = await self._call(self.store.check_connection)
        self._set_state(connection_status=CONNECTION_ONLINE if outcome else CONNECTION_OFFLINE)
        return outcome

    async def initialize(self) -> None:
        await asyncio.gather(self.check_connection(), self.refresh(silent=True))

    async def refresh(self, silent: bool = False) -> bool:
        if not silent:
            self._notify("loading", "Loading records")
        try:
            records = await self._call(self.store.fetch_all)
        except StoreError as exc:
            log_event(
                self.logger,
                f"refresh failed: {exc}",
                operation="refresh",
                status="error",
                error_code=exc.error_code,
            )
            if not silent:
                self._notify("error", "Could not load records", str(exc), error_code=exc.error_code)
            return False

        self._set_state(records=tuple(records))
        log_event(self.logger, "records refreshed", operation="refresh", status="ok", rows_out=len(records))
        if not silent:
            self._notify("success", "Records loaded", f"{len(records)} records")
        return True

    async def create(self, record: Record) -> bool:
        check_methods(record)
        await self._call(self.store.upsert, record)
        await self.refresh(silent=True)
        return True

    async def update(self, record: Record) -> bool:
        check_methods(record)
        await self._call(self.store.upsert, record)
        await self.refresh(silent=True)
        return True

    async def delete(self, record_id: str) -> StoreOutcome:
        try:
            outcome = await self._call(self.store.delete, record_id)
        except StoreError as exc:
            self._notify("error", "Delete failed", str(exc), record_id=record_id, error_code=exc.error_code)
            raise
        await self.refresh(silent=True)
        if outcome:
            self._notify("success", "Record deleted", record_id=record_id)
        else:
            self._notify("warning", "Delete rejected", outcome.error or "", record_id=record_id)
        return outcome

    async def find_duplicates(self, full_name: str, *, exclude_id: str = "") -> list[Record]:
        """Read the store afresh and return other records with the same full name."""
        existing = await self._call(self.store.fetch_all)
        return [record for record in existing if record.full_name == full_name and record.id != exclude_id]

    async def submit(
        self,
        draft: RecordDraft,
        *,
        original: Record | None = None,
        image: ImageUpload | Path | None = None,
        confirm_duplicate: ConfirmDuplicate | None = None,
    ) -> Record:
        """Validate, guard duplicates, upload the image, then create or update.

        Without a ``confirm_duplicate`` hook a duplicate name is declined.
        """
        try:
            draft = validate_draft(draft, self.options)
        except ValidationFailure as exc:
            self._notify("warning", "Check the form", str(exc), error_code=exc.error_code)
            raise

        try:
            if original is None or original.full_name != draft.full_name:
                duplicates = await self.find_duplicates(
                    draft.full_name,
                    exclude_id=original.id if original else "",
                )
                if duplicates and not await _confirm(confirm_duplicate, draft.full_name, duplicates):
                    self._notify("info", "Save cancelled", f'"{draft.full_name}" already exists')
                    raise DuplicateDeclined(f'Duplicate name "{draft.full_name}" not confirmed')

            image_url = None
            if image is not None:
                if isinstance(image, Path):
                    image = await self._call(load_image, image)
                image_url = await self._call(self.store.upload, image)

            record = build_record(draft, original=original, image_url=image_url)
            if original is None:
                await self.create(record)
            else:
                await self.update(record)
        except StoreError as exc:
            self._notify("error", "Could not save record", str(exc), error_code=exc.error_code)
            raise
        except OSError as exc:
            self._notify("error", "Could not read image", str(exc))
            raise

        self._notify("success", "Record updated" if original else "Record saved", record_id=record.id)
        return record


async def _confirm(hook: ConfirmDuplicate | None, full_name: str, duplicates: Sequence[Record]) -> bool:
    if hook is None:
        return False
    answer = hook(full_name, duplicates)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)
