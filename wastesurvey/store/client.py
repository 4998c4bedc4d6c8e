"""Client for the spreadsheet-backed record store endpoint."""

from __future__ import annotations

import base64
import json
import logging
import mimetypes
import time
from pathlib import Path
from types import TracebackType
from typing import Any

from wastesurvey.common.config_loader import ConfigBundle
from wastesurvey.common.constants import STATUS_SUCCESS
from wastesurvey.common.errors import StoreError, StoreRejection, TransportFailure
from wastesurvey.common.fs import read_bytes
from wastesurvey.common.http import HttpClient, TimeoutConfig
from wastesurvey.common.logging import log_event
from wastesurvey.common.models import ImageUpload, Record, StoreOutcome


def _is_success(payload: Any) -> bool:
    return isinstance(payload, dict) and payload.get("status") == STATUS_SUCCESS


def _message(payload: Any, fallback: str) -> str:
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return fallback


class RecordStoreClient:
    """Stateless wrapper over the store's ``action``-driven HTTP interface.

    ``check_connection`` and ``delete`` report some failures through a
    :class:`StoreOutcome` instead of raising; every other operation raises
    :class:`StoreError`.
    """

    def __init__(
        self,
        base_url: str,
        sheet_id: str,
        drive_folder_id: str,
        *,
        http: HttpClient | None = None,
        timeout: TimeoutConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.base_url = base_url
        self.sheet_id = sheet_id
        self.drive_folder_id = drive_folder_id
        self.http = http or HttpClient(timeout=timeout)
        self.logger = logger or logging.getLogger("wastesurvey.store")

    @classmethod
    def from_config(cls, bundle: ConfigBundle, *, logger: logging.Logger | None = None) -> "RecordStoreClient":
        return cls(
            bundle.base_url,
            bundle.sheet_id,
            bundle.drive_folder_id,
            timeout=bundle.timeout,
            logger=logger,
        )

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "RecordStoreClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _log(self, action: str, started: float, status: str, **fields: Any) -> None:
        duration_ms = int((time.monotonic() - started) * 1000)
        log_event(
            self.logger,
            f"store {action} {status}",
            operation="store_call",
            action=action,
            status=status,
            duration_ms=duration_ms,
            **fields,
        )

    def check_connection(self) -> StoreOutcome:
        started = time.monotonic()
        try:
            payload = self.http.get_json(self.base_url, params={"action": "ping"})
        except StoreError as exc:
            self._log("ping", started, "error", error_code=exc.error_code)
            return StoreOutcome(ok=False, error=str(exc), error_code=exc.error_code)

        if not _is_success(payload):
            self._log("ping", started, "error", error_code=StoreRejection.error_code)
            return StoreOutcome(
                ok=False,
                error=_message(payload, "Unexpected ping response"),
                error_code=StoreRejection.error_code,
            )
        self._log("ping", started, "ok")
        return StoreOutcome(ok=True)

    def fetch_all(self) -> list[Record]:
        started = time.monotonic()
        try:
            payload = self.http.get_json(
                self.base_url,
                params={"action": "getRecords", "sheetId": self.sheet_id},
            )
            if not _is_success(payload):
                raise StoreRejection(_message(payload, "Failed to fetch records"))
            rows = payload.get("data") or []
            if not isinstance(rows, list):
                raise TransportFailure("Malformed records payload: data is not a list")
        except StoreError as exc:
            self._log("getRecords", started, "error", error_code=exc.error_code)
            raise

        records = [Record.from_wire(row) for row in rows if isinstance(row, dict)]
        self._log("getRecords", started, "ok", rows_out=len(records))
        return records

    def upsert(self, record: Record) -> bool:
        started = time.monotonic()
        form = {
            "action": "saveRecord",
            "sheetId": self.sheet_id,
            "data": json.dumps(record.to_wire(), ensure_ascii=False),
        }
        try:
            payload = self.http.post_form_json(self.base_url, data=form)
            if not _is_success(payload):
                raise StoreRejection(_message(payload, "Failed to save record"))
        except StoreError as exc:
            self._log("saveRecord", started, "error", record_id=record.id, error_code=exc.error_code)
            raise
        self._log("saveRecord", started, "ok", record_id=record.id)
        return True

    def delete(self, record_id: str) -> StoreOutcome:
        started = time.monotonic()
        form = {"action": "deleteRecord", "sheetId": self.sheet_id, "id": record_id}
        try:
            payload = self.http.post_form_json(self.base_url, data=form)
        except StoreError as exc:
            self._log("deleteRecord", started, "error", record_id=record_id, error_code=exc.error_code)
            raise

        if not _is_success(payload):
            self._log(
                "deleteRecord",
                started,
                "error",
                record_id=record_id,
                error_code=StoreRejection.error_code,
            )
            return StoreOutcome(
                ok=False,
                error=_message(payload, "Failed to delete record"),
                error_code=StoreRejection.error_code,
            )
        self._log("deleteRecord", started, "ok", record_id=record_id)
        return StoreOutcome(ok=True)

    def upload_image(self, content: bytes, mime_type: str, filename: str) -> str:
        started = time.monotonic()
        form = {
            "action": "uploadImage",
            "folderId": self.drive_folder_id,
            "data": base64.b64encode(content).decode("ascii"),
            "mimeType": mime_type,
            "filename": filename,
        }
        try:
            payload = self.http.post_form_json(self.base_url, data=form)
            if not _is_success(payload) or not payload.get("url"):
                raise StoreRejection(_message(payload, "Upload failed"))
        except StoreError as exc:
            self._log("uploadImage", started, "error", error_code=exc.error_code)
            raise
        self._log("uploadImage", started, "ok")
        return str(payload["url"])

    def upload(self, image: ImageUpload) -> str:
        return self.upload_image(image.content, image.mime_type, image.filename)


def load_image(path: Path) -> ImageUpload:
    mime_type, _ = mimetypes.guess_type(path.name)
    return ImageUpload(
        content=read_bytes(path),
        mime_type=mime_type or "application/octet-stream",
        filename=path.name,
    )
