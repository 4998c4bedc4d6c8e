"""Identifier helpers."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def generate_record_id() -> str:
    return str(uuid.uuid4())


def generate_session_id() -> str:
    now = datetime.now(tz=timezone.utc)
    return now.strftime("session-%Y%m%dT%H%M%S%fZ")
