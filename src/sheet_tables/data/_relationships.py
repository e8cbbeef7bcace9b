# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Surgeries-to-surgeon join for the Sheets client.

This module provides mixin functionality plus the pure helpers it is built on:
the surgeon lookup, the scheduled-date filter, the nested ``surgeon`` payload
flattening and the status-transition timestamps.
"""

from __future__ import annotations

import datetime as _dt
import re
from typing import Any, Dict, List, Optional, Sequence

from ..common.constants import (
    END_TIME_FIELD,
    ID_FIELD,
    SCHEDULED_AT_FIELD,
    START_TIME_FIELD,
    STATUS_COMPLETED,
    STATUS_FIELD,
    STATUS_IN_PROGRESS,
    SURGEON_FIELD,
    SURGEON_ID_FIELD,
    SURGERIES,
    UNKNOWN_SURGEON_NAME,
    USERS,
)
from ..core._error_codes import VALIDATION_SURGEON_MISSING_ID
from ..core.errors import ValidationError
from ..models.record import Record

_LEADING_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")


def _utc_now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = _dt.datetime.now(_dt.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _scheduled_date(value: Any) -> Optional[_dt.date]:
    """Calendar date of a scheduled timestamp, ignoring the time of day.

    Values carrying an offset are converted to UTC first. Returns ``None`` when
    the value is empty or not a recognizable date.
    """
    text = str(value or "").strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = _dt.datetime.fromisoformat(text)
    except ValueError:
        m = _LEADING_DATE_RE.match(text)
        if not m:
            return None
        try:
            return _dt.date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(_dt.timezone.utc)
    return parsed.date()


def _filter_by_scheduled_date(surgeries: Sequence[Record], day: _dt.date) -> List[Record]:
    return [s for s in surgeries if _scheduled_date(s.get(SCHEDULED_AT_FIELD)) == day]


def _enrich_with_surgeon(surgeries: Sequence[Record], users: Sequence[Record]) -> List[Dict[str, Any]]:
    """Attach each surgery's surgeon as a nested ``surgeon`` object.

    A surgery whose ``surgeonId`` matches no user gets a placeholder surgeon
    carrying only a name. When ids repeat, the first user wins.
    """
    users_by_id: Dict[str, Record] = {}
    for user in users:
        users_by_id.setdefault(user.get(ID_FIELD, ""), user)

    enriched: List[Dict[str, Any]] = []
    for surgery in surgeries:
        item: Dict[str, Any] = surgery.to_dict()
        surgeon_id = surgery.get(SURGEON_ID_FIELD, "")
        surgeon = users_by_id.get(surgeon_id) if surgeon_id else None
        item[SURGEON_FIELD] = surgeon.to_dict() if surgeon is not None else {"name": UNKNOWN_SURGEON_NAME}
        enriched.append(item)
    return enriched


def _flatten_surgeon(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Replace a nested ``surgeon`` object with its id in ``surgeonId``.

    Payloads without a ``surgeon`` key are returned unchanged (as a copy).

    :raises ValidationError: If ``surgeon`` is present but carries no ``id``.
    """
    flat = dict(payload)
    if SURGEON_FIELD not in flat:
        return flat
    surgeon = flat.pop(SURGEON_FIELD)
    surgeon_id = surgeon.get(ID_FIELD) if isinstance(surgeon, dict) else None
    if surgeon_id in (None, ""):
        raise ValidationError(
            "surgeon must be an object with an 'id'.",
            subcode=VALIDATION_SURGEON_MISSING_ID,
        )
    flat[SURGEON_ID_FIELD] = str(surgeon_id)
    return flat


def _status_changes(status: str, time: Optional[str] = None) -> Dict[str, str]:
    """Changes for a status transition.

    Moving into ``InProgress`` stamps ``startTime``; moving into ``Completed``
    stamps ``endTime``. The stamp is ``time`` when given, else now (UTC).
    """
    changes = {STATUS_FIELD: status}
    if status == STATUS_IN_PROGRESS:
        changes[START_TIME_FIELD] = time or _utc_now_iso()
    elif status == STATUS_COMPLETED:
        changes[END_TIME_FIELD] = time or _utc_now_iso()
    return changes


class _RelationshipOperationsMixin:
    """
    Mixin providing the surgeries/surgeon join.

    This mixin is designed to be used with _SheetsClient and depends on:
    - self._read_records(table): Grid Reader
    """

    def _list_surgeries(self, day: Optional[_dt.date] = None) -> List[Dict[str, Any]]:
        """Read surgeries (optionally for one scheduled date) and attach surgeons."""
        surgeries = self._read_records(SURGERIES.table)
        if day is not None:
            surgeries = _filter_by_scheduled_date(surgeries, day)
        users = self._read_records(USERS.table)
        return _enrich_with_surgeon(surgeries, users)
