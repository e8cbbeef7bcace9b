# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Surgery operations namespace: enriched listing, surgeon flattening, status changes."""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

from ..common.constants import STATUS_FIELD, STATUS_SCHEDULED, SURGEON_FIELD, SURGERIES
from ..core._error_codes import VALIDATION_STATUS_EMPTY
from ..core.errors import ValidationError
from ..data._relationships import _flatten_surgeon, _status_changes
from .records import _check_id

if TYPE_CHECKING:
    from ..client import SheetsClient


def _parse_day(day: Union[str, _dt.date]) -> _dt.date:
    if isinstance(day, _dt.datetime):
        return day.date()
    if isinstance(day, _dt.date):
        return day
    try:
        return _dt.date.fromisoformat(str(day).strip())
    except ValueError:
        raise ValidationError(f"date must be YYYY-MM-DD, got '{day}'") from None


class SurgeryOperations:
    """
    Operations on the ``Surgeries`` tab.

    Accessed via ``client.surgeries``. Listings always carry a nested
    ``surgeon`` object taken from ``Users``; writes accept that nested object and
    store only its id in ``surgeonId``.

    Example::

        today = client.surgeries.list(date="2024-05-01")
        s = client.surgeries.create({"patientName": "A", "surgeon": {"id": "user-1"}})
        client.surgeries.set_status(s["id"], "InProgress")
    """

    def __init__(self, client: "SheetsClient") -> None:
        self._client = client

    def list(self, date: Optional[Union[str, _dt.date]] = None) -> List[Dict[str, Any]]:
        """
        List surgeries with their surgeon attached.

        :param date: Keep only surgeries whose ``scheduledDateTime`` falls on this
            calendar date (``YYYY-MM-DD`` or a :class:`datetime.date`).
        :return: Surgery dicts, each with a ``surgeon`` dict. Unknown surgeons are
            replaced by ``{"name": "Unknown"}``.
        :raises ValidationError: If ``date`` is not a valid date.
        """
        day = _parse_day(date) if date not in (None, "") else None
        with self._client._scoped_sheets() as sh:
            return sh._list_surgeries(day)

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Schedule a surgery. The status is always set to ``Scheduled``.

        :return: The stored surgery; the inbound ``surgeon`` object is echoed back
            when one was supplied.
        :raises ValidationError: If ``surgeon`` is present without an ``id``.
        """
        if not isinstance(data, dict):
            raise TypeError("data must be a dict")
        flat = _flatten_surgeon(data)
        flat[STATUS_FIELD] = STATUS_SCHEDULED
        record = self._client.records.create(SURGERIES.table, SURGERIES.prefix, flat)
        return self._with_surgeon(record.to_dict(), data)

    def update(self, surgery_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge ``changes`` into a surgery, flattening a nested ``surgeon``.

        :raises NotFoundError: If no surgery has that id.
        """
        if not isinstance(changes, dict):
            raise TypeError("changes must be a dict")
        flat = _flatten_surgeon(changes)
        record = self._client.records.update(SURGERIES.table, surgery_id, flat)
        return self._with_surgeon(record.to_dict(), changes)

    def set_status(self, surgery_id: str, status: str, time: Optional[str] = None) -> Dict[str, Any]:
        """
        Change a surgery's status, stamping ``startTime`` or ``endTime``.

        Entering ``InProgress`` sets ``startTime``; entering ``Completed`` sets
        ``endTime``. The stamp is ``time`` when given, else the current UTC time.
        Every other field is preserved.

        :raises ValidationError: If ``status`` is empty.
        :raises NotFoundError: If no surgery has that id.
        """
        _check_id(surgery_id)
        if not isinstance(status, str) or not status.strip():
            raise ValidationError("status must be a non-empty string", subcode=VALIDATION_STATUS_EMPTY)
        record = self._client.records.update(SURGERIES.table, surgery_id, _status_changes(status, time))
        return record.to_dict()

    def delete(self, surgery_id: str) -> None:
        self._client.records.delete(SURGERIES.table, surgery_id)

    @staticmethod
    def _with_surgeon(stored: Dict[str, Any], inbound: Dict[str, Any]) -> Dict[str, Any]:
        surgeon = inbound.get(SURGEON_FIELD)
        if isinstance(surgeon, dict):
            stored[SURGEON_FIELD] = surgeon
        return stored


__all__ = ["SurgeryOperations"]
