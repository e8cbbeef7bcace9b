# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record CRUD operations namespace."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TYPE_CHECKING

import pandas as pd

from ..core._error_codes import VALIDATION_ID_EMPTY, VALIDATION_TABLE_EMPTY
from ..core.errors import ValidationError
from ..models.record import Record
from ..models.table_schema import TableSchema, records_from_grid
from ..utils._pandas import records_to_dataframe

if TYPE_CHECKING:
    from ..client import SheetsClient


def _check_table(table: str) -> str:
    if not isinstance(table, str) or not table.strip():
        raise ValidationError("table must be a non-empty string", subcode=VALIDATION_TABLE_EMPTY)
    return table


def _check_id(record_id: str) -> str:
    if not isinstance(record_id, str) or not record_id:
        raise ValidationError("record_id must be a non-empty string", subcode=VALIDATION_ID_EMPTY)
    return record_id


class RecordOperations:
    """
    Record CRUD operations on any tab of the spreadsheet.

    Accessed via ``client.records``. Every call reads the tab again; nothing is
    cached between calls.

    Example::

        room = client.records.create("OperatingRooms", "or", {"name": "Room 1"})
        client.records.update("OperatingRooms", room.id, {"name": "Room 1A"})
        rooms = client.records.list("OperatingRooms", {"name": "Room 1A"})
        client.records.delete("OperatingRooms", room.id)
    """

    def __init__(self, client: "SheetsClient") -> None:
        self._client = client

    def list(self, table: str, filters: Optional[Dict[str, Any]] = None) -> List[Record]:
        """
        List the records of a table, optionally keeping only exact matches.

        :param table: Tab title (e.g., ``"Users"``).
        :type table: str
        :param filters: Field name to expected value. A record is kept when every
            filter field exists on it and equals the expected value as a string.
        :type filters: dict or None
        :return: Records in sheet order; empty when the tab has no data rows.
        :rtype: list[Record]

        Example::

            doctors = client.records.list("Users", {"role": "Doctor"})
        """
        _check_table(table)
        with self._client._scoped_sheets() as sh:
            return sh._list(table, filters)

    def get(self, table: str, record_id: str) -> Record:
        """
        Get a single record by id.

        :raises NotFoundError: If no record has that id.
        """
        _check_table(table)
        _check_id(record_id)
        with self._client._scoped_sheets() as sh:
            return sh._get(table, record_id)

    def create(self, table: str, prefix: str, data: Dict[str, Any]) -> Record:
        """
        Append a record, assigning it the id ``<prefix>-<epoch millis>``.

        Fields not in the tab's header are ignored; header fields missing from
        ``data`` are written empty.

        :param table: Tab title.
        :type table: str
        :param prefix: Resource prefix of the generated id (e.g., ``"or"``).
        :type prefix: str
        :param data: Field values.
        :type data: dict
        :return: The stored record, including its ``id``.
        :rtype: Record

        :raises TypeError: If ``data`` is not a dict.
        :raises SchemaError: If the tab has no header or no ``id`` column.
        """
        _check_table(table)
        if not isinstance(data, dict):
            raise TypeError("data must be a dict")
        with self._client._scoped_sheets() as sh:
            return sh._insert(table, prefix, data)

    def update(self, table: str, record_id: str, changes: Dict[str, Any]) -> Record:
        """
        Merge ``changes`` into an existing record.

        Fields not present in ``changes`` keep their stored values.

        :return: The record as written.
        :rtype: Record

        :raises TypeError: If ``changes`` is not a dict.
        :raises NotFoundError: If no record has that id.
        """
        _check_table(table)
        _check_id(record_id)
        if not isinstance(changes, dict):
            raise TypeError("changes must be a dict")
        with self._client._scoped_sheets() as sh:
            return sh._update(table, record_id, changes)

    def delete(self, table: str, record_id: str) -> None:
        """
        Delete a record's row.

        :raises NotFoundError: If no record has that id (including a second
            delete of the same id).
        """
        _check_table(table)
        _check_id(record_id)
        with self._client._scoped_sheets() as sh:
            sh._delete(table, record_id)

    def to_dataframe(self, table: str, filters: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Load a table into a DataFrame with one column per header field.

        An empty tab gives an empty frame that still carries the header columns.

        :rtype: ~pandas.DataFrame
        """
        _check_table(table)
        with self._client._scoped_sheets() as sh:
            grid = sh._read_grid(table)
        columns = list(TableSchema.from_header_row(table, grid[0]).fields) if grid else []
        records = records_from_grid(table, grid)
        if filters:
            records = [r for r in records if r.matches(filters)]
        return records_to_dataframe(records, columns)


__all__ = ["RecordOperations"]
