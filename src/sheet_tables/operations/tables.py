# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Table metadata operations namespace."""

from __future__ import annotations

from typing import List, TYPE_CHECKING

from .records import _check_table

if TYPE_CHECKING:
    from ..client import SheetsClient


__all__ = ["TableOperations"]


class TableOperations:
    """Namespace for tab-level metadata.

    Accessed via ``client.tables``.

    Example::

        client.tables.list()              # ["Users", "OperatingRooms", ...]
        client.tables.headers("Users")    # ["id", "name", "email", "role"]
        client.tables.sheet_id("Users")   # 0
    """

    def __init__(self, client: SheetsClient) -> None:
        self._client = client

    def headers(self, table: str) -> List[str]:
        """Return the tab's header row, in column order.

        :raises SchemaError: If the tab is missing or its first row is empty.
        """
        _check_table(table)
        with self._client._scoped_sheets() as sh:
            return sh._read_header(table)

    def sheet_id(self, table: str) -> int:
        """Return the numeric sheet id of a tab.

        :raises SchemaError: If no tab has that title.
        """
        _check_table(table)
        with self._client._scoped_sheets() as sh:
            return sh._sheet_id(table)

    def list(self) -> List[str]:
        """Return the titles of all tabs, in spreadsheet order."""
        with self._client._scoped_sheets() as sh:
            return [str(p.get("title", "")) for p in sh._sheet_properties()]
