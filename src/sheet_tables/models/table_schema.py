# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Header-driven codec between spreadsheet rows and records.

Nothing here talks to the network: a grid (list of rows, each a list of cell
values) goes in, records come out, and the reverse for writes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .record import Record


def _to_cell(value: Any) -> str:
    """Render a caller-supplied value as the string written to a cell."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


@dataclass(frozen=True)
class TableSchema:
    """
    Ordered field list of one tab, taken from its first row.

    :param table: Tab title.
    :type table: str
    :param fields: Header cells in column order.
    :type fields: tuple[str, ...]
    """

    table: str
    fields: Tuple[str, ...]

    @classmethod
    def from_header_row(cls, table: str, row: Sequence[Any]) -> "TableSchema":
        return cls(table=table, fields=tuple(_to_cell(c) for c in row))

    def to_record(self, row: Sequence[Any]) -> Record:
        """
        Zip a data row with the header.

        Cells past the end of the row read as ``""``; cells past the end of the
        header are dropped. With duplicate header names the rightmost column wins.
        """
        data: Dict[str, str] = {}
        for index, name in enumerate(self.fields):
            data[name] = _to_cell(row[index]) if index < len(row) else ""
        return Record(table=self.table, data=data)

    def to_row(self, values: Mapping[str, Any], defaults: Optional[Mapping[str, Any]] = None) -> List[str]:
        """
        Build a header-ordered row from ``values``.

        A field absent from ``values`` (or given as ``None``) takes its value from
        ``defaults`` when provided, else ``""``. Keys not in the header are ignored.

        :param values: Caller-supplied field values.
        :param defaults: Previous field values, used for partial updates.
        :return: Cell values in column order.
        :rtype: list[str]
        """
        row: List[str] = []
        for name in self.fields:
            value = values.get(name)
            if value is None and defaults is not None:
                value = defaults.get(name)
            row.append(_to_cell(value))
        return row


def records_from_grid(table: str, grid: Sequence[Sequence[Any]]) -> List[Record]:
    """
    Convert a grid whose first row is the header into records.

    A grid with fewer than two rows (nothing, or a header alone) has no records.

    :param table: Tab title the grid was read from.
    :param grid: Rows of cell values.
    :rtype: list[~sheet_tables.models.record.Record]
    """
    if not grid or len(grid) < 2:
        return []
    schema = TableSchema.from_header_row(table, grid[0])
    return [schema.to_record(row) for row in grid[1:]]


__all__ = ["TableSchema", "records_from_grid"]
