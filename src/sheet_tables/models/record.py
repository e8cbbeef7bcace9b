# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record data model for spreadsheet rows.

A record is one data row keyed by the header of the tab it was read from. All
values are strings; a cell that is missing from the row reads as ``""``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

from ..common.constants import ID_FIELD

# Type aliases for semantic clarity
RecordId = str  # e.g., "or-1717171717171"
TableName = str  # tab title, e.g., "OperatingRooms"


@dataclass
class Record:
    """
    A row of a spreadsheet table with dict-like access.

    :param table: Title of the tab the record belongs to.
    :type table: str
    :param data: Field values keyed by header name.
    :type data: dict[str, str]

    Example:
        Dict-like access::

            record = client.records.get("Users", "user-1717171717171")
            print(record["email"])
            for key in record:
                print(key, record[key])
    """

    table: TableName
    data: Dict[str, str] = field(default_factory=dict)

    @property
    def id(self) -> RecordId:
        """Value of the ``id`` field, or ``""`` when the header has none."""
        return self.data.get(ID_FIELD, "")

    def __getitem__(self, key: str) -> str:
        return self.data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def keys(self):
        return self.data.keys()

    def values(self):
        return self.data.values()

    def items(self):
        return self.data.items()

    def matches(self, filters: Dict[str, Any]) -> bool:
        """
        Check the record against exact-match filters.

        A filter on a field the record does not have never matches. Expected
        values are compared as strings, so ``{"floor": 2}`` matches ``"2"``.

        :param filters: Field name to expected value.
        :type filters: dict[str, Any]
        :rtype: bool
        """
        for key, expected in filters.items():
            if key not in self.data:
                return False
            if self.data[key] != str(expected):
                return False
        return True

    def to_dict(self) -> Dict[str, str]:
        """
        Convert to a plain dictionary (for serialization).

        :return: Copy of the field data.
        :rtype: dict[str, str]
        """
        return dict(self.data)


__all__ = ["Record", "RecordId", "TableName"]
