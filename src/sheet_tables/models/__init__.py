# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models for sheet_tables.

- :class:`~sheet_tables.models.record.Record`: One data row with dict-like access.
- :class:`~sheet_tables.models.table_schema.TableSchema`: A tab's header row and the
  row/record codec built on it.

Import models from their modules directly.
"""

__all__ = []
