# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for sheet_tables.

- RecordOperations: CRUD on the records of any tab
- TableOperations: header and tab metadata
- SurgeryOperations: surgeries with surgeon enrichment and status transitions
"""

__all__ = []
