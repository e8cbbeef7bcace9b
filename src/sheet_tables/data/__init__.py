# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for sheet_tables.

This module contains the Google Sheets API client that reads grids, resolves
headers, locates rows and issues writes, plus the surgeries/surgeon join.
"""

__all__ = []
