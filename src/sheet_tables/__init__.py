# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Spreadsheet-backed tables for the hospital scheduling service.

Treats each tab of a Google Sheets spreadsheet as a table whose first row is
the schema, and exposes record CRUD plus the surgeries/surgeon join.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
