# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for sheet_tables.

This module contains the foundational components including authentication,
configuration, HTTP client, telemetry, and error handling.
"""

from .config import SheetsConfig
from .errors import (
    SheetsError,
    ValidationError,
    NotFoundError,
    SchemaError,
    UpstreamError,
)
from .telemetry import TelemetryConfig

__all__ = [
    "SheetsConfig",
    "SheetsError",
    "ValidationError",
    "NotFoundError",
    "SchemaError",
    "UpstreamError",
    "TelemetryConfig",
]
