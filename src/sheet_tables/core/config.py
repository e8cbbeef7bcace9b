# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .telemetry import TelemetryConfig


@dataclass(frozen=True)
class SheetsConfig:
    """
    Configuration settings for spreadsheet table operations.

    Built once at process start and passed to :class:`~sheet_tables.client.SheetsClient`.

    :param spreadsheet_id: Identifier of the backing spreadsheet (from its URL).
    :type spreadsheet_id: str
    :param credentials_file: Path to the service-account JSON key file.
    :type credentials_file: str
    :param http_retries: Maximum number of attempts per HTTP request (default: 1, no retry).
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff (default: 0.5).
    :type http_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param telemetry: Optional tracing/logging configuration. ``None`` disables telemetry.
    :type telemetry: ~sheet_tables.core.telemetry.TelemetryConfig or None
    """

    spreadsheet_id: str = ""
    credentials_file: str = "credentials.json"

    # HTTP configuration
    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_timeout: Optional[float] = None

    telemetry: Optional[TelemetryConfig] = None

    @classmethod
    def from_env(cls) -> "SheetsConfig":
        """
        Create a configuration instance from ``SHEETS_*`` environment variables.

        :return: Configuration instance.
        :rtype: ~sheet_tables.core.config.SheetsConfig
        :raises ValueError: If a numeric variable cannot be parsed.
        """
        retries = os.getenv("SHEETS_HTTP_RETRIES", "").strip()
        timeout = os.getenv("SHEETS_HTTP_TIMEOUT", "").strip()
        log_level = os.getenv("SHEETS_LOG_LEVEL", "").strip().upper()
        telemetry = None
        if log_level:
            if not isinstance(logging.getLevelName(log_level), int):
                raise ValueError(f"Unknown SHEETS_LOG_LEVEL '{log_level}'.")
            telemetry = TelemetryConfig(enable_logging=True, log_level=log_level)
        return cls(
            spreadsheet_id=os.getenv("SHEETS_SPREADSHEET_ID", "").strip(),
            credentials_file=os.getenv("SHEETS_CREDENTIALS_FILE", "").strip() or "credentials.json",
            http_retries=int(retries) if retries else None,  # Will default to 1 in _HttpClient
            http_backoff=None,  # Will default to 0.5 in _HttpClient
            http_timeout=float(timeout) if timeout else None,  # Method-dependent defaults
            telemetry=telemetry,
        )
