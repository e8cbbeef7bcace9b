# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the Google Sheets API and the scheduling tables it backs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"

# valueInputOption / insertDataOption used for every write
VALUE_INPUT_USER_ENTERED = "USER_ENTERED"
INSERT_DATA_INSERT_ROWS = "INSERT_ROWS"

ID_FIELD = "id"


@dataclass(frozen=True)
class TableResource:
    """A table exposed over HTTP: URL segment, tab title and id prefix."""

    path: str
    table: str
    prefix: str


USERS = TableResource("users", "Users", "user")
OPERATING_ROOMS = TableResource("operating-rooms", "OperatingRooms", "or")
SURGERY_TYPES = TableResource("surgery-types", "SurgeryTypes", "st")
PATIENTS = TableResource("patients", "Patients", "patient")
SURGERIES = TableResource("surgeries", "Surgeries", "surg")

# Resources served by the generic CRUD router; surgeries has its own.
GENERIC_RESOURCES = (USERS, OPERATING_ROOMS, SURGERY_TYPES, PATIENTS)

RESOURCES_BY_PATH: Dict[str, TableResource] = {
    r.path: r for r in (*GENERIC_RESOURCES, SURGERIES)
}

# Surgery fields and statuses
SURGEON_ID_FIELD = "surgeonId"
SURGEON_FIELD = "surgeon"
STATUS_FIELD = "status"
SCHEDULED_AT_FIELD = "scheduledDateTime"
START_TIME_FIELD = "startTime"
END_TIME_FIELD = "endTime"

STATUS_SCHEDULED = "Scheduled"
STATUS_IN_PROGRESS = "InProgress"
STATUS_COMPLETED = "Completed"

UNKNOWN_SURGEON_NAME = "Unknown"

# OpenTelemetry attribute names
OTEL_ATTR_DB_SYSTEM = "db.system"
OTEL_ATTR_DB_OPERATION = "db.operation"
OTEL_ATTR_HTTP_METHOD = "http.method"
OTEL_ATTR_HTTP_URL = "http.url"
OTEL_ATTR_HTTP_STATUS_CODE = "http.status_code"
OTEL_ATTR_SHEETS_TABLE = "sheets.table"
OTEL_ATTR_SHEETS_REQUEST_ID = "sheets.client_request_id"
OTEL_ATTR_SHEETS_CORRELATION_ID = "sheets.correlation_id"
