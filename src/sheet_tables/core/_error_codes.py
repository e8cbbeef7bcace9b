# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

_HTTP_STATUS_TO_SUBCODE = {
    400: HTTP_400,
    401: HTTP_401,
    403: HTTP_403,
    404: HTTP_404,
    429: HTTP_429,
    500: HTTP_500,
    502: HTTP_502,
    503: HTTP_503,
    504: HTTP_504,
}

TRANSIENT_STATUS = {429, 500, 502, 503, 504}

# Validation subcodes
VALIDATION_ID_EMPTY = "validation_id_empty"
VALIDATION_TABLE_EMPTY = "validation_table_empty"
VALIDATION_STATUS_EMPTY = "validation_status_empty"
VALIDATION_SURGEON_MISSING_ID = "validation_surgeon_missing_id"

# Schema subcodes
SCHEMA_HEADER_MISSING = "schema_header_missing"
SCHEMA_TABLE_NOT_FOUND = "schema_table_not_found"
SCHEMA_ID_COLUMN_MISSING = "schema_id_column_missing"

# Not-found subcodes
NOT_FOUND_RECORD = "not_found_record"


def http_subcode(status: int) -> str:
    """Map an HTTP status to its subcode, falling back to ``http_<status>``."""
    return _HTTP_STATUS_TO_SUBCODE.get(status, f"http_{status}")


def is_transient_status(status: int) -> bool:
    return status in TRANSIENT_STATUS
