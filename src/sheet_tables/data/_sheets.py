# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Google Sheets API client treating each tab as a table.

Reads always go to the spreadsheet: rows, headers and tab identifiers are never
cached, so every position-dependent write re-derives the row offset first.
"""

from __future__ import annotations

import contextvars
import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple
from urllib.parse import quote

import requests

from ..common.constants import (
    ID_FIELD,
    INSERT_DATA_INSERT_ROWS,
    SHEETS_API_BASE,
    VALUE_INPUT_USER_ENTERED,
)
from ..core._error_codes import (
    NOT_FOUND_RECORD,
    SCHEMA_HEADER_MISSING,
    SCHEMA_ID_COLUMN_MISSING,
    SCHEMA_TABLE_NOT_FOUND,
    http_subcode,
    is_transient_status,
)
from ..core._http import _HttpClient
from ..core._locks import _TableLocks
from ..core.config import SheetsConfig
from ..core.errors import NotFoundError, SchemaError, UpstreamError
from ..core.telemetry import create_telemetry_manager
from ..models.record import Record
from ..models.table_schema import TableSchema, records_from_grid
from ._relationships import _RelationshipOperationsMixin

logger = logging.getLogger(__name__)

_CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "sheet_tables_correlation_id", default=None
)


def _now_millis() -> int:
    return int(time.time() * 1000)


def _a1(table: str, cells: Optional[str] = None) -> str:
    """A1 range for ``table``; the title is always quoted so spaces and quotes are safe."""
    quoted = "'" + table.replace("'", "''") + "'"
    return f"{quoted}!{cells}" if cells else quoted


class _SheetsClient(_RelationshipOperationsMixin):
    """Google Sheets API client: grid reads, header resolution, row location and writes.

    :param auth: Authentication manager exposing ``_acquire_token()``.
    :param spreadsheet_id: Identifier of the backing spreadsheet.
    :param config: Client configuration.
    :param session: Optional requests.Session for connection pooling.
    :param locks: Per-table lock registry shared by every writer in this process.
    """

    def __init__(
        self,
        auth,
        spreadsheet_id: str,
        config: Optional[SheetsConfig] = None,
        session: Optional[requests.Session] = None,
        locks: Optional[_TableLocks] = None,
    ) -> None:
        self.auth = auth
        self.spreadsheet_id = (spreadsheet_id or "").strip()
        if not self.spreadsheet_id:
            raise ValueError("spreadsheet_id is required.")
        self.api = f"{SHEETS_API_BASE}/{self.spreadsheet_id}"
        self.config = config or SheetsConfig(spreadsheet_id=self.spreadsheet_id)
        self._http = _HttpClient(
            retries=self.config.http_retries,
            backoff=self.config.http_backoff,
            timeout=self.config.http_timeout,
            session=session,
        )
        self._telemetry = create_telemetry_manager(self.config.telemetry)
        self._locks = locks or _TableLocks()

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------ transport

    @contextmanager
    def _call_scope(self) -> Iterator[str]:
        """Share one correlation id across every request made inside the block."""
        current = _CORRELATION_ID.get()
        if current is not None:
            yield current
            return
        correlation_id = str(uuid.uuid4())
        token = _CORRELATION_ID.set(correlation_id)
        try:
            yield correlation_id
        finally:
            _CORRELATION_ID.reset(token)

    def _headers(self) -> Dict[str, str]:
        """Build standard JSON headers with bearer auth."""
        token = self.auth._acquire_token().access_token
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        url: str,
        *,
        operation: str = "request",
        table: Optional[str] = None,
        **kwargs: Any,
    ):
        headers = kwargs.pop("headers", None) or self._headers()
        client_request_id = str(uuid.uuid4())
        headers["x-client-request-id"] = client_request_id
        correlation_id = _CORRELATION_ID.get()
        if correlation_id is not None:
            headers["x-correlation-id"] = correlation_id

        with self._telemetry.trace_request(
            operation, method.upper(), url, client_request_id, correlation_id or "", table
        ) as ctx:
            r = self._http._request(method, url, headers=headers, **kwargs)
            self._telemetry.record_response(ctx, r.status_code)

        if 200 <= r.status_code < 300:
            return r
        raise self._upstream_error(r, client_request_id, correlation_id)

    @staticmethod
    def _upstream_error(r, client_request_id: str, correlation_id: Optional[str]) -> UpstreamError:
        status = r.status_code
        message = f"Google Sheets API request failed with HTTP {status}"
        service_code = None
        body_excerpt = None
        try:
            body = r.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            err = body["error"]
            if err.get("message"):
                message = str(err["message"])
            if err.get("status"):
                service_code = str(err["status"])
        else:
            text = getattr(r, "text", "") or ""
            body_excerpt = text[:200] if text else None

        retry_after = None
        raw_retry = (r.headers or {}).get("Retry-After")
        if raw_retry is not None:
            try:
                retry_after = int(raw_retry)
            except (TypeError, ValueError):
                retry_after = None

        return UpstreamError(
            message,
            status_code=status,
            is_transient=is_transient_status(status),
            subcode=http_subcode(status),
            service_error_code=service_code,
            correlation_id=correlation_id,
            client_request_id=client_request_id,
            body_excerpt=body_excerpt,
            retry_after=retry_after,
        )

    def _values_url(self, range_: str, suffix: str = "") -> str:
        return f"{self.api}/values/{quote(range_, safe='')}{suffix}"

    def _get_values(self, table: str, range_: str, operation: str) -> List[List[Any]]:
        r = self._request("get", self._values_url(range_), operation=operation, table=table,
                          params={"majorDimension": "ROWS"})
        try:
            body = r.json()
        except ValueError:
            return []
        values = body.get("values") if isinstance(body, dict) else None
        if not isinstance(values, list):
            return []
        return [row if isinstance(row, list) else [] for row in values]

    # ---------------------------------------------------------------- reads

    def _read_grid(self, table: str) -> List[List[Any]]:
        """Return every row of the tab's used range, header included."""
        return self._get_values(table, _a1(table), "values.get")

    def _read_records(self, table: str) -> List[Record]:
        """Read the tab and return its data rows as records (empty for < 2 rows)."""
        return records_from_grid(table, self._read_grid(table))

    def _read_schema(self, table: str) -> TableSchema:
        """Fetch only the first row of the tab.

        :raises SchemaError: If the tab does not exist or its first row is empty.
        """
        try:
            rows = self._get_values(table, _a1(table, "1:1"), "values.get.header")
        except UpstreamError as exc:
            # The API answers 400 "Unable to parse range" for an unknown tab title.
            if exc.status_code == 400:
                raise SchemaError(
                    f"Table '{table}' does not exist.",
                    subcode=SCHEMA_TABLE_NOT_FOUND,
                    details={"table": table},
                ) from exc
            raise
        if not rows or not any(str(c) for c in rows[0]):
            raise SchemaError(
                f"Table '{table}' has no header row.",
                subcode=SCHEMA_HEADER_MISSING,
                details={"table": table},
            )
        return TableSchema.from_header_row(table, rows[0])

    def _read_header(self, table: str) -> List[str]:
        return list(self._read_schema(table).fields)

    def _find(self, table: str, record_id: str) -> Tuple[int, Record]:
        """Scan the table for ``record_id``; return its data-row offset and record.

        Linear in the number of rows.

        :raises NotFoundError: If no record has that id.
        """
        for offset, record in enumerate(self._read_records(table)):
            if record.get(ID_FIELD) == record_id:
                return offset, record
        raise NotFoundError(
            f"No record with id '{record_id}' in table '{table}'.",
            subcode=NOT_FOUND_RECORD,
            details={"table": table, "id": record_id},
        )

    def _locate(self, table: str, record_id: str) -> int:
        """Zero-based offset of the record among data rows (header excluded)."""
        return self._find(table, record_id)[0]

    def _list(self, table: str, filters: Optional[Dict[str, Any]] = None) -> List[Record]:
        records = self._read_records(table)
        if filters:
            records = [r for r in records if r.matches(filters)]
        return records

    def _get(self, table: str, record_id: str) -> Record:
        return self._find(table, record_id)[1]

    def _sheet_id(self, table: str) -> int:
        """Resolve a tab title to the numeric sheet id used by structural requests."""
        for props in self._sheet_properties():
            if props.get("title") == table:
                return int(props["sheetId"])
        raise SchemaError(
            f"Table '{table}' does not exist.",
            subcode=SCHEMA_TABLE_NOT_FOUND,
            details={"table": table},
        )

    def _sheet_properties(self) -> List[Dict[str, Any]]:
        r = self._request("get", self.api, operation="spreadsheets.get",
                          params={"fields": "sheets.properties(sheetId,title)"})
        try:
            body = r.json()
        except ValueError:
            body = {}
        sheets = body.get("sheets") if isinstance(body, dict) else None
        out: List[Dict[str, Any]] = []
        for sheet in sheets or []:
            props = sheet.get("properties") if isinstance(sheet, dict) else None
            if isinstance(props, dict):
                out.append(props)
        return out

    # --------------------------------------------------------------- writes

    def _insert(self, table: str, prefix: str, data: Dict[str, Any]) -> Record:
        """Append a new row with a generated ``<prefix>-<millis>`` id.

        No duplicate-id check is made; two inserts within the same millisecond
        under the same prefix produce the same id.

        :raises SchemaError: If the header is missing or has no ``id`` column.
        """
        with self._locks.hold(table):
            schema = self._read_schema(table)
            if ID_FIELD not in schema.fields:
                raise SchemaError(
                    f"Table '{table}' has no '{ID_FIELD}' column.",
                    subcode=SCHEMA_ID_COLUMN_MISSING,
                    details={"table": table, "header": list(schema.fields)},
                )
            values = {**data, ID_FIELD: f"{prefix}-{_now_millis()}"}
            row = schema.to_row(values)
            self._request(
                "post",
                self._values_url(_a1(table), ":append"),
                operation="values.append",
                table=table,
                params={
                    "valueInputOption": VALUE_INPUT_USER_ENTERED,
                    "insertDataOption": INSERT_DATA_INSERT_ROWS,
                },
                json={"majorDimension": "ROWS", "values": [row]},
            )
        record = schema.to_record(row)
        logger.info("Inserted %s into %s", record.id, table)
        return record

    def _update(self, table: str, record_id: str, changes: Dict[str, Any]) -> Record:
        """Merge ``changes`` into the stored row and write it back in place.

        Fields omitted from ``changes`` (or given as ``None``) keep their stored
        value. The ``id`` field is never rewritten.

        :raises NotFoundError: If no record has that id.
        """
        with self._locks.hold(table):
            offset, current = self._find(table, record_id)
            schema = self._read_schema(table)
            patch = {k: v for k, v in changes.items() if k != ID_FIELD}
            row = schema.to_row(patch, defaults=current.data)
            # Data offset 0 is sheet row 2 (row 1 holds the header).
            range_ = _a1(table, f"A{offset + 2}")
            self._request(
                "put",
                self._values_url(range_),
                operation="values.update",
                table=table,
                params={"valueInputOption": VALUE_INPUT_USER_ENTERED},
                json={"range": range_, "majorDimension": "ROWS", "values": [row]},
            )
        logger.info("Updated %s in %s", record_id, table)
        return schema.to_record(row)

    def _delete(self, table: str, record_id: str) -> None:
        """Remove the record's row; every later row shifts up by one.

        :raises NotFoundError: If no record has that id.
        """
        with self._locks.hold(table):
            offset = self._locate(table, record_id)
            sheet_id = self._sheet_id(table)
            # deleteDimension indexes are zero-based over all rows, header at 0.
            payload = {
                "requests": [
                    {
                        "deleteDimension": {
                            "range": {
                                "sheetId": sheet_id,
                                "dimension": "ROWS",
                                "startIndex": offset + 1,
                                "endIndex": offset + 2,
                            }
                        }
                    }
                ]
            }
            self._request("post", f"{self.api}:batchUpdate", operation="spreadsheets.batchUpdate",
                          table=table, json=payload)
        logger.info("Deleted %s from %s", record_id, table)
