# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Telemetry infrastructure for sheet_tables.

Provides OpenTelemetry-based tracing and stdlib logging of every request made
to the Google Sheets API.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator, Optional, Union

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..common.constants import (
    OTEL_ATTR_DB_SYSTEM,
    OTEL_ATTR_DB_OPERATION,
    OTEL_ATTR_HTTP_METHOD,
    OTEL_ATTR_HTTP_URL,
    OTEL_ATTR_HTTP_STATUS_CODE,
    OTEL_ATTR_SHEETS_TABLE,
    OTEL_ATTR_SHEETS_REQUEST_ID,
    OTEL_ATTR_SHEETS_CORRELATION_ID,
)


# ============================================================================
# Configuration
# ============================================================================


@dataclass(frozen=True)
class TelemetryConfig:
    """Configuration for request tracing and logging.

    Telemetry is opt-in. Spans go to whatever OpenTelemetry tracer provider the
    host process installed; without one they are no-ops.

    Example:
        Log every Sheets request at DEBUG and failures at WARNING::

            config = SheetsConfig(
                spreadsheet_id="...",
                telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG"),
            )
    """

    enable_tracing: bool = False
    enable_logging: bool = False

    log_level: str = "WARNING"
    logger_name: str = "sheet_tables"


# ============================================================================
# Context Objects
# ============================================================================


@dataclass
class RequestContext:
    """Context for one HTTP request to the Sheets API."""

    client_request_id: str
    correlation_id: str

    method: str
    url: str
    operation: str  # e.g., "values.get", "spreadsheets.batchUpdate"
    table_name: Optional[str] = None

    start_time: float = field(default_factory=time.perf_counter)

    _span: Any = field(default=None, repr=False)


# ============================================================================
# Telemetry Manager
# ============================================================================


class TelemetryManager:
    """Manages tracing and logging for Sheets API requests.

    This class is internal and not part of the public API.
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._config = config or TelemetryConfig()
        self._tracer: Optional[Any] = None
        self._logger: Optional[logging.Logger] = None

        if self._config.enable_tracing:
            self._tracer = trace.get_tracer("sheet_tables")
        if self._config.enable_logging:
            self._logger = logging.getLogger(self._config.logger_name)
            self._logger.setLevel(getattr(logging, self._config.log_level.upper()))

    @property
    def is_tracing_enabled(self) -> bool:
        return self._tracer is not None

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        client_request_id: str,
        correlation_id: str,
        table_name: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        """Create a traced request context.

        Usage:
            with telemetry.trace_request("values.get", "GET", url, req_id, corr_id) as ctx:
                response = self._http._request(...)
                telemetry.record_response(ctx, response.status_code)
        """
        ctx = RequestContext(
            client_request_id=client_request_id,
            correlation_id=correlation_id,
            method=method,
            url=url,
            operation=operation,
            table_name=table_name,
        )

        span = None
        if self._tracer:
            span_name = f"Sheets {operation}"
            if table_name:
                span_name = f"{span_name} {table_name}"
            span = self._tracer.start_span(
                span_name,
                kind=trace.SpanKind.CLIENT,
                attributes={
                    OTEL_ATTR_DB_SYSTEM: "google_sheets",
                    OTEL_ATTR_DB_OPERATION: operation,
                    OTEL_ATTR_HTTP_METHOD: method,
                    OTEL_ATTR_HTTP_URL: url,
                    OTEL_ATTR_SHEETS_REQUEST_ID: client_request_id,
                    OTEL_ATTR_SHEETS_CORRELATION_ID: correlation_id,
                    **({OTEL_ATTR_SHEETS_TABLE: table_name} if table_name else {}),
                },
            )
            ctx._span = span

        try:
            yield ctx
        except Exception as e:
            if span:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
            if self._logger:
                self._logger.warning("%s %s failed: %s", ctx.operation, ctx.method, e)
            raise
        finally:
            if span:
                span.end()

    def record_response(self, ctx: RequestContext, status_code: int) -> None:
        """Attach the response status to the span and log the request outcome."""
        duration_ms = (time.perf_counter() - ctx.start_time) * 1000

        if ctx._span:
            ctx._span.set_attribute(OTEL_ATTR_HTTP_STATUS_CODE, status_code)

        if self._logger:
            level = logging.WARNING if status_code >= 400 else logging.DEBUG
            self._logger.log(
                level,
                f"{ctx.operation} {ctx.method} {status_code} {duration_ms:.1f}ms",
                extra={
                    "client_request_id": ctx.client_request_id,
                    "correlation_id": ctx.correlation_id,
                },
            )


# ============================================================================
# No-op Manager for when telemetry is disabled
# ============================================================================


class NoOpTelemetryManager:
    """No-op telemetry manager when telemetry is disabled."""

    is_tracing_enabled = False

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        client_request_id: str,
        correlation_id: str,
        table_name: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        yield RequestContext(
            client_request_id=client_request_id,
            correlation_id=correlation_id,
            method=method,
            url=url,
            operation=operation,
            table_name=table_name,
        )

    def record_response(self, *args: Any, **kwargs: Any) -> None:
        pass


def create_telemetry_manager(
    config: Optional[TelemetryConfig],
) -> Union[TelemetryManager, NoOpTelemetryManager]:
    """Factory to create appropriate telemetry manager."""
    if config is None or not (config.enable_tracing or config.enable_logging):
        return NoOpTelemetryManager()
    return TelemetryManager(config)


__all__ = [
    "TelemetryConfig",
    "TelemetryManager",
    "NoOpTelemetryManager",
    "RequestContext",
    "create_telemetry_manager",
]
