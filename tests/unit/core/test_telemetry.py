# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for request telemetry (logging and tracing)."""

import logging
import unittest
from unittest.mock import MagicMock, patch

from sheet_tables.core.telemetry import (
    NoOpTelemetryManager,
    RequestContext,
    TelemetryConfig,
    TelemetryManager,
    create_telemetry_manager,
)


class TestTelemetryConfig(unittest.TestCase):
    def test_defaults(self):
        config = TelemetryConfig()
        self.assertFalse(config.enable_tracing)
        self.assertFalse(config.enable_logging)
        self.assertEqual(config.log_level, "WARNING")
        self.assertEqual(config.logger_name, "sheet_tables")


class TestCreateTelemetryManager(unittest.TestCase):
    def test_none_config_gives_noop(self):
        self.assertIsInstance(create_telemetry_manager(None), NoOpTelemetryManager)

    def test_everything_disabled_gives_noop(self):
        self.assertIsInstance(create_telemetry_manager(TelemetryConfig()), NoOpTelemetryManager)

    def test_logging_enabled_gives_manager(self):
        manager = create_telemetry_manager(TelemetryConfig(enable_logging=True))
        self.assertIsInstance(manager, TelemetryManager)
        self.assertFalse(manager.is_tracing_enabled)


class TestNoOpTelemetryManager(unittest.TestCase):
    def test_trace_request_yields_context(self):
        manager = NoOpTelemetryManager()
        with manager.trace_request("values.get", "GET", "https://x", "req-1", "corr-1", "Users") as ctx:
            manager.record_response(ctx, 200)
        self.assertIsInstance(ctx, RequestContext)
        self.assertEqual(ctx.table_name, "Users")
        self.assertEqual(ctx.client_request_id, "req-1")


class TestTelemetryLogging(unittest.TestCase):
    def setUp(self):
        self.manager = TelemetryManager(
            TelemetryConfig(enable_logging=True, log_level="DEBUG", logger_name="sheet_tables.test")
        )

    def test_success_logged_at_debug(self):
        with self.assertLogs("sheet_tables.test", level="DEBUG") as logs:
            with self.manager.trace_request("values.get", "GET", "https://x", "r", "c", "Users") as ctx:
                self.manager.record_response(ctx, 200)
        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].levelno, logging.DEBUG)
        self.assertIn("values.get GET 200", logs.output[0])

    def test_error_status_logged_at_warning(self):
        with self.assertLogs("sheet_tables.test", level="DEBUG") as logs:
            with self.manager.trace_request("values.append", "POST", "https://x", "r", "c") as ctx:
                self.manager.record_response(ctx, 429)
        self.assertEqual(logs.records[0].levelno, logging.WARNING)
        self.assertEqual(logs.records[0].client_request_id, "r")

    def test_exception_logged_and_reraised(self):
        with self.assertLogs("sheet_tables.test", level="WARNING") as logs:
            with self.assertRaises(ConnectionError):
                with self.manager.trace_request("values.get", "GET", "https://x", "r", "c"):
                    raise ConnectionError("boom")
        self.assertIn("failed: boom", logs.output[0])


class TestTelemetryTracing(unittest.TestCase):
    def test_span_started_with_attributes_and_ended(self):
        tracer = MagicMock()
        span = MagicMock()
        tracer.start_span.return_value = span
        with patch("sheet_tables.core.telemetry.trace.get_tracer", return_value=tracer):
            manager = TelemetryManager(TelemetryConfig(enable_tracing=True))
        self.assertTrue(manager.is_tracing_enabled)

        with manager.trace_request("values.get", "GET", "https://x", "r", "c", "Users") as ctx:
            manager.record_response(ctx, 200)

        name = tracer.start_span.call_args.args[0]
        attributes = tracer.start_span.call_args.kwargs["attributes"]
        self.assertEqual(name, "Sheets values.get Users")
        self.assertEqual(attributes["db.system"], "google_sheets")
        self.assertEqual(attributes["sheets.table"], "Users")
        span.set_attribute.assert_called_once_with("http.status_code", 200)
        span.end.assert_called_once()

    def test_span_records_exception(self):
        tracer = MagicMock()
        span = MagicMock()
        tracer.start_span.return_value = span
        with patch("sheet_tables.core.telemetry.trace.get_tracer", return_value=tracer):
            manager = TelemetryManager(TelemetryConfig(enable_tracing=True))

        with self.assertRaises(RuntimeError):
            with manager.trace_request("values.get", "GET", "https://x", "r", "c"):
                raise RuntimeError("nope")
        span.record_exception.assert_called_once()
        span.end.assert_called_once()


if __name__ == "__main__":
    unittest.main()
