# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for SheetsClient context manager support."""

import unittest
from unittest.mock import MagicMock

import requests

from sheet_tables.client import SheetsClient
from tests.fixtures.fake_sheets import fake_credential


class TestContextManager(unittest.TestCase):
    """Test context manager support on SheetsClient."""

    def setUp(self):
        self.credential = fake_credential()

    def test_enter_creates_session(self):
        client = SheetsClient("sheet-123", self.credential)
        self.assertIsNone(client._session)

        result = client.__enter__()

        self.assertIsInstance(client._session, requests.Session)
        self.assertTrue(client._owns_session)
        self.assertIs(result, client)

    def test_exit_closes_session(self):
        client = SheetsClient("sheet-123", self.credential)
        client.__enter__()
        mock_session = MagicMock(spec=requests.Session)
        client._session = mock_session

        client.__exit__(None, None, None)

        mock_session.close.assert_called_once()
        self.assertIsNone(client._session)
        self.assertFalse(client._owns_session)

    def test_close_idempotent(self):
        client = SheetsClient("sheet-123", self.credential)
        client.__enter__()
        client.close()
        client.close()
        self.assertIsNone(client._session)

    def test_close_without_enter(self):
        client = SheetsClient("sheet-123", self.credential)
        client.close()
        self.assertIsNone(client._session)

    def test_exit_with_exception(self):
        client = SheetsClient("sheet-123", self.credential)
        with self.assertRaises(ValueError):
            with client:
                self.assertIsNotNone(client._session)
                raise ValueError("Test exception")
        self.assertIsNone(client._session)

    def test_session_passed_to_sheets_client(self):
        with SheetsClient("sheet-123", self.credential) as client:
            sheets = client._get_sheets()
            self.assertIs(sheets._http._session, client._session)

    def test_close_also_closes_sheets_client(self):
        client = SheetsClient("sheet-123", self.credential)
        mock_sheets = MagicMock()
        client._sheets = mock_sheets

        client.close()

        mock_sheets.close.assert_called_once()
        self.assertIsNone(client._sheets)

    def test_nested_enter_reuses_session(self):
        client = SheetsClient("sheet-123", self.credential)
        with client:
            session = client._session
            client.__enter__()
            self.assertIs(client._session, session)


if __name__ == "__main__":
    unittest.main()
