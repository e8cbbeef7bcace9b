# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
from unittest.mock import MagicMock, patch

from sheet_tables.client import SheetsClient
from sheet_tables.core._error_codes import VALIDATION_ID_EMPTY, VALIDATION_TABLE_EMPTY
from sheet_tables.core.errors import NotFoundError, ValidationError
from sheet_tables.models.record import Record
from sheet_tables.operations.records import RecordOperations
from tests.fixtures.fake_sheets import FakeSheetsHTTP, fake_credential, make_client
from tests.fixtures.sample_data import sample_tabs


class TestRecordOperationsDelegation(unittest.TestCase):
    """client.records forwards to the low-level client inside a correlation scope."""

    def setUp(self):
        self.client = SheetsClient("sheet-123", fake_credential())
        self.client._sheets = MagicMock()

    def test_namespace_exists(self):
        self.assertIsInstance(self.client.records, RecordOperations)

    def test_list_forwards_filters(self):
        self.client._sheets._list.return_value = []
        self.client.records.list("Users", {"role": "Doctor"})
        self.client._sheets._list.assert_called_once_with("Users", {"role": "Doctor"})
        self.client._sheets._call_scope.assert_called_once()

    def test_create_forwards_prefix(self):
        self.client._sheets._insert.return_value = Record("OperatingRooms", {"id": "or-1"})
        result = self.client.records.create("OperatingRooms", "or", {"name": "Room 1"})
        self.client._sheets._insert.assert_called_once_with("OperatingRooms", "or", {"name": "Room 1"})
        self.assertEqual(result.id, "or-1")

    def test_empty_table_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.client.records.list("  ")
        self.assertEqual(ctx.exception.subcode, VALIDATION_TABLE_EMPTY)
        self.client._sheets._list.assert_not_called()

    def test_empty_id_rejected(self):
        for call in (
            lambda: self.client.records.get("Users", ""),
            lambda: self.client.records.update("Users", "", {}),
            lambda: self.client.records.delete("Users", ""),
        ):
            with self.assertRaises(ValidationError) as ctx:
                call()
            self.assertEqual(ctx.exception.subcode, VALIDATION_ID_EMPTY)

    def test_non_dict_payload_rejected(self):
        with self.assertRaises(TypeError):
            self.client.records.create("Users", "user", [{"name": "x"}])
        with self.assertRaises(TypeError):
            self.client.records.update("Users", "u1", "name=x")


class TestRecordOperationsAgainstSheet(unittest.TestCase):
    """End-to-end behaviour over the in-memory spreadsheet."""

    def setUp(self):
        self.store = FakeSheetsHTTP(sample_tabs())
        self.client = make_client(self.store)

    def test_list_empty_tab(self):
        self.assertEqual(self.client.records.list("OperatingRooms"), [])
        self.assertEqual(self.client.records.list("SurgeryTypes"), [])

    def test_list_pads_short_rows(self):
        [patient] = self.client.records.list("Patients")
        self.assertEqual(patient.to_dict(), {"id": "patient-1", "name": "P One", "dob": ""})

    def test_list_filters_exact_match(self):
        doctors = self.client.records.list("Users", {"role": "Doctor"})
        self.assertEqual([r.id for r in doctors], ["u2", "u3"])
        self.assertEqual(self.client.records.list("Users", {"role": "doctor"}), [])
        self.assertEqual(self.client.records.list("Users", {"wing": ""}), [])

    @patch("sheet_tables.data._sheets._now_millis", return_value=1717171717171)
    def test_create_then_list_room(self, _mock_now):
        created = self.client.records.create("OperatingRooms", "or", {"name": "Room 1"})
        self.assertEqual(created.id, "or-1717171717171")

        rooms = self.client.records.list("OperatingRooms")
        self.assertEqual(len(rooms), 1)
        self.assertEqual(rooms[0].to_dict(), {"id": "or-1717171717171", "name": "Room 1", "floor": ""})

    def test_create_round_trip_via_get(self):
        created = self.client.records.create("Users", "user", {"name": "D", "email": "d@example.com"})
        self.assertTrue(created.id.startswith("user-"))
        fetched = self.client.records.get("Users", created.id)
        self.assertEqual(fetched.to_dict(), created.to_dict())

    def test_partial_update_keeps_other_fields(self):
        self.client.records.update("Users", "u1", {"role": "Lead Nurse"})
        u1 = self.client.records.get("Users", "u1")
        self.assertEqual(u1.to_dict(), {"id": "u1", "name": "A", "email": "a@example.com", "role": "Lead Nurse"})
        self.assertEqual(self.client.records.get("Users", "u2")["role"], "Doctor")

    def test_delete_then_missing(self):
        self.client.records.delete("Users", "u2")
        self.assertEqual([r.id for r in self.client.records.list("Users")], ["u1", "u3"])
        with self.assertRaises(NotFoundError):
            self.client.records.get("Users", "u2")
        with self.assertRaises(NotFoundError):
            self.client.records.delete("Users", "u2")

    def test_update_after_delete_hits_shifted_row(self):
        self.client.records.delete("Users", "u1")
        self.client.records.update("Users", "u3", {"name": "Dr. C2"})
        self.assertEqual(self.store.tabs["Users"][2][:2], ["u3", "Dr. C2"])
        self.assertEqual(self.client.records.get("Users", "u2")["name"], "Dr. B")

    def test_update_missing(self):
        with self.assertRaises(NotFoundError):
            self.client.records.update("Users", "nobody", {"name": "x"})

    def test_requests_in_one_call_share_correlation_id(self):
        self.client.records.update("Users", "u1", {"role": "x"})
        ids = {c["headers"]["x-correlation-id"] for c in self.store.calls}
        self.assertEqual(len(self.store.calls), 3)
        self.assertEqual(len(ids), 1)


if __name__ == "__main__":
    unittest.main()
