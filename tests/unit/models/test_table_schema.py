# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from sheet_tables.models.table_schema import TableSchema, _to_cell, records_from_grid


class TestToCell:
    def test_values(self):
        assert _to_cell(None) == ""
        assert _to_cell("x") == "x"
        assert _to_cell(True) == "TRUE"
        assert _to_cell(False) == "FALSE"
        assert _to_cell(3) == "3"
        assert _to_cell(2.5) == "2.5"
        assert _to_cell({"a": 1}) == '{"a": 1}'
        assert _to_cell(["é"]) == '["é"]'


class TestTableSchema:
    def setup_method(self):
        self.schema = TableSchema.from_header_row("Users", ["id", "name", "email"])

    def test_fields_in_column_order(self):
        assert self.schema.fields == ("id", "name", "email")

    def test_short_row_padded(self):
        record = self.schema.to_record(["u1", "A"])
        assert record.to_dict() == {"id": "u1", "name": "A", "email": ""}
        assert record.table == "Users"

    def test_extra_cells_dropped(self):
        record = self.schema.to_record(["u1", "A", "a@x", "junk"])
        assert record.to_dict() == {"id": "u1", "name": "A", "email": "a@x"}

    def test_duplicate_header_rightmost_wins(self):
        schema = TableSchema.from_header_row("T", ["id", "x", "x"])
        assert schema.to_record(["1", "left", "right"]).to_dict() == {"id": "1", "x": "right"}

    def test_to_row_orders_and_blanks(self):
        row = self.schema.to_row({"email": "a@x", "id": "u1", "unknown": "ignored"})
        assert row == ["u1", "", "a@x"]

    def test_to_row_defaults_fill_missing_and_none(self):
        row = self.schema.to_row(
            {"name": "B", "email": None},
            defaults={"id": "u1", "name": "A", "email": "a@x"},
        )
        assert row == ["u1", "B", "a@x"]

    def test_to_row_empty_string_overrides_default(self):
        row = self.schema.to_row({"email": ""}, defaults={"id": "u1", "name": "A", "email": "a@x"})
        assert row == ["u1", "A", ""]


class TestRecordsFromGrid:
    def test_empty_grid(self):
        assert records_from_grid("T", []) == []

    def test_header_only(self):
        assert records_from_grid("T", [["id", "name"]]) == []

    def test_rows(self):
        records = records_from_grid("T", [["id", "name"], ["1", "a"], ["2"]])
        assert [r.to_dict() for r in records] == [{"id": "1", "name": "a"}, {"id": "2", "name": ""}]
