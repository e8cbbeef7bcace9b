# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Walk through the scheduling tables of a spreadsheet.

Requires SHEETS_SPREADSHEET_ID and a service-account key file
(SHEETS_CREDENTIALS_FILE, default ``credentials.json``) shared on the
spreadsheet with edit rights.
"""

import sys

from sheet_tables.client import SheetsClient
from sheet_tables.core.config import SheetsConfig
from sheet_tables.core.errors import NotFoundError, SheetsError


def log_call(call: str) -> None:
    print({"call": call})


def main() -> int:
    config = SheetsConfig.from_env()
    if not config.spreadsheet_id:
        print("Set SHEETS_SPREADSHEET_ID first; exiting.")
        return 1

    with SheetsClient.from_config(config) as client:
        log_call("client.tables.list()")
        print(client.tables.list())

        log_call('client.records.create("OperatingRooms", "or", {"name": "Room 1"})')
        room = client.records.create("OperatingRooms", "or", {"name": "Room 1"})
        print(room.to_dict())

        log_call(f'client.records.update("OperatingRooms", "{room.id}", {{"name": "Room 1A"}})')
        print(client.records.update("OperatingRooms", room.id, {"name": "Room 1A"}).to_dict())

        log_call('client.records.to_dataframe("OperatingRooms")')
        print(client.records.to_dataframe("OperatingRooms"))

        log_call("client.surgeries.list()")
        for surgery in client.surgeries.list():
            print(surgery["id"], surgery.get("scheduledDateTime"), surgery["surgeon"].get("name"))

        log_call(f'client.records.delete("OperatingRooms", "{room.id}")')
        client.records.delete("OperatingRooms", room.id)
        try:
            client.records.get("OperatingRooms", room.id)
        except NotFoundError as exc:
            print(f"Deleted: {exc.message}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except SheetsError as exc:
        print(exc.to_dict())
        sys.exit(1)
