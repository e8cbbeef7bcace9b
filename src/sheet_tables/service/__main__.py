# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Run the service: ``python -m sheet_tables.service``."""

from __future__ import annotations

import logging
import os

import uvicorn

from ..client import SheetsClient
from ..core.config import SheetsConfig
from .app import ServiceSettings, create_app


def main() -> None:
    logging.basicConfig(
        level=os.getenv("SHEETS_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = SheetsConfig.from_env()
    if not config.spreadsheet_id:
        raise RuntimeError("Environment variable 'SHEETS_SPREADSHEET_ID' is required.")
    settings = ServiceSettings.from_env()

    # Credentials are loaded before serving so a bad key file fails at startup.
    with SheetsClient.from_config(config) as client:
        logging.getLogger(__name__).info(
            "Serving spreadsheet %s on port %d", config.spreadsheet_id, settings.port
        )
        uvicorn.run(create_app(client, settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
