# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import requests
from google.auth.credentials import Credentials

from .core._auth import _AuthManager, load_service_account_credentials
from .core._locks import _TableLocks
from .core.config import SheetsConfig
from .data._sheets import _SheetsClient
from .operations.records import RecordOperations
from .operations.surgeries import SurgeryOperations
from .operations.tables import TableOperations


class SheetsClient:
    """
    High-level client for spreadsheet-backed tables.

    Each tab of the spreadsheet is a table; its first row is the header. The
    client authenticates with a ``google-auth`` credential and delegates HTTP
    operations to an internal :class:`~sheet_tables.data._sheets._SheetsClient`.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager reuses one HTTP session::

            with SheetsClient(spreadsheet_id, credential) as client:
                client.records.create("OperatingRooms", "or", {"name": "Room 1"})

    Operations are organized under namespaces:

    - ``client.records``: list, get, create, update, delete, to_dataframe
    - ``client.tables``: headers, sheet_id, list
    - ``client.surgeries``: enriched list, create, update, set_status, delete

    Writes to the same table from this client (and every client sharing its
    ``locks``) are serialized, so a row located for an update or delete cannot
    move before the write lands. Writers in other processes are not covered.

    :param spreadsheet_id: Identifier of the spreadsheet (from its URL).
    :type spreadsheet_id: :class:`str`
    :param credential: ``google-auth`` credential with the spreadsheets scope.
    :type credential: ~google.auth.credentials.Credentials
    :param config: Optional configuration for timeouts, retries and telemetry.
    :type config: ~sheet_tables.core.config.SheetsConfig or None

    :raises ValueError: If ``spreadsheet_id`` is missing or empty.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        credential: Credentials,
        config: Optional[SheetsConfig] = None,
    ) -> None:
        self.auth = _AuthManager(credential)
        self._spreadsheet_id = (spreadsheet_id or "").strip()
        if not self._spreadsheet_id:
            raise ValueError("spreadsheet_id is required.")
        self._config = config or SheetsConfig(spreadsheet_id=self._spreadsheet_id)
        self._sheets: Optional[_SheetsClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False
        self._locks = _TableLocks()

        self.records = RecordOperations(self)
        self.tables = TableOperations(self)
        self.surgeries = SurgeryOperations(self)

    @classmethod
    def from_config(cls, config: SheetsConfig) -> "SheetsClient":
        """
        Build a client from configuration, loading the service-account key file.

        :raises FileNotFoundError: If ``config.credentials_file`` does not exist.
        """
        credential = load_service_account_credentials(config.credentials_file)
        return cls(config.spreadsheet_id, credential, config)

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    def __enter__(self) -> "SheetsClient":
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release the HTTP session. Safe to call multiple times.
        """
        if self._sheets is not None:
            self._sheets.close()
            self._sheets = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_sheets(self) -> _SheetsClient:
        """
        Get or create the internal Sheets API client.

        Construction is deferred to the first call so building a client makes no
        network requests.
        """
        if self._sheets is None:
            self._sheets = _SheetsClient(
                self.auth,
                self._spreadsheet_id,
                self._config,
                session=self._session,
                locks=self._locks,
            )
        return self._sheets

    @contextmanager
    def _scoped_sheets(self) -> Iterator[_SheetsClient]:
        """Yield the low-level client while ensuring a correlation scope is active."""
        sh = self._get_sheets()
        with sh._call_scope():
            yield sh


__all__ = ["SheetsClient"]
