# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Per-table serialization of read-locate-write sequences."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class _TableLocks:
    """
    Registry of one lock per table name.

    Holding a table's lock makes a locate followed by a write atomic with respect
    to other writers in this process. Other processes writing the same
    spreadsheet are not covered.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def _lock_for(self, table: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(table)
            if lock is None:
                lock = self._locks[table] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, table: str) -> Iterator[None]:
        with self._lock_for(table):
            yield
