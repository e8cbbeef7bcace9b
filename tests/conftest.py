# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for sheet_tables tests.

This module provides a populated in-memory spreadsheet and a client wired to it.
"""

import pytest

from sheet_tables.core.config import SheetsConfig
from tests.fixtures.fake_sheets import FakeSheetsHTTP, make_client
from tests.fixtures.sample_data import sample_tabs


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return SheetsConfig(
        spreadsheet_id="sheet-123",
        http_retries=1,
        http_backoff=0.1,
        http_timeout=5,
    )


@pytest.fixture
def store():
    """In-memory spreadsheet with the scheduling tabs populated."""
    return FakeSheetsHTTP(sample_tabs())


@pytest.fixture
def client(store, test_config):
    """SheetsClient backed by ``store``."""
    return make_client(store, test_config)
