# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Service-account authentication for the Google Sheets API.

This module provides :class:`~sheet_tables.core._auth._AuthManager`, which wraps a
``google-auth`` credential and hands out bearer tokens, refreshing them when they
have expired.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import google.auth.transport.requests
from google.auth.credentials import Credentials
from google.oauth2 import service_account

from ..common.constants import SHEETS_SCOPE


@dataclass
class _TokenPair:
    """
    Container for an OAuth2 access token.

    :param scope: The OAuth2 scope the token was requested for.
    :type scope: str
    :param access_token: The access token string.
    :type access_token: str
    """

    scope: str
    access_token: str


class _AuthManager:
    """
    Google credential-based authentication manager.

    :param credential: A ``google.auth`` credential, typically a service account.
    :type credential: ~google.auth.credentials.Credentials
    :raises TypeError: If ``credential`` is not a ``google.auth`` credential.
    """

    def __init__(self, credential: Credentials) -> None:
        if not isinstance(credential, Credentials):
            raise TypeError("credential must implement google.auth.credentials.Credentials.")
        self.credential: Credentials = credential
        self._refresh_request = google.auth.transport.requests.Request()

    def _acquire_token(self, scope: str = SHEETS_SCOPE) -> _TokenPair:
        """
        Return a valid access token, refreshing the credential if needed.

        :param scope: Scope the token is used for (recorded on the pair).
        :type scope: str
        :return: Token pair containing the scope and access token.
        :rtype: ~sheet_tables.core._auth._TokenPair
        :raises google.auth.exceptions.RefreshError: If the token cannot be refreshed.
        """
        if not self.credential.valid:
            self.credential.refresh(self._refresh_request)
        return _TokenPair(scope=scope, access_token=self.credential.token)


def load_service_account_credentials(path: str, scopes: Sequence[str] = (SHEETS_SCOPE,)) -> Credentials:
    """Load service-account credentials from a JSON key file."""
    return service_account.Credentials.from_service_account_file(path, scopes=list(scopes))
