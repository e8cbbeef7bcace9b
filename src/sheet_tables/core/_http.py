# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with timeout handling, opt-in retries, and optional session support.

This module provides :class:`~sheet_tables.core._http._HttpClient`, a wrapper
around the requests library that applies per-method default timeouts and can
retry transport errors when configured to.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import requests


class _HttpClient:
    """
    HTTP client with timeout handling and configurable retry logic.

    By default each request is attempted once. Setting ``retries`` above one
    retries ``requests`` transport errors with exponential backoff; HTTP error
    statuses are never retried here.

    :param retries: Maximum number of attempts per request. Default is 1.
    :type retries: :class:`int` | None
    :param backoff: Base delay in seconds between attempts. Default is 0.5.
    :type backoff: :class:`float` | None
    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session for connection pooling.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.max_attempts = max(1, retries) if retries is not None else 1
        self.base_delay = backoff if backoff is not None else 0.5
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute an HTTP request with timeout management.

        Applies default timeouts based on HTTP method (120s for POST/PUT, 10s for others).

        :param method: HTTP method (GET, POST, PUT, ...).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: If all attempts fail.
        """
        if "timeout" not in kwargs:
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "put") else 10

        for attempt in range(self.max_attempts):
            try:
                if self._session is not None:
                    return self._session.request(method, url, **kwargs)
                return requests.request(method, url, **kwargs)
            except requests.exceptions.RequestException:
                if attempt == self.max_attempts - 1:
                    raise
                time.sleep(self.base_delay * (2**attempt))
        raise RuntimeError("Unexpected end of retry loop")

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
