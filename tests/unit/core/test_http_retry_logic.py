# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from unittest.mock import Mock, patch

import pytest
import requests

from sheet_tables.core._http import _HttpClient


class TestHttpClient:
    """Timeouts and opt-in retries in _HttpClient."""

    def test_default_configuration(self):
        client = _HttpClient()
        assert client.max_attempts == 1
        assert client.base_delay == 0.5
        assert client.default_timeout is None

    @patch("requests.request")
    def test_get_uses_short_default_timeout(self, mock_request):
        mock_request.return_value = Mock(status_code=200)
        _HttpClient()._request("get", "https://test.example.com")
        assert mock_request.call_args.kwargs["timeout"] == 10

    @patch("requests.request")
    def test_writes_use_long_default_timeout(self, mock_request):
        mock_request.return_value = Mock(status_code=200)
        client = _HttpClient()
        client._request("post", "https://test.example.com")
        client._request("put", "https://test.example.com")
        assert [c.kwargs["timeout"] for c in mock_request.call_args_list] == [120, 120]

    @patch("requests.request")
    def test_configured_timeout_wins(self, mock_request):
        mock_request.return_value = Mock(status_code=200)
        _HttpClient(timeout=3)._request("post", "https://test.example.com")
        assert mock_request.call_args.kwargs["timeout"] == 3

    @patch("requests.request")
    @patch("time.sleep")
    def test_no_retry_by_default(self, mock_sleep, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError("Network error")
        with pytest.raises(requests.exceptions.ConnectionError):
            _HttpClient()._request("get", "https://test.example.com")
        assert mock_request.call_count == 1
        mock_sleep.assert_not_called()

    @patch("requests.request")
    @patch("time.sleep")
    def test_network_error_retry_when_enabled(self, mock_sleep, mock_request):
        mock_request.side_effect = [
            requests.exceptions.ConnectionError("Network error"),
            requests.exceptions.ConnectionError("Network error"),
            Mock(status_code=200),
        ]
        response = _HttpClient(retries=3)._request("get", "https://test.example.com")
        assert response.status_code == 200
        assert mock_request.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.5, 1.0]

    @patch("requests.request")
    def test_http_error_status_not_retried(self, mock_request):
        mock_request.return_value = Mock(status_code=503)
        response = _HttpClient(retries=3)._request("get", "https://test.example.com")
        assert response.status_code == 503
        assert mock_request.call_count == 1

    def test_session_used_and_closed(self):
        session = Mock()
        session.request.return_value = Mock(status_code=200)
        client = _HttpClient(session=session)
        client._request("get", "https://test.example.com")
        session.request.assert_called_once()
        client.close()
        session.close.assert_called_once()
        client.close()
        session.close.assert_called_once()
