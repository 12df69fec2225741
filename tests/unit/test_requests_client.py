"""Unit tests for the requests transport."""

import threading
from datetime import timedelta
from decimal import Decimal
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import patch

import pytest
import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from torn_api import RequestsClient, TornConfig
from torn_api.endpoints import user
from torn_api.exceptions import (
    DeserializeError,
    FeatureNotAvailableError,
    TornAPIConnectionError,
    TornAPIRateLimitError,
    TornAPITimeoutError,
)

from conftest import TEST_API_KEY, make_response

URL = f"https://api.torn.com/user/?selections=basic&key={TEST_API_KEY}"


@pytest.fixture
def unavailable_server():
    """Local HTTP server answering every GET with 503.

    Yields the server; ``server.hits`` counts the requests it received.
    """
    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            self.server.hits += 1
            self.send_response(503)
            self.send_header("Content-Length", "0")
            self.end_headers()

        def log_message(self, *args):
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    server.hits = 0
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join()


class TestRequestsClient:
    """Test suite for RequestsClient."""

    def test_default_session_does_not_retry(self):
        client = RequestsClient(TornConfig(max_retries=4))
        adapter = client.session.get_adapter("https://api.torn.com")
        assert adapter.max_retries.total == 0
        client.close()

    def test_max_retries_bounds_http_requests(self, test_config, unavailable_server):
        host, port = unavailable_server.server_address[:2]
        client = RequestsClient(test_config, base_url=f"http://{host}:{port}", max_retries=3)
        client.session.trust_env = False

        with client, pytest.raises(TornAPIConnectionError, match="503"):
            client.torn_api().user().selections(user.Selection.BASIC).send()
        assert unavailable_server.hits == 3

    def test_requests_feature_disabled(self, test_config, mock_session, monkeypatch):
        monkeypatch.setenv("TORN_API_FEATURES", "httpx,user")

        with pytest.raises(FeatureNotAvailableError, match="TORN_API_FEATURES"):
            RequestsClient(test_config, session=mock_session)

    def test_request_success(self, requests_client, mock_session):
        mock_session.get.return_value = make_response({"name": "Pyrit"})

        assert requests_client.request(URL) == {"name": "Pyrit"}
        mock_session.get.assert_called_once_with(URL, timeout=(5, 30))

    def test_api_errors_are_returned(self, requests_client, mock_session):
        """Errors other than rate limits are left for ApiResponse."""
        body = {"error": {"code": 2, "error": "Incorrect key"}}
        mock_session.get.return_value = make_response(body)

        assert requests_client.request(URL) == body
        assert mock_session.get.call_count == 1

    def test_retry_on_rate_limit(self, requests_client, mock_session):
        rate_limited = make_response({"error": {"code": 5, "error": "Too many requests"}})
        mock_session.get.side_effect = [rate_limited, rate_limited, make_response({"ok": True})]

        assert requests_client.request(URL) == {"ok": True}
        assert mock_session.get.call_count == 3

    def test_rate_limit_exhausts_retries(self, requests_client, mock_session):
        mock_session.get.return_value = make_response(
            {"error": {"code": 5, "error": "Too many requests"}}
        )

        with pytest.raises(TornAPIRateLimitError) as exc:
            requests_client.request(URL)
        assert exc.value.code == 5
        assert mock_session.get.call_count == 3

    def test_retry_after_connection_error(self, requests_client, mock_session):
        mock_session.get.side_effect = [
            ConnectionError("Temporary failure"),
            make_response({"ok": True}),
        ]

        assert requests_client.request(URL) == {"ok": True}
        assert mock_session.get.call_count == 2

    def test_connection_error(self, requests_client, mock_session):
        mock_session.get.side_effect = ConnectionError("Connection failed")

        with pytest.raises(TornAPIConnectionError, match="Failed to connect"):
            requests_client.request(URL)

    def test_timeout(self, requests_client, mock_session):
        mock_session.get.side_effect = Timeout("Request timed out")

        with pytest.raises(TornAPITimeoutError, match="Request timed out"):
            requests_client.request(URL)
        assert mock_session.get.call_count == 3

    def test_http_error(self, requests_client, mock_session):
        mock_session.get.return_value = make_response({}, status_code=502)

        with pytest.raises(TornAPIConnectionError, match="Request failed"):
            requests_client.request(URL)

    def test_invalid_json_is_not_retried(self, requests_client, mock_session):
        response = make_response(None)
        response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        mock_session.get.return_value = response

        with pytest.raises(DeserializeError):
            requests_client.request(URL)
        assert mock_session.get.call_count == 1

    def test_sensitive_data_masking(self, requests_client, mock_session):
        mock_session.get.side_effect = RequestException(f"Error with url {URL}")

        with pytest.raises(TornAPIConnectionError) as exc:
            requests_client.request(URL)

        assert TEST_API_KEY not in str(exc.value)
        assert "***" in str(exc.value)

    def test_debug_log_masks_key(self, requests_client, mock_session, caplog):
        mock_session.get.return_value = make_response({})
        with caplog.at_level("DEBUG", logger="torn_api"):
            requests_client.request(URL)
        assert "key=***" in caplog.text
        assert TEST_API_KEY not in caplog.text

    def test_decimal_floats(self, test_config, mock_session):
        client = RequestsClient(test_config, session=mock_session, use_decimal=True)
        mock_session.get.return_value = make_response({"price": Decimal("1.10")})

        client.request(URL)
        assert mock_session.get.return_value.json.call_args.kwargs == {"parse_float": Decimal}

    def test_plain_floats_by_default(self, requests_client, mock_session):
        requests_client.request(URL)
        assert mock_session.get.return_value.json.call_args.kwargs == {}

    def test_rate_limiting(self, test_config, mock_session):
        client = RequestsClient(test_config, session=mock_session, min_request_interval=0.2)
        mock_session.get.return_value = make_response({})

        with patch("torn_api.transports.requests_client.time.sleep") as mock_sleep:
            client.request(URL)
            client.request(URL)

        mock_sleep.assert_called_once()
        assert 0 < mock_sleep.call_args[0][0] <= 0.2

    def test_rate_limiting_is_per_key(self, test_config, mock_session):
        client = RequestsClient(test_config, session=mock_session, min_request_interval=5)
        other_url = URL.replace(TEST_API_KEY, "zzzz1234yyyy5678")

        with patch("torn_api.transports.requests_client.time.sleep") as mock_sleep:
            client.request(URL)
            client.request(other_url)

        mock_sleep.assert_not_called()
        assert client.min_request_interval == timedelta(seconds=5)

    def test_context_manager_closes_session(self, test_config, mock_session):
        with RequestsClient(test_config, session=mock_session):
            pass
        mock_session.close.assert_called_once()
