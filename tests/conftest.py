"""Test configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock, Mock

import pytest
import requests

from torn_api import RequestsClient, TornConfig

TEST_DATA_DIR = Path(__file__).parent / "fixtures"
TEST_API_KEY = "abcd1234efgh5678"


def load_fixture(name: str) -> Dict[str, Any]:
    """Load a JSON fixture file.

    Args:
        name: Name of the fixture file (without .json extension)
    """
    with open(TEST_DATA_DIR / f"{name}.json") as f:
        return json.load(f)


def make_response(body: Any, status_code: int = 200) -> Mock:
    """Create a mock requests response returning ``body`` from json()."""
    mock = Mock()
    mock.status_code = status_code
    mock.json.return_value = body
    if status_code >= 400:
        mock.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    else:
        mock.raise_for_status.return_value = None
    return mock


@pytest.fixture
def api_key() -> str:
    return TEST_API_KEY


@pytest.fixture
def test_config() -> TornConfig:
    """Settings without request spacing or retry waits."""
    return TornConfig(api_key=TEST_API_KEY, min_request_interval=0, retry_backoff=0)


@pytest.fixture
def mock_session():
    session = MagicMock(spec=requests.Session)
    session.get.return_value = make_response({})
    return session


@pytest.fixture
def requests_client(test_config, mock_session) -> RequestsClient:
    return RequestsClient(test_config, session=mock_session)


@pytest.fixture
def faction_basic_data() -> Dict[str, Any]:
    return load_fixture("faction_basic")


@pytest.fixture
def user_profile_data() -> Dict[str, Any]:
    return load_fixture("user_profile")


@pytest.fixture
def torn_data() -> Dict[str, Any]:
    return load_fixture("torn_items_stocks")


@pytest.fixture
def market_data() -> Dict[str, Any]:
    return load_fixture("market")


@pytest.fixture
def key_info_data() -> Dict[str, Any]:
    return load_fixture("key_info")


@pytest.fixture(autouse=True)
def all_features(monkeypatch):
    """Run every test with all features selected."""
    monkeypatch.delenv("TORN_API_FEATURES", raising=False)
