"""Synchronous transport on ``requests``.

This is the default binding. It keeps one ``requests.Session`` and retries
transient API, HTTP and network failures with tenacity. The session's
urllib3 adapter does not retry, so ``max_retries`` bounds the number of
GETs per request.
"""

import time
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from tenacity import Retrying
from urllib3.util.retry import Retry

from .. import features
from ..client import ApiClient
from ..config import TornConfig
from ..exceptions import (
    DeserializeError,
    TornAPIConnectionError,
    TornAPITimeoutError,
)
from .base import TransportBase


class RequestsClient(TransportBase, ApiClient):
    """Client for the Torn API on a requests session."""

    def __init__(self, config: Optional[TornConfig] = None,
                 session: Optional[requests.Session] = None, **overrides):
        """Initialize the client.

        Args:
            config: Client settings
            session: Session to use instead of a newly configured one
            **overrides: Individual TornConfig fields to replace

        Raises:
            FeatureNotAvailableError: If the ``requests`` feature is disabled
        """
        features.require('requests')
        super().__init__(config, **overrides)
        self.session = session or self._init_session()

    def _init_session(self) -> requests.Session:
        """Initialize a requests session.

        Retries are left to tenacity in :meth:`request`.
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=0,
            allowed_methods=["GET"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def close(self) -> None:
        """Close the session."""
        if hasattr(self, 'session'):
            self.session.close()

    def __enter__(self) -> 'RequestsClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, url: str) -> Dict[str, Any]:
        """GET ``url`` and return the parsed JSON body.

        Raises:
            TornAPIRateLimitError: If the API still reports code 5 after retries
            TornAPIConnectionError: On network or HTTP failure
            TornAPITimeoutError: On request timeout
            DeserializeError: If the body is not JSON
        """
        retrying = Retrying(**self._retry_config())
        return retrying(self._fetch, url)

    def _fetch(self, url: str) -> Any:
        api_key = self._api_key_of(url)
        sleep_time = self._reserve_slot(api_key)
        if sleep_time > 0:
            time.sleep(sleep_time)

        self.logger.debug(f"GET {self.mask(url)}")
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            raise TornAPITimeoutError("Request timed out")
        except requests.exceptions.ConnectionError as e:
            raise TornAPIConnectionError(f"Failed to connect to API: {self.mask(str(e))}")
        except requests.exceptions.RequestException as e:
            raise TornAPIConnectionError(f"Request failed: {self.mask(str(e))}")

        try:
            body = response.json(**self._json_kwargs())
        except ValueError as e:
            raise DeserializeError(f"api response couldn't be deserialized: {self.mask(str(e))}")

        return self._check_rate_limit(body)
