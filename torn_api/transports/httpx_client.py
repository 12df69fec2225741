"""Asynchronous transport on ``httpx``.

Needs the ``httpx`` extra. Use ``ApiRequestBuilder.send_async()`` with
this client.
"""

import asyncio
from typing import Any, Dict, Optional

from tenacity import AsyncRetrying

from .. import features
from ..client import AsyncApiClient
from ..config import TornConfig
from ..exceptions import (
    DeserializeError,
    TornAPIConnectionError,
    TornAPITimeoutError,
)
from .base import TransportBase

features.require('httpx')

import httpx  # noqa: E402


class HttpxClient(TransportBase, AsyncApiClient):
    """Client for the Torn API on an ``httpx.AsyncClient``."""

    def __init__(self, config: Optional[TornConfig] = None,
                 client: Optional[httpx.AsyncClient] = None, **overrides):
        """Initialize the client.

        Args:
            config: Client settings
            client: httpx client to use instead of a newly created one
            **overrides: Individual TornConfig fields to replace
        """
        super().__init__(config, **overrides)
        self.http = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.read_timeout, connect=self.config.connect_timeout),
        )
        self._lock = asyncio.Lock()

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> 'HttpxClient':
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def request(self, url: str) -> Dict[str, Any]:
        """GET ``url`` and return the parsed JSON body.

        Raises the same errors as :meth:`RequestsClient.request`.
        """
        async for attempt in AsyncRetrying(**self._retry_config()):
            with attempt:
                return await self._fetch(url)

    async def _fetch(self, url: str) -> Any:
        api_key = self._api_key_of(url)
        async with self._lock:
            sleep_time = self._reserve_slot(api_key)
        if sleep_time > 0:
            await asyncio.sleep(sleep_time)

        self.logger.debug(f"GET {self.mask(url)}")
        try:
            response = await self.http.get(url)
            response.raise_for_status()
        except httpx.TimeoutException:
            raise TornAPITimeoutError("Request timed out")
        except httpx.TransportError as e:
            raise TornAPIConnectionError(f"Failed to connect to API: {self.mask(str(e))}")
        except httpx.HTTPError as e:
            raise TornAPIConnectionError(f"Request failed: {self.mask(str(e))}")

        try:
            body = response.json(**self._json_kwargs())
        except ValueError as e:
            raise DeserializeError(f"api response couldn't be deserialized: {self.mask(str(e))}")

        return self._check_rate_limit(body)
