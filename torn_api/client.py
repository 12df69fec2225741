"""Torn API request building.

This module ties the pieces together:
- ApiClient / AsyncApiClient: the transport bindings' interface
- TornApi: an API key bound to a client, entry point per category
- ApiRequestBuilder: collects selections and options, sends the request

Transports live in :mod:`torn_api.transports`.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type
from urllib.parse import quote

from .response import ApiCategoryResponse, ApiResponse, ApiSelection
from .registry import CategoryRegistry, default_registry

API_BASE_URL = "https://api.torn.com"

logger = logging.getLogger(__name__)


class ApiClient(ABC):
    """A synchronous transport binding."""

    is_async = False
    base_url = API_BASE_URL

    @abstractmethod
    def request(self, url: str) -> Dict[str, Any]:
        """GET ``url`` and return the parsed JSON body."""

    def torn_api(self, key: str, registry: Optional[CategoryRegistry] = None) -> 'TornApi':
        return TornApi(self, key, registry=registry)


class AsyncApiClient(ApiClient):
    """An asynchronous transport binding."""

    is_async = True

    @abstractmethod
    async def request(self, url: str) -> Dict[str, Any]:
        """GET ``url`` and return the parsed JSON body."""


class TornApi:
    """An API key bound to a client.

    Usage:
        api = RequestsClient().torn_api("XXXXXXXXXXXXXXXX")
        basic = api.faction().selections(faction.Selection.BASIC).send().basic()
    """

    def __init__(self, client: ApiClient, key: str, registry: Optional[CategoryRegistry] = None):
        self.client = client
        self.api_key = key
        self.registry = registry or default_registry()

    def category(self, name: str, id: Optional[int] = None) -> 'ApiRequestBuilder':
        """Start a request for any registered category."""
        return ApiRequestBuilder(self.client, self.api_key, self.registry.get(name), id)

    def user(self, id: Optional[int] = None) -> 'ApiRequestBuilder':
        return self.category('user', id)

    def faction(self, id: Optional[int] = None) -> 'ApiRequestBuilder':
        return self.category('faction', id)

    def torn(self, id: Optional[int] = None) -> 'ApiRequestBuilder':
        return self.category('torn', id)

    def market(self, id: Optional[int] = None) -> 'ApiRequestBuilder':
        return self.category('market', id)

    def key(self) -> 'ApiRequestBuilder':
        return self.category('key')


def _unix(moment: datetime) -> int:
    # naive datetimes are taken to be UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())


class ApiRequestBuilder:
    """Builds and sends a request for one category."""

    def __init__(self, client: ApiClient, key: str,
                 response_class: Type[ApiCategoryResponse], id: Optional[int] = None):
        self.client = client
        self.api_key = key
        self.response_class = response_class
        self.id = id
        self._selections: List[str] = []
        self._from: Optional[datetime] = None
        self._to: Optional[datetime] = None
        self._comment: Optional[str] = None

    @property
    def category(self) -> str:
        return self.response_class.selection.category()

    def selections(self, *selections: ApiSelection) -> 'ApiRequestBuilder':
        """Add selections, either members or an iterable of members.

        Raises:
            ValueError: If a selection belongs to another category
        """
        if len(selections) == 1 and not isinstance(selections[0], ApiSelection):
            selections = tuple(selections[0])
        for selection in selections:
            if not isinstance(selection, self.response_class.selection):
                raise ValueError(f"{selection!r} is not a {self.category} selection")
            self._selections.append(selection.raw_value)
        return self

    def from_(self, moment: datetime) -> 'ApiRequestBuilder':
        self._from = moment
        return self

    def to(self, moment: datetime) -> 'ApiRequestBuilder':
        self._to = moment
        return self

    def comment(self, comment: str) -> 'ApiRequestBuilder':
        self._comment = comment
        return self

    def url(self) -> str:
        """Build the request URL."""
        query_fragments = [
            f"selections={','.join(self._selections)}",
            f"key={self.api_key}",
        ]
        if self._from is not None:
            query_fragments.append(f"from={_unix(self._from)}")
        if self._to is not None:
            query_fragments.append(f"to={_unix(self._to)}")
        if self._comment is not None:
            query_fragments.append(f"comment={quote(self._comment, safe='')}")

        id_fragment = '' if self.id is None else str(self.id)
        base_url = getattr(self.client, 'base_url', API_BASE_URL).rstrip('/')
        return f"{base_url}/{self.category}/{id_fragment}?{'&'.join(query_fragments)}"

    def send(self) -> ApiCategoryResponse:
        """Execute the request on a synchronous client.

        Raises:
            ApiError: If the API reports an error
            TornAPIConnectionError: On network failure
            TornAPITimeoutError: On request timeout
            DeserializeError: If the body is not valid JSON
            TypeError: If the client is asynchronous
        """
        if self.client.is_async:
            raise TypeError("Use send_async() with an asynchronous client")
        value = self.client.request(self.url())
        return self.response_class.from_response(ApiResponse.from_value(value))

    async def send_async(self) -> ApiCategoryResponse:
        """Execute the request on an asynchronous client.

        Raises the same errors as :meth:`send`.
        """
        if not self.client.is_async:
            raise TypeError("Use send() with a synchronous client")
        value = await self.client.request(self.url())
        return self.response_class.from_response(ApiResponse.from_value(value))
