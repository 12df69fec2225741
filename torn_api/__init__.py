"""Torn API bindings.

Typed bindings for the Torn City web API with a synchronous transport on
requests and an optional asynchronous one on httpx.

Usage:
    from torn_api import RequestsClient
    from torn_api.endpoints import faction

    client = RequestsClient()
    response = (client.torn_api("your_key")
                .faction()
                .selections(faction.Selection.BASIC)
                .send())
    print(response.basic().name)
"""

from .client import ApiClient, ApiRequestBuilder, AsyncApiClient, TornApi
from .config import TornConfig, load_api_keys, setup_logging
from .exceptions import (
    ApiError,
    DeserializeError,
    FeatureNotAvailableError,
    TornAPIAccessError,
    TornAPIConnectionError,
    TornAPIError,
    TornAPIKeyError,
    TornAPIRateLimitError,
    TornAPITimeoutError,
    TornAPIUnavailableError,
)
from .response import ApiCategoryResponse, ApiResponse, ApiSelection
from .transports import RequestsClient

__version__ = '0.7.4'

__all__ = [
    'ApiCategoryResponse',
    'ApiClient',
    'ApiError',
    'ApiRequestBuilder',
    'ApiResponse',
    'ApiSelection',
    'AsyncApiClient',
    'DeserializeError',
    'FeatureNotAvailableError',
    'RequestsClient',
    'TornAPIAccessError',
    'TornAPIConnectionError',
    'TornAPIError',
    'TornAPIKeyError',
    'TornAPIRateLimitError',
    'TornAPITimeoutError',
    'TornAPIUnavailableError',
    'TornApi',
    'TornConfig',
    'load_api_keys',
    'setup_logging',
]
