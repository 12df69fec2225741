"""Behavior shared by the transport bindings.

- Per-key request spacing
- Retry policy for transient failures
- JSON body parsing, optionally with decimal floats
- API key masking for logs and errors
"""

import logging
import re
from dataclasses import replace
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlsplit

from tenacity import (
    after_log,
    before_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .. import features
from ..config import TornConfig
from ..exceptions import (
    TornAPIConnectionError,
    TornAPIKeyError,
    TornAPIRateLimitError,
    TornAPITimeoutError,
    api_error,
)

KEY_QUERY_PATTERN = re.compile(r'key=[^&\s]+')

RATE_LIMIT_ERROR_CODE = 5


class TransportBase:
    """Mixin holding the configuration and policies of a transport."""

    # transient failures worth another attempt
    RETRY_EXCEPTIONS = (
        TornAPIRateLimitError,
        TornAPIConnectionError,
        TornAPITimeoutError,
    )

    def __init__(self, config: Optional[TornConfig] = None, **overrides):
        """Initialize the transport.

        Args:
            config: Client settings, defaults to ``TornConfig()``
            **overrides: Individual TornConfig fields to replace
        """
        config = config or TornConfig()
        if overrides:
            config = replace(config, **overrides)
        if config.use_decimal:
            features.require('decimal')
        self.config = config
        self.base_url = config.base_url.rstrip('/')
        self.min_request_interval = timedelta(seconds=config.min_request_interval)
        self.logger = logging.getLogger(type(self).__module__)
        self._last_request_time: Dict[str, datetime] = {}
        self._known_keys = set()
        if config.api_key:
            self._known_keys.add(config.api_key)

    def torn_api(self, key: Optional[str] = None, registry=None):
        """Bind a key to this client, defaulting to the configured key."""
        key = key or self.config.api_key
        if not key:
            raise TornAPIKeyError("No API key configured")
        self._known_keys.add(key)
        return super().torn_api(key, registry=registry)

    def mask(self, text: str) -> str:
        """Remove API keys from a URL or message."""
        masked = KEY_QUERY_PATTERN.sub('key=***', text)
        for key in self._known_keys:
            masked = masked.replace(key, '***')
        return masked

    def _api_key_of(self, url: str) -> str:
        keys = parse_qs(urlsplit(url).query).get('key')
        if keys:
            self._known_keys.add(keys[0])
            return keys[0]
        return ''

    def _reserve_slot(self, api_key: str) -> float:
        """Record a request for ``api_key``.

        Returns:
            float: Seconds to wait before sending it
        """
        now = datetime.now()
        sleep_time = 0.0
        last = self._last_request_time.get(api_key)
        if last is not None:
            time_since_last = now - last
            if time_since_last < self.min_request_interval:
                sleep_time = (self.min_request_interval - time_since_last).total_seconds()
        self._last_request_time[api_key] = now + timedelta(seconds=sleep_time)
        if sleep_time > 0:
            self.logger.debug(f"Rate limiting: sleeping for {sleep_time:.2f} seconds")
        return sleep_time

    def _retry_config(self) -> Dict[str, Any]:
        return {
            'stop': stop_after_attempt(max(1, self.config.max_retries)),
            'wait': wait_exponential(multiplier=self.config.retry_backoff, max=10),
            'retry': retry_if_exception_type(self.RETRY_EXCEPTIONS),
            'before': before_log(self.logger, logging.DEBUG),
            'after': after_log(self.logger, logging.DEBUG),
            'reraise': True,
        }

    def _json_kwargs(self) -> Dict[str, Any]:
        if self.config.use_decimal:
            return {'parse_float': Decimal}
        return {}

    def _check_rate_limit(self, body: Any) -> Any:
        """Turn a rate limit answer into an exception so it gets retried.

        Other API errors are left in the body for ApiResponse to report.
        """
        if isinstance(body, dict) and isinstance(body.get('error'), dict):
            error = body['error']
            if error.get('code') == RATE_LIMIT_ERROR_CODE:
                raise api_error(RATE_LIMIT_ERROR_CODE, str(error.get('error', '')))
        return body
