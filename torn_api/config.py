"""Configuration for Torn API clients.

Settings can be given directly, read from the environment (a ``.env``
file is loaded first) or, for keys, read from a JSON file of named keys.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import find_dotenv, load_dotenv

from .exceptions import TornAPIKeyError

API_KEY_PATTERN = re.compile(r'^[A-Za-z0-9]{16}$')
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


@dataclass
class TornConfig:
    """Torn API client settings."""
    api_key: Optional[str] = None
    base_url: str = 'https://api.torn.com'
    min_request_interval: float = 1.0
    connect_timeout: float = 5
    read_timeout: float = 30
    max_retries: int = 3
    retry_backoff: float = 1.0
    use_decimal: bool = False

    @property
    def timeout(self):
        return (self.connect_timeout, self.read_timeout)

    @classmethod
    def from_env(cls, prefix: str = 'TORN_', dotenv_path: Optional[Union[str, Path]] = None) -> 'TornConfig':
        """Create TornConfig from environment variables.

        ``APIKEY`` or ``<prefix>API_KEY`` holds the key. The other settings
        are read from ``<prefix>BASE_URL``, ``<prefix>MIN_REQUEST_INTERVAL``,
        ``<prefix>CONNECT_TIMEOUT``, ``<prefix>READ_TIMEOUT``,
        ``<prefix>MAX_RETRIES``, ``<prefix>RETRY_BACKOFF`` and ``<prefix>USE_DECIMAL``.

        Raises:
            ValueError: If a numeric setting cannot be parsed
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        defaults = cls()

        def setting(name, convert, default):
            raw = os.getenv(f"{prefix}{name}")
            if raw is None or raw == '':
                return default
            try:
                return convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {prefix}{name}: {raw!r}") from e

        return cls(
            api_key=os.getenv(f"{prefix}API_KEY") or os.getenv('APIKEY'),
            base_url=setting('BASE_URL', str, defaults.base_url).rstrip('/'),
            min_request_interval=setting('MIN_REQUEST_INTERVAL', float, defaults.min_request_interval),
            connect_timeout=setting('CONNECT_TIMEOUT', float, defaults.connect_timeout),
            read_timeout=setting('READ_TIMEOUT', float, defaults.read_timeout),
            max_retries=setting('MAX_RETRIES', int, defaults.max_retries),
            retry_backoff=setting('RETRY_BACKOFF', float, defaults.retry_backoff),
            use_decimal=setting('USE_DECIMAL', _parse_bool, defaults.use_decimal),
        )


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(value)


def load_api_keys(api_key_or_file: str) -> Dict[str, str]:
    """Load API keys from a JSON file or a direct key.

    Args:
        api_key_or_file: Either a direct API key or path to a JSON file
            mapping key names to keys. The file must contain ``default``.

    Returns:
        Dict[str, str]: Key names to keys, a direct key is named ``default``

    Raises:
        TornAPIKeyError: If API keys cannot be loaded or are invalid.
    """
    if not api_key_or_file:
        raise TornAPIKeyError("No API key configured")

    if api_key_or_file.endswith('.json'):
        if not os.path.exists(api_key_or_file):
            raise TornAPIKeyError("API keys file not found")
        try:
            with open(api_key_or_file, 'r') as f:
                api_keys = json.load(f)
        except json.JSONDecodeError:
            raise TornAPIKeyError("API keys file must contain valid JSON")
        if not isinstance(api_keys, dict):
            raise TornAPIKeyError("API keys file must contain a JSON object")
        if "default" not in api_keys:
            raise TornAPIKeyError("API keys file must contain 'default' key")
    else:
        api_keys = {"default": api_key_or_file}

    for key_name, api_key in api_keys.items():
        if not isinstance(api_key, str) or not api_key.strip():
            raise TornAPIKeyError(f"Invalid API key for '{key_name}'")
        if not API_KEY_PATTERN.match(api_key):
            raise TornAPIKeyError(f"API key '{key_name}' has invalid format")

    return api_keys


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure console logging for scripts using the library."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()]
    )
