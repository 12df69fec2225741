"""Torn API exceptions.

This module defines a hierarchy of exceptions for handling the error
conditions that may occur when talking to the Torn API or decoding its
responses.

Exception Hierarchy:
    TornAPIError (base)
    ├── ApiError
    │   ├── TornAPIKeyError
    │   ├── TornAPIRateLimitError
    │   ├── TornAPIAccessError
    │   └── TornAPIUnavailableError
    ├── TornAPIConnectionError
    ├── TornAPITimeoutError
    ├── DeserializeError
    └── FeatureNotAvailableError
"""

from typing import Dict, Optional, Tuple, Type


class TornAPIError(Exception):
    """Base exception for Torn API errors.

    Args:
        message: Human-readable error description
        code: Optional error code from the API
    """
    def __init__(self, message: str, code: Optional[int] = None):
        self.code = code
        super().__init__(message)

    def __str__(self):
        if self.code is not None:
            return f"[{self.code}] {super().__str__()}"
        return super().__str__()


class ApiError(TornAPIError):
    """Exception raised when the API answers with an ``error`` object.

    Args:
        code: Error code reported by the API
        reason: Error text reported by the API
    """
    def __init__(self, code: int, reason: str):
        self.reason = reason
        super().__init__(f"api returned error '{reason}', code = '{code}'", code)

    def __str__(self):
        """The message already names the code, so no ``[code]`` prefix."""
        return self.args[0]


class TornAPIKeyError(ApiError):
    """Raised when there are issues with API keys.

    Raised for API error codes reporting an empty, incorrect, inactive or
    paused key, and by key loading when no usable key is configured (in
    which case there is no code).
    """
    def __init__(self, code_or_message, reason: Optional[str] = None):
        if reason is None:
            self.reason = str(code_or_message)
            TornAPIError.__init__(self, str(code_or_message))
        else:
            super().__init__(code_or_message, reason)


class TornAPIRateLimitError(ApiError):
    """Raised when the key made more requests than the API allows per minute."""
    pass


class TornAPIAccessError(ApiError):
    """Raised when the key may not read the requested selection or entity."""
    pass


class TornAPIUnavailableError(ApiError):
    """Raised when the API is disabled or failed on its side."""
    pass


class TornAPIConnectionError(TornAPIError):
    """Raised when connection to the API fails.

    Raised when the application cannot establish a connection
    to the Torn API, such as network issues or DNS failures.
    """
    pass


class TornAPITimeoutError(TornAPIError):
    """Raised when API request times out."""
    pass


class DeserializeError(TornAPIError):
    """Raised when a response body is not JSON or does not fit the model."""
    pass


class FeatureNotAvailableError(TornAPIError):
    """Raised when a disabled feature flag is used."""
    pass


ERROR_MAPPING: Dict[int, Tuple[str, Type[ApiError]]] = {
    0: ("Unknown error", ApiError),
    1: ("Key is empty", TornAPIKeyError),
    2: ("Incorrect key", TornAPIKeyError),
    3: ("Wrong type", ApiError),
    4: ("Wrong fields", ApiError),
    5: ("Too many requests", TornAPIRateLimitError),
    6: ("Incorrect ID", ApiError),
    7: ("Incorrect ID-entity relation", TornAPIAccessError),
    8: ("IP block", ApiError),
    9: ("API disabled", TornAPIUnavailableError),
    10: ("Key owner is in federal jail", ApiError),
    11: ("Key change error", ApiError),
    12: ("Key read error", ApiError),
    13: ("The key is temporarily disabled due to owner inactivity", TornAPIKeyError),
    14: ("Daily read limit reached", ApiError),
    15: ("Temporary error", TornAPIUnavailableError),
    16: ("Access level of this key is not high enough", TornAPIAccessError),
    17: ("Backend error occurred, please try again", TornAPIUnavailableError),
    18: ("API key has been paused by the owner", TornAPIKeyError),
}


def api_error(code: int, reason: str) -> ApiError:
    """Build the exception matching an API error code."""
    _, error_class = ERROR_MAPPING.get(code, ("Unknown error", ApiError))
    return error_class(code, reason)
