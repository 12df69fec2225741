"""Selections and responses shared by every API category.

- ApiSelection: enum base for the selections of one category
- ApiResponse: a raw JSON body that passed the API error check
- ApiCategoryResponse: base for the typed per-category responses
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from .exceptions import DeserializeError, api_error

T = TypeVar('T')

logger = logging.getLogger(__name__)


class ApiSelection(Enum):
    """Base for the ``Selection`` enum of an API category.

    Members are declared as ``(raw_value, decoder[, flatten[, field]])``:
    ``decoder`` turns raw JSON into the model, ``flatten`` decodes the
    whole body instead of a single field and ``field`` overrides the
    field name (it defaults to ``raw_value``).
    """

    def __init__(self, raw_value: str, decoder: Callable[[Any], Any],
                 flatten: bool = False, field: Optional[str] = None):
        self.raw_value = raw_value
        self.decoder = decoder
        self.flatten = flatten
        self.field = field or raw_value

    @classmethod
    def category(cls) -> str:
        raise NotImplementedError(f"{cls.__name__} does not name its category")

    @classmethod
    def from_raw(cls, raw_value: str) -> 'ApiSelection':
        for member in cls:
            if member.raw_value == raw_value:
                return member
        raise ValueError(f"'{raw_value}' is not a {cls.category()} selection")


class ApiResponse:
    """A decoded response body that carries no API error."""

    def __init__(self, value: Dict[str, Any]):
        self.value = value

    @classmethod
    def from_value(cls, value: Any) -> 'ApiResponse':
        """Check a raw body for an API error.

        Args:
            value: Parsed JSON body

        Returns:
            ApiResponse: The wrapped body

        Raises:
            ApiError: If the body contains an ``error`` object
            DeserializeError: If the body or its error object is malformed
        """
        if not isinstance(value, dict):
            raise DeserializeError(
                f"api response couldn't be deserialized: expected an object, got {type(value).__name__}"
            )

        if 'error' in value:
            error = value['error']
            try:
                code = int(error['code'])
                reason = str(error['error'])
            except (KeyError, TypeError, ValueError) as e:
                raise DeserializeError(f"api response couldn't be deserialized: {e}") from e
            exc = api_error(code, reason)
            logger.error(str(exc))
            raise exc

        return cls(value)

    def decode(self, decoder: Callable[[Any], T]) -> T:
        """Decode the whole body."""
        return _run_decoder(decoder, self.value)

    def decode_field(self, decoder: Callable[[Any], T], field: str) -> T:
        """Decode a single top-level field of the body.

        Raises:
            DeserializeError: If the field is missing or does not fit
        """
        if field not in self.value:
            raise DeserializeError(f"missing field `{field}`")
        return _run_decoder(decoder, self.value[field])


def _run_decoder(decoder: Callable[[Any], T], value: Any) -> T:
    try:
        return decoder(value)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DeserializeError(f"api response couldn't be deserialized: {e!r}") from e


class ApiCategoryResponse:
    """Typed response of one API category.

    Subclasses set ``selection`` to their ``Selection`` enum and add one
    accessor per member that calls :meth:`get`.
    """

    selection: Type[ApiSelection]

    def __init__(self, response: ApiResponse):
        self.response = response

    @classmethod
    def from_response(cls, response: ApiResponse) -> 'ApiCategoryResponse':
        return cls(response)

    @property
    def raw(self) -> Dict[str, Any]:
        return self.response.value

    def get(self, selection: ApiSelection) -> Any:
        """Decode the data of one selection.

        Raises:
            ValueError: If the selection belongs to another category
            DeserializeError: If the data is missing or malformed
        """
        if not isinstance(selection, self.selection):
            raise ValueError(
                f"{selection!r} is not a {self.selection.category()} selection"
            )
        if selection.flatten:
            return self.response.decode(selection.decoder)
        return self.response.decode_field(selection.decoder, selection.field)
