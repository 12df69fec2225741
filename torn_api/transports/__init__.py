"""Transport bindings.

``RequestsClient`` is always exported but can only be built while the
``requests`` feature is enabled. ``HttpxClient`` is exported when the
``httpx`` feature is enabled.
"""

from .. import features
from .requests_client import RequestsClient

__all__ = ['RequestsClient']

if features.is_enabled('httpx'):
    from .httpx_client import HttpxClient  # noqa: F401
    __all__.append('HttpxClient')
