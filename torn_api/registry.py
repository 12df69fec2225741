"""API category registry.

This module discovers the category bindings in ``torn_api.endpoints``
and maps each category name (``user``, ``faction``...) to its
``Response`` class. Every category is registered; feature flags are
checked on lookup, so changes to ``TORN_API_FEATURES`` apply to the
shared registry too.
"""

import importlib
import inspect
import logging
import pkgutil
from typing import Dict, Optional, Type

from . import features
from .response import ApiCategoryResponse

logger = logging.getLogger(__name__)


class CategoryRegistry:
    """Registry of category response classes."""

    def __init__(self):
        self._responses: Dict[str, Type[ApiCategoryResponse]] = {}

    def register(self, response_class: Type[ApiCategoryResponse]) -> None:
        """Register a response class under its selection's category.

        Raises:
            ValueError: If the class is not an ApiCategoryResponse
        """
        if not (inspect.isclass(response_class)
                and issubclass(response_class, ApiCategoryResponse)):
            raise ValueError(
                f"{response_class!r} must inherit from ApiCategoryResponse"
            )
        category = response_class.selection.category()
        self._responses[category] = response_class
        logger.debug(f"Registered {response_class.__module__}.{response_class.__name__} "
                     f"for category '{category}'")

    def get(self, category: str) -> Type[ApiCategoryResponse]:
        """Look up the response class of a category.

        Raises:
            FeatureNotAvailableError: If the category's feature is disabled
            ValueError: If no such category exists
        """
        if category in features.FEATURES and features.FEATURES[category].section:
            features.require(category)
        if category not in self._responses:
            raise ValueError(f"No binding found for category: {category}")
        return self._responses[category]

    def load(self) -> None:
        """Import every module of ``torn_api.endpoints`` and register the
        ``Response`` class it defines."""
        from . import endpoints

        for _, name, _ in pkgutil.iter_modules(endpoints.__path__):
            module = importlib.import_module(f"{endpoints.__name__}.{name}")
            response_class = getattr(module, 'Response', None)
            if response_class is not None:
                self.register(response_class)

    def categories(self) -> Dict[str, str]:
        """Mapping of category names to response class paths."""
        return {
            category: f"{response_class.__module__}.{response_class.__name__}"
            for category, response_class in self._responses.items()
        }


_default_registry: Optional[CategoryRegistry] = None


def default_registry() -> CategoryRegistry:
    global _default_registry
    if _default_registry is None:
        registry = CategoryRegistry()
        registry.load()
        _default_registry = registry
    return _default_registry
