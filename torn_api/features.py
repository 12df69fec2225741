"""Feature flags.

Each feature names the optional modules it needs and the features it
builds on. A feature is enabled when it is selected, its modules can be
imported and every feature it requires is enabled too.

All features are selected unless ``TORN_API_FEATURES`` holds a comma
separated list of feature names (``default`` expands to the default
set), for example ``TORN_API_FEATURES=default,httpx``.
"""

import importlib.util
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from .exceptions import FeatureNotAvailableError

FEATURES_ENV_VAR = 'TORN_API_FEATURES'


@dataclass(frozen=True)
class Feature:
    name: str
    modules: Tuple[str, ...] = ()
    requires: Tuple[str, ...] = ()
    default: bool = False
    section: bool = False
    description: str = field(default='', compare=False)


FEATURES: Dict[str, Feature] = {
    feature.name: feature for feature in (
        Feature('requests', modules=('requests',), default=True,
                description='synchronous transport on requests.Session'),
        Feature('httpx', modules=('httpx',),
                description='asynchronous transport on httpx.AsyncClient'),
        Feature('decimal', modules=('decimal',),
                description='decode JSON floats as decimal.Decimal'),
        Feature('frames', modules=('pandas',),
                description='flatten responses into pandas DataFrames'),
        Feature('__common', description='models shared between sections'),
        Feature('user', requires=('__common',), default=True, section=True),
        Feature('faction', requires=('__common',), default=True, section=True),
        Feature('torn', requires=('__common',), default=True, section=True),
        Feature('market', requires=('__common',), default=True, section=True),
        Feature('key', default=True, section=True),
    )
}

logger = logging.getLogger(__name__)


def selected_features(value: Optional[str] = None) -> FrozenSet[str]:
    """Resolve which features are selected.

    Args:
        value: Comma separated feature names, defaults to the value of
            ``TORN_API_FEATURES``. ``None`` or empty selects everything.

    Raises:
        ValueError: If an unknown feature name is given
    """
    if value is None:
        value = os.environ.get(FEATURES_ENV_VAR, '')
    names = [name.strip() for name in value.split(',') if name.strip()]
    if not names:
        return frozenset(FEATURES)

    selected = set()
    for name in names:
        if name == 'default':
            selected.update(f.name for f in FEATURES.values() if f.default)
        elif name in FEATURES:
            selected.add(name)
        else:
            raise ValueError(f"Unknown feature: {name}")

    # features pull in what they require
    pending = list(selected)
    while pending:
        for required in FEATURES[pending.pop()].requires:
            if required not in selected:
                selected.add(required)
                pending.append(required)
    return frozenset(selected)


def _importable(module: str) -> bool:
    return importlib.util.find_spec(module) is not None


def is_enabled(name: str, selected: Optional[FrozenSet[str]] = None) -> bool:
    """Check whether a feature can be used in this environment."""
    if name not in FEATURES:
        raise ValueError(f"Unknown feature: {name}")
    if selected is None:
        selected = selected_features()
    feature = FEATURES[name]
    if name not in selected:
        return False
    if not all(_importable(module) for module in feature.modules):
        return False
    return all(is_enabled(required, selected) for required in feature.requires)


def require(name: str) -> None:
    """Raise unless the feature is enabled.

    Raises:
        FeatureNotAvailableError: If the feature is disabled or its
            optional dependency is missing
    """
    if is_enabled(name):
        return
    feature = FEATURES[name]
    missing = [module for module in feature.modules if not _importable(module)]
    if missing:
        message = (f"Feature '{name}' needs {', '.join(missing)}; "
                   f"install torn-api[{name}]")
    else:
        message = f"Feature '{name}' is disabled by {FEATURES_ENV_VAR}"
    logger.debug(message)
    raise FeatureNotAvailableError(message)


def enabled_sections() -> List[str]:
    """API categories that can be requested."""
    selected = selected_features()
    return [
        feature.name for feature in FEATURES.values()
        if feature.section and is_enabled(feature.name, selected)
    ]
