"""Unit tests for the category registry."""

import pytest

from torn_api.endpoints import faction, key, market, torn, user
from torn_api.exceptions import FeatureNotAvailableError
from torn_api.registry import CategoryRegistry, default_registry


@pytest.fixture
def registry():
    registry = CategoryRegistry()
    registry.load()
    return registry


def test_load_discovers_all_categories(registry):
    assert registry.categories() == {
        'faction': 'torn_api.endpoints.faction.Response',
        'key': 'torn_api.endpoints.key.Response',
        'market': 'torn_api.endpoints.market.Response',
        'torn': 'torn_api.endpoints.torn.Response',
        'user': 'torn_api.endpoints.user.Response',
    }


def test_get(registry):
    assert registry.get('user') is user.Response
    assert registry.get('faction') is faction.Response
    assert registry.get('torn') is torn.Response
    assert registry.get('market') is market.Response
    assert registry.get('key') is key.Response


def test_get_unknown(registry):
    with pytest.raises(ValueError, match="No binding found"):
        registry.get('company')


def test_register_rejects_other_classes():
    with pytest.raises(ValueError):
        CategoryRegistry().register(dict)


def test_load_registers_disabled_categories(monkeypatch):
    monkeypatch.setenv('TORN_API_FEATURES', 'requests,key')
    registry = CategoryRegistry()
    registry.load()
    assert len(registry.categories()) == 5
    with pytest.raises(FeatureNotAvailableError):
        registry.get('user')

    monkeypatch.setenv('TORN_API_FEATURES', 'requests,user')
    assert registry.get('user') is user.Response


def test_get_disabled_category(registry, monkeypatch):
    monkeypatch.setenv('TORN_API_FEATURES', 'requests,key')
    with pytest.raises(FeatureNotAvailableError):
        registry.get('market')


def test_default_registry_is_shared():
    assert default_registry() is default_registry()


def test_default_registry_follows_feature_changes(monkeypatch):
    monkeypatch.setenv('TORN_API_FEATURES', 'requests,key')
    with pytest.raises(FeatureNotAvailableError):
        default_registry().get('faction')

    monkeypatch.delenv('TORN_API_FEATURES')
    assert default_registry().get('faction') is faction.Response
