"""Unit tests for the user category bindings."""

from datetime import datetime, timezone

import pytest

from torn_api.endpoints import user
from torn_api.exceptions import DeserializeError
from torn_api.response import ApiResponse


@pytest.fixture
def response(user_profile_data):
    return user.Response(ApiResponse.from_value(user_profile_data))


def test_basic(response):
    basic = response.basic()
    assert basic.player_id == 2111649
    assert basic.name == "Pyrit"
    assert basic.gender == "Female"
    assert basic.status.is_okay


def test_profile(response):
    profile = response.profile()
    assert profile.rank == "Reasonable Average"
    assert profile.signup == datetime(2019, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert profile.donator is True
    assert profile.life.current == 1500
    assert profile.life.maximum == 2000
    assert profile.last_action.timestamp == datetime.fromtimestamp(1710579151, tz=timezone.utc)
    assert profile.faction.faction_id == 40832
    assert profile.faction.faction_tag == "TF"


def test_profile_without_faction(user_profile_data):
    user_profile_data["faction"] = {
        "position": "None",
        "faction_id": 0,
        "days_in_faction": 0,
        "faction_name": "None",
        "faction_tag": "",
    }
    profile = user.Response(ApiResponse(user_profile_data)).profile()
    assert profile.faction is None


def test_status_until_zero_is_none(response):
    status = response.basic().status
    assert status.until is None
    assert status.details is None


def test_discord_without_link(response):
    discord = response.discord()
    assert discord.user_id == 2111649
    assert discord.discord_id is None


def test_personal_stats_defaults(response):
    stats = response.personal_stats()
    assert stats.attacks_won == 120
    assert stats.xanax_taken == 77
    assert stats.refills == 0
    assert stats.user_activity == 0


def test_missing_selection_field():
    response = user.Response(ApiResponse({"player_id": 1}))
    with pytest.raises(DeserializeError, match="missing field `personalstats`"):
        response.personal_stats()
