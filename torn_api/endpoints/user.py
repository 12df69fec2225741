"""Bindings for the ``user`` category."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..common import LastAction, Status
from ..decoding import empty_string_is_none
from ..response import ApiCategoryResponse, ApiSelection


@dataclass
class Basic:
    player_id: int
    name: str
    level: int
    gender: str
    status: Status

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Basic':
        return cls(
            player_id=data['player_id'],
            name=data['name'],
            level=data['level'],
            gender=data['gender'],
            status=Status.from_dict(data['status']),
        )


@dataclass
class Bar:
    current: int
    maximum: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Bar':
        return cls(current=data['current'], maximum=data['maximum'])


@dataclass
class UserFaction:
    faction_id: int
    faction_name: str
    position: str
    days_in_faction: int
    faction_tag: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['UserFaction']:
        """Players without a faction are reported with ``faction_id`` 0."""
        if not data or not data.get('faction_id'):
            return None
        return cls(
            faction_id=data['faction_id'],
            faction_name=data['faction_name'],
            position=data['position'],
            days_in_faction=data['days_in_faction'],
            faction_tag=empty_string_is_none(data.get('faction_tag')),
        )


@dataclass
class Profile:
    player_id: int
    name: str
    rank: str
    level: int
    gender: str
    age: int
    signup: datetime
    role: str
    donator: bool
    status: Status
    last_action: LastAction
    life: Bar
    faction: Optional[UserFaction] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Profile':
        return cls(
            player_id=data['player_id'],
            name=data['name'],
            rank=data['rank'],
            level=data['level'],
            gender=data['gender'],
            age=data['age'],
            # signup is the only date the API sends as text
            signup=datetime.strptime(data['signup'], '%Y-%m-%d %H:%M:%S').replace(tzinfo=timezone.utc),
            role=data['role'],
            donator=bool(data.get('donator', 0)),
            status=Status.from_dict(data['status']),
            last_action=LastAction.from_dict(data['last_action']),
            life=Bar.from_dict(data['life']),
            faction=UserFaction.from_dict(data.get('faction')),
        )


@dataclass
class Discord:
    user_id: int
    discord_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Discord':
        return cls(
            user_id=data['userID'],
            discord_id=empty_string_is_none(data.get('discordID')),
        )


@dataclass
class PersonalStats:
    attacks_won: int = 0
    attacks_lost: int = 0
    networth: int = 0
    xanax_taken: int = 0
    refills: int = 0
    user_activity: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PersonalStats':
        return cls(
            attacks_won=data.get('attackswon', 0),
            attacks_lost=data.get('attackslost', 0),
            networth=data.get('networth', 0),
            xanax_taken=data.get('xantaken', 0),
            refills=data.get('refills', 0),
            user_activity=data.get('useractivity', 0),
        )


class Selection(ApiSelection):
    BASIC = ('basic', Basic.from_dict, True)
    PROFILE = ('profile', Profile.from_dict, True)
    DISCORD = ('discord', Discord.from_dict)
    PERSONAL_STATS = ('personalstats', PersonalStats.from_dict)

    @classmethod
    def category(cls) -> str:
        return 'user'


class Response(ApiCategoryResponse):
    selection = Selection

    def basic(self) -> Basic:
        return self.get(Selection.BASIC)

    def profile(self) -> Profile:
        return self.get(Selection.PROFILE)

    def discord(self) -> Discord:
        return self.get(Selection.DISCORD)

    def personal_stats(self) -> PersonalStats:
        return self.get(Selection.PERSONAL_STATS)
