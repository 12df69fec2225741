"""Bindings for the ``faction`` category."""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..common import LastAction, Status
from ..decoding import int_keyed
from ..response import ApiCategoryResponse, ApiSelection


@dataclass
class Member:
    name: str
    level: int
    days_in_faction: int
    position: str
    status: Status
    last_action: LastAction

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Member':
        return cls(
            name=data['name'],
            level=data['level'],
            days_in_faction=data['days_in_faction'],
            position=data['position'],
            status=Status.from_dict(data['status']),
            last_action=LastAction.from_dict(data['last_action']),
        )


@dataclass
class Basic:
    """Faction overview together with its roster.

    ``members`` is keyed by player id in ascending order.
    """
    id: int
    name: str
    leader: int
    respect: int
    age: int
    capacity: int
    best_chain: int
    members: Dict[int, Member] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Basic':
        return cls(
            id=data['ID'],
            name=data['name'],
            leader=data['leader'],
            respect=data['respect'],
            age=data['age'],
            capacity=data['capacity'],
            best_chain=data['best_chain'],
            members=int_keyed(data.get('members'), Member.from_dict),
        )


class Selection(ApiSelection):
    BASIC = ('basic', Basic.from_dict, True)

    @classmethod
    def category(cls) -> str:
        return 'faction'


class Response(ApiCategoryResponse):
    selection = Selection

    def basic(self) -> Basic:
        return self.get(Selection.BASIC)
