"""Bindings for the ``key`` category."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..response import ApiCategoryResponse, ApiSelection


@dataclass
class KeyInfo:
    access_level: int
    access_type: str
    selections: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeyInfo':
        return cls(
            access_level=data['access_level'],
            access_type=data['access_type'],
            selections={
                category: list(names)
                for category, names in (data.get('selections') or {}).items()
            },
        )

    def allows(self, category: str, selection: str) -> bool:
        return selection in self.selections.get(category, [])


class Selection(ApiSelection):
    INFO = ('info', KeyInfo.from_dict, True)

    @classmethod
    def category(cls) -> str:
        return 'key'


class Response(ApiCategoryResponse):
    selection = Selection

    def info(self) -> KeyInfo:
        return self.get(Selection.INFO)
