"""Bindings for the ``market`` category.

The id passed to :meth:`torn_api.TornApi.market` is the item id whose
listings are requested.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..decoding import int_keyed, null_is_empty
from ..response import ApiCategoryResponse, ApiSelection


@dataclass
class Listing:
    id: int
    cost: int
    quantity: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Listing':
        return cls(id=data['ID'], cost=data['cost'], quantity=data['quantity'])


@dataclass
class PointsListing:
    cost: int
    quantity: int
    total_cost: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PointsListing':
        return cls(
            cost=data['cost'],
            quantity=data['quantity'],
            total_cost=data['total_cost'],
        )


def listings_from_list(data: Optional[List[Dict[str, Any]]]) -> List[Listing]:
    return null_is_empty(data, Listing.from_dict)


def points_from_dict(data: Optional[Dict[str, Any]]) -> Dict[int, PointsListing]:
    return int_keyed(data, PointsListing.from_dict)


class Selection(ApiSelection):
    BAZAAR = ('bazaar', listings_from_list)
    ITEM_MARKET = ('itemmarket', listings_from_list)
    POINTS_MARKET = ('pointsmarket', points_from_dict)

    @classmethod
    def category(cls) -> str:
        return 'market'


class Response(ApiCategoryResponse):
    selection = Selection

    def bazaar(self) -> List[Listing]:
        return self.get(Selection.BAZAAR)

    def item_market(self) -> List[Listing]:
        return self.get(Selection.ITEM_MARKET)

    def points_market(self) -> Dict[int, PointsListing]:
        return self.get(Selection.POINTS_MARKET)
