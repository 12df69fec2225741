"""Bindings for the ``torn`` category.

Stock prices are fractional; construct the client with
``use_decimal=True`` to receive them as :class:`decimal.Decimal`.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from ..decoding import empty_string_is_none, int_keyed
from ..response import ApiCategoryResponse, ApiSelection

Number = Union[int, float, Decimal]


@dataclass
class Item:
    name: str
    description: str
    type: str
    buy_price: int
    sell_price: int
    market_value: int
    circulation: int
    image: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Item':
        return cls(
            name=data['name'],
            description=data['description'],
            type=data['type'],
            buy_price=data['buy_price'],
            sell_price=data['sell_price'],
            market_value=data['market_value'],
            circulation=data['circulation'],
            image=empty_string_is_none(data.get('image')),
        )


@dataclass
class Stock:
    stock_id: int
    name: str
    acronym: str
    current_price: Number
    market_cap: int
    total_shares: int
    investors: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Stock':
        return cls(
            stock_id=data['stock_id'],
            name=data['name'],
            acronym=data['acronym'],
            current_price=data['current_price'],
            market_cap=data['market_cap'],
            total_shares=data['total_shares'],
            investors=data['investors'],
        )


def items_from_dict(data: Dict[str, Any]) -> Dict[int, Item]:
    return int_keyed(data, Item.from_dict)


def stocks_from_dict(data: Dict[str, Any]) -> Dict[int, Stock]:
    return int_keyed(data, Stock.from_dict)


class Selection(ApiSelection):
    ITEMS = ('items', items_from_dict)
    STOCKS = ('stocks', stocks_from_dict)

    @classmethod
    def category(cls) -> str:
        return 'torn'


class Response(ApiCategoryResponse):
    selection = Selection

    def items(self) -> Dict[int, Item]:
        return self.get(Selection.ITEMS)

    def stocks(self) -> Dict[int, Stock]:
        return self.get(Selection.STOCKS)
