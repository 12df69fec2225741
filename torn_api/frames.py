"""Flatten typed responses into pandas DataFrames.

Needs the ``frames`` extra.
"""

import logging
from dataclasses import asdict
from typing import Dict, List

from . import features
from .endpoints.faction import Basic as FactionBasic
from .endpoints.market import Listing
from .endpoints.torn import Item

features.require('frames')

import pandas as pd  # noqa: E402

logger = logging.getLogger(__name__)

MEMBER_INT_COLUMNS = ['member_id', 'level', 'days_in_faction']
ITEM_INT_COLUMNS = ['item_id', 'buy_price', 'sell_price', 'market_value', 'circulation']
LISTING_INT_COLUMNS = ['id', 'cost', 'quantity']


def _as_int64(df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    for col in columns:
        if col in df.columns:
            df[col] = df[col].astype('Int64')
    return df


def members_frame(basic: FactionBasic) -> pd.DataFrame:
    """One row per faction member.

    Status and last action are flattened into ``status_*`` and
    ``last_action_*`` columns.
    """
    records = []
    for member_id, member in basic.members.items():
        records.append({
            'faction_id': basic.id,
            'member_id': member_id,
            'name': member.name,
            'level': member.level,
            'days_in_faction': member.days_in_faction,
            'position': member.position,
            'status_state': member.status.state,
            'status_description': member.status.description,
            'status_until': member.status.until,
            'last_action_status': member.last_action.status,
            'last_action_timestamp': member.last_action.timestamp,
        })

    columns = ['faction_id', 'member_id', 'name', 'level', 'days_in_faction', 'position',
               'status_state', 'status_description', 'status_until',
               'last_action_status', 'last_action_timestamp']
    df = pd.DataFrame(records, columns=columns)
    df = _as_int64(df, ['faction_id'] + MEMBER_INT_COLUMNS)
    for col in ('status_until', 'last_action_timestamp'):
        df[col] = pd.to_datetime(df[col], utc=True)

    logger.debug(f"Built members frame: {len(df)} rows")
    return df


def items_frame(items: Dict[int, Item]) -> pd.DataFrame:
    """One row per item, ``item_id`` first."""
    records = [{'item_id': item_id, **asdict(item)} for item_id, item in items.items()]
    columns = ['item_id'] + list(Item.__dataclass_fields__)
    df = pd.DataFrame(records, columns=columns)
    return _as_int64(df, ITEM_INT_COLUMNS)


def listings_frame(listings: List[Listing]) -> pd.DataFrame:
    """One row per bazaar or item market listing."""
    df = pd.DataFrame([asdict(listing) for listing in listings], columns=LISTING_INT_COLUMNS)
    return _as_int64(df, LISTING_INT_COLUMNS)
