"""Models shared by the user and faction categories."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .decoding import empty_string_is_none, timestamp, zero_is_none_timestamp


@dataclass
class LastAction:
    """When a player was last active."""
    status: str
    timestamp: datetime
    relative: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LastAction':
        return cls(
            status=data['status'],
            timestamp=timestamp(data['timestamp']),
            relative=data.get('relative'),
        )


@dataclass
class Status:
    """Player state such as Okay, Hospital, Jail or Traveling.

    ``until`` is only set while the state has an end time.
    """
    description: str
    state: str
    details: Optional[str] = None
    color: Optional[str] = None
    until: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Status':
        return cls(
            description=data['description'],
            state=data['state'],
            details=empty_string_is_none(data.get('details')),
            color=data.get('color'),
            until=zero_is_none_timestamp(data.get('until')),
        )

    @property
    def is_okay(self) -> bool:
        return self.state == 'Okay'
