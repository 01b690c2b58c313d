"""Records returned by the storage backends.

Field names match the database columns, so a ``RealDictCursor`` row can be
splatted straight into the matching class.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

DEFAULT_COLUMNS = ("BACKLOG", "IN PROGRESS", "DONE")


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class User:
    id: int
    email: Optional[str]
    password_hash: Optional[str] = field(default=None, repr=False)
    is_guest: bool = False
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "is_guest": self.is_guest,
            "created_at": _iso(self.created_at),
        }


@dataclass
class Board:
    id: int
    name: str
    user_id: int
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "user_id": self.user_id,
            "created_at": _iso(self.created_at),
        }


@dataclass
class Column:
    id: int
    name: str
    board_id: int
    order: int
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "board_id": self.board_id,
            "order": self.order,
            "created_at": _iso(self.created_at),
        }


@dataclass
class Task:
    id: int
    title: str
    column_id: int
    board_id: int
    user_id: int
    order: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "column_id": self.column_id,
            "board_id": self.board_id,
            "user_id": self.user_id,
            "order": self.order,
            "created_at": _iso(self.created_at),
        }
