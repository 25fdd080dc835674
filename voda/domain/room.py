"""The diary room entity and its turn/membership rules."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from voda.domain.entities import Member
from voda.domain.utils import contains, current_datetime, remove

MAX_ROOM_MEMBER_COUNT = 10


class RoomError(Exception):
    """Raised when a room operation breaks the room's rules."""


def period_to_duration(period: int) -> timedelta:
    """Convert a period in days (0-255) to a timedelta."""
    if not 0 <= period <= 255:
        raise ValueError(f"period must be between 0 and 255, got {period}")
    return timedelta(days=period)


@dataclass
class Room:
    """A shared diary room whose members write in turn."""

    name: str
    code: str
    hint: str
    theme: str
    period: int
    master_id: int
    turn_account_id: int
    orders: list[int] = field(default_factory=list)
    members: list[Member] | None = None
    id: int = 0
    due_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_equal(self, other: Room) -> bool:
        """Entity identity: same id."""
        return other.id == self.id

    def is_master(self, account_id: int) -> bool:
        return self.master_id == account_id

    def is_turn(self, account_id: int) -> bool:
        return self.turn_account_id == account_id

    def is_already_joined(self, account_id: int) -> bool:
        """True when the account is the master or in the order list."""
        return self.is_master(account_id) or contains(self.orders, account_id)

    def is_member_full(self) -> bool:
        return len(self.orders) >= MAX_ROOM_MEMBER_COUNT

    def append_member(self, account_id: int) -> None:
        self.orders.append(account_id)

    def remove_member(self, account_id: int) -> int:
        """Take ``account_id`` out of the order list and return it."""
        if not self.orders:
            raise RoomError("There is no room member")
        self.orders, removed = remove(self.orders, account_id)
        if removed == 0:
            raise RoomError("There is no matched accountID from room.Orders")
        return removed

    def change_master(self) -> None:
        """Remove the master from the orders and promote the next member."""
        self.remove_member(self.master_id)
        if not self.members or len(self.members) < 2:
            raise RoomError("There is no member to become the new master")
        self.master_id = self.members[1].id

    def orders_to_json(self) -> bytes:
        return json.dumps(self.orders, separators=(",", ":")).encode("utf-8")

    def member_only_orders(self) -> list[int]:
        """Return the orders without the master."""
        orders = list(self.orders)
        if self.master_id not in orders:
            raise RoomError(f"There is no masterID in orders: {self!r}")
        orders.remove(self.master_id)
        return orders

    def member_all_except_turn_account(self) -> list[int]:
        """Return every member but the one whose turn it is (empty if absent)."""
        orders = list(self.orders)
        if self.turn_account_id not in orders:
            return []
        orders.remove(self.turn_account_id)
        return orders

    def next_turn(self) -> int:
        """Advance the turn to the next account in order and return it.

        An account missing from the orders gives 0.
        """
        current = self.turn_account_id
        if len(self.orders) == 1:
            return current
        try:
            index = self.orders.index(current)
        except ValueError:
            following = 0
        else:
            following = self.orders[(index + 1) % len(self.orders)]
        self.turn_account_id = following
        return following

    def before_due_at(self) -> datetime:
        """Return the due time one period earlier."""
        return self._require_due_at() - period_to_duration(self.period)

    def next_due_at(self) -> datetime:
        """Return the due time one period later."""
        return self._require_due_at() + period_to_duration(self.period)

    def _require_due_at(self) -> datetime:
        if self.due_at is None:
            raise RoomError("room has no due time")
        return self.due_at


def new_room(master_id: int, name: str, code: str, hint: str, theme: str, period: int) -> Room:
    """Create a room owned by ``master_id``, due one period from now."""
    return Room(
        name=name,
        code=code,
        hint=hint,
        theme=theme,
        period=period,
        master_id=master_id,
        turn_account_id=master_id,
        orders=[master_id],
        due_at=current_datetime() + period_to_duration(period),
    )