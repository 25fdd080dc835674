"""Relational tables backing the repositories."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from voda.domain.utils import current_datetime


def to_db_time(value: datetime | None) -> datetime | None:
    """Convert a datetime to the naive local time stored in the database."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.replace(tzinfo=None)


def from_db_time(value: datetime | None) -> datetime | None:
    """Read a stored naive local time back as an aware local datetime."""
    if value is None:
        return None
    return value.astimezone()


def _now() -> datetime:
    return current_datetime().replace(tzinfo=None)


class Base(DeclarativeBase):
    """Declarative base of every table."""


class _Timestamps:
    created_at: Mapped[datetime | None] = mapped_column(DateTime, default=_now)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=_now, onupdate=_now
    )


class MemberModel(_Timestamps, Base):
    """Row of the ``members`` table."""

    __tablename__ = "members"
    __table_args__ = {"mysql_engine": "InnoDB"}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    profile_url: Mapped[str | None] = mapped_column(Text, default="")
    auth_type: Mapped[str | None] = mapped_column(Text, default="")
    alarm_flag: Mapped[bool | None] = mapped_column(Boolean, default=False)


class RoomModel(_Timestamps, Base):
    """Row of the ``rooms`` table; ``orders`` holds the writing order as JSON."""

    __tablename__ = "rooms"
    __table_args__ = {"mysql_engine": "InnoDB"}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    code: Mapped[str] = mapped_column(Text, nullable=False)
    hint: Mapped[str] = mapped_column(Text, nullable=False)
    theme: Mapped[str] = mapped_column(Text, nullable=False)
    period: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    master_id: Mapped[int | None] = mapped_column(
        ForeignKey("members.id", ondelete="SET NULL", onupdate="CASCADE")
    )
    turn_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("members.id", ondelete="SET NULL", onupdate="CASCADE")
    )
    due_at: Mapped[datetime | None] = mapped_column(DateTime)
    orders: Mapped[list[int] | None] = mapped_column(JSON)


class RoomMemberModel(_Timestamps, Base):
    """Row of the ``room_members`` table; one per (room, account)."""

    __tablename__ = "room_members"
    __table_args__ = (
        UniqueConstraint("room_id", "account_id", name="idx_room_account"),
        {"mysql_engine": "InnoDB"},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id", ondelete="CASCADE"))
    account_id: Mapped[int] = mapped_column(ForeignKey("members.id", ondelete="CASCADE"))


class MemberDeviceModel(_Timestamps, Base):
    """Row of the ``member_devices`` table; device tokens are unique."""

    __tablename__ = "member_devices"
    __table_args__ = (
        UniqueConstraint("device_token", name="idx_device_token"),
        {"mysql_engine": "InnoDB"},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"), index=True
    )
    device_token: Mapped[str] = mapped_column(String(512), nullable=False)


class AlarmModel(Base):
    """Row of the ``alarms`` table; one per (room, member, code)."""

    __tablename__ = "alarms"
    __table_args__ = (
        UniqueConstraint("member_id", "code", "room_id", name="unq_room_member_code"),
        {"mysql_engine": "InnoDB"},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int | None] = mapped_column(
        ForeignKey("members.id", ondelete="SET NULL", onupdate="CASCADE")
    )
    code: Mapped[str] = mapped_column(String(512))
    title: Mapped[str | None] = mapped_column(Text, default="")
    room_id: Mapped[int | None] = mapped_column(ForeignKey("rooms.id", ondelete="CASCADE"))
    room_name: Mapped[str | None] = mapped_column(Text, default="")
    author: Mapped[str | None] = mapped_column(Text, default="")
    alarm_at: Mapped[datetime | None] = mapped_column(DateTime)