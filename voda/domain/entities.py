"""Domain entities: alarms, auth claims, members, devices and room memberships."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from voda.domain.utils import current_datetime
from voda.domain.vo import TaskCode

_ALARM_TITLES = {
    TaskCode.MEMBER_ON_DUTY: "내가 일기 쓸 차례에요!",
    TaskCode.MEMBER_BEFORE_1HR: "일기 등록까지 1시간 남았어요!",
    TaskCode.MEMBER_BEFORE_4HR: "일기 등록까지 4시간 남았어요!",
}


def _format_rfc3339(value: datetime) -> str:
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if offset is None or offset == timedelta(0):
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass
class Alarm:
    """A notification addressed to one member about one room."""

    member_id: int
    room_id: int
    code: str
    title: str = ""
    room_name: str = ""
    author: str = ""
    alarm_at: datetime | None = None

    def unq_fields(self) -> tuple[int, int, TaskCode]:
        """Return the (room_id, member_id, code) triple that identifies the alarm."""
        return self.room_id, self.member_id, TaskCode(self.code)

    def to_map(self) -> dict[str, str]:
        """Return the string-valued fields keyed by their wire names."""
        return {
            "Code": self.code,
            "Title": self.title,
            "RoomName": self.room_name,
            "Author": self.author,
            "AlarmAt": _format_rfc3339(self.alarm_at) if self.alarm_at else "",
        }


def new_alarm(
    member_id: int,
    room_id: int,
    code: TaskCode | str,
    room_name: str,
    diary_title: str,
    author_nickname: str,
) -> Alarm:
    """Build the alarm for a task code; raise ValueError for codes without one."""
    try:
        task_code = TaskCode(code)
    except ValueError:
        raise ValueError(f"'{code}' is invalid code type") from None

    if task_code in _ALARM_TITLES:
        title = _ALARM_TITLES[task_code]
        author = ""
    elif task_code is TaskCode.MEMBER_POSTED_DIARY:
        title = f"'{diary_title}' 새글 등록"
        author = author_nickname
    else:
        raise ValueError(f"'{task_code.value}' is invalid code type")

    return Alarm(
        member_id=member_id,
        room_id=room_id,
        code=task_code.value,
        title=title,
        room_name=room_name,
        author=author,
        alarm_at=current_datetime(),
    )


@dataclass
class AuthCodeClaims:
    """Claims carried by an issued auth token."""

    auth_type: str
    id: int
    email: str
    name: str
    expires_at: int = 0
    issued_at: int = 0
    not_before: int = 0
    issuer: str = ""
    subject: str = ""
    audience: str = ""
    jwt_id: str = ""


@dataclass
class Token:
    """An access/refresh token pair."""

    access_token: str
    refresh_token: str


@dataclass
class Member:
    """A registered user."""

    email: str
    name: str
    profile_url: str = ""
    auth_type: str = ""
    alarm_flag: bool = False
    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_equal(self, other: Member) -> bool:
        """Entity identity: same id and same e-mail."""
        return other.id == self.id and other.email == self.email

    def is_nil(self) -> bool:
        """True when the member has not been stored (id is 0)."""
        return self.id == 0


def new_member(email: str, name: str, profile_url: str, auth_type: str) -> Member:
    """Create a new member with alarms switched on."""
    return Member(
        email=email,
        name=name,
        profile_url=profile_url,
        auth_type=auth_type,
        alarm_flag=True,
    )


@dataclass
class MemberDevice:
    """Links a member to a push-notification device token."""

    member_id: int
    device_token: str
    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_equal(self, other: MemberDevice) -> bool:
        """Entity identity: same id."""
        return other.id == self.id


def new_member_device(member_id: int, token: str) -> MemberDevice:
    """Create a device link for a member."""
    return MemberDevice(member_id=member_id, device_token=token)


class RoomMemberOrderBy(str, Enum):
    """How a room's members are populated."""

    JOINED_ORDER = "JOINED_ORDER"
    DIARY_ORDER = "DIARY_ORDER"
    IGNORE = "IGNORE"


@dataclass
class RoomMember:
    """Membership of an account in a room."""

    room_id: int
    account_id: int
    id: int = 0
    created_at: datetime | None = field(default=None)

    def is_equal(self, other: RoomMember) -> bool:
        """Entity identity: same id."""
        return other.id == self.id


def new_room_member(room_id: int, account_id: int) -> RoomMember:
    """Create a membership of ``account_id`` in ``room_id``."""
    return RoomMember(room_id=room_id, account_id=account_id)