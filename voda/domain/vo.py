"""Value objects carried in scheduled task payloads."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class TaskCode(str, Enum):
    """Kinds of scheduled task."""

    ROOM_PERIOD_FIN = "ROOM_PERIOD_FIN"
    MEMBER_ON_DUTY = "MEMBER_ON_DUTY"
    MEMBER_BEFORE_1HR = "MEMBER_BEFORE_1HR"
    MEMBER_BEFORE_4HR = "MEMBER_BEFORE_4HR"
    MEMBER_POSTED_DIARY = "MEMBER_POSTED_DIARY"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TaskVO:
    """Body of a scheduled task request."""

    room_id: int
    email: str
    code: TaskCode

    def encode(self) -> bytes:
        """Serialise to a newline-terminated JSON document."""
        text = json.dumps(
            {
                "RoomID": self.room_id,
                "Email": self.email,
                "Code": TaskCode(self.code).value,
            },
            separators=(",", ":"),
            ensure_ascii=False,
        )
        for char, escaped in _HTML_ESCAPES.items():
            text = text.replace(char, escaped)
        return (text + "\n").encode("utf-8")