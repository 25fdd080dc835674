"""Push notifications of alarms to member devices."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from voda.domain.entities import Alarm

CREDENTIALS_FILE = "firebase-credential.json"
CREDENTIALS_ENV = "FIREBASE_CREDENTIALS_SECRET"
ROOM_TITLE_SUFFIX = " 다이어리방"

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MulticastMessage:
    """One notification addressed to several devices."""

    data: dict[str, str]
    tokens: list[str]
    title: str
    body: str


@dataclass(frozen=True)
class SendResult:
    """Outcome of delivering a message to one device."""

    success: bool
    error: str = ""


class Messenger(ABC):
    """A messaging backend able to deliver one message to many devices."""

    @abstractmethod
    def send_multicast(self, message: MulticastMessage) -> list[SendResult]:
        """Deliver ``message``; return one result per token, in token order."""


def build_message(device_tokens: Sequence[str], alarm: Alarm) -> MulticastMessage:
    """Build the notification that announces ``alarm`` to ``device_tokens``."""
    payload = alarm.to_map()
    return MulticastMessage(
        data=payload,
        tokens=list(device_tokens),
        title=payload["RoomName"] + ROOM_TITLE_SUFFIX,
        body=payload["Title"],
    )


def credential_from_env() -> bytes:
    """Return the credential JSON held in the environment, or empty bytes."""
    return os.environ.get(CREDENTIALS_ENV, "").encode("utf-8")


class PushClient:
    """Sends alarms to devices through a messenger."""

    def __init__(self, messenger: Messenger) -> None:
        self._messenger = messenger

    def push(self, device_tokens: Sequence[str], alarm: Alarm) -> list[str]:
        """Send ``alarm`` to every token and return the tokens that failed."""
        tokens = list(device_tokens)
        results = self._messenger.send_multicast(build_message(tokens, alarm))
        failed = [
            token
            for token, result in zip(tokens, results, strict=True)
            if not result.success
        ]
        if failed:
            _log.info("List of tokens that caused failures: %s", failed)
        return failed