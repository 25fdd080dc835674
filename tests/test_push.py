import pytest

from voda.clients.push import (
    CREDENTIALS_ENV,
    Messenger,
    MulticastMessage,
    PushClient,
    SendResult,
    build_message,
    credential_from_env,
)
from voda.domain.entities import new_alarm
from voda.domain.vo import TaskCode


class FakeMessenger(Messenger):
    def __init__(self, failing=(), short=False):
        self.failing = set(failing)
        self.short = short
        self.sent = []

    def send_multicast(self, message):
        self.sent.append(message)
        results = [SendResult(success=t not in self.failing) for t in message.tokens]
        return results[:-1] if self.short else results


@pytest.fixture
def alarm():
    return new_alarm(1, 2, TaskCode.MEMBER_ON_DUTY, "garden", "", "")


def test_build_message_uses_alarm_fields(alarm):
    message = build_message(["a", "b"], alarm)
    assert message.tokens == ["a", "b"]
    assert message.data == alarm.to_map()
    assert message.title == "garden 다이어리방"
    assert message.body == alarm.title


def test_build_message_copies_tokens(alarm):
    tokens = ["a"]
    message = build_message(tokens, alarm)
    tokens.append("b")
    assert message.tokens == ["a"]


def test_push_all_successful_returns_empty(alarm):
    messenger = FakeMessenger()
    assert PushClient(messenger).push(["a", "b"], alarm) == []
    assert len(messenger.sent) == 1
    assert isinstance(messenger.sent[0], MulticastMessage)
    assert messenger.sent[0].tokens == ["a", "b"]


def test_push_returns_failed_tokens_in_order(alarm):
    messenger = FakeMessenger(failing={"c", "a"})
    assert PushClient(messenger).push(["a", "b", "c"], alarm) == ["a", "c"]


def test_push_rejects_mismatched_results(alarm):
    with pytest.raises(ValueError):
        PushClient(FakeMessenger(short=True)).push(["a", "b"], alarm)


def test_credential_from_env(monkeypatch):
    monkeypatch.setenv(CREDENTIALS_ENV, '{"type": "secret"}')
    assert credential_from_env() == b'{"type": "secret"}'


def test_credential_from_env_unset(monkeypatch):
    monkeypatch.delenv(CREDENTIALS_ENV, raising=False)
    assert credential_from_env() == b""