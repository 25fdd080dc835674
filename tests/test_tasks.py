from datetime import datetime, timezone

import pytest

from voda.clients.tasks import (
    HttpMethod,
    Task,
    TaskBackend,
    TaskClient,
    queue_path_from_env,
)

QUEUE = "projects/p/locations/l/queues/q"
URL = "https://tasks.example.com/hook"


class FakeBackend(TaskBackend):
    def __init__(self, fail_create=False):
        self.tasks = {}
        self.parents = []
        self.fail_create = fail_create

    def create_task(self, parent, task):
        if self.fail_create:
            raise ConnectionError("unavailable")
        if task.name in self.tasks:
            raise KeyError(task.name)
        self.parents.append(parent)
        self.tasks[task.name] = task
        return task

    def get_task(self, name):
        return self.tasks[name]

    def delete_task(self, name):
        del self.tasks[name]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    return TaskClient(backend, QUEUE)


def test_task_name(client):
    assert client.task_name("1-2-X") == QUEUE + "/tasks/1-2-X"


def test_build_task_without_schedule(client):
    task = client.build_task(URL, "t", b"{}", HttpMethod.POST, None)
    assert task == Task(
        name=client.task_name("t"),
        url=URL,
        body=b"{}",
        http_method=HttpMethod.POST,
        schedule_time=None,
    )


def test_build_task_with_schedule(client):
    when = datetime(2022, 3, 1, 12, tzinfo=timezone.utc)
    task = client.build_task(URL, "t", b"", HttpMethod.POST, when)
    assert task.schedule_time == when


def test_register_and_get(client, backend):
    task = client.build_task(URL, "t", b"x", HttpMethod.POST, None)
    assert client.register_task(task) == task
    assert backend.parents == [QUEUE]
    assert client.get_task("t") == task


def test_register_failure_is_wrapped():
    client = TaskClient(FakeBackend(fail_create=True), QUEUE)
    task = client.build_task(URL, "t", b"", HttpMethod.POST, None)
    with pytest.raises(RuntimeError, match="^cloudtasks.CreateTask: unavailable"):
        client.register_task(task)


def test_delete_task(client, backend):
    task = client.build_task(URL, "t", b"", HttpMethod.POST, None)
    client.register_task(task)
    client.delete_task("t")
    with pytest.raises(KeyError):
        client.get_task("t")
    assert client.register_task(task) == task


def test_update_task_replaces(client, backend):
    when = datetime(2022, 3, 1, tzinfo=timezone.utc)
    client.register_task(client.build_task(URL, "t", b"", HttpMethod.POST, None))
    new = client.build_task(URL, "t", b"", HttpMethod.POST, when)
    client.update_task("t", new)
    assert client.get_task("t").schedule_time == when
    assert list(backend.tasks) == [client.task_name("t")]


def test_update_task_without_old_task(client, backend):
    new = client.build_task(URL, "n", b"", HttpMethod.POST, None)
    assert client.update_task("missing", new) == new
    assert list(backend.tasks) == [client.task_name("n")]


def test_queue_path_defaults(monkeypatch):
    for key in ("PROJECT_ID", "LOCATION_ID", "QUEUE_ID"):
        monkeypatch.delenv(key, raising=False)
    assert queue_path_from_env() == (
        "projects/voda-342511/locations/asia-northeast3/queues/voda-alarm-queue"
    )


def test_queue_path_from_env(monkeypatch):
    monkeypatch.setenv("PROJECT_ID", "p")
    monkeypatch.setenv("LOCATION_ID", "l")
    monkeypatch.setenv("QUEUE_ID", "q")
    assert queue_path_from_env() == QUEUE
    assert TaskClient(FakeBackend()).queue_path == QUEUE