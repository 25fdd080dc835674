"""Client for a cloud task queue that calls back over HTTP at a set time."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from voda.domain.utils import getenv

KIND = "google"
CREDENTIALS_FILE = "credentials.json"

_log = logging.getLogger(__name__)


class HttpMethod(IntEnum):
    """HTTP method of a task's callback request."""

    HTTP_METHOD_UNSPECIFIED = 0
    POST = 1
    GET = 2
    HEAD = 3
    PUT = 4
    DELETE = 5
    PATCH = 6
    OPTIONS = 7


@dataclass
class Task:
    """A scheduled HTTP callback; no schedule time means run right away."""

    name: str
    url: str
    body: bytes
    http_method: HttpMethod
    schedule_time: datetime | None = None


class TaskBackend(ABC):
    """The queue service that stores and runs tasks."""

    @abstractmethod
    def create_task(self, parent: str, task: Task) -> Task:
        """Add ``task`` to the queue at ``parent`` and return it as stored."""

    @abstractmethod
    def get_task(self, name: str) -> Task:
        """Return the task with the full ``name``."""

    @abstractmethod
    def delete_task(self, name: str) -> None:
        """Remove the task with the full ``name``."""


def queue_path_from_env() -> str:
    """Build the queue path from PROJECT_ID, LOCATION_ID and QUEUE_ID."""
    return "projects/{}/locations/{}/queues/{}".format(
        getenv("PROJECT_ID", "voda-342511"),
        getenv("LOCATION_ID", "asia-northeast3"),
        getenv("QUEUE_ID", "voda-alarm-queue"),
    )


class TaskClient:
    """Builds, registers and removes tasks on one queue."""

    def __init__(self, backend: TaskBackend, queue_path: str | None = None) -> None:
        self._backend = backend
        self.queue_path = queue_path if queue_path is not None else queue_path_from_env()

    def task_name(self, task_id: str) -> str:
        """Return the full task name for ``task_id`` on this queue."""
        return f"{self.queue_path}/tasks/{task_id}"

    def build_task(
        self,
        url: str,
        task_id: str,
        body: bytes,
        http_method: HttpMethod,
        scheduled_at: datetime | None,
    ) -> Task:
        """Describe a callback to ``url``; ``scheduled_at`` None means now."""
        return Task(
            name=self.task_name(task_id),
            url=url,
            body=bytes(body),
            http_method=HttpMethod(http_method),
            schedule_time=scheduled_at,
        )

    def register_task(self, task: Task) -> Task:
        """Add ``task`` to the queue."""
        try:
            return self._backend.create_task(self.queue_path, task)
        except Exception as exc:
            raise RuntimeError(f"cloudtasks.CreateTask: {exc}") from exc

    def update_task(self, old_id: str, task: Task) -> Task:
        """Replace the task ``old_id`` by ``task``; a missing old task is ignored."""
        try:
            self.delete_task(old_id)
        except Exception as exc:
            _log.error("%s", exc)
        return self.register_task(task)

    def get_task(self, task_id: str) -> Task:
        return self._backend.get_task(self.task_name(task_id))

    def delete_task(self, task_id: str) -> None:
        self._backend.delete_task(self.task_name(task_id))