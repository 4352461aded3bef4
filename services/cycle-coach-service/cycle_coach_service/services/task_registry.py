from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

import structlog
from pydantic import BaseModel

from ..schemas.generation import GenerationKind, TaskStatusResponse

logger = structlog.get_logger(__name__)

PENDING = "PENDING"
SUCCESS = "SUCCESS"
FAILURE = "FAILURE"
REVOKED = "REVOKED"


@dataclass
class _TrackedTask:
    kind: GenerationKind
    task: asyncio.Task
    cancel_requested: bool = False

    @property
    def status(self) -> str:
        if self.cancel_requested or self.task.cancelled():
            return REVOKED
        if not self.task.done():
            return PENDING
        return FAILURE if self.task.exception() is not None else SUCCESS


class GenerationTaskRegistry:
    """In-process registry of background generation tasks, addressable by id.

    Finished tasks are kept for polling; once more than ``max_kept`` tasks are
    tracked the oldest finished ones are forgotten.
    """

    def __init__(self, max_kept: int = 256) -> None:
        self._max_kept = max_kept
        self._tasks: dict[str, _TrackedTask] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def submit(self, kind: GenerationKind, coro: Coroutine[Any, Any, Any]) -> str:
        task_id = str(uuid4())
        task = asyncio.create_task(coro, name=f"generation-{kind.value}-{task_id}")
        self._tasks[task_id] = _TrackedTask(kind=kind, task=task)
        task.add_done_callback(lambda t: self._on_done(task_id, kind, t))
        logger.info("generation_task_submitted", task_id=task_id, kind=kind.value)
        self._prune()
        return task_id

    def _on_done(self, task_id: str, kind: GenerationKind, task: asyncio.Task) -> None:
        if task.cancelled():
            logger.info("generation_task_cancelled", task_id=task_id, kind=kind.value)
            return
        exc = task.exception()
        if exc is not None:
            logger.error("generation_task_failed", task_id=task_id, kind=kind.value, error=str(exc))
        else:
            logger.info("generation_task_finished", task_id=task_id, kind=kind.value)

    def _prune(self) -> None:
        overflow = len(self._tasks) - self._max_kept
        if overflow <= 0:
            return
        finished = [task_id for task_id, tracked in self._tasks.items() if tracked.task.done()]
        for task_id in finished[:overflow]:
            del self._tasks[task_id]

    def status(self, task_id: str) -> TaskStatusResponse | None:
        tracked = self._tasks.get(task_id)
        if tracked is None:
            return None

        status = tracked.status
        payload: dict[str, Any] = {"task_id": task_id, "kind": tracked.kind, "status": status}
        if status == SUCCESS:
            result = tracked.task.result()
            payload["result"] = result.model_dump(mode="json") if isinstance(result, BaseModel) else result
        elif status == FAILURE:
            payload["error"] = str(tracked.task.exception())
        return TaskStatusResponse(**payload)

    def cancel(self, task_id: str) -> bool:
        """Request cancellation; False if the task is unknown, finished or already revoked."""
        tracked = self._tasks.get(task_id)
        if tracked is None or tracked.cancel_requested or tracked.task.done():
            return False
        tracked.cancel_requested = True
        tracked.task.cancel()
        return True

    async def shutdown(self) -> None:
        pending = [tracked.task for tracked in self._tasks.values() if not tracked.task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._tasks.clear()
