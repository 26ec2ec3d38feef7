"""Delayed and repeating tasks run on a background thread, optionally grouped by owner."""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta

_log = logging.getLogger(__name__)

Task = Callable[[], object]
Delay = float | int | timedelta


def _seconds(value: Delay, what: str) -> float:
    seconds = value.total_seconds() if isinstance(value, timedelta) else float(value)
    if seconds < 0:
        raise ValueError(f"{what} must not be negative, got {seconds}")
    return seconds


class BaseScheduler(ABC):
    """The operations shared by schedulers: one-shot, delayed and repeating tasks.

    Delays and intervals are given in seconds or as ``timedelta`` values.
    """

    def run_task(self, task: Task, owner_id: uuid.UUID | None = None) -> uuid.UUID:
        """Run ``task`` as soon as possible and return its id."""
        return self.schedule_task(0, task, owner_id)

    @abstractmethod
    def schedule_task(
        self, delay: Delay, task: Task, owner_id: uuid.UUID | None = None
    ) -> uuid.UUID:
        """Run ``task`` once after ``delay`` and return its id."""

    @abstractmethod
    def schedule_repeating_task(
        self,
        delay: Delay,
        interval: Delay,
        task: Task,
        owner_id: uuid.UUID | None = None,
    ) -> uuid.UUID:
        """Run ``task`` after ``delay``, then again ``interval`` after each run."""

    @abstractmethod
    def cancel(self, task_id: uuid.UUID) -> bool:
        """Cancel a task; return whether it was still pending."""


@dataclass
class _Entry:
    task: Task
    interval: float | None
    owner_id: uuid.UUID | None
    seq: int


class Scheduler(BaseScheduler):
    """Runs tasks on one background thread in order of their due time.

    A task owned by a registered owner is cancelled together with all the
    owner's other tasks by :meth:`cancel_owner`. A repeating task with an
    owner stops once that owner is no longer registered.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._heap: list[tuple[float, int, uuid.UUID]] = []
        self._entries: dict[uuid.UUID, _Entry] = {}
        self._owners: set[uuid.UUID] = set()
        self._owner_tasks: dict[uuid.UUID, set[uuid.UUID]] = {}
        self._counter = itertools.count()
        self._running = True
        self._thread = threading.Thread(
            target=self._run, name="celerity-scheduler", daemon=True
        )
        self._thread.start()

    # -- scheduling ---------------------------------------------------------

    def _schedule(
        self,
        delay: float,
        interval: float | None,
        task: Task,
        owner_id: uuid.UUID | None,
    ) -> uuid.UUID:
        task_id = uuid.uuid4()
        with self._cond:
            if not self._running:
                raise RuntimeError("Scheduler has been shut down")
            if owner_id is not None and owner_id in self._owners:
                self._owner_tasks.setdefault(owner_id, set()).add(task_id)
            seq = next(self._counter)
            self._entries[task_id] = _Entry(task, interval, owner_id, seq)
            heapq.heappush(self._heap, (time.monotonic() + delay, seq, task_id))
            self._cond.notify()
        return task_id

    def schedule_task(
        self, delay: Delay, task: Task, owner_id: uuid.UUID | None = None
    ) -> uuid.UUID:
        return self._schedule(_seconds(delay, "delay"), None, task, owner_id)

    def schedule_repeating_task(
        self,
        delay: Delay,
        interval: Delay,
        task: Task,
        owner_id: uuid.UUID | None = None,
    ) -> uuid.UUID:
        return self._schedule(
            _seconds(delay, "delay"), _seconds(interval, "interval"), task, owner_id
        )

    # -- cancellation -------------------------------------------------------

    def _forget_locked(self, task_id: uuid.UUID) -> _Entry | None:
        entry = self._entries.pop(task_id, None)
        if entry is not None and entry.owner_id is not None:
            owned = self._owner_tasks.get(entry.owner_id)
            if owned is not None:
                owned.discard(task_id)
                if not owned:
                    del self._owner_tasks[entry.owner_id]
        return entry

    def cancel(self, task_id: uuid.UUID) -> bool:
        with self._cond:
            return self._forget_locked(task_id) is not None

    def cancel_owner(self, owner_id: uuid.UUID) -> int:
        """Cancel every task of ``owner_id`` and unregister it; return how many."""
        with self._cond:
            cancelled = 0
            for task_id in self._owner_tasks.pop(owner_id, set()):
                if self._entries.pop(task_id, None) is not None:
                    cancelled += 1
            self._owners.discard(owner_id)
        _log.info("Scheduler automatically cancelled %d tasks", cancelled)
        return cancelled

    def register_owner(self, owner_id: uuid.UUID) -> None:
        """Register ``owner_id`` so that tasks scheduled for it are tracked."""
        with self._cond:
            self._owners.add(owner_id)

    def shutdown(self) -> None:
        """Drop all pending tasks and stop the background thread."""
        with self._cond:
            self._running = False
            self._entries.clear()
            self._heap.clear()
            self._owner_tasks.clear()
            self._cond.notify_all()
        if threading.current_thread() is not self._thread:
            self._thread.join()

    # -- the worker ---------------------------------------------------------

    def _next_due(self) -> tuple[uuid.UUID, _Entry] | None:
        with self._cond:
            while self._running:
                if not self._heap:
                    self._cond.wait()
                    continue
                due, seq, task_id = self._heap[0]
                remaining = due - time.monotonic()
                if remaining > 0:
                    self._cond.wait(remaining)
                    continue
                heapq.heappop(self._heap)
                entry = self._entries.get(task_id)
                if entry is not None and entry.seq == seq:
                    return task_id, entry
            return None

    def _finish(self, task_id: uuid.UUID, entry: _Entry) -> None:
        with self._cond:
            if self._entries.get(task_id) is not entry:
                return
            if entry.interval is None:
                self._forget_locked(task_id)
                return
            if entry.owner_id is not None and entry.owner_id not in self._owners:
                self._forget_locked(task_id)
                return
            entry.seq = next(self._counter)
            heapq.heappush(
                self._heap, (time.monotonic() + entry.interval, entry.seq, task_id)
            )
            self._cond.notify()

    def _run(self) -> None:
        while (due := self._next_due()) is not None:
            task_id, entry = due
            try:
                entry.task()
            except Exception:
                _log.exception("Scheduled task %s raised", task_id)
            self._finish(task_id, entry)


class OwnerTrackingScheduler(BaseScheduler):
    """Schedules every task under its own owner id on a shared scheduler.

    Closing it, directly or by leaving a ``with`` block, cancels all the
    tasks it scheduled. Any ``owner_id`` passed to it is ignored.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self.owner_id = uuid.uuid4()
        self._scheduler = scheduler
        self._closed = False
        scheduler.register_owner(self.owner_id)

    def schedule_task(
        self, delay: Delay, task: Task, owner_id: uuid.UUID | None = None
    ) -> uuid.UUID:
        return self._scheduler.schedule_task(delay, task, self.owner_id)

    def schedule_repeating_task(
        self,
        delay: Delay,
        interval: Delay,
        task: Task,
        owner_id: uuid.UUID | None = None,
    ) -> uuid.UUID:
        return self._scheduler.schedule_repeating_task(
            delay, interval, task, self.owner_id
        )

    def cancel(self, task_id: uuid.UUID) -> bool:
        return self._scheduler.cancel(task_id)

    def close(self) -> int:
        """Cancel all owned tasks; return how many were cancelled."""
        if self._closed:
            return 0
        self._closed = True
        _log.info("Owner tracking scheduler is closing, cancelling all owned tasks")
        return self._scheduler.cancel_owner(self.owner_id)

    def __enter__(self) -> OwnerTrackingScheduler:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()