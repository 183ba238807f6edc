# -*- coding: utf-8 -*-
"""
Post-commit work for comment writes.

- The comment service registers work items with enqueue_on_commit(); they
  reach the queue only once the surrounding transaction has committed.
- A work item is (callable, kwargs). Failures are logged with the item's
  arguments and never propagate to whoever enqueued it. No retry.
- COMMENTS_TASK_QUEUE selects the queue:
    * comments.tasks.ThreadedTaskQueue  (default, daemon worker threads)
    * comments.tasks.ImmediateTaskQueue (inline, for dev/tests)
"""
from __future__ import annotations
import logging
import queue
import threading
from typing import Any, Callable, Dict, List, Optional

from django.conf import settings
from django.core.signals import setting_changed
from django.db import close_old_connections, transaction
from django.dispatch import receiver
from django.utils.module_loading import import_string

from comments.services.index_sync import IndexSyncService
from comments.services.notification import NotificationService

logger = logging.getLogger(__name__)

DEFAULT_QUEUE = "comments.tasks.ThreadedTaskQueue"


def _task_name(func: Callable) -> str:
    return getattr(func, "__qualname__", repr(func))


def run_task(func: Callable, kwargs: Dict[str, Any]) -> None:
    """Execute one work item; errors are logged, not raised."""
    name = _task_name(func)
    try:
        func(**kwargs)
    except Exception:
        logger.exception("Post-commit task %s failed %s", name, kwargs)
    else:
        logger.debug("Post-commit task %s done %s", name, kwargs)


class TaskQueue:

    def enqueue(self, func: Callable, **kwargs: Any) -> None:
        raise NotImplementedError


class ImmediateTaskQueue(TaskQueue):
    """Runs each item right away in the calling thread."""

    def enqueue(self, func: Callable, **kwargs: Any) -> None:
        run_task(func, kwargs)


class ThreadedTaskQueue(TaskQueue):
    """Hands items to background worker threads; enqueue() never blocks on them."""

    def __init__(self, workers: Optional[int] = None) -> None:
        self._workers = workers or getattr(settings, "COMMENTS_TASK_WORKERS", 1)
        self._queue: "queue.Queue[tuple]" = queue.Queue()
        self._threads: List[threading.Thread] = []
        self._lock = threading.Lock()

    def _ensure_workers(self) -> None:
        with self._lock:
            if self._threads:
                return
            for i in range(self._workers):
                t = threading.Thread(target=self._work, name=f"comments-tasks-{i}", daemon=True)
                t.start()
                self._threads.append(t)

    def _work(self) -> None:
        while True:
            func, kwargs = self._queue.get()
            try:
                run_task(func, kwargs)
            finally:
                # worker threads own their DB connections
                close_old_connections()
                self._queue.task_done()

    def enqueue(self, func: Callable, **kwargs: Any) -> None:
        self._ensure_workers()
        self._queue.put((func, kwargs))

    def join(self) -> None:
        """Block until every enqueued item has been processed."""
        self._queue.join()


_queue: Optional[TaskQueue] = None


def get_task_queue() -> TaskQueue:
    global _queue
    if _queue is None:
        queue_cls = import_string(getattr(settings, "COMMENTS_TASK_QUEUE", DEFAULT_QUEUE))
        _queue = queue_cls()
    return _queue


@receiver(setting_changed)
def _reset_queue(*, setting, **kwargs):
    global _queue
    if setting in ("COMMENTS_TASK_QUEUE", "COMMENTS_TASK_WORKERS"):
        _queue = None


def enqueue_on_commit(func: Callable, **kwargs: Any) -> None:
    """Enqueue func(**kwargs) after the current transaction commits (now in autocommit)."""
    transaction.on_commit(lambda: get_task_queue().enqueue(func, **kwargs))


# -----------------------------
# Work items
# -----------------------------
def index_page_comments(*, page_id: int) -> None:
    IndexSyncService.run(page_id)


def notify_new_comment(*, page_id: int, comment_id: int, content: str, author_email: str) -> None:
    NotificationService.notify_new_comment(
        page_id=page_id, comment_id=comment_id, content=content, author_email=author_email
    )
