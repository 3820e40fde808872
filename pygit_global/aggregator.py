"""StatusAggregator: queries many repositories concurrently."""

from __future__ import annotations

import concurrent.futures
import logging
import math
import os
import queue
import threading
from collections.abc import Sequence

from tqdm import tqdm

from pygit_global.models import FailureKind, Report, StatusEntry
from pygit_global.protocols import RepositoryHandle

DEFAULT_MAX_WORKERS = min(os.cpu_count() or 4, 8)


class StatusAggregator:
    """Runs query_status() across repositories on a bounded set of daemon threads"""

    def __init__(
        self,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout: float | None = None,
        show_progress: bool = False,
    ):
        """Create an aggregator.

        timeout is the per-repository budget in seconds. The whole run waits at
        most timeout * ceil(n / max_workers) seconds; anything still running
        then is reported as TIMED_OUT. Workers are daemon threads, so a query
        stuck past the deadline never holds up interpreter exit.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self.timeout = timeout
        self.show_progress = show_progress
        self._logger = logging.getLogger(__name__)

    def aggregate(self, handles: Sequence[RepositoryHandle]) -> Report:
        """Query every handle and return a Report in input order."""
        handles = list(handles)
        if not handles:
            return Report()

        slots: list[StatusEntry | None] = [None] * len(handles)
        workers = min(self.max_workers, len(handles))
        deadline = None
        if self.timeout is not None:
            deadline = self.timeout * math.ceil(len(handles) / workers)

        jobs: queue.SimpleQueue = queue.SimpleQueue()
        futures: dict[concurrent.futures.Future, int] = {}
        for index, handle in enumerate(handles):
            future = concurrent.futures.Future()
            futures[future] = index
            jobs.put((future, handle))
        for n in range(workers):
            jobs.put(None)
            threading.Thread(target=self._work, args=(jobs,),
                             name=f'pygit-global-status_{n}', daemon=True).start()

        try:
            with tqdm(total=len(handles), desc="Querying", unit="repo",
                      disable=not self.show_progress) as pbar:
                try:
                    for future in concurrent.futures.as_completed(futures, timeout=deadline):
                        index = futures[future]
                        slots[index] = self._collect(handles[index], future)
                        pbar.set_postfix_str(handles[index].path.name, refresh=False)
                        pbar.update(1)
                except concurrent.futures.TimeoutError:
                    self._logger.warning(
                        "Status run exceeded %.1fs; %d repositories did not answer",
                        deadline, sum(1 for slot in slots if slot is None),
                    )
        finally:
            # Queued work is dropped; running queries are abandoned to their daemon threads.
            for future in futures:
                future.cancel()

        for index, slot in enumerate(slots):
            if slot is None:
                slots[index] = StatusEntry.failed(
                    handles[index].path, FailureKind.TIMED_OUT,
                    f"No answer within {self.timeout:g}s",
                )

        return Report(slots)

    @staticmethod
    def _work(jobs: queue.SimpleQueue) -> None:
        """Run queued queries until the stop marker, skipping cancelled ones."""
        while True:
            job = jobs.get()
            if job is None:
                return
            future, handle = job
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(handle.query_status())
            except Exception as e:
                future.set_exception(e)

    def _collect(self, handle: RepositoryHandle, future: concurrent.futures.Future) -> StatusEntry:
        """Return the future's entry, turning an escaped exception into a failure."""
        try:
            return future.result()
        except Exception as e:
            self._logger.error("Unexpected error querying %s: %s", handle.path, e)
            return StatusEntry.failed(handle.path, FailureKind.QUERY_FAILED, f"Unexpected error: {e}")
