"""
Simulated record source and the load continuation.

Design:
- AsyncRecordSource.load() sleeps on the event loop (never blocks), then hands back a
  fresh copy of its seed records. It never touches shared state.
- RecordLoader runs one load as an asyncio task and installs the result:
    1) await source.load()
    2) if the loader was cancelled or the controller closed meanwhile, discard the result
    3) otherwise controller.apply_load(records) exactly once, then on_loaded(records)
  A LoadError becomes a LoadOutcome with `error` set plus an on_failed() call, so the UI
  can offer a retry instead of crashing.
- Methods:
    start(): schedule the load on the running loop (returns the task)
    cancel(): cancel the pending load timer
    wait(): await the outcome without propagating cancellation
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from .config import LOAD_DELAY_SEC
from .errors import LoadError
from .models import Record
from .repository import ListController

logger = logging.getLogger(__name__)


class AsyncRecordSource:
    def __init__(self, seed: Iterable[Record], delay: float = LOAD_DELAY_SEC, fail_first: int = 0):
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay!r}")
        self._seed: Tuple[Record, ...] = tuple(seed)
        self.delay = delay
        self._failures_left = fail_first
        self.calls = 0

    async def load(self) -> List[Record]:
        """Resolve with a new list of the seed records after `delay` seconds."""
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self._failures_left > 0:
            self._failures_left -= 1
            raise LoadError(f"simulated network failure (attempt {self.calls})")
        return list(self._seed)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class LoadOutcome:
    records: Tuple[Record, ...] = ()
    error: Optional[LoadError] = None
    discarded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.discarded


class RecordLoader:
    def __init__(
        self,
        source: AsyncRecordSource,
        controller: ListController,
        on_loaded: Optional[Callable[[Tuple[Record, ...]], None]] = None,
        on_failed: Optional[Callable[[LoadError], None]] = None,
    ):
        self.source = source
        self.controller = controller
        self.on_loaded = on_loaded
        self.on_failed = on_failed
        self._task: Optional[asyncio.Task] = None
        self._state = LoadState.IDLE

    @property
    def state(self) -> LoadState:
        return self._state

    def start(self) -> asyncio.Task:
        if self._task is not None and self._state in (LoadState.LOADING, LoadState.LOADED):
            # Pending, or already delivered: the collection is never re-fetched
            return self._task
        # A cancelled task may still be unwinding; it is superseded and reports nothing
        self._state = LoadState.LOADING
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Loading records (delay %.2fs)", self.source.delay)
        return self._task

    def cancel(self) -> None:
        if self._task is None or self._task.done():
            return
        self._state = LoadState.CANCELLED
        self._task.cancel()
        logger.info("Pending load cancelled")

    async def wait(self) -> Optional[LoadOutcome]:
        if self._task is None:
            return None
        task = self._task
        await asyncio.wait({task})
        if task.cancelled():
            return LoadOutcome(discarded=True)
        return task.result()

    def _is_current(self) -> bool:
        return asyncio.current_task() is self._task

    async def _run(self) -> LoadOutcome:
        try:
            records = await self.source.load()
        except LoadError as exc:
            if not self._is_current():
                return LoadOutcome(error=exc, discarded=True)
            self._state = LoadState.FAILED
            logger.warning("Record load failed: %s", exc)
            if self.on_failed is not None:
                self.on_failed(exc)
            return LoadOutcome(error=exc)
        except asyncio.CancelledError:
            if self._is_current():
                self._state = LoadState.CANCELLED
            raise

        if not self._is_current() or self._state == LoadState.CANCELLED or self.controller.closed:
            if self._is_current():
                self._state = LoadState.CANCELLED
            logger.info("Discarding %d loaded records; consumer is gone", len(records))
            return LoadOutcome(records=tuple(records), discarded=True)

        self.controller.apply_load(records)
        self._state = LoadState.LOADED
        delivered = self.controller.current_collection()
        if self.on_loaded is not None:
            self.on_loaded(delivered)
        return LoadOutcome(records=delivered)
