"""
Design (repository.py)
- Purpose: Own the authoritative record collection behind a tiny API, so the UI and the
           loader don't touch a shared list directly.
- Inputs: Record sequences (on load) and record ids (on removal).
- Outputs: Tuple snapshots of the current collection.
- Side effects: Replaces/filters the internal list; notifies subscribers after each change.
- Thread-safety: Event-loop thread only. No lock; every operation completes synchronously.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .models import Record, RecordId

logger = logging.getLogger(__name__)

Listener = Callable[[Tuple[Record, ...]], None]


class ListController:
    """
    Design (ListController)
    - State:
        _records: ordered list of Record, ids unique
        _loaded: True once apply_load() has installed a collection
        _closed: set by close() when the hosting component is torn down
        _listeners: callbacks receiving the new snapshot after each change
    """

    def __init__(self) -> None:
        self._records: List[Record] = []
        self._loaded = False
        self._closed = False
        self._listeners: List[Listener] = []

    # -------- Mutations --------

    def apply_load(self, records: Iterable[Record]) -> None:
        """
        Purpose: Replace the collection wholesale (last write wins, no merge).
        Inputs: records (any iterable of Record)
        Side effects: Drops duplicate ids (first occurrence kept); notifies listeners.
        """
        if self._closed:
            logger.warning("apply_load ignored; controller is closed")
            return
        seen: Set[RecordId] = set()
        unique: List[Record] = []
        for record in records:
            if record.id in seen:
                logger.warning("Dropping duplicate record id %r", record.id)
                continue
            seen.add(record.id)
            unique.append(record)
        self._records = unique
        self._loaded = True
        logger.info("Loaded %d records", len(unique))
        self._notify()

    def remove(self, record_id: RecordId) -> bool:
        """
        Purpose: Remove the record with the given id, keeping the others in order.
        Outputs: True if a record was removed; False (no-op) if none matched.
        """
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            logger.debug("remove(%r): no such record", record_id)
            return False
        self._records = remaining
        logger.info("Removed record %r", record_id)
        self._notify()
        return True

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()

    # -------- Reads --------

    def current_collection(self) -> Tuple[Record, ...]:
        return tuple(self._records)

    def get(self, record_id: RecordId) -> Optional[Record]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._records)

    # -------- Change notification --------

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.current_collection()
        for listener in list(self._listeners):
            listener(snapshot)
