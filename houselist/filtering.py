"""
Design (filtering.py)
- Purpose: Derive the visible records from the full collection and the search text.
- Inputs: Record collection, search string.
- Outputs: Order-preserving tuple of matching records.
- Side effects: compute() has none; FilteredView keeps the latest snapshot and notifies.
- Thread-safety: Event-loop thread only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple

from .models import Record
from .repository import ListController
from .storage import PersistedValue


def matches(record: Record, search_text: str) -> bool:
    return search_text.lower() in record.country.lower()


def compute(collection: Iterable[Record], search_text: str) -> Tuple[Record, ...]:
    """Records whose country contains search_text (case-insensitive), in original order."""
    return tuple(r for r in collection if matches(r, search_text))


@dataclass(frozen=True)
class ViewSnapshot:
    records: Tuple[Record, ...]
    search_text: str
    visible: Tuple[Record, ...]


class FilteredView:
    """
    Keeps `visible` in step with a ListController and a persisted search term.

    Every recompute reads both inputs at the same moment and publishes them together
    as one ViewSnapshot, so subscribers never see results built from a mix of an old
    collection and a new search term (or the reverse).
    """

    def __init__(self, controller: ListController, search: PersistedValue) -> None:
        self.controller = controller
        self.search = search
        self._listeners: List[Callable[[ViewSnapshot], None]] = []
        self._snapshot = self._build()
        self._unsubscribers = [
            controller.subscribe(lambda _records: self.refresh()),
            search.subscribe(lambda _text: self.refresh()),
        ]

    def _build(self) -> ViewSnapshot:
        records = self.controller.current_collection()
        search_text = self.search.current_value()
        return ViewSnapshot(records, search_text, compute(records, search_text))

    def refresh(self) -> ViewSnapshot:
        self._snapshot = self._build()
        for listener in list(self._listeners):
            listener(self._snapshot)
        return self._snapshot

    def snapshot(self) -> ViewSnapshot:
        return self._snapshot

    def visible(self) -> Tuple[Record, ...]:
        return self._snapshot.visible

    def subscribe(self, callback: Callable[[ViewSnapshot], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._listeners.clear()
