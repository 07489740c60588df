"""
Design (storage.py)
- Purpose: Durable key/value persistence boundary and the PersistedValue primitive
           that mirrors one in-memory string to one store key.
- Inputs: Keys and string values; path for the JSON-backed store and seed file.
- Outputs: Stored strings (or None when absent); list[Record] from a seed file.
- Side effects: JsonFileStore reads/writes its file on every call.
- Thread-safety: Single-threaded use from the event loop; no locking.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .config import STATE_FILENAME
from .errors import StorageUnavailable
from .models import Record

logger = logging.getLogger(__name__)


class DurableStore(ABC):
    """
    Abstract key/value store holding strings.
    Implementations raise StorageUnavailable when the backing medium fails.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None when no entry exists for key."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class MemoryStore(DurableStore):
    """Dict-backed store; survives only as long as the object does."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"store values must be str, got {type(value).__name__}")
        self._data[key] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class JsonFileStore(DurableStore):
    """
    Design (JsonFileStore)
    - State: a single JSON object {key: string} at `path`.
    - get(): re-reads the file so that values written by a previous session are seen.
    - set(): read-modify-write of the whole object; corrupt content is overwritten.
    - Failures: get() on corrupt content and any OSError -> StorageUnavailable.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageUnavailable(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageUnavailable(f"{self.path} does not contain a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        # Entries written by something other than this store are ignored
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"store values must be str, got {type(value).__name__}")
        try:
            data = self._read_all()
        except StorageUnavailable:
            # Unreadable content is replaced; otherwise no later write could ever land
            logger.warning("Replacing unreadable state file %s", self.path, exc_info=True)
            data = {}
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            raise StorageUnavailable(f"cannot write {self.path}: {exc}") from exc


def get_state_path() -> Path:
    """
    Resolve path for the state file. Prefer a per-user data dir so the search term
    survives reinstalls. Fallback to the project directory.
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata) / "House List"
            try:
                base.mkdir(parents=True, exist_ok=True)
                return base / STATE_FILENAME
            except OSError:
                pass
    else:
        base = Path.home() / ".houselist"
        try:
            base.mkdir(parents=True, exist_ok=True)
            return base / STATE_FILENAME
        except OSError:
            pass
    return Path(__file__).resolve().parent.parent / STATE_FILENAME


def load_seed_records(path: Path) -> List[Record]:
    """
    Load seed records from a JSON list. Returns empty list on missing file or parse error;
    malformed entries are skipped.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Seed file %s not found", path)
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        logger.warning("Seed file %s could not be parsed", path, exc_info=True)
        return []
    if not isinstance(data, list):
        return []
    records: List[Record] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        try:
            records.append(Record.from_dict(item))
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed seed entry: %r", item)
            continue
    return records


def init_value(store: DurableStore, key: str, default: str) -> str:
    """
    Purpose: Resolve the starting value for `key`.
    Inputs: store, key (caller-supplied, never hard-coded), default.
    Outputs: Stored value if an entry exists (even ""), else default.
    Side effects: Seeds the store with default when the entry is absent.
    Failures: StorageUnavailable is logged and answered with default.
    """
    try:
        stored = store.get(key)
    except StorageUnavailable:
        logger.warning("Storage unavailable reading %r; using default", key, exc_info=True)
        return default
    if stored is not None:
        return stored
    try:
        store.set(key, default)
    except StorageUnavailable:
        logger.warning("Storage unavailable seeding %r", key, exc_info=True)
    return default


class PersistedValue:
    """
    Design (PersistedValue)
    - State:
        key: store key this value is bound to
        _value: current in-memory value
        _pending: True while the last write has not reached the store
        _listeners: callbacks notified with the new value after each set()
    - Writes happen synchronously inside set(), so they reach the store in call order.
    """

    def __init__(self, store: DurableStore, key: str, default: str) -> None:
        self.store = store
        self.key = key
        self._value = init_value(store, key, default)
        self._pending = False
        self._listeners: List[Callable[[str], None]] = []

    @property
    def value(self) -> str:
        return self._value

    def current_value(self) -> str:
        return self._value

    @property
    def pending_write(self) -> bool:
        return self._pending

    def set(self, new_value: str) -> None:
        """
        Purpose: Update the in-memory value and write it through to the store.
        Inputs: new_value (str; conversion of other types is the caller's job)
        Side effects: Store write; listeners notified even if the write failed.
        """
        if not isinstance(new_value, str):
            raise TypeError(f"PersistedValue holds str, got {type(new_value).__name__}")
        self._value = new_value
        self._write()
        for listener in list(self._listeners):
            listener(new_value)

    def flush(self) -> bool:
        """Retry a failed write. Returns True when the store holds the current value."""
        if self._pending:
            self._write()
        return not self._pending

    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _write(self) -> None:
        try:
            self.store.set(self.key, self._value)
        except StorageUnavailable:
            self._pending = True
            logger.warning("Write of %r deferred; storage unavailable", self.key, exc_info=True)
            return
        self._pending = False
