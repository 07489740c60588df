from __future__ import annotations

from typing import Optional

import pytest

from houselist.errors import StorageUnavailable
from houselist.models import Record, sample_records
from houselist.repository import ListController
from houselist.storage import DurableStore, MemoryStore


class FlakyStore(DurableStore):
    """MemoryStore wrapper whose reads/writes can be switched off."""

    def __init__(self) -> None:
        self.inner = MemoryStore()
        self.readable = True
        self.writable = True
        self.writes = []

    def get(self, key: str) -> Optional[str]:
        if not self.readable:
            raise StorageUnavailable("read disabled")
        return self.inner.get(key)

    def set(self, key: str, value: str) -> None:
        if not self.writable:
            raise StorageUnavailable("write disabled")
        self.writes.append((key, value))
        self.inner.set(key, value)


@pytest.fixture
def records():
    return sample_records()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def flaky_store():
    return FlakyStore()


@pytest.fixture
def controller():
    return ListController()


@pytest.fixture
def loaded_controller(records):
    c = ListController()
    c.apply_load(records)
    return c


@pytest.fixture
def make_record():
    def _make(record_id, country="Italy", price=100):
        return Record(id=record_id, address=f"{record_id} Main St", country=country, price=price)

    return _make
