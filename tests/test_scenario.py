"""End-to-end: delayed load, persisted search, filtering and removal wired together."""

from __future__ import annotations

import asyncio

import pytest

from houselist.filtering import FilteredView, compute
from houselist.models import sample_records
from houselist.repository import ListController
from houselist.source import AsyncRecordSource, RecordLoader
from houselist.storage import JsonFileStore, PersistedValue

DELAY = 0.03


@pytest.mark.asyncio
async def test_load_filter_remove_scenario(tmp_path):
    store = JsonFileStore(tmp_path / "state.json")
    search = PersistedValue(store, "search", "Italy")
    controller = ListController()
    view = FilteredView(controller, search)
    loader = RecordLoader(AsyncRecordSource(sample_records(), delay=DELAY), controller)

    loader.start()
    await asyncio.sleep(DELAY / 3)
    assert view.visible() == ()

    await loader.wait()
    assert len(controller) == 5
    assert [r.country for r in view.visible()] == ["Italy"]

    search.set("usa")
    usa = view.visible()
    assert [r.country for r in usa] == ["USA"]

    controller.remove(usa[0].id)
    assert compute(controller.current_collection(), "usa") == ()
    assert view.visible() == ()

    # the search term survives into the next session
    assert PersistedValue(JsonFileStore(tmp_path / "state.json"), "search", "Italy").value == "usa"


@pytest.mark.asyncio
async def test_teardown_before_load_leaves_state_untouched(store):
    search = PersistedValue(store, "search", "")
    controller = ListController()
    view = FilteredView(controller, search)
    loader = RecordLoader(AsyncRecordSource(sample_records(), delay=DELAY), controller)

    loader.start()
    loader.cancel()
    view.close()
    controller.close()
    await asyncio.sleep(DELAY * 2)

    assert controller.current_collection() == ()
    assert view.visible() == ()
