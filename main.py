"""
Entry point: wires the persisted search term, the simulated record source, the list
controller and the filtered view into the Tk window, then runs everything on one
asyncio event loop.
"""

import asyncio
import logging
import tkinter as tk

from houselist.config import (
    DEFAULT_SEARCH,
    LOAD_DELAY_SEC,
    SEARCH_KEY,
    SEED_FILE,
    SIMULATED_FAILURES,
)
from houselist.filtering import FilteredView
from houselist.logging_config import configure_logging
from houselist.models import sample_records
from houselist.repository import ListController
from houselist.source import AsyncRecordSource, RecordLoader
from houselist.storage import JsonFileStore, PersistedValue, get_state_path, load_seed_records
from houselist.ui import AppUI

logger = logging.getLogger("houselist.main")


async def _run_app() -> None:
    store = JsonFileStore(get_state_path())
    search = PersistedValue(store, SEARCH_KEY, DEFAULT_SEARCH)

    seed = load_seed_records(SEED_FILE) if SEED_FILE else sample_records()
    source = AsyncRecordSource(seed, delay=LOAD_DELAY_SEC, fail_first=SIMULATED_FAILURES)
    controller = ListController()
    view = FilteredView(controller, search)
    loader = RecordLoader(source, controller)

    root = tk.Tk()
    app = AppUI(root, controller, search, view, loader)
    logger.info("Starting with search term %r (state file %s)", search.current_value(), store.path)
    await app.run()


def main() -> None:
    configure_logging()
    asyncio.run(_run_app())


if __name__ == "__main__":
    main()
