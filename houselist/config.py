"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: Optional environment overrides (HOUSELIST_*).
- Outputs: Constants (delays, storage keys, file names, UI limits).
- Side effects: Reads os.environ once at import.
- Thread-safety: N/A (read-only constants).
"""

import os


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


# Simulated network latency for the record load (seconds)
LOAD_DELAY_SEC = _env_float("HOUSELIST_LOAD_DELAY", 2.0)

# Number of initial loads that fail with LoadError (0 = never fail)
SIMULATED_FAILURES = _env_int("HOUSELIST_SIMULATED_FAILURES", 0)

# Persisted search term
SEARCH_KEY = "search"
DEFAULT_SEARCH = "Italy"

# Persistence: filename for the key/value state file (path resolved in storage module)
STATE_FILENAME = "houselist_state.json"

# Optional JSON file with seed records; built-in sample records are used when unset
SEED_FILE = os.getenv("HOUSELIST_SEED_FILE") or None

# How often the asyncio loop pumps Tk events (seconds)
UI_POLL_SEC = 0.02

# maximum number of log lines kept in the Logs panel (oldest trimmed)
LOG_MAX_LINES = 1000

PRICE_CURRENCY = "USD"
