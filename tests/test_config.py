from __future__ import annotations

from houselist import config


def test_defaults():
    assert config.SEARCH_KEY == "search"
    assert config.DEFAULT_SEARCH == "Italy"


def test_env_float_parses_and_falls_back(monkeypatch):
    monkeypatch.setenv("HOUSELIST_TEST_DELAY", "0.5")
    assert config._env_float("HOUSELIST_TEST_DELAY", 2.0) == 0.5

    for bad in ["", "abc", "-1"]:
        monkeypatch.setenv("HOUSELIST_TEST_DELAY", bad)
        assert config._env_float("HOUSELIST_TEST_DELAY", 2.0) == 2.0

    monkeypatch.delenv("HOUSELIST_TEST_DELAY")
    assert config._env_float("HOUSELIST_TEST_DELAY", 2.0) == 2.0


def test_env_int_parses_and_falls_back(monkeypatch):
    monkeypatch.setenv("HOUSELIST_TEST_FAILS", "2")
    assert config._env_int("HOUSELIST_TEST_FAILS", 0) == 2
    monkeypatch.setenv("HOUSELIST_TEST_FAILS", "1.5")
    assert config._env_int("HOUSELIST_TEST_FAILS", 0) == 0
