# _cache/test__cache.py

import shelve
from datetime import UTC, datetime, timedelta

import pytest

from emissions_aggregator.adapters.data_sources._cache._cache import (
    _get_cache_dir,
    _get_cache_ttl,
    _is_expired,
    load_cache_entry,
    save_cache_entry,
)

pytestmark = pytest.mark.unit


def test_get_cache_ttl_non_integer_raises_value_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """
    ARRANGE: set env var CACHE_TTL_MINUTES to 'abc'
    ACT:     call _get_cache_ttl
    ASSERT:  ValueError is raised with correct message
    """
    monkeypatch.setenv("CACHE_TTL_MINUTES", "abc")

    with pytest.raises(ValueError, match="must be an integer"):
        _get_cache_ttl()


def test_get_cache_ttl_negative_raises_value_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """
    ARRANGE: set env var CACHE_TTL_MINUTES to '-1'
    ACT:     call _get_cache_ttl
    ASSERT:  ValueError is raised with correct message
    """
    monkeypatch.setenv("CACHE_TTL_MINUTES", "-1")

    with pytest.raises(ValueError, match=">= 0"):
        _get_cache_ttl()


def test_is_expired_false_when_ttl_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    ARRANGE: CACHE_TTL_MINUTES=0 and a year-old timestamp
    ACT:     call _is_expired
    ASSERT:  False
    """
    monkeypatch.setenv("CACHE_TTL_MINUTES", "0")

    assert _is_expired(datetime.now(UTC) - timedelta(days=365)) is False


def test_save_and_load_cache_entry_roundtrip() -> None:
    """
    ARRANGE: save_cache_entry for a price key
    ACT:     load_cache_entry for the same key
    ASSERT:  stored value returned
    """
    save_cache_entry("historical_prices", "coingecko:x@100", 1.5)

    assert load_cache_entry("historical_prices", "coingecko:x@100") == 1.5


def test_load_cache_entry_missing_key_returns_none() -> None:
    """
    ARRANGE: empty cache
    ACT:     load_cache_entry
    ASSERT:  None
    """
    assert load_cache_entry("historical_prices", "absent") is None


def test_load_cache_entry_purges_expired_entry(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """
    ARRANGE: entry written two minutes ago with a one-minute TTL
    ACT:     load_cache_entry
    ASSERT:  None returned and entry deleted
    """
    monkeypatch.setenv("CACHE_TTL_MINUTES", "1")
    path = str(_get_cache_dir() / "historical_prices")
    with shelve.open(path) as db:
        db["old"] = (datetime.now(UTC) - timedelta(minutes=2), 9.0)

    assert load_cache_entry("historical_prices", "old") is None

    with shelve.open(path) as db:
        assert "old" not in db
