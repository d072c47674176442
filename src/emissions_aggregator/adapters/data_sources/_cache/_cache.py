# _cache/_cache.py

import logging
import os
import shelve
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

# define a generic type for return values of db callbacks
T = TypeVar("T")


def _get_cache_dir() -> Path:
    """
    Get and prepare the cache directory for storing cache files.

    If the environment variable CACHE_DIR is set, use its value as the cache
    directory. Otherwise, default to a 'data/cache' directory in the current
    working directory. Ensures the directory exists by creating it if necessary.

    Args:
        None

    Returns:
        Path: The absolute path to the cache directory.
    """
    env = os.environ.get("CACHE_DIR")
    path = Path(env) if env else Path.cwd() / "data" / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _get_cache_ttl() -> int:
    """
    Retrieves the cache time-to-live (TTL) in minutes from the environment variable
    CACHE_TTL_MINUTES. If the variable is not set, defaults to 10080 minutes (7 days).
    A value of 0 disables expiry.

    Args:
        None

    Returns:
        int: The cache TTL in minutes.

    Raises:
        ValueError: If CACHE_TTL_MINUTES is not a valid non-negative integer.
    """
    raw = os.environ.get("CACHE_TTL_MINUTES", "10080")
    try:
        ttl = int(raw)
    except ValueError as err:
        raise ValueError("CACHE_TTL_MINUTES must be an integer") from err
    if ttl < 0:
        raise ValueError("CACHE_TTL_MINUTES must be >= 0")
    return ttl


def _is_expired(timestamp: datetime) -> bool:
    """
    Check if a timestamp is older than the allowed TTL (time-to-live) in minutes.

    Args:
        timestamp (datetime): The original timestamp of the cache entry.

    Returns:
        bool: True if the cache entry has expired, False otherwise.
    """
    ttl = _get_cache_ttl()
    if ttl == 0:
        return False
    return datetime.now(UTC) > timestamp + timedelta(minutes=ttl)


def _with_db(
    name: str,
    fn: Callable[[shelve.Shelf], T],
) -> T:
    """
    Open a shelve database at the given name, execute a callback, and ensure the
    database is properly closed.

    Args:
        name (str): The name of the shelve database file (without extension).
        fn (Callable[[shelve.Shelf], T]): A function that takes an open
            shelve database and performs operations, returning a value of type T.

    Returns:
        T: The result returned by the callback function.
    """
    path = str(_get_cache_dir() / name)
    with shelve.open(path) as db:
        return fn(db)


def load_cache_entry(db_name: str, key: str) -> object | None:
    """
    Retrieve a cached value from the specified database and key, checking expiration.

    Expired entries are deleted and reported as missing.

    Args:
        db_name (str): Name of the cache database file (without extension).
        key (str): Cache key to retrieve.

    Returns:
        object | None: Cached value if present and not expired, otherwise None.
    """

    def _fetch(db: shelve.Shelf) -> object | None:
        entry = db.get(key)
        if entry is None:
            return None

        # unpack into (timestamp, value)
        timestamp, value = entry

        if _is_expired(timestamp):
            del db[key]
            logger.debug("Cache expired for %s[%s]", db_name, key)
            return None
        return value

    return _with_db(db_name, _fetch)


def save_cache_entry(db_name: str, key: str, value: object) -> None:
    """
    Save a value with a timestamp under the given key in the specified cache database.

    Overwrites any existing entry for the key.

    Args:
        db_name (str): Name of the cache database file (without extension).
        key (str): Cache key under which to store the value.
        value (object): The value to be cached; must be pickle-serialisable.

    Returns:
        None
    """

    def _write(db: shelve.Shelf) -> None:
        db[key] = (datetime.now(UTC), value)

    _with_db(db_name, _write)
    logger.debug("Saved cache entry %r in %s", key, db_name)
