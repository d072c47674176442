# tests/conftest.py

import os
import shutil
import tempfile
import typing
from collections.abc import Iterator
from pathlib import Path

import pytest
import respx


def pytest_configure(config: pytest.Config) -> None:
    """
    Configures pytest to keep the HTTP response cache inside .pytest_cache.

    Creates a directory named 'cache' inside the .pytest_cache folder and points the
    CACHE_DIR environment variable at it, so tests never touch the real cache.

    Args:
        config (pytest.Config): The pytest configuration object.

    Returns:
        None
    """
    cache = getattr(config, "cache", None)
    if cache is not None:
        root = Path(cache.makedir("cache").strpath)
    else:
        # The cacheprovider plugin is disabled (-p no:cacheprovider); fall back to a
        # temporary directory so tests still never touch the real cache.
        root = Path(tempfile.mkdtemp(prefix="emissions-aggregator-cache-"))

    os.environ["CACHE_DIR"] = root.as_posix()


@pytest.fixture(autouse=True)
def clear_cache_dir() -> Iterator[None]:
    """
    Resets the cache directory before each test.

    Deletes the directory named by CACHE_DIR, recreates it empty and yields control
    to the test.

    Args:
        None

    Yields:
        None: Control is yielded to the test after resetting the cache directory.
    """
    cache_dir = Path(os.environ["CACHE_DIR"])

    if cache_dir.exists():
        shutil.rmtree(cache_dir)

    cache_dir.mkdir(parents=True, exist_ok=True)
    yield


@pytest.fixture
def respx_mock() -> typing.Generator[respx.MockRouter, None, None]:
    """
    Yields a respx.MockRouter instance for mocking HTTP requests in tests.

    Args:
        None

    Yields:
        respx.MockRouter: The mock router for HTTP request interception.

    This fixture avoids boilerplate in each test and automatically closes the router
    after the test completes.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router
