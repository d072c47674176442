# pipeline/conftest.py

from pathlib import Path

import pytest

from emissions_aggregator.domain.pipeline import PipelineContext
from emissions_aggregator.schemas import (
    ParentProtocol,
    ReferenceTables,
    RegistryProtocol,
)
from emissions_aggregator.storage import LocalBlobStore


class RecordingNotifier:
    """Notifier that keeps every message it is asked to send."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    async def send(self, message: str) -> None:
        self.messages.append(message)


async def fixed_price(token: str, timestamp: int) -> float | None:
    return 1.0


async def no_futures(symbol: str) -> dict[str, object] | None:
    return None


@pytest.fixture
def reference_tables() -> ReferenceTables:
    """
    Registries with one parent-grouped protocol and one standalone protocol.

    Returns:
        ReferenceTables: Aave V3 under "parent#aave", and Uniswap.
    """
    return ReferenceTables(
        protocols=(
            RegistryProtocol(
                id="1",
                name="Aave V3",
                symbol="AAVE",
                parent_protocol="parent#aave",
            ),
            RegistryProtocol(id="2", name="Uniswap", gecko_id="uniswap"),
        ),
        parent_protocols=(
            ParentProtocol(id="parent#aave", name="Aave", gecko_id="aave"),
        ),
    )


@pytest.fixture
def store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "store")


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def context(
    reference_tables: ReferenceTables,
    store: LocalBlobStore,
) -> PipelineContext:
    """
    Pipeline context backed by a local store, a constant price and no futures.

    Returns:
        PipelineContext: Context for one test run.
    """
    return PipelineContext(
        reference_tables=reference_tables,
        store=store,
        fetch_price=fixed_price,
        fetch_futures=no_futures,
    )
