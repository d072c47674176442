# pipeline/context.py

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeAlias

from emissions_aggregator.domain.identity import GUARDED_ADAPTERS
from emissions_aggregator.schemas import ReferenceTables
from emissions_aggregator.storage import BlobStore

PriceLookup: TypeAlias = Callable[[str, int], Awaitable[float | None]]
FuturesLookup: TypeAlias = Callable[[str], Awaitable[dict[str, object] | None]]


@dataclass(frozen=True, slots=True)
class PipelineContext:
    """
    Collaborators shared by every protocol processed in a batch run.

    Attributes:
        reference_tables (ReferenceTables): Protocol and parent-protocol registries.
        store (BlobStore): Destination of artifacts and the protocol index.
        fetch_price (PriceLookup): Historical price by (token, timestamp).
        fetch_futures (FuturesLookup): Futures market snapshot by symbol.
        guarded_adapters (frozenset[str]): Adapters that must resolve to registry
            metadata.
    """

    reference_tables: ReferenceTables
    store: BlobStore
    fetch_price: PriceLookup
    fetch_futures: FuturesLookup
    guarded_adapters: frozenset[str] = GUARDED_ADAPTERS
