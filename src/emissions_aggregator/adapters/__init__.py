# adapters/__init__.py

from .data_sources import (
    DiscordNotifier,
    FuturesFeed,
    PriceFeed,
    open_futures_feed,
    open_price_feed,
)
from .registry import (
    AdapterEntry,
    load_adapter_registry,
    registry_from_mapping,
    resolve_definitions,
)

__all__ = [
    # registry
    "AdapterEntry",
    "load_adapter_registry",
    "registry_from_mapping",
    "resolve_definitions",
    # data sources
    "DiscordNotifier",
    "FuturesFeed",
    "PriceFeed",
    "open_futures_feed",
    "open_price_feed",
]
