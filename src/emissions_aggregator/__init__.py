# src/emissions_aggregator/__init__.py

from .domain import handle_event, store_emissions
from .logging_config import configure_logging

__all__ = [
    # logging_config
    "configure_logging",
    # domain
    "handle_event",
    "store_emissions",
]
