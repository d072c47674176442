# pipeline/__init__.py

from .aggregate import aggregate_metadata
from .context import FuturesLookup, PipelineContext, PriceLookup
from .processor import process_protocol
from .reporter import FailureReporter, Notifier, notify
from .runner import (
    RunResult,
    handle_event,
    process_protocol_list,
    select_adapters,
    store_emissions,
)
from .valuation import INCENTIVE_CATEGORIES, compute_usd_unlocks

__all__ = [
    # context
    "FuturesLookup",
    "PipelineContext",
    "PriceLookup",
    # per-protocol stages
    "aggregate_metadata",
    "compute_usd_unlocks",
    "INCENTIVE_CATEGORIES",
    "process_protocol",
    # batch
    "RunResult",
    "handle_event",
    "process_protocol_list",
    "select_adapters",
    "store_emissions",
    # reporting
    "FailureReporter",
    "Notifier",
    "notify",
]
