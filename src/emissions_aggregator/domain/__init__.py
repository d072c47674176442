# domain/__init__.py

from .identity import GUARDED_ADAPTERS, Resolution, extract_gecko_id, resolve
from .pipeline import (
    PipelineContext,
    RunResult,
    handle_event,
    process_protocol,
    process_protocol_list,
    store_emissions,
)

__all__ = [
    # identity
    "GUARDED_ADAPTERS",
    "Resolution",
    "extract_gecko_id",
    "resolve",
    # pipeline
    "PipelineContext",
    "RunResult",
    "handle_event",
    "process_protocol",
    "process_protocol_list",
    "store_emissions",
]
