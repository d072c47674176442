# schemas/__init__.py

from .artifact import EmissionArtifact, EmissionData, TokenAllocation
from .chart import ChartData, ChartPoint, ChartSection
from .raw import (
    AdapterDefinition,
    ProtocolMetadata,
    RawSection,
    RawSectionData,
    UnlockEvent,
)
from .reference import (
    ParentProtocol,
    ProtocolIdentity,
    ReferenceTables,
    RegistryProtocol,
)

__all__ = [
    # raw
    "AdapterDefinition",
    "ProtocolMetadata",
    "RawSection",
    "RawSectionData",
    "UnlockEvent",
    # chart
    "ChartData",
    "ChartPoint",
    "ChartSection",
    # reference
    "ParentProtocol",
    "ProtocolIdentity",
    "ReferenceTables",
    "RegistryProtocol",
    # artifact
    "EmissionArtifact",
    "EmissionData",
    "TokenAllocation",
]
