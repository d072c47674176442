# schemas/artifact.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .chart import ChartSection
from .raw import ProtocolMetadata


class TokenAllocation(BaseModel):
    """
    Category-weighted breakdown of a chart variant, in percent of the total.

    Fields:
      - current: shares of what has unlocked so far
      - final: shares of the full schedule
    """

    model_config = ConfigDict(frozen=True)

    current: dict[str, float] = Field(default_factory=dict)
    final: dict[str, float] = Field(default_factory=dict)


class EmissionData(BaseModel):
    """Server-shaped series of one chart variant with its token allocation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data: list[ChartSection] = Field(default_factory=list)
    token_allocation: TokenAllocation = Field(
        default_factory=TokenAllocation,
        alias="tokenAllocation",
    )


class EmissionArtifact(BaseModel):
    """
    Persisted emissions document for one resolved protocol.

    Serialised by alias with None fields omitted, so a protocol without a
    documented schedule has no `realTimeData` key at all.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    real_time_data: EmissionData | None = Field(None, alias="realTimeData")
    documented_data: EmissionData = Field(..., alias="documentedData")
    metadata: ProtocolMetadata
    name: str
    gecko_id: str | None = None
    futures: dict[str, Any] | None = None
    categories: dict[str, list[str]] = Field(default_factory=dict)
    unlock_usd_chart: list[tuple[str, float]] = Field(
        default_factory=list,
        alias="unlockUsdChart",
    )

    def to_json(self) -> str:
        """
        Serialise the artifact to the JSON document written to the store.

        Returns:
            str: Compact JSON using camelCase aliases, None fields omitted.
        """
        return self.model_dump_json(by_alias=True, exclude_none=True)
