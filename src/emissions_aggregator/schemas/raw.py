# schemas/raw.py

from collections.abc import Mapping
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from .types import LabelStr, NonNegFloat, Timestamp

# adapter-supplied mapping of section labels to schedules, plus "meta",
# "categories" and "documented"
AdapterDefinition: TypeAlias = Mapping[str, object]


# ──────────────────────────── Adapter metadata ────────────────────────────
class ProtocolMetadata(BaseModel):
    """
    Metadata block supplied by an adapter alongside its unlock schedule.

    Only `token` and `protocolIds` are interpreted by the pipeline. Any other keys
    (sources, notes, event descriptions, ...) are carried through to the stored
    artifact untouched.

    Fields:
      - token: price-feed token identifier, e.g. "coingecko:uniswap"
      - protocol_ids: explicit registry ids; only the first entry is consulted
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    token: str | None = None
    protocol_ids: list[str | None] = Field(default_factory=list, alias="protocolIds")


# ──────────────────────────── Raw schedule data ────────────────────────────
class UnlockEvent(BaseModel):
    """A single unlock of `amount` tokens at `timestamp`."""

    model_config = ConfigDict(frozen=True)

    timestamp: Timestamp
    amount: NonNegFloat


class RawSection(BaseModel):
    """All unlock events an adapter reports under one series label."""

    model_config = ConfigDict(frozen=True)

    label: LabelStr
    events: list[UnlockEvent] = Field(default_factory=list)


class RawSectionData(BaseModel):
    """
    Evaluated output of one adapter definition, before chart shaping.

    `raw_sections` is None when the definition produced nothing usable; the
    protocol processor treats that as fatal for the protocol.
    """

    model_config = ConfigDict(frozen=True)

    metadata: ProtocolMetadata
    categories: dict[str, list[str]] = Field(default_factory=dict)
    raw_sections: list[RawSection] | None = None
    documented_sections: list[RawSection] = Field(default_factory=list)
    replaces: list[str] = Field(default_factory=list)
