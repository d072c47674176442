# schemas/reference.py

from pydantic import BaseModel, ConfigDict, Field

from .types import NonEmptyStr


class RegistryProtocol(BaseModel):
    """
    Entry of the flat protocol registry.

    Fields:
      - id: registry id
      - name: display name
      - gecko_id: CoinGecko id, if listed
      - symbol: trading symbol, used for futures lookups
      - parent_protocol: id of the parent group, e.g. "parent#aave"
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: NonEmptyStr
    name: NonEmptyStr
    gecko_id: str | None = None
    symbol: str | None = None
    parent_protocol: str | None = Field(None, alias="parentProtocol")


class ParentProtocol(BaseModel):
    """Entry of the parent-protocol registry, grouping several registry entries."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: NonEmptyStr
    name: NonEmptyStr
    gecko_id: str | None = None


class ReferenceTables(BaseModel):
    """
    Immutable snapshot of the protocol and parent-protocol registries.

    Loaded once per run and shared by reference; lookups return the first entry
    in registry order that matches.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    protocols: tuple[RegistryProtocol, ...] = ()
    parent_protocols: tuple[ParentProtocol, ...] = Field((), alias="parentProtocols")

    def protocol_by_id(self, protocol_id: str) -> RegistryProtocol | None:
        return next((p for p in self.protocols if p.id == protocol_id), None)

    def protocol_by_gecko_id(self, gecko_id: str) -> RegistryProtocol | None:
        return next((p for p in self.protocols if p.gecko_id == gecko_id), None)

    def parent_by_id(self, parent_id: str) -> ParentProtocol | None:
        return next((p for p in self.parent_protocols if p.id == parent_id), None)

    def parent_by_gecko_id(self, gecko_id: str) -> ParentProtocol | None:
        return next(
            (p for p in self.parent_protocols if p.gecko_id == gecko_id),
            None,
        )


class ProtocolIdentity(BaseModel):
    """
    Resolved identity under which a protocol's artifact is published.

    When the protocol belongs to a parent group, `id` and `name` are the parent's.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: NonEmptyStr
    name: NonEmptyStr
    gecko_id: str | None = None
    parent_protocol: str | None = Field(None, alias="parentProtocol")
