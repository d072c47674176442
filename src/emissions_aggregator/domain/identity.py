# domain/identity.py

import logging
from typing import NamedTuple

from emissions_aggregator.schemas import (
    ProtocolIdentity,
    ProtocolMetadata,
    ReferenceTables,
    RegistryProtocol,
)

from .errors import MissingMetadataError

logger = logging.getLogger(__name__)

# price-feed namespace that embeds a CoinGecko id in an adapter's token string
COINGECKO_PREFIX = "coingecko:"

# factory-style adapters whose sub-protocols must never be keyed by adapter name
GUARDED_ADAPTERS: frozenset[str] = frozenset({"daomaker"})


class Resolution(NamedTuple):
    identity: ProtocolIdentity
    canonical_key: str
    match: RegistryProtocol | None


def resolve(
    protocol_name: str,
    metadata: ProtocolMetadata,
    tables: ReferenceTables,
    *,
    guarded: frozenset[str] = GUARDED_ADAPTERS,
) -> Resolution:
    """
    Resolve an adapter's raw metadata to the canonical protocol identity.

    The registry match is found via the explicit protocol id when the adapter
    supplies one, otherwise via the CoinGecko id embedded in the token (parent
    registry first, then the flat registry). The canonical key then falls back
    through the match's parent, the match's own id, the CoinGecko id and finally
    the adapter name.

    Args:
        protocol_name (str): Name of the adapter that produced the metadata.
        metadata (ProtocolMetadata): Metadata block of the adapter's output.
        tables (ReferenceTables): Protocol and parent-protocol registries.
        guarded (frozenset[str], optional): Adapter names that must resolve to
            registry metadata. Defaults to GUARDED_ADAPTERS.

    Returns:
        Resolution: The identity, canonical key and registry match (if any).

    Raises:
        MissingMetadataError: If a guarded adapter yields neither a registry match
            nor a CoinGecko id.
    """
    explicit_id = _explicit_protocol_id(metadata)
    gecko_id = extract_gecko_id(metadata.token)

    if explicit_id:
        match = tables.protocol_by_id(explicit_id)
    else:
        match = _match_by_gecko_id(gecko_id, tables)

    if protocol_name in guarded and not (match or gecko_id):
        raise MissingMetadataError(f"{protocol_name}: token {metadata.token!r}")

    canonical_key = _canonical_key(match, gecko_id, protocol_name)

    if match is None and gecko_id is None:
        logger.debug(
            "No registry metadata for %s, keying by adapter name.",
            protocol_name,
        )

    identity = ProtocolIdentity(
        id=canonical_key,
        name=_display_name(match, canonical_key, tables),
        gecko_id=match.gecko_id if match else None,
        parent_protocol=match.parent_protocol if match else None,
    )
    return Resolution(identity, canonical_key, match)


def extract_gecko_id(token: str | None) -> str | None:
    """
    Extract the CoinGecko id embedded in a token string.

    Args:
        token (str | None): Token identifier, e.g. "coingecko:uniswap".

    Returns:
        str | None: The text following the "coingecko:" marker, or None if the
            marker is absent.
    """
    if not token:
        return None

    start = token.find(COINGECKO_PREFIX)
    if start == -1:
        return None

    return token[start + len(COINGECKO_PREFIX) :]


def _explicit_protocol_id(metadata: ProtocolMetadata) -> str | None:
    """
    Return the first explicit protocol id from the metadata, if non-empty.

    Args:
        metadata (ProtocolMetadata): Adapter metadata.

    Returns:
        str | None: The first protocol id, or None when missing or empty.
    """
    if not metadata.protocol_ids:
        return None
    return metadata.protocol_ids[0] or None


def _match_by_gecko_id(
    gecko_id: str | None,
    tables: ReferenceTables,
) -> RegistryProtocol | None:
    """
    Find a registry record for a CoinGecko id, preferring parent protocols.

    A parent match is returned as a registry record whose `parent_protocol` is the
    parent's own id, so downstream keying treats it as a parent group. It carries
    no symbol.

    Args:
        gecko_id (str | None): CoinGecko id extracted from the token.
        tables (ReferenceTables): Protocol and parent-protocol registries.

    Returns:
        RegistryProtocol | None: Matching record, or None.
    """
    if not gecko_id:
        return None

    parent = tables.parent_by_gecko_id(gecko_id)
    if parent:
        return RegistryProtocol(
            id=parent.id,
            name=parent.name,
            gecko_id=parent.gecko_id,
            parent_protocol=parent.id,
        )

    return tables.protocol_by_gecko_id(gecko_id)


def _canonical_key(
    match: RegistryProtocol | None,
    gecko_id: str | None,
    protocol_name: str,
) -> str:
    if match:
        return match.parent_protocol or match.id
    return gecko_id or protocol_name


def _display_name(
    match: RegistryProtocol | None,
    canonical_key: str,
    tables: ReferenceTables,
) -> str:
    """
    Choose the published name: the parent's registered name for grouped
    protocols, otherwise the canonical key.

    Args:
        match (RegistryProtocol | None): Registry match, if any.
        canonical_key (str): Resolved canonical key.
        tables (ReferenceTables): Registries used to look up the parent.

    Returns:
        str: Display name for the artifact.
    """
    if match is None or not match.parent_protocol:
        return canonical_key

    parent = tables.parent_by_id(match.parent_protocol)
    return parent.name if parent else canonical_key
