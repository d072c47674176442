# adapters/registry.py

import inspect
import logging
from collections.abc import Mapping, Sequence
from importlib.metadata import entry_points
from typing import NamedTuple

from emissions_aggregator.schemas import AdapterDefinition

logger = logging.getLogger(__name__)

# entry-point group under which adapter packages register their loaders
ADAPTER_ENTRY_POINT_GROUP = "emissions_aggregator.adapters"


class AdapterEntry(NamedTuple):
    """
    A named adapter in the registry.

    `loader` is either the adapter's definition(s) directly, or a zero-argument
    callable (usually async) producing one definition or a sequence of them.
    """

    name: str
    loader: object


def load_adapter_registry(
    group: str = ADAPTER_ENTRY_POINT_GROUP,
) -> list[AdapterEntry]:
    """
    Load the static adapter registry from installed entry points.

    Entries are ordered by name so that batch indexes are stable across runs. An
    entry point that fails to import is logged and left out.

    Args:
        group (str, optional): Entry-point group to read. Defaults to
            ADAPTER_ENTRY_POINT_GROUP.

    Returns:
        list[AdapterEntry]: Registered adapters, sorted by name.
    """
    registry = []
    for entry_point in sorted(entry_points(group=group), key=lambda ep: ep.name):
        try:
            registry.append(AdapterEntry(entry_point.name, entry_point.load()))
        except Exception as error:
            logger.error("Could not load adapter %s: %s", entry_point.name, error)

    logger.info("Loaded %d adapters from %s.", len(registry), group)
    return registry


def registry_from_mapping(adapters: Mapping[str, object]) -> list[AdapterEntry]:
    """
    Build a registry from a name → loader mapping, preserving mapping order.

    Args:
        adapters (Mapping[str, object]): Adapter loaders keyed by adapter name.

    Returns:
        list[AdapterEntry]: Registry entries in mapping order.
    """
    return [AdapterEntry(name, loader) for name, loader in adapters.items()]


async def resolve_definitions(entry: AdapterEntry) -> list[AdapterDefinition]:
    """
    Normalise an adapter's loader into an ordered list of definitions.

    Calls the loader if it is callable and awaits the result if needed. A single
    definition mapping becomes a one-element list.

    Args:
        entry (AdapterEntry): Registry entry to resolve.

    Returns:
        list[AdapterDefinition]: The adapter's protocol definitions.

    Raises:
        TypeError: If the loader yields neither a mapping nor a sequence of them.
    """
    loaded = entry.loader() if callable(entry.loader) else entry.loader

    if inspect.isawaitable(loaded):
        loaded = await loaded

    if isinstance(loaded, Mapping):
        return [loaded]

    if isinstance(loaded, Sequence) and not isinstance(loaded, str | bytes):
        return list(loaded)

    raise TypeError(
        f"adapter {entry.name} produced {type(loaded).__name__}, "
        "expected a definition or a sequence of definitions",
    )
