# storage/reference_tables.py

import logging
from pathlib import Path

from emissions_aggregator.schemas import ReferenceTables

logger = logging.getLogger(__name__)


def load_reference_tables(path: str | Path) -> ReferenceTables:
    """
    Load the protocol and parent-protocol registries from a JSON file.

    The file holds `{"protocols": [...], "parentProtocols": [...]}`. A missing
    file yields empty registries, so every protocol falls back to its CoinGecko
    id or adapter name.

    Args:
        path (str | Path): Location of the reference tables file.

    Returns:
        ReferenceTables: Immutable registries.

    Raises:
        pydantic.ValidationError: If the file content does not match the schema.
    """
    path = Path(path)

    if not path.is_file():
        logger.warning("No reference tables at %s, using empty registries.", path)
        return ReferenceTables()

    tables = ReferenceTables.model_validate_json(path.read_text(encoding="utf-8"))

    logger.info(
        "Loaded %d protocols and %d parent protocols from %s.",
        len(tables.protocols),
        len(tables.parent_protocols),
        path,
    )
    return tables
