# storage/emissions_store.py

import json
import logging
from collections.abc import Iterable

from emissions_aggregator.schemas import EmissionArtifact

from .blob_store import BlobStore

logger = logging.getLogger(__name__)

_ARTIFACT_PREFIX = "emissions/"
PROTOCOL_INDEX_KEY = "emissionsProtocolsList"


def artifact_key(slug: str) -> str:
    """
    Storage key of a protocol's emissions artifact.

    Args:
        slug (str): Storage slug of the protocol.

    Returns:
        str: The key, e.g. "emissions/uniswap".
    """
    return f"{_ARTIFACT_PREFIX}{slug}"


async def save_artifact(store: BlobStore, slug: str, artifact: EmissionArtifact) -> None:
    """
    Write a protocol's artifact, replacing any previous version.

    Args:
        store (BlobStore): Target store.
        slug (str): Storage slug of the protocol.
        artifact (EmissionArtifact): Artifact to persist.

    Returns:
        None
    """
    await store.put(artifact_key(slug), artifact.to_json())
    logger.debug("Stored %s.", artifact_key(slug))


async def load_protocol_index(store: BlobStore) -> list[str]:
    """
    Read the persisted protocol index.

    A missing or empty document is an empty index.

    Args:
        store (BlobStore): Store holding the index.

    Returns:
        list[str]: Slugs listed in the index.

    Raises:
        ValueError: If the stored index is not a JSON array.
    """
    blob = await store.get(PROTOCOL_INDEX_KEY)
    if not blob.body:
        return []

    slugs = json.loads(blob.body)
    if not isinstance(slugs, list):
        raise ValueError(f"{PROTOCOL_INDEX_KEY} is not a JSON array")
    return slugs


async def merge_protocol_index(store: BlobStore, slugs: Iterable[str]) -> list[str]:
    """
    Union the persisted protocol index with newly produced slugs and write it back.

    The merged index is deduplicated and sorted. Slugs are only ever added.

    Args:
        store (BlobStore): Store holding the index.
        slugs (Iterable[str]): Slugs produced by the current run.

    Returns:
        list[str]: The index as written.
    """
    previous = await load_protocol_index(store)
    merged = sorted({*previous, *slugs})

    await store.put(PROTOCOL_INDEX_KEY, json.dumps(merged))

    logger.info(
        "Protocol index now lists %d protocols (%d new).",
        len(merged),
        len(merged) - len(set(previous)),
    )
    return merged
