# storage/__init__.py

from .blob_store import (
    BlobObject,
    BlobStore,
    LocalBlobStore,
    R2BlobStore,
    make_blob_store,
)
from .emissions_store import (
    PROTOCOL_INDEX_KEY,
    artifact_key,
    load_protocol_index,
    merge_protocol_index,
    save_artifact,
)
from .reference_tables import load_reference_tables

__all__ = [
    # blob stores
    "BlobObject",
    "BlobStore",
    "LocalBlobStore",
    "R2BlobStore",
    "make_blob_store",
    # emissions artifacts
    "PROTOCOL_INDEX_KEY",
    "artifact_key",
    "load_protocol_index",
    "merge_protocol_index",
    "save_artifact",
    # reference data
    "load_reference_tables",
]
