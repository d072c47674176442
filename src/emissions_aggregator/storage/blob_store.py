# storage/blob_store.py

import asyncio
import logging
from pathlib import Path
from typing import NamedTuple, Protocol

import boto3
from botocore.exceptions import ClientError

from emissions_aggregator.config import Settings

logger = logging.getLogger(__name__)


class BlobObject(NamedTuple):
    """Result of a blob read; `body` is None when the key does not exist."""

    body: str | None


class BlobStore(Protocol):
    """Key/value store of JSON documents. Writes fully replace the stored value."""

    async def put(self, key: str, body: str) -> None: ...

    async def get(self, key: str) -> BlobObject: ...


class LocalBlobStore:
    """
    Blob store backed by files under a root directory, one file per key.

    Keys may contain "/" and map onto subdirectories.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    async def put(self, key: str, body: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # readers only ever see complete documents
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(path)

    async def get(self, key: str) -> BlobObject:
        path = self._path(key)
        if not path.is_file():
            return BlobObject(None)
        return BlobObject(path.read_text(encoding="utf-8"))

    def _path(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if not path.is_relative_to(self._root.resolve()):
            raise ValueError(f"key escapes store root: {key!r}")
        return path


class R2BlobStore:
    """
    Blob store backed by a Cloudflare R2 (S3-compatible) bucket.

    boto3 is synchronous, so every call runs in a worker thread to keep the
    event loop free.
    """

    __slots__ = ("_bucket", "_s3")

    def __init__(
        self,
        *,
        bucket: str,
        endpoint: str,
        access_key: str | None = None,
        secret_key: str | None = None,
        region: str = "auto",
    ) -> None:
        self._bucket = bucket
        self._s3 = boto3.client(
            "s3",
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
        )

    async def put(self, key: str, body: str) -> None:
        await asyncio.to_thread(
            self._s3.put_object,
            Bucket=self._bucket,
            Key=key,
            Body=body.encode("utf-8"),
            ContentType="application/json",
        )

    async def get(self, key: str) -> BlobObject:
        return await asyncio.to_thread(self._get_sync, key)

    def _get_sync(self, key: str) -> BlobObject:
        try:
            response = self._s3.get_object(Bucket=self._bucket, Key=key)
        except ClientError as error:
            code = error.response.get("Error", {}).get("Code")
            if code in {"404", "NoSuchKey", "NotFound"}:
                return BlobObject(None)
            raise

        return BlobObject(response["Body"].read().decode("utf-8"))


def make_blob_store(settings: Settings) -> BlobStore:
    """
    Build the blob store selected by the settings: R2 when an endpoint and bucket
    are configured, otherwise a local store under `settings.store_dir`.

    Args:
        settings (Settings): Run settings.

    Returns:
        BlobStore: The configured store.
    """
    if settings.uses_r2:
        logger.debug("Using R2 bucket %s.", settings.r2_bucket)
        return R2BlobStore(
            bucket=settings.r2_bucket,
            endpoint=settings.r2_endpoint,
            access_key=settings.r2_access_key_id,
            secret_key=settings.r2_secret_access_key,
        )

    logger.debug("Using local store at %s.", settings.store_dir)
    return LocalBlobStore(settings.store_dir)
