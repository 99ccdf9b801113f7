"""Blob storage for memes, share images and audio.

Objects are addressed by a flat key inside a named bucket. Two backends are
provided: a directory on local disk, used in development and tests, and an
S3-compatible object store (AWS S3 or Cloudflare R2) reached through boto3.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from radical_api.core.settings import settings

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "image/jpeg"

MEDIA_TYPES = {
    ".mp3": "audio/mpeg",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


class BlobStoreError(RuntimeError):
    """Raised when the blob store cannot complete an operation."""


@dataclass(frozen=True)
class StoredBlob:
    """Object body together with its content type."""

    data: bytes
    content_type: str


class BlobStore(Protocol):
    """Minimal get/put/delete interface over one bucket."""

    def get(self, key: str) -> StoredBlob | None: ...

    def put(self, key: str, data: bytes, content_type: str) -> None: ...

    def delete(self, key: str) -> None: ...


def infer_media_type(key: str) -> str:
    """Map a key's extension to a content type, defaulting to JPEG."""
    return MEDIA_TYPES.get(PurePosixPath(key).suffix.lower(), DEFAULT_MEDIA_TYPE)


def is_safe_key(key: str) -> bool:
    """Return True for flat keys that cannot escape the bucket."""
    return bool(key) and "/" not in key and "\\" not in key and key not in {".", ".."}


class LocalBlobStore:
    """Bucket backed by a directory on local disk."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not is_safe_key(key):
            raise BlobStoreError(f"Invalid object key: {key!r}")
        return self.root / key

    def get(self, key: str) -> StoredBlob | None:
        if not is_safe_key(key):
            return None
        path = self.root / key
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise BlobStoreError(f"Failed to read {key}") from exc
        return StoredBlob(data=data, content_type=infer_media_type(key))

    def put(self, key: str, data: bytes, content_type: str) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise BlobStoreError(f"Failed to write {key}") from exc

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise BlobStoreError(f"Failed to delete {key}") from exc


class S3BlobStore:
    """Bucket in an S3-compatible object store."""

    def __init__(self, bucket: str, client: object | None = None) -> None:
        self.bucket = bucket
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = _get_s3()
        return self._client

    def get(self, key: str) -> StoredBlob | None:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            data = response["Body"].read()
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                return None
            raise BlobStoreError(f"Failed to read {key} from {self.bucket}") from exc
        except BotoCoreError as exc:
            raise BlobStoreError(f"Failed to read {key} from {self.bucket}") from exc
        content_type = response.get("ContentType") or infer_media_type(key)
        return StoredBlob(data=data, content_type=content_type)

    def put(self, key: str, data: bytes, content_type: str) -> None:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise BlobStoreError(f"Failed to write {key} to {self.bucket}") from exc

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise BlobStoreError(f"Failed to delete {key} from {self.bucket}") from exc


_s3 = None


def _get_s3():
    """Get (or create) the S3 client singleton."""
    global _s3
    if _s3 is None:
        _s3 = boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint_url,
            region_name=settings.s3_region,
            aws_access_key_id=settings.s3_access_key_id,
            aws_secret_access_key=settings.s3_secret_access_key,
            # Downstream failures surface to the caller without retrying.
            config=Config(retries={"max_attempts": 1, "mode": "standard"}),
        )
    return _s3


@lru_cache(maxsize=None)
def get_blob_store(bucket: str) -> BlobStore:
    """Return the shared store for ``bucket`` on the configured backend."""
    if settings.blob_backend == "s3":
        logger.info("Using S3 blob store for bucket %s", bucket)
        return S3BlobStore(bucket)
    root = Path(settings.media_root) / bucket
    logger.info("Using local blob store at %s", root)
    return LocalBlobStore(root)
