"""
Blob storage for uploaded judgments.

Two backends share one interface: S3 (or any S3-compatible endpoint) for
deployments, and a local directory for development and tests.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Minimal object storage interface"""

    @abstractmethod
    def put(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        """Store bytes under path and return the path"""

    @abstractmethod
    def get(self, path: str) -> bytes:
        """Return the bytes stored under path"""

    @abstractmethod
    def public_url(self, path: str) -> Optional[str]:
        """Publicly reachable URL for path, if the backend has one"""


def _join_public_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{quote(path.lstrip('/'))}"


class S3BlobStore(BlobStore):
    """S3 bucket backend"""

    def __init__(self, bucket: str, client=None, public_base_url: str = ""):
        if not bucket:
            raise StorageError("Storage bucket not configured")
        self.bucket = bucket
        self.public_base_url = public_base_url
        self.client = client or boto3.client(
            "s3",
            region_name=settings.AWS_REGION,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            endpoint_url=settings.AWS_S3_ENDPOINT_URL or None,
        )

    def put(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=path,
                Body=data,
                ContentType=content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload of {path} to {self.bucket} failed: {e}")
            raise StorageError(f"Storage upload failed: {e}") from e
        return path

    def get(self, path: str) -> bytes:
        try:
            obj = self.client.get_object(Bucket=self.bucket, Key=path)
            return obj["Body"].read()
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 download of {path} from {self.bucket} failed: {e}")
            raise StorageError(f"Storage download failed: {e}") from e

    def public_url(self, path: str) -> Optional[str]:
        if self.public_base_url:
            return _join_public_url(self.public_base_url, path)
        if settings.AWS_S3_ENDPOINT_URL:
            return _join_public_url(f"{settings.AWS_S3_ENDPOINT_URL}/{self.bucket}", path)
        return _join_public_url(f"https://{self.bucket}.s3.{settings.AWS_REGION}.amazonaws.com", path)


class LocalBlobStore(BlobStore):
    """Filesystem backend rooted at a single directory"""

    def __init__(self, root: str, public_base_url: str = ""):
        self.root = Path(root).expanduser().resolve()
        self.public_base_url = public_base_url

    def _resolve(self, path: str) -> Path:
        target = (self.root / path.lstrip("/")).resolve()
        if target != self.root and self.root not in target.parents:
            raise StorageError(f"Invalid storage path: {path}")
        return target

    def put(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error(f"Local write of {path} failed: {e}")
            raise StorageError(f"Storage upload failed: {e}") from e
        return path

    def get(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except OSError as e:
            logger.error(f"Local read of {path} failed: {e}")
            raise StorageError(f"Storage download failed: {e}") from e

    def public_url(self, path: str) -> Optional[str]:
        if not self.public_base_url:
            return None
        return _join_public_url(self.public_base_url, path)


def create_blob_store(backend: str = None) -> BlobStore:
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "s3":
        return S3BlobStore(settings.AWS_S3_BUCKET, public_base_url=settings.STORAGE_PUBLIC_BASE_URL)
    if backend == "local":
        return LocalBlobStore(settings.LOCAL_STORAGE_DIR, public_base_url=settings.STORAGE_PUBLIC_BASE_URL)
    raise StorageError(f"Unsupported storage backend: {backend}")


# Global blob store instance
_blob_store: Optional[BlobStore] = None


def get_blob_store() -> BlobStore:
    """Get the process-wide blob store"""
    global _blob_store
    if _blob_store is None:
        _blob_store = create_blob_store()
        logger.info(f"Using {type(_blob_store).__name__} for uploads")
    return _blob_store
