"""External object storage for patient documents."""

import mimetypes
import os
from dataclasses import dataclass
from typing import Optional, Protocol

from fastapi.concurrency import run_in_threadpool
from google.cloud import storage
from google.cloud.exceptions import NotFound

from medportal.config import settings
from medportal.core.logging import logger


DEFAULT_CONTENT_TYPE = "application/octet-stream"


class StorageError(Exception):
    """Raised when the object store cannot complete an operation."""


@dataclass(frozen=True)
class StoredObject:
    """Result of a successful upload."""

    url: str
    object_id: str


class ObjectStore(Protocol):
    """Capability needed by the document service: store bytes, delete by id."""

    async def upload(self, data: bytes, key: str, content_type: Optional[str] = None) -> StoredObject:
        ...

    async def delete(self, object_id: str) -> None:
        ...


def detect_content_type(key: str, declared: Optional[str] = None) -> str:
    """Use the declared content type, otherwise guess it from the object name."""
    if declared and declared != DEFAULT_CONTENT_TYPE:
        return declared
    guessed, _ = mimetypes.guess_type(key)
    return guessed or declared or DEFAULT_CONTENT_TYPE


class GCSObjectStore:
    """Object store backed by a GCP Cloud Storage bucket."""

    def __init__(self, bucket_name: str, project_id: str, credentials_path: str = ""):
        self.bucket_name = bucket_name
        self.project_id = project_id
        self.credentials_path = credentials_path
        self._client: Optional[storage.Client] = None

    def get_client(self) -> storage.Client:
        """Get or create the GCP Storage client."""
        if self._client is not None:
            return self._client

        if not self.project_id:
            raise StorageError("GCP_PROJECT_ID is not configured")
        if not self.bucket_name:
            raise StorageError("GCP_STORAGE_BUCKET_NAME is not configured")

        try:
            if self.credentials_path:
                if not os.path.exists(self.credentials_path):
                    raise StorageError(f"Service account key file not found: {self.credentials_path}")
                self._client = storage.Client.from_service_account_json(
                    self.credentials_path,
                    project=self.project_id,
                )
                logger.info(f"GCP Storage client initialized with service account: {self.credentials_path}")
            else:
                self._client = storage.Client(project=self.project_id)
                logger.info("GCP Storage client initialized with default credentials")
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize GCP Storage client: {e}")
            raise StorageError("Failed to initialize GCP Storage client") from e

        return self._client

    def _upload_sync(self, data: bytes, key: str, content_type: str) -> StoredObject:
        bucket = self.get_client().bucket(self.bucket_name)
        blob = bucket.blob(key)
        blob.upload_from_string(data, content_type=content_type)
        return StoredObject(url=blob.public_url, object_id=blob.name)

    def _delete_sync(self, object_id: str) -> None:
        bucket = self.get_client().bucket(self.bucket_name)
        bucket.blob(object_id).delete()

    async def upload(self, data: bytes, key: str, content_type: Optional[str] = None) -> StoredObject:
        """
        Upload bytes under ``key``.

        Args:
            data: File content
            key: Object name inside the bucket
            content_type: Client-declared type; detected from the key when absent

        Returns:
            StoredObject: URL and object id of the stored file

        Raises:
            StorageError: If the upload fails for any reason
        """
        resolved_type = detect_content_type(key, content_type)
        try:
            stored = await run_in_threadpool(self._upload_sync, data, key, resolved_type)
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Error uploading {key} to GCP: {e}")
            raise StorageError(f"Failed to upload {key}") from e

        logger.info(f"Uploaded object {stored.object_id} ({len(data)} bytes, {resolved_type})")
        return stored

    async def delete(self, object_id: str) -> None:
        """Delete an object. A missing object counts as deleted."""
        try:
            await run_in_threadpool(self._delete_sync, object_id)
        except NotFound:
            logger.warning(f"Object not found for deletion: {object_id}")
            return
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Error deleting object {object_id}: {e}")
            raise StorageError(f"Failed to delete {object_id}") from e

        logger.info(f"Deleted object {object_id}")


def create_object_store() -> GCSObjectStore:
    """Build the object store from application settings."""
    return GCSObjectStore(
        bucket_name=settings.GCP_STORAGE_BUCKET_NAME,
        project_id=settings.GCP_PROJECT_ID,
        credentials_path=settings.GOOGLE_APPLICATION_CREDENTIALS,
    )
