"""
Google Cloud Storage backend for storekit.

Talks to GCS through a ``google.cloud.storage.Client`` created once per
store.
"""

from typing import Any, BinaryIO, Optional

from ...exceptions import StoreConfigurationError
from ..config import GSOptions
from .base import ZERO_TIME, ObjectDescriptor, StoreType
from .object_store import ObjectStore, key_name


def descriptor_from_blob(blob: Any) -> ObjectDescriptor:
    """Translate a ``google.cloud.storage.Blob`` listing entry into an ObjectDescriptor."""
    return ObjectDescriptor(
        name=key_name(blob.name),
        size=blob.size or 0,
        mod_time=blob.updated or ZERO_TIME,
        key=blob.name,
    )


class GSStore(ObjectStore):
    """
    Google Cloud Storage store.

    Configuration:
        bucket: GCS bucket name (required by every operation)
        project_id: Google Cloud project ID (optional, auto-detected)
        credentials_path: Path to service account JSON file (optional)
        page_size: Keys per listing call (default: 1000)

    Examples:
        >>> store = GSStore(GSOptions(bucket="my-bucket", project_id="my-project"))
        >>> store.write_file("exports/data.json", b"{}")
    """

    options_class = GSOptions
    backend_name = "gs"

    def __init__(self, config: Optional[GSOptions] = None, client: Any = None):
        super().__init__(config, client=client)
        self._bucket = None

    @property
    def store_type(self) -> StoreType:
        """Return the backend tag."""
        return StoreType.GS

    def _create_client(self) -> Any:
        """Create a Google Cloud Storage client from the store options."""
        try:
            from google.cloud import storage
            from google.oauth2 import service_account
        except ImportError as e:
            raise StoreConfigurationError(
                "google-cloud-storage is required for the GS backend",
                backend=self.backend_name,
            ) from e

        client_kwargs = {}
        if self.config.project_id:
            client_kwargs["project"] = self.config.project_id
        if self.config.credentials_path:
            client_kwargs["credentials"] = service_account.Credentials.from_service_account_file(
                self.config.credentials_path
            )

        return storage.Client(**client_kwargs)

    def _bucket_handle(self, bucket: str) -> Any:
        if self._bucket is None:
            self._bucket = self._client.bucket(bucket)
        return self._bucket

    def _upload(self, bucket: str, key: str, stream: BinaryIO) -> None:
        self._bucket_handle(bucket).blob(key).upload_from_file(stream)

    def _download(self, bucket: str, key: str) -> bytes:
        return self._bucket_handle(bucket).blob(key).download_as_bytes()

    def _delete_key(self, bucket: str, key: str) -> None:
        self._bucket_handle(bucket).blob(key).delete()

    def _list_page(self, bucket: str, prefix: str, limit: int) -> list[ObjectDescriptor]:
        blobs = self._client.list_blobs(bucket, prefix=prefix, max_results=limit)
        return [descriptor_from_blob(blob) for blob in blobs]

    def _list_dir(self, bucket: str, prefix: str) -> list[ObjectDescriptor]:
        blobs = self._client.list_blobs(
            bucket, prefix=prefix, delimiter="/", page_size=self.config.page_size
        )
        return [descriptor_from_blob(blob) for blob in blobs if blob.name != prefix]
