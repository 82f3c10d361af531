"""
Amazon S3 backend for storekit.

Talks to S3 (or an S3 compatible service) through a boto3 client created
once per store.
"""

import io
from typing import Any, BinaryIO, Optional

from ...exceptions import StoreConfigurationError
from ..config import S3Options
from .base import ZERO_TIME, ObjectDescriptor, StoreType
from .object_store import ObjectStore, key_name


def descriptor_from_s3(obj: dict[str, Any]) -> ObjectDescriptor:
    """Translate a ``Contents`` entry of ``list_objects_v2`` into an ObjectDescriptor."""
    key = obj["Key"]
    return ObjectDescriptor(
        name=key_name(key),
        size=obj.get("Size") or 0,
        mod_time=obj.get("LastModified") or ZERO_TIME,
        key=key,
    )


class S3Store(ObjectStore):
    """
    Amazon S3 store.

    Configuration:
        bucket: S3 bucket name (required by every operation)
        region: AWS region (optional, uses boto3 defaults)
        profile: Named profile, used with sdk_load_config and shared_config_enabled
        endpoint_url: Endpoint for S3 compatible services (optional)
        connect_timeout / read_timeout: Client-level deadlines in seconds
        page_size: Keys per listing call (default: 1000)

    Examples:
        >>> store = S3Store(S3Options(bucket="my-bucket", region="us-west-2"))
        >>> store.create("reports/2024.csv", b"a,b\\n1,2\\n")
        >>> store.stat("reports/2024.csv").size
        8
    """

    options_class = S3Options
    backend_name = "s3"

    def __init__(self, config: Optional[S3Options] = None, client: Any = None):
        super().__init__(config, client=client)

    @property
    def store_type(self) -> StoreType:
        """Return the backend tag."""
        return StoreType.S3

    def _create_client(self) -> Any:
        """Create a boto3 S3 client from the store options."""
        try:
            import boto3
            from botocore.config import Config
        except ImportError as e:
            raise StoreConfigurationError(
                "boto3 is required for the S3 backend", backend=self.backend_name
            ) from e

        session_kwargs = {}
        if self.config.region:
            session_kwargs["region_name"] = self.config.region
        if self.config.sdk_load_config and self.config.shared_config_enabled and self.config.profile:
            session_kwargs["profile_name"] = self.config.profile

        timeouts = {
            name: value
            for name, value in (
                ("connect_timeout", self.config.connect_timeout),
                ("read_timeout", self.config.read_timeout),
            )
            if value is not None
        }
        client_kwargs: dict[str, Any] = {"config": Config(**timeouts)}
        if self.config.endpoint_url:
            client_kwargs["endpoint_url"] = self.config.endpoint_url

        session = boto3.session.Session(**session_kwargs)
        return session.client("s3", **client_kwargs)

    def _upload(self, bucket: str, key: str, stream: BinaryIO) -> None:
        self._client.upload_fileobj(Fileobj=stream, Bucket=bucket, Key=key)

    def _download(self, bucket: str, key: str) -> bytes:
        buf = io.BytesIO()
        self._client.download_fileobj(Bucket=bucket, Key=key, Fileobj=buf)
        return buf.getvalue()

    def _delete_key(self, bucket: str, key: str) -> None:
        self._client.delete_object(Bucket=bucket, Key=key)

    def _list_page(self, bucket: str, prefix: str, limit: int) -> list[ObjectDescriptor]:
        response = self._client.list_objects_v2(Bucket=bucket, Prefix=prefix, MaxKeys=limit)
        return [descriptor_from_s3(obj) for obj in response.get("Contents", [])]

    def _list_dir(self, bucket: str, prefix: str) -> list[ObjectDescriptor]:
        entries = []
        continuation_token = None

        while True:
            list_args = {
                "Bucket": bucket,
                "Prefix": prefix,
                "Delimiter": "/",
                "MaxKeys": self.config.page_size,
            }
            if continuation_token:
                list_args["ContinuationToken"] = continuation_token

            response = self._client.list_objects_v2(**list_args)
            for obj in response.get("Contents", []):
                # Skip the zero-byte marker some tools create for "folders"
                if obj["Key"] != prefix:
                    entries.append(descriptor_from_s3(obj))

            if not response.get("IsTruncated", False):
                return entries
            continuation_token = response.get("NextContinuationToken")
