"""Shared fixtures for storekit tests."""

from collections.abc import Generator
from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from botocore.exceptions import ClientError
from google.api_core.exceptions import NotFound

from storekit.observability import LoggingConfig, configure_logging
from storekit.storage import init
from storekit.storage.registry import reset_storage_registry

BUCKET = "test-bucket"


class FakeS3Client:
    """In-memory stand-in for the parts of the boto3 S3 client storekit uses."""

    def __init__(self):
        self.objects: dict[tuple[str, str], tuple[bytes, datetime]] = {}
        self.list_calls: list[dict[str, Any]] = []

    def upload_fileobj(self, Fileobj, Bucket, Key):
        self.objects[(Bucket, Key)] = (Fileobj.read(), datetime.now(timezone.utc))

    def download_fileobj(self, Bucket, Key, Fileobj):
        if (Bucket, Key) not in self.objects:
            raise ClientError(
                {"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject"
            )
        Fileobj.write(self.objects[(Bucket, Key)][0])

    def delete_object(self, Bucket, Key):
        self.objects.pop((Bucket, Key), None)
        return {}

    def list_objects_v2(
        self,
        Bucket,
        Prefix="",
        MaxKeys=1000,
        Delimiter=None,
        ContinuationToken=None,
    ):
        self.list_calls.append({"Prefix": Prefix, "MaxKeys": MaxKeys, "Delimiter": Delimiter})
        keys = sorted(k for b, k in self.objects if b == Bucket and k.startswith(Prefix))
        if Delimiter:
            keys = [k for k in keys if Delimiter not in k[len(Prefix):]]

        start = int(ContinuationToken or 0)
        page = keys[start : start + MaxKeys]
        truncated = start + MaxKeys < len(keys)

        response: dict[str, Any] = {"KeyCount": len(page), "IsTruncated": truncated}
        if page:
            response["Contents"] = [
                {
                    "Key": key,
                    "Size": len(self.objects[(Bucket, key)][0]),
                    "LastModified": self.objects[(Bucket, key)][1],
                }
                for key in page
            ]
        if truncated:
            response["NextContinuationToken"] = str(start + MaxKeys)
        return response

    def keys(self, bucket: str = BUCKET) -> list[str]:
        return sorted(k for b, k in self.objects if b == bucket)


class FakeBlob:
    def __init__(self, client: "FakeGCSClient", bucket: str, name: str):
        self._client = client
        self._bucket = bucket
        self.name = name

    def upload_from_file(self, file_obj):
        self._client.objects[(self._bucket, self.name)] = (
            file_obj.read(),
            datetime.now(timezone.utc),
        )

    def download_as_bytes(self):
        try:
            return self._client.objects[(self._bucket, self.name)][0]
        except KeyError:
            raise NotFound(f"No such object: {self._bucket}/{self.name}") from None

    def delete(self):
        if self._client.objects.pop((self._bucket, self.name), None) is None:
            raise NotFound(f"No such object: {self._bucket}/{self.name}")


class FakeBucket:
    def __init__(self, client: "FakeGCSClient", name: str):
        self._client = client
        self.name = name

    def blob(self, name: str) -> FakeBlob:
        return FakeBlob(self._client, self.name, name)


class FakeGCSClient:
    """In-memory stand-in for ``google.cloud.storage.Client``."""

    def __init__(self):
        self.objects: dict[tuple[str, str], tuple[bytes, datetime]] = {}

    def bucket(self, name: str) -> FakeBucket:
        return FakeBucket(self, name)

    def list_blobs(
        self,
        bucket,
        prefix: Optional[str] = None,
        max_results: Optional[int] = None,
        delimiter: Optional[str] = None,
        page_size: Optional[int] = None,
    ):
        name = getattr(bucket, "name", bucket)
        prefix = prefix or ""
        keys = sorted(k for b, k in self.objects if b == name and k.startswith(prefix))
        if delimiter:
            keys = [k for k in keys if delimiter not in k[len(prefix):]]
        if max_results is not None:
            keys = keys[:max_results]
        return iter(
            SimpleNamespace(
                name=key,
                size=len(self.objects[(name, key)][0]),
                updated=self.objects[(name, key)][1],
            )
            for key in keys
        )

    def keys(self, bucket: str = BUCKET) -> list[str]:
        return sorted(k for b, k in self.objects if b == bucket)


@pytest.fixture(scope="session", autouse=True)
def quiet_logging() -> None:
    """Route storekit logs through the standard library at WARNING."""
    configure_logging(LoggingConfig(level="WARNING"))


@pytest.fixture(autouse=True)
def fresh_registry() -> Generator[None, None, None]:
    """Give every test its own global storage registry."""
    reset_storage_registry()
    yield
    reset_storage_registry()


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Directory for write_filter temp files."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def fake_gcs() -> FakeGCSClient:
    return FakeGCSClient()


@pytest.fixture(params=["s3", "gs"])
def object_store(request, fake_s3, fake_gcs, scratch_dir):
    """An S3 or GS store backed by an in-memory client, listing three keys per page."""
    client = fake_s3 if request.param == "s3" else fake_gcs
    store = init(
        request.param,
        {"bucket": BUCKET, "page_size": 3, "temp_dir": str(scratch_dir)},
        client=client,
    )
    return store
