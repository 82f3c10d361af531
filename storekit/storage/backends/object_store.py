"""
Shared behavior for flat, key-addressed object stores.

Object stores have no directories: a path is just part of the key. This
module turns the few primitives each backend provides (upload, download,
delete one key, list one page by prefix, list one pseudo-directory) into the
full ``Store`` contract.
"""

import posixpath
from abc import abstractmethod
from typing import Any, BinaryIO, Optional

from ...exceptions import BucketNotDefinedError, ClientNotConfiguredError, ObjectNotFoundError
from ...observability import get_logger
from ..config import ObjectStoreOptions
from .base import Data, ObjectDescriptor, Store, as_stream

logger = get_logger(__name__)


def key_name(key: str) -> str:
    """Base name of a key, matching what ``os.path.basename`` gives for files."""
    return posixpath.basename(key.rstrip("/"))


def children_prefix(path: str) -> str:
    """Prefix that selects only the keys beneath ``path``."""
    if path in ("", ".", "/"):
        return ""
    return path if path.endswith("/") else path + "/"


class ObjectStore(Store):
    """
    Base class for object-store backends.

    Subclasses provide the session handle and the backend primitives;
    everything else is shared:

    - ``create``, ``update`` and ``write_file`` are one upload. Uploading to
      an existing key replaces it, so ``update`` also creates missing keys.
    - ``mkdir`` and ``mkdir_all`` succeed without creating anything.
    - ``stat`` lists by prefix and only accepts the exact key.
    - ``remove_all`` lists and deletes page by page until nothing is left.
    """

    options_class = ObjectStoreOptions
    backend_name = "object store"

    def __init__(self, config: Optional[ObjectStoreOptions] = None, client: Any = None):
        """
        Initialize the store and its session.

        Args:
            config: Typed backend options
            client: Existing session handle; created from ``config`` when omitted
        """
        super().__init__(config)
        self._client = client if client is not None else self._create_client()
        logger.debug(
            "object store configured",
            backend=self.backend_name,
            bucket=self.config.bucket,
        )

    @property
    def client(self) -> Any:
        """Session handle reused for every call on this store."""
        return self._client

    @property
    def bucket_name(self) -> Optional[str]:
        """Configured bucket name."""
        return self.config.bucket

    def _require(self, key: str) -> str:
        """Check the store can talk to its bucket and return the bucket name."""
        if self._client is None:
            raise ClientNotConfiguredError(self.backend_name)
        if not self.config.bucket:
            raise BucketNotDefinedError(key, backend=self.backend_name)
        return self.config.bucket

    # Backend primitives

    @abstractmethod
    def _create_client(self) -> Any:
        """Create the backend session handle from ``self.config``."""

    @abstractmethod
    def _upload(self, bucket: str, key: str, stream: BinaryIO) -> None:
        """Upload ``stream`` under ``key``."""

    @abstractmethod
    def _download(self, bucket: str, key: str) -> bytes:
        """Download the whole body of ``key``."""

    @abstractmethod
    def _delete_key(self, bucket: str, key: str) -> None:
        """Delete a single key."""

    @abstractmethod
    def _list_page(self, bucket: str, prefix: str, limit: int) -> list[ObjectDescriptor]:
        """List at most ``limit`` objects whose keys start with ``prefix``."""

    @abstractmethod
    def _list_dir(self, bucket: str, prefix: str) -> list[ObjectDescriptor]:
        """List every object directly under ``prefix`` (``/`` delimited)."""

    # Store contract

    def create(self, path: str, data: Data) -> None:
        """Upload ``data`` under the key ``path``."""
        bucket = self._require(path)
        self._upload(bucket, path, as_stream(data))
        logger.debug("object uploaded", backend=self.backend_name, bucket=bucket, key=path)

    def read(self, path: str) -> bytes:
        """Download the object stored under ``path``."""
        bucket = self._require(path)
        return self._download(bucket, path)

    def update(self, path: str, data: Data) -> None:
        """Same as ``create``: uploading replaces any existing object."""
        self.create(path, data)

    def delete(self, path: str) -> None:
        """Delete the object stored under ``path``."""
        bucket = self._require(path)
        self._delete_key(bucket, path)
        logger.debug("object deleted", backend=self.backend_name, bucket=bucket, key=path)

    def _find(self, bucket: str, key: str) -> Optional[ObjectDescriptor]:
        # Keys come back in lexicographic order, so an exact match sorts
        # ahead of every other key sharing its prefix.
        for entry in self._list_page(bucket, key, self.config.page_size):
            if entry.key == key:
                return entry
        return None

    def stat(self, path: str) -> ObjectDescriptor:
        """
        Return metadata for the object whose key is exactly ``path``.

        Raises:
            ObjectNotFoundError: If no object has that exact key
        """
        bucket = self._require(path)
        found = self._find(bucket, path)
        if found is None:
            raise ObjectNotFoundError(path, bucket=bucket)
        return found

    def mkdir(self, path: str, mode: int = 0o775) -> None:
        """No-op: object stores have no directories."""

    def mkdir_all(self, path: str, mode: int = 0o775) -> None:
        """No-op: object stores have no directories."""

    def remove(self, path: str) -> None:
        """Delete the object stored under ``path``."""
        self.delete(path)

    def _delete_pages(self, bucket: str, prefix: str) -> int:
        deleted = 0
        while True:
            page = self._list_page(bucket, prefix, self.config.page_size)
            if not page:
                return deleted
            for entry in page:
                self._delete_key(bucket, entry.key)
            deleted += len(page)

    def remove_all(self, path: str) -> None:
        """
        Delete the key ``path`` and every key beneath ``path/``.

        Keys that merely share the prefix (``a/bc`` for ``a/b``) are kept.
        Listing and deleting proceed one page at a time; the first failed
        delete stops the run and keys already deleted stay deleted.
        """
        bucket = self._require(path)
        prefix = children_prefix(path)
        deleted = self._delete_pages(bucket, prefix)
        if prefix != path and self._find(bucket, path) is not None:
            self._delete_key(bucket, path)
            deleted += 1
        logger.info(
            "objects removed",
            backend=self.backend_name,
            bucket=bucket,
            prefix=path,
            count=deleted,
        )

    def read_file(self, path: str) -> bytes:
        """Download the object stored under ``path``."""
        return self.read(path)

    def write_file(self, path: str, data: bytes, mode: int = 0o664) -> None:
        """Upload ``data`` under ``path``; ``mode`` has no meaning here."""
        self.create(path, data)

    def read_dir(self, path: str) -> list[ObjectDescriptor]:
        """List the objects directly under ``path``, treating ``/`` as a separator."""
        bucket = self._require(path)
        return self._list_dir(bucket, children_prefix(path))

    def is_dir(self, path: str) -> bool:
        """Always False: object stores have no directories."""
        return False

    def _publish(self, temp_path: str, final_path: str) -> None:
        """Upload the finished temp file under ``final_path``."""
        with open(temp_path, "rb") as fp:
            self.create(final_path, fp)
