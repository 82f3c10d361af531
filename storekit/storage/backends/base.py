"""
Base store interface for storekit.

Defines the backend tag enumeration, the backend-agnostic object metadata
record and the abstract ``Store`` every backend implements, so calling code
written against one backend runs unchanged against another.
"""

import io
import os
import posixpath
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import IO, Any, BinaryIO, Callable, Optional, Union

from ..config import StoreOptions


ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

Data = Union[bytes, bytearray, memoryview, BinaryIO]
Processor = Callable[[IO[bytes]], Any]


class StoreType(IntEnum):
    """Backend tags, used as the factory dispatch key and selector result."""

    UNSUPPORTED = 0
    FILESYSTEM = 1
    S3 = 2
    GS = 3


@dataclass(frozen=True)
class ObjectDescriptor:
    """
    Metadata for a file or object, independent of the backend it came from.

    Attributes:
        name: Base name of the path or key
        size: Size in bytes, 0 if unknown
        mod_time: Last modification time, ZERO_TIME if unknown
        is_dir: True only for filesystem directories
        mode: Permission bits, 0 for object stores
        key: Full path or key the descriptor was produced for
    """

    name: str
    size: int = 0
    mod_time: datetime = ZERO_TIME
    is_dir: bool = False
    mode: int = 0
    key: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert descriptor to dictionary for display or serialization."""
        return {
            "name": self.name,
            "key": self.key,
            "size": self.size,
            "mod_time": self.mod_time.isoformat(),
            "is_dir": self.is_dir,
            "mode": oct(self.mode),
        }


def as_stream(data: Data) -> BinaryIO:
    """Return a readable binary stream for bytes-like or file-like data."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(data))
    return data


class Store(ABC):
    """
    Abstract base class for storekit backends.

    Key Operations:
    - create / read / update / delete: basic CRUD on a path or key
    - stat / read_dir: metadata as ObjectDescriptor values
    - mkdir / mkdir_all / remove / remove_all / read_file / write_file:
      the familiar os and shutil style helpers
    - write_filter: fill a temp file through a callback, then publish it

    Every operation is implemented by every backend. Operations a backend
    has no meaning for (directories on an object store) succeed as no-ops.
    Errors from the backend propagate unchanged; nothing here retries.
    """

    options_class: type[StoreOptions] = StoreOptions

    def __init__(self, config: Optional[StoreOptions] = None):
        """
        Initialize the store with validated options.

        Args:
            config: Typed backend options, defaults to the backend's defaults
        """
        self._config = config if config is not None else self.options_class()

    @property
    def config(self) -> StoreOptions:
        """Backend options, fixed for the lifetime of the store."""
        return self._config

    @property
    def client(self) -> Any:
        """Backend session handle, None for backends without one."""
        return None

    @property
    @abstractmethod
    def store_type(self) -> StoreType:
        """Return the backend tag."""

    # Basic CRUD operations

    @abstractmethod
    def create(self, path: str, data: Data) -> None:
        """
        Create ``path`` with the contents of ``data``.

        Args:
            path: File path or object key
            data: Bytes or a readable binary stream
        """

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Return the full contents of ``path``."""

    @abstractmethod
    def update(self, path: str, data: Data) -> None:
        """Replace the contents of ``path`` with ``data``."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a single file or object."""

    # os / shutil style operations

    @abstractmethod
    def stat(self, path: str) -> ObjectDescriptor:
        """
        Return metadata for ``path``.

        Raises:
            FileNotFoundError: If nothing exists at ``path``
        """

    @abstractmethod
    def mkdir(self, path: str, mode: int = 0o775) -> None:
        """Create a single directory level."""

    @abstractmethod
    def mkdir_all(self, path: str, mode: int = 0o775) -> None:
        """Create a directory and any missing parents."""

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove a single file or object."""

    @abstractmethod
    def remove_all(self, path: str) -> None:
        """Remove ``path`` and everything beneath it."""

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Return the full contents of ``path``."""

    @abstractmethod
    def write_file(self, path: str, data: bytes, mode: int = 0o664) -> None:
        """Write ``data`` to ``path``, replacing any existing content."""

    @abstractmethod
    def read_dir(self, path: str) -> list[ObjectDescriptor]:
        """List metadata for the immediate children of ``path``."""

    @abstractmethod
    def _publish(self, temp_path: str, final_path: str) -> None:
        """Move a finished temp file to its final location in this backend."""

    def write_filter(self, final_path: str, processor: Processor) -> None:
        """
        Build content through a file handle, then publish it to ``final_path``.

        ``processor`` receives a temp file opened for binary writing. Once it
        returns, the temp file is closed and published with the backend's
        publish step (rename for the filesystem, upload for object stores).
        The temp file is removed on every exit path, and ``final_path`` is
        not touched when ``processor`` raises.

        Args:
            final_path: Destination path or key
            processor: Callable that writes the content to the given file
        """
        tmp = tempfile.NamedTemporaryFile(
            mode="w+b",
            prefix=posixpath.basename(final_path.rstrip("/")) or "storekit",
            dir=self.config.temp_dir,
            delete=False,
        )
        try:
            try:
                processor(tmp)
            finally:
                tmp.close()
            self._publish(tmp.name, final_path)
        finally:
            if os.path.exists(tmp.name):
                os.remove(tmp.name)

    # Convenience queries

    def exists(self, path: str) -> bool:
        """Check whether anything exists at ``path``."""
        try:
            self.stat(path)
        except FileNotFoundError:
            return False
        return True

    def is_dir(self, path: str) -> bool:
        """Check whether ``path`` is a directory."""
        try:
            return self.stat(path).is_dir
        except FileNotFoundError:
            return False

    def is_file(self, path: str) -> bool:
        """Check whether ``path`` is a regular file or an object."""
        try:
            return not self.stat(path).is_dir
        except FileNotFoundError:
            return False

    def find_by_ext(self, path: str, ext: str) -> list[str]:
        """Return the names of the entries of ``path`` ending in ``ext``."""
        return [
            entry.name
            for entry in self.read_dir(path)
            if not entry.is_dir and entry.name.endswith(ext)
        ]

    def __str__(self) -> str:
        """String representation of the store."""
        return f"{self.__class__.__name__}({self.store_type.name})"

    def __repr__(self) -> str:
        """Detailed string representation."""
        return f"{self.__class__.__name__}(store_type={self.store_type.name}, config={self.config!r})"
