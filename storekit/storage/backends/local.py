"""
Local filesystem backend for storekit.

Operations map directly onto ``os``, ``shutil`` and ``open``, keeping the
native filesystem semantics and errors.
"""

import os
import shutil
import stat as stat_module
from datetime import datetime, timezone
from typing import Optional

from ...exceptions import StoreWriteError
from ...observability import get_logger
from ..config import FilesystemOptions
from .base import Data, ObjectDescriptor, Store, StoreType, as_stream

logger = get_logger(__name__)


def descriptor_from_stat(path: str, st: os.stat_result, name: Optional[str] = None) -> ObjectDescriptor:
    """Translate an ``os.stat_result`` into an ObjectDescriptor."""
    return ObjectDescriptor(
        name=name if name is not None else os.path.basename(os.path.normpath(path)),
        size=st.st_size,
        mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        is_dir=stat_module.S_ISDIR(st.st_mode),
        mode=stat_module.S_IMODE(st.st_mode),
        key=path,
    )


class FilesystemStore(Store):
    """
    Local filesystem store.

    Paths are used as given, relative paths resolve against the current
    working directory.

    Examples:
        >>> store = FilesystemStore()
        >>> store.create("testdata/hello.txt", b"Hello World!!!!")
        >>> store.read("testdata/hello.txt")
        b'Hello World!!!!'
    """

    options_class = FilesystemOptions

    @property
    def store_type(self) -> StoreType:
        """Return the backend tag."""
        return StoreType.FILESYSTEM

    def _copy_into(self, path: str, fp, data: Data) -> None:
        try:
            shutil.copyfileobj(as_stream(data), fp)
        except OSError as e:
            raise StoreWriteError(path, e) from e

    def create(self, path: str, data: Data) -> None:
        """
        Create ``path``, making any missing parent directories first.

        A write that fails part way leaves the partial file in place.
        """
        dirname = os.path.dirname(path)
        if dirname:
            os.makedirs(dirname, 0o775, exist_ok=True)
        with open(path, "wb") as fp:
            self._copy_into(path, fp, data)
        logger.debug("file created", path=path)

    def read(self, path: str) -> bytes:
        """Return the contents of ``path``."""
        with open(path, "rb") as fp:
            return fp.read()

    def update(self, path: str, data: Data) -> None:
        """
        Truncate and rewrite an existing file.

        Raises:
            FileNotFoundError: If ``path`` does not exist
        """
        with open(path, "r+b") as fp:
            fp.truncate(0)
            self._copy_into(path, fp, data)
        logger.debug("file updated", path=path)

    def delete(self, path: str) -> None:
        """Delete a file or an empty directory."""
        self.remove(path)

    def stat(self, path: str) -> ObjectDescriptor:
        """Return native metadata for ``path``."""
        return descriptor_from_stat(path, os.stat(path))

    def mkdir(self, path: str, mode: int = 0o775) -> None:
        """Create a single directory."""
        os.mkdir(path, mode)

    def mkdir_all(self, path: str, mode: int = 0o775) -> None:
        """Create a directory and all missing parents."""
        os.makedirs(path, mode, exist_ok=True)

    def remove(self, path: str) -> None:
        """Remove a file or an empty directory."""
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.remove(path)
        logger.debug("path removed", path=path)

    def remove_all(self, path: str) -> None:
        """Remove ``path`` and its children; a missing path is not an error."""
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.remove(path)
        logger.debug("tree removed", path=path)

    def read_file(self, path: str) -> bytes:
        """Return the contents of ``path``."""
        return self.read(path)

    def write_file(self, path: str, data: bytes, mode: int = 0o664) -> None:
        """Write ``data`` to ``path`` and apply ``mode``."""
        with open(path, "wb") as fp:
            fp.write(data)
        os.chmod(path, mode)

    def read_dir(self, path: str) -> list[ObjectDescriptor]:
        """List the immediate children of ``path`` in platform order.

        Entries are lstat-ed, so a symlink describes the link itself.
        """
        with os.scandir(path) as entries:
            return [
                descriptor_from_stat(entry.path, entry.stat(follow_symlinks=False), name=entry.name)
                for entry in entries
            ]

    def _publish(self, temp_path: str, final_path: str) -> None:
        """Rename the temp file into place, copying across devices if needed."""
        try:
            os.replace(temp_path, final_path)
        except OSError:
            logger.debug("rename failed, copying instead", src=temp_path, dest=final_path)
            shutil.copyfile(temp_path, final_path)
            os.remove(temp_path)
