"""
Storage backends for storekit.

One ``Store`` interface over the local filesystem, Amazon S3 and Google
Cloud Storage. Pick a backend explicitly with ``init`` or let
``get_store`` infer it from a path or URI.

Key Components:
- Store: Abstract base class every backend implements
- ObjectDescriptor: Backend-agnostic file/object metadata
- StorageRegistry / init: Backend lookup and store factory
- storage_type / get_store / get_default_store: Backend selection
- Built-in backends: FilesystemStore, S3Store, GSStore

Example:
    >>> from storekit.storage import StoreType, init
    >>>
    >>> store = init(StoreType.FILESYSTEM)
    >>> store.create("testdata/hello.txt", b"Hello World!!!!")
    >>> store.read("testdata/hello.txt")
    b'Hello World!!!!'
    >>>
    >>> remote = get_store("s3://my-bucket/reports")
"""

from .backends import (
    ZERO_TIME,
    FilesystemStore,
    GSStore,
    ObjectDescriptor,
    ObjectStore,
    S3Store,
    Store,
    StoreType,
)
from .config import FilesystemOptions, GSOptions, S3Options, StorageConfig, StoreOptions
from .registry import StorageRegistry, get_storage_registry, init
from .selector import (
    Location,
    default_store_type,
    env_to_options,
    get_default_store,
    get_store,
    parse_location,
    storage_type,
)

__all__ = [
    "ZERO_TIME",
    "ObjectDescriptor",
    "Store",
    "StoreType",
    "FilesystemStore",
    "ObjectStore",
    "S3Store",
    "GSStore",
    "StoreOptions",
    "FilesystemOptions",
    "S3Options",
    "GSOptions",
    "StorageConfig",
    "StorageRegistry",
    "get_storage_registry",
    "init",
    "Location",
    "storage_type",
    "parse_location",
    "env_to_options",
    "default_store_type",
    "get_default_store",
    "get_store",
]
