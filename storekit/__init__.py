"""storekit: one CRUD interface over local disk, S3 and Google Cloud Storage.

Calling code works against ``Store`` and picks the backend by tag, by
path/URI scheme or from the environment.
"""

__version__ = "0.1.0"

from .exceptions import (
    BucketNotDefinedError,
    ClientNotConfiguredError,
    ObjectNotFoundError,
    StoreConfigurationError,
    StoreError,
    StoreWriteError,
    UnsupportedStoreError,
)
from .storage import (
    FilesystemStore,
    GSStore,
    ObjectDescriptor,
    S3Store,
    StorageConfig,
    Store,
    StoreType,
    get_default_store,
    get_store,
    init,
    parse_location,
    storage_type,
)

__all__ = [
    "__version__",
    "StoreError",
    "StoreConfigurationError",
    "UnsupportedStoreError",
    "BucketNotDefinedError",
    "ClientNotConfiguredError",
    "ObjectNotFoundError",
    "StoreWriteError",
    "Store",
    "StoreType",
    "ObjectDescriptor",
    "FilesystemStore",
    "S3Store",
    "GSStore",
    "StorageConfig",
    "init",
    "storage_type",
    "parse_location",
    "get_store",
    "get_default_store",
]
