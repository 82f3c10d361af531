"""Store backend implementations."""

from .base import ZERO_TIME, ObjectDescriptor, Store, StoreType
from .gcs import GSStore
from .local import FilesystemStore
from .object_store import ObjectStore
from .s3 import S3Store

__all__ = [
    "ZERO_TIME",
    "ObjectDescriptor",
    "Store",
    "StoreType",
    "FilesystemStore",
    "ObjectStore",
    "S3Store",
    "GSStore",
]
