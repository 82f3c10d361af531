"""storekit exception hierarchy.

Errors raised by this package carry a human-readable message, a
machine-readable error code and a context dictionary. Errors coming from
the underlying backends (``OSError``, ``botocore`` client errors, Google API
errors) are never wrapped or swallowed; they reach the caller unchanged.
"""

from typing import Any, Dict, Optional


class StoreError(Exception):
    """Base exception for all storekit errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional error context (path, bucket, backend, ...)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._default_error_code()
        self.context = context or {}

    def _default_error_code(self) -> str:
        """Generate default error code based on exception class name."""
        return self.__class__.__name__.upper().replace("ERROR", "_ERROR")

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context to the error."""
        self.context[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }

    def __str__(self) -> str:
        return self.message


class StoreConfigurationError(StoreError):
    """Raised when a store cannot be constructed or is missing configuration."""

    def __init__(self, message: str, backend: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        if backend:
            self.add_context("backend", backend)


class UnsupportedStoreError(StoreConfigurationError):
    """Raised when a backend tag or URI scheme matches no known backend."""

    def __init__(self, store_type: Any = None, **kwargs):
        message = "backend not supported"
        if store_type is not None:
            message = f"backend not supported: {store_type!r}"
        super().__init__(message, **kwargs)
        self.add_context("store_type", str(store_type))


class BucketNotDefinedError(StoreConfigurationError):
    """Raised by object-store operations when no bucket was configured."""

    def __init__(self, key: str, backend: Optional[str] = None, **kwargs):
        super().__init__(f"bucket not defined for {key}", backend=backend, **kwargs)
        self.add_context("key", key)


class ClientNotConfiguredError(StoreConfigurationError):
    """Raised when an object-store operation runs without a session handle."""

    def __init__(self, backend: str, **kwargs):
        super().__init__(f"{backend} client not configured", backend=backend, **kwargs)


class ObjectNotFoundError(StoreError, FileNotFoundError):
    """Raised when a listing-based lookup finds no object with the exact key.

    Also a ``FileNotFoundError`` so callers can handle a missing path the
    same way for every backend.
    """

    def __init__(self, key: str, bucket: Optional[str] = None, **kwargs):
        super().__init__(f"{key} not found", **kwargs)
        self.key = key
        self.add_context("key", key)
        if bucket:
            self.add_context("bucket", bucket)


class StoreWriteError(StoreError):
    """Raised when copying content into a created or updated file fails.

    The file may hold a partial write; it is not rolled back.
    """

    def __init__(self, path: str, cause: BaseException, **kwargs):
        super().__init__(f"{path}, {cause}", **kwargs)
        self.path = path
        self.add_context("path", path)
