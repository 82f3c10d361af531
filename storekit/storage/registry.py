"""
Store registry and factory for storekit.

Maps backend tags (and their aliases) to store classes and builds fully
configured stores from an options mapping.
"""

from typing import Any, Mapping, Optional, Union

from ..exceptions import StoreConfigurationError, UnsupportedStoreError
from ..observability import get_logger
from .backends.base import Store, StoreType
from .backends.object_store import ObjectStore
from .config import build_options

logger = get_logger(__name__)

StoreTag = Union[StoreType, int, str]


class StorageRegistry:
    """
    Registry of store classes keyed by backend tag.

    Examples:
        >>> registry = StorageRegistry()
        >>> store = registry.create_store("s3", {"bucket": "my-bucket"})
        >>>
        >>> # Accepts the enum, its value, its name or an alias
        >>> registry.resolve_store_type("gcs")
        <StoreType.GS: 3>
    """

    def __init__(self):
        """Initialize the registry with the built-in backends."""
        self._stores: dict[StoreType, type[Store]] = {}
        self._aliases: dict[str, StoreType] = {}

        self._register_builtin_stores()

    def _register_builtin_stores(self) -> None:
        """Register all built-in backends."""
        # Import backends locally so cloud SDK modules load only when used
        from .backends.gcs import GSStore
        from .backends.local import FilesystemStore
        from .backends.s3 import S3Store

        self._stores[StoreType.FILESYSTEM] = FilesystemStore
        self._stores[StoreType.S3] = S3Store
        self._stores[StoreType.GS] = GSStore

        self._aliases.update({
            "fs": StoreType.FILESYSTEM,
            "file": StoreType.FILESYSTEM,
            "local": StoreType.FILESYSTEM,
            "filesystem": StoreType.FILESYSTEM,
            "s3": StoreType.S3,
            "aws": StoreType.S3,
            "gs": StoreType.GS,
            "gcs": StoreType.GS,
            "google": StoreType.GS,
        })

    def register_store(
        self,
        store_type: StoreType,
        store_class: type[Store],
        aliases: Optional[list[str]] = None,
    ) -> None:
        """
        Register the class used for a backend tag.

        Args:
            store_type: Backend tag the class implements
            store_class: Store subclass
            aliases: Optional alias names for the tag

        Raises:
            ValueError: If the tag is UNSUPPORTED or the class is not a Store
        """
        if store_type == StoreType.UNSUPPORTED:
            raise ValueError("Cannot register a store for UNSUPPORTED")

        if not (isinstance(store_class, type) and issubclass(store_class, Store)):
            raise ValueError("store_class must inherit from Store")

        self._stores[StoreType(store_type)] = store_class

        for alias in aliases or []:
            self._aliases[alias.lower()] = StoreType(store_type)

    def resolve_store_type(self, store_type: StoreTag) -> StoreType:
        """
        Resolve a tag, its name or an alias to a registered StoreType.

        Raises:
            UnsupportedStoreError: If the tag matches no registered backend
        """
        resolved: Optional[StoreType] = None
        if isinstance(store_type, str):
            name = store_type.strip().lower()
            resolved = self._aliases.get(name)
            if resolved is None and name.upper() in StoreType.__members__:
                resolved = StoreType[name.upper()]
        else:
            try:
                resolved = StoreType(store_type)
            except ValueError:
                resolved = None

        if resolved is None or resolved not in self._stores:
            raise UnsupportedStoreError(store_type)
        return resolved

    def get_store_class(self, store_type: StoreTag) -> type[Store]:
        """Return the store class registered for a tag."""
        return self._stores[self.resolve_store_type(store_type)]

    def create_store(
        self,
        store_type: StoreTag,
        options: Optional[Mapping[str, Any]] = None,
        client: Any = None,
    ) -> Store:
        """
        Create a fully configured store.

        Args:
            store_type: Backend tag, its name or an alias
            options: Backend options; copied, never kept by reference
            client: Existing session handle for object-store backends;
                other backends reject one

        Returns:
            Configured store instance

        Raises:
            UnsupportedStoreError: If the tag matches no backend
            StoreConfigurationError: If the options are invalid, or a client is
                passed to a backend that has no session
        """
        resolved = self.resolve_store_type(store_type)
        store_class = self._stores[resolved]
        config = build_options(store_class.options_class, options, backend=resolved.name.lower())

        logger.debug("creating store", store_type=resolved.name, store_class=store_class.__name__)
        if issubclass(store_class, ObjectStore):
            return store_class(config, client=client)
        if client is not None:
            raise StoreConfigurationError(
                f"{resolved.name.lower()} backend takes no client",
                backend=resolved.name.lower(),
            )
        return store_class(config)

    def list_store_types(self) -> list[StoreType]:
        """List all registered backend tags."""
        return list(self._stores.keys())

    def list_aliases(self) -> dict[str, StoreType]:
        """List all registered aliases and their tags."""
        return dict(self._aliases)

    def __str__(self) -> str:
        """String representation of the registry."""
        return f"StorageRegistry({len(self._stores)} stores, {len(self._aliases)} aliases)"


# Global registry instance
_global_registry: Optional[StorageRegistry] = None


def get_storage_registry() -> StorageRegistry:
    """Get the global storage registry, creating it on first access."""
    global _global_registry

    if _global_registry is None:
        _global_registry = StorageRegistry()

    return _global_registry


def reset_storage_registry() -> None:
    """
    Reset the global storage registry.

    This is primarily for testing purposes to ensure test isolation.
    """
    global _global_registry
    _global_registry = None


def init(
    store_type: StoreTag,
    options: Optional[Mapping[str, Any]] = None,
    *,
    client: Any = None,
) -> Store:
    """
    Build a store for ``store_type`` configured with ``options``.

    Examples:
        >>> store = init(StoreType.FILESYSTEM)
        >>> store = init("s3", {"bucket": "my-bucket", "region": "us-east-1"})
    """
    return get_storage_registry().create_store(store_type, options, client=client)
