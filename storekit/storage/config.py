"""
Storage configuration for storekit.

Each backend takes a typed, immutable options model. Options arrive as a
plain mapping (from code, a YAML file or the environment) and are validated
once, when the store is built, so a misspelled option or a value of the
wrong type fails at construction instead of at first use.
"""

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import StoreConfigurationError


DEFAULT_PAGE_SIZE = 1000


class StoreOptions(BaseModel):
    """Options shared by every backend."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    temp_dir: Optional[str] = Field(
        default=None, description="Scratch directory for write_filter temp files"
    )


class FilesystemOptions(StoreOptions):
    """Options for the local filesystem backend."""


class ObjectStoreOptions(StoreOptions):
    """Options shared by the object-store backends."""

    bucket: Optional[str] = Field(default=None, description="Bucket name")
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        gt=0,
        le=DEFAULT_PAGE_SIZE,
        description="Maximum keys requested per listing call",
    )


class S3Options(ObjectStoreOptions):
    """Options for the S3 backend.

    ``profile`` is only honored when ``sdk_load_config`` and
    ``shared_config_enabled`` are both set, since named profiles live in the
    shared AWS config files.
    """

    region: Optional[str] = Field(default=None, description="AWS region")
    profile: Optional[str] = Field(default=None, description="AWS profile name")
    sdk_load_config: bool = Field(
        default=False, description="Use the ambient AWS SDK configuration"
    )
    shared_config_enabled: bool = Field(
        default=False, description="Read the shared ~/.aws config files"
    )
    endpoint_url: Optional[str] = Field(
        default=None, description="Endpoint of an S3 compatible service"
    )
    connect_timeout: Optional[float] = Field(default=None, gt=0)
    read_timeout: Optional[float] = Field(default=None, gt=0)


class GSOptions(ObjectStoreOptions):
    """Options for the Google Cloud Storage backend."""

    project_id: Optional[str] = Field(default=None, description="Google Cloud project")
    credentials_path: Optional[str] = Field(
        default=None, description="Path to a service account JSON file"
    )


def build_options(
    options_class: type[StoreOptions],
    options: Optional[Mapping[str, Any]] = None,
    backend: Optional[str] = None,
) -> StoreOptions:
    """Validate a caller's options mapping into a typed options model.

    The mapping is deep-copied first; the returned model shares nothing with
    the caller's objects.

    Raises:
        StoreConfigurationError: If an option is unknown or has a bad value
    """
    data = copy.deepcopy(dict(options or {}))
    try:
        return options_class.model_validate(data)
    except ValidationError as e:
        raise StoreConfigurationError(
            f"Invalid options for {backend or options_class.__name__}: {e}",
            backend=backend,
        ) from e


@dataclass
class StorageConfig:
    """
    Declarative description of a store: a backend tag plus its options.

    Examples:
        >>> config = StorageConfig(store_type="s3", options={"bucket": "my-bucket"})
        >>> store = config.create_store()
        >>>
        >>> config = StorageConfig.from_yaml_file("storage.yaml")
    """

    store_type: str = "fs"
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StorageConfig":
        """Create StorageConfig from dictionary."""
        return cls(
            store_type=str(data.get("store_type", "fs")),
            options=dict(data.get("options") or {}),
        )

    @classmethod
    def from_yaml_file(cls, file_path: Union[str, Path]) -> "StorageConfig":
        """Load StorageConfig from YAML file."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Storage config file not found: {file_path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        # Handle nested storage config
        if "storage" in data:
            data = data["storage"]

        if not isinstance(data, dict):
            raise StoreConfigurationError(f"Invalid storage config in {file_path}")

        return cls.from_dict(data)

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "StorageConfig":
        """Describe the default store implied by environment variables."""
        from .selector import default_store_type, env_to_options

        store_type = default_store_type(environ)
        return cls(
            store_type=store_type.name.lower(),
            options=env_to_options(environ, store_type),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert StorageConfig to dictionary."""
        return {
            "store_type": self.store_type,
            "options": dict(self.options),
        }

    def to_yaml(self) -> str:
        """Convert StorageConfig to YAML string."""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False)

    def save_to_file(self, file_path: Union[str, Path]) -> None:
        """Save StorageConfig to YAML file."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_yaml())

    def create_store(self, **kwargs: Any):
        """Create a store instance from this configuration."""
        from .registry import init

        return init(self.store_type, self.options, **kwargs)
