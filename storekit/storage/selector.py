"""
Backend selection for storekit.

Works out which backend a path or URI names and which options the process
environment implies. ``storage_type``, ``parse_location``, ``env_to_options``
and ``default_store_type`` are pure functions; only ``get_default_store`` and
``get_store`` read ``os.environ``, and only when no mapping is passed in.
"""

import os
from typing import Any, Mapping, NamedTuple, Optional
from urllib.parse import urlsplit

from ..exceptions import UnsupportedStoreError
from .backends.base import Store, StoreType
from .registry import init

SCHEMES = {
    "s3": StoreType.S3,
    "gs": StoreType.GS,
}

# Environment variable -> option name, per backend
S3_ENV_OPTIONS = {
    "AWS_BUCKET": "bucket",
    "AWS_DEFAULT_REGION": "region",
    "AWS_REGION": "region",
    "AWS_PROFILE": "profile",
    "AWS_ENDPOINT_URL": "endpoint_url",
}
S3_ENV_FLAGS = {
    "AWS_SDK_LOAD_CONFIG": "sdk_load_config",
    "AWS_SHARED_CONFIG_ENABLED": "shared_config_enabled",
}
GS_ENV_OPTIONS = {
    "GOOGLE_BUCKET": "bucket",
    "GOOGLE_PROJECT_ID": "project_id",
    "GOOGLE_JSON_CONFIG": "credentials_path",
}
GS_ENV_MARKERS = ("GOOGLE_BUCKET", "GOOGLE_PROJECT_ID")
TEMP_DIR_ENV = "STOREKIT_TEMP_DIR"


class Location(NamedTuple):
    """A path or URI split into backend, bucket and key."""

    store_type: StoreType
    bucket: Optional[str]
    key: str


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true")


def storage_type(path: str) -> StoreType:
    """
    Infer the backend a path or URI names.

    ``s3://bucket/key`` and ``gs://bucket/key`` select their object stores,
    any other ``scheme://`` is UNSUPPORTED and a string without a scheme is
    a local path.
    """
    if "://" in path:
        scheme = path.split("://", 1)[0].lower()
        return SCHEMES.get(scheme, StoreType.UNSUPPORTED)
    return StoreType.FILESYSTEM


def parse_location(path: str) -> Location:
    """Split a path or URI into its backend, bucket and key."""
    store_type = storage_type(path)
    if store_type in (StoreType.FILESYSTEM, StoreType.UNSUPPORTED):
        return Location(store_type, None, path)

    parts = urlsplit(path)
    return Location(store_type, parts.netloc or None, parts.path.lstrip("/"))


def env_to_options(
    environ: Optional[Mapping[str, str]] = None,
    store_type: Optional[StoreType] = None,
) -> dict[str, Any]:
    """
    Map recognized environment variables to store options.

    Args:
        environ: Environment mapping, defaults to ``os.environ``
        store_type: Backend to collect options for, defaults to the one
            ``default_store_type`` infers from ``environ``

    Returns:
        Options mapping suitable for ``init``
    """
    if environ is None:
        environ = os.environ
    if store_type is None:
        store_type = default_store_type(environ)

    opts: dict[str, Any] = {}
    if environ.get(TEMP_DIR_ENV):
        opts["temp_dir"] = environ[TEMP_DIR_ENV]

    if store_type == StoreType.S3:
        for env_var, option in S3_ENV_OPTIONS.items():
            if environ.get(env_var):
                opts[option] = environ[env_var]
        for env_var, option in S3_ENV_FLAGS.items():
            if env_var in environ:
                opts[option] = _truthy(environ[env_var])
        # Loading the SDK config means reading the shared config files
        if opts.get("sdk_load_config") and "shared_config_enabled" not in opts:
            opts["shared_config_enabled"] = True
    elif store_type == StoreType.GS:
        for env_var, option in GS_ENV_OPTIONS.items():
            if environ.get(env_var):
                opts[option] = environ[env_var]

    return opts


def default_store_type(environ: Optional[Mapping[str, str]] = None) -> StoreType:
    """
    Infer the default backend from the environment.

    Any ``AWS_`` variable selects S3, a Google bucket or project selects GS,
    and the local filesystem is the fallback.
    """
    if environ is None:
        environ = os.environ

    if any(name.startswith("AWS_") for name in environ):
        return StoreType.S3
    if any(environ.get(name) for name in GS_ENV_MARKERS):
        return StoreType.GS
    return StoreType.FILESYSTEM


def get_default_store(environ: Optional[Mapping[str, str]] = None, **kwargs: Any) -> Store:
    """Build the store the environment points at, or a filesystem store."""
    if environ is None:
        environ = os.environ

    store_type = default_store_type(environ)
    return init(store_type, env_to_options(environ, store_type), **kwargs)


def get_store(name: str, environ: Optional[Mapping[str, str]] = None, **kwargs: Any) -> Store:
    """
    Build the store for a path or URI.

    The bucket comes from the URI authority (``s3://bucket/...``) and takes
    precedence over any bucket set in the environment.

    Raises:
        UnsupportedStoreError: If the URI scheme is not recognized
    """
    location = parse_location(name)
    if location.store_type == StoreType.UNSUPPORTED:
        raise UnsupportedStoreError(name.split("://", 1)[0])

    opts = env_to_options(environ, location.store_type)
    if location.bucket:
        opts["bucket"] = location.bucket
    return init(location.store_type, opts, **kwargs)
