"""Tests for backend selection from paths, URIs and the environment."""

from unittest.mock import patch

import pytest

from storekit.exceptions import UnsupportedStoreError
from storekit.storage import (
    FilesystemStore,
    GSStore,
    S3Store,
    StoreType,
    default_store_type,
    env_to_options,
    get_default_store,
    get_store,
    parse_location,
    storage_type,
)


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/my/stuff", StoreType.FILESYSTEM),
        ("stuff", StoreType.FILESYSTEM),
        ("foo.txt", StoreType.FILESYSTEM),
        ("", StoreType.FILESYSTEM),
        ("s3://my/stuff", StoreType.S3),
        ("S3://my/stuff", StoreType.S3),
        ("gs://my/stuff", StoreType.GS),
        ("eworiwer://my/stuff", StoreType.UNSUPPORTED),
        ("https://my/stuff", StoreType.UNSUPPORTED),
        ("http://my/stuff", StoreType.UNSUPPORTED),
        ("gopher://my/stuff", StoreType.UNSUPPORTED),
    ],
)
def test_storage_type(path, expected):
    assert storage_type(path) == expected


class TestParseLocation:
    """Test splitting paths and URIs."""

    def test_local_path(self):
        location = parse_location("/var/data/file.txt")

        assert location.store_type == StoreType.FILESYSTEM
        assert location.bucket is None
        assert location.key == "/var/data/file.txt"

    def test_s3_uri(self):
        location = parse_location("s3://my-bucket/reports/2024.csv")

        assert location == (StoreType.S3, "my-bucket", "reports/2024.csv")

    def test_gs_uri_without_key(self):
        location = parse_location("gs://my-bucket")

        assert location.store_type == StoreType.GS
        assert location.bucket == "my-bucket"
        assert location.key == ""

    def test_unsupported_uri(self):
        location = parse_location("ftp://host/file")

        assert location.store_type == StoreType.UNSUPPORTED
        assert location.key == "ftp://host/file"


class TestEnvToOptions:
    """Test mapping environment variables to store options."""

    def test_s3_options(self):
        environ = {
            "AWS_BUCKET": "env-bucket",
            "AWS_REGION": "eu-west-1",
            "AWS_ENDPOINT_URL": "http://localhost:9000",
        }
        opts = env_to_options(environ, StoreType.S3)

        assert opts == {
            "bucket": "env-bucket",
            "region": "eu-west-1",
            "endpoint_url": "http://localhost:9000",
        }

    def test_region_variables(self):
        environ = {"AWS_DEFAULT_REGION": "us-east-1", "AWS_REGION": "ap-south-1"}

        assert env_to_options(environ, StoreType.S3) == {"region": "ap-south-1"}
        assert env_to_options({"AWS_DEFAULT_REGION": "us-east-1"}, StoreType.S3) == {
            "region": "us-east-1"
        }

    def test_sdk_load_config_enables_shared_config(self):
        environ = {"AWS_SDK_LOAD_CONFIG": "1", "AWS_PROFILE": "dev"}
        opts = env_to_options(environ, StoreType.S3)

        assert opts == {
            "profile": "dev",
            "sdk_load_config": True,
            "shared_config_enabled": True,
        }

    def test_shared_config_explicitly_disabled(self):
        environ = {"AWS_SDK_LOAD_CONFIG": "true", "AWS_SHARED_CONFIG_ENABLED": "false"}
        opts = env_to_options(environ, StoreType.S3)

        assert opts["sdk_load_config"] is True
        assert opts["shared_config_enabled"] is False

    def test_gs_options(self):
        environ = {
            "GOOGLE_BUCKET": "gcs-bucket",
            "GOOGLE_PROJECT_ID": "my-project",
            "GOOGLE_JSON_CONFIG": "/secrets/sa.json",
            "AWS_BUCKET": "ignored",
        }
        opts = env_to_options(environ, StoreType.GS)

        assert opts == {
            "bucket": "gcs-bucket",
            "project_id": "my-project",
            "credentials_path": "/secrets/sa.json",
        }

    def test_temp_dir_for_every_backend(self):
        environ = {"STOREKIT_TEMP_DIR": "/scratch"}

        assert env_to_options(environ, StoreType.FILESYSTEM) == {"temp_dir": "/scratch"}
        assert env_to_options(environ, StoreType.GS) == {"temp_dir": "/scratch"}

    def test_infers_backend(self):
        assert env_to_options({"GOOGLE_BUCKET": "b"}) == {"bucket": "b"}

    def test_empty_values_ignored(self):
        assert env_to_options({"AWS_BUCKET": "", "AWS_REGION": "us-east-1"}, StoreType.S3) == {
            "region": "us-east-1"
        }


class TestDefaultStoreType:
    """Test environment-driven backend choice."""

    def test_empty_environment(self):
        assert default_store_type({}) == StoreType.FILESYSTEM

    def test_any_aws_variable(self):
        assert default_store_type({"AWS_PROFILE": "dev"}) == StoreType.S3
        assert default_store_type({"AWS_SDK_LOAD_CONFIG": "0"}) == StoreType.S3

    def test_google_variables(self):
        assert default_store_type({"GOOGLE_BUCKET": "b"}) == StoreType.GS
        assert default_store_type({"GOOGLE_PROJECT_ID": "p"}) == StoreType.GS

    def test_credentials_alone_do_not_select_gs(self):
        assert default_store_type({"GOOGLE_JSON_CONFIG": "/sa.json"}) == StoreType.FILESYSTEM

    def test_s3_wins_over_gs(self):
        environ = {"AWS_BUCKET": "a", "GOOGLE_BUCKET": "g"}
        assert default_store_type(environ) == StoreType.S3

    def test_reads_process_environment(self):
        with patch.dict("os.environ", {"GOOGLE_BUCKET": "from-env"}, clear=True):
            assert default_store_type() == StoreType.GS


class TestGetDefaultStore:
    """Test building the environment's default store."""

    def test_filesystem_fallback(self):
        store = get_default_store({})
        assert isinstance(store, FilesystemStore)

    def test_s3_from_environment(self, fake_s3):
        store = get_default_store({"AWS_BUCKET": "env-bucket"}, client=fake_s3)

        assert isinstance(store, S3Store)
        assert store.bucket_name == "env-bucket"

    def test_gs_from_environment(self, fake_gcs):
        store = get_default_store(
            {"GOOGLE_BUCKET": "gcs-bucket", "GOOGLE_PROJECT_ID": "p"}, client=fake_gcs
        )

        assert isinstance(store, GSStore)
        assert store.bucket_name == "gcs-bucket"
        assert store.config.project_id == "p"


class TestGetStore:
    """Test building a store for a path or URI."""

    def test_local_path(self):
        store = get_store("/tmp/whatever.txt", environ={})
        assert isinstance(store, FilesystemStore)

    def test_bucket_from_uri(self, fake_s3):
        store = get_store("s3://uri-bucket/key.txt", environ={}, client=fake_s3)

        assert isinstance(store, S3Store)
        assert store.bucket_name == "uri-bucket"

    def test_uri_bucket_overrides_environment(self, fake_s3):
        store = get_store(
            "s3://uri-bucket/key.txt",
            environ={"AWS_BUCKET": "env-bucket", "AWS_REGION": "us-east-2"},
            client=fake_s3,
        )

        assert store.bucket_name == "uri-bucket"
        assert store.config.region == "us-east-2"

    def test_gs_uri(self, fake_gcs):
        store = get_store("gs://gcs-bucket/a/b", environ={}, client=fake_gcs)

        assert isinstance(store, GSStore)
        assert store.bucket_name == "gcs-bucket"

    def test_unsupported_scheme(self):
        with pytest.raises(UnsupportedStoreError, match="gopher"):
            get_store("gopher://host/file", environ={})
