"""Tests for the storekit exception hierarchy."""

from storekit.exceptions import (
    BucketNotDefinedError,
    ClientNotConfiguredError,
    ObjectNotFoundError,
    StoreConfigurationError,
    StoreError,
    StoreWriteError,
    UnsupportedStoreError,
)


def test_store_error_to_dict():
    error = StoreError("something broke", context={"path": "/tmp/x"})

    assert error.to_dict() == {
        "error_type": "StoreError",
        "message": "something broke",
        "error_code": "STORE_ERROR",
        "context": {"path": "/tmp/x"},
    }


def test_configuration_errors():
    assert issubclass(UnsupportedStoreError, StoreConfigurationError)
    assert issubclass(BucketNotDefinedError, StoreConfigurationError)
    assert issubclass(ClientNotConfiguredError, StoreConfigurationError)

    error = BucketNotDefinedError("reports/a.csv", backend="s3")
    assert str(error) == "bucket not defined for reports/a.csv"
    assert error.context == {"backend": "s3", "key": "reports/a.csv"}

    assert str(ClientNotConfiguredError("gs")) == "gs client not configured"
    assert str(UnsupportedStoreError("ftp")) == "backend not supported: 'ftp'"
    assert str(UnsupportedStoreError()) == "backend not supported"


def test_object_not_found():
    error = ObjectNotFoundError("a/b.txt", bucket="my-bucket")

    assert isinstance(error, FileNotFoundError)
    assert isinstance(error, StoreError)
    assert str(error) == "a/b.txt not found"
    assert error.key == "a/b.txt"
    assert error.context == {"key": "a/b.txt", "bucket": "my-bucket"}
    assert error.error_code == "OBJECTNOTFOUND_ERROR"


def test_write_error():
    cause = OSError("no space left on device")
    error = StoreWriteError("/data/out.bin", cause)

    assert str(error) == "/data/out.bin, no space left on device"
    assert error.path == "/data/out.bin"
