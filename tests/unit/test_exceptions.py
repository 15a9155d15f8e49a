"""Tests for exception classes."""

import pytest

from oss_testing.exceptions import (
    BucketOperationError,
    ConfigurationError,
    FixtureError,
    FixtureNotStartedError,
    OSSTestingError,
    ShutdownError,
    StartupError,
    UnknownFixtureError,
)


class TestExceptionHierarchy:
    """Test that exceptions fall into the right categories."""

    @pytest.mark.parametrize(
        "exc_class",
        [ConfigurationError, FixtureError, UnknownFixtureError, StartupError, ShutdownError],
    )
    def test_all_inherit_from_base(self, exc_class) -> None:
        assert issubclass(exc_class, OSSTestingError)

    def test_unknown_fixture_is_configuration_error(self) -> None:
        assert issubclass(UnknownFixtureError, ConfigurationError)

    @pytest.mark.parametrize(
        "exc_class",
        [StartupError, ShutdownError, FixtureNotStartedError, BucketOperationError],
    )
    def test_lifecycle_errors_are_fixture_errors(self, exc_class) -> None:
        assert issubclass(exc_class, FixtureError)
        assert not issubclass(exc_class, ConfigurationError)


class TestConfigurationError:
    """Tests for ConfigurationError and UnknownFixtureError."""

    def test_name_attribute(self) -> None:
        exc = ConfigurationError("bad class", name="pkg.Bad")
        assert exc.name == "pkg.Bad"
        assert str(exc) == "bad class"

    def test_unknown_fixture_lists_available_sorted(self) -> None:
        exc = UnknownFixtureError("minio", ["mock", "integration"])
        assert exc.name == "minio"
        assert exc.available == ["integration", "mock"]
        assert "Unknown fixture: minio" in str(exc)
        assert "Available: integration, mock" in str(exc)

    def test_unknown_fixture_with_empty_registry(self) -> None:
        exc = UnknownFixtureError("minio")
        assert "Available: none" in str(exc)


class TestLifecycleErrors:
    """Tests for StartupError, ShutdownError and friends."""

    def test_startup_error_message(self) -> None:
        cause = OSError("address in use")
        exc = StartupError("MockFixture", "cannot bind 127.0.0.1:9000", cause)
        assert exc.fixture == "MockFixture"
        assert exc.reason == "cannot bind 127.0.0.1:9000"
        assert exc.cause is cause
        assert str(exc) == "Failed to start MockFixture: cannot bind 127.0.0.1:9000"

    def test_shutdown_error_message(self) -> None:
        exc = ShutdownError("MockFixture", "thread hung")
        assert exc.reason == "thread hung"
        assert exc.cause is None
        assert str(exc) == "Failed to stop MockFixture: thread hung"

    def test_not_started_message(self) -> None:
        exc = FixtureNotStartedError("IntegrationFixture")
        assert "IntegrationFixture is not started" in str(exc)

    def test_bucket_operation_error_with_cause(self) -> None:
        cause = RuntimeError("AccessDenied")
        exc = BucketOperationError("my-bucket", "tear_down", cause)
        assert exc.bucket == "my-bucket"
        assert exc.operation == "tear_down"
        assert str(exc) == "Bucket tear_down failed for 'my-bucket': AccessDenied"

    def test_bucket_operation_error_without_cause(self) -> None:
        exc = BucketOperationError("my-bucket", "set_up")
        assert str(exc) == "Bucket set_up failed for 'my-bucket'"
