"""Exceptions for oss-testing."""

from collections.abc import Iterable

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class OSSTestingError(Exception):
    """
    Base exception for all oss-testing errors.

    All exceptions raised by this library inherit from this class,
    allowing test harnesses to catch all library-specific errors with a
    single except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Category Exceptions
# ---------------------------------------------------------------------------


class ConfigurationError(OSSTestingError):
    """
    Raised when a fixture strategy cannot be selected or constructed.

    This covers unknown strategy names, classes that cannot be imported,
    classes without a no-arg constructor, objects that do not satisfy
    ``FixtureProtocol``, and missing integration settings.

    Attributes:
        name: The strategy name or class path that caused the failure
    """

    def __init__(self, message: str, name: str | None = None) -> None:
        self.name = name
        super().__init__(message)


class FixtureError(OSSTestingError):
    """
    Base exception for fixture lifecycle errors.

    This includes failures to start or stop the backing object store and
    bucket operations performed on behalf of a test suite.
    """

    pass


# ---------------------------------------------------------------------------
# Configuration Exceptions
# ---------------------------------------------------------------------------


class UnknownFixtureError(ConfigurationError):
    """Raised when a selector value matches no registered fixture."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.available = sorted(available)
        listing = ", ".join(self.available) or "none"
        super().__init__(f"Unknown fixture: {name}. Available: {listing}", name=name)


# ---------------------------------------------------------------------------
# Lifecycle Exceptions
# ---------------------------------------------------------------------------


class StartupError(FixtureError):
    """
    Raised when a fixture cannot bring up its backing service.

    Attributes:
        fixture: Name of the fixture class that failed
        reason: What went wrong, without the fixture name
        cause: The underlying exception, if any
    """

    def __init__(self, fixture: str, reason: str, cause: Exception | None = None) -> None:
        self.fixture = fixture
        self.reason = reason
        self.cause = cause
        super().__init__(f"Failed to start {fixture}: {reason}")


class ShutdownError(FixtureError):
    """
    Raised when a fixture cannot tear down its backing service.

    Attributes:
        fixture: Name of the fixture class that failed
        reason: What went wrong, without the fixture name
        cause: The underlying exception, if any
    """

    def __init__(self, fixture: str, reason: str, cause: Exception | None = None) -> None:
        self.fixture = fixture
        self.reason = reason
        self.cause = cause
        super().__init__(f"Failed to stop {fixture}: {reason}")


class FixtureNotStartedError(FixtureError):
    """Raised when a client or bucket operation is attempted before ``start()``."""

    def __init__(self, fixture: str) -> None:
        self.fixture = fixture
        super().__init__(f"{fixture} is not started. Call start() first.")


class BucketOperationError(FixtureError):
    """
    Raised when setting up or tearing down a test bucket fails.

    Attributes:
        bucket: The bucket being operated on
        operation: ``"set_up"`` or ``"tear_down"``
        cause: The underlying service error
    """

    def __init__(self, bucket: str, operation: str, cause: Exception | None = None) -> None:
        self.bucket = bucket
        self.operation = operation
        self.cause = cause
        msg = f"Bucket {operation} failed for '{bucket}'"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
