"""Lifecycle contract for object storage test fixtures.

``FixtureProtocol`` uses ``typing.Protocol`` with ``@runtime_checkable`` so
the selector can verify any object, including classes that do not inherit
from ``BaseFixture``, with ``isinstance()``.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


@runtime_checkable
class FixtureProtocol(Protocol):
    """
    Protocol for object storage test fixtures.

    A fixture is a test-scoped object store, either an in-process mock
    server or a real service, that a test suite runs against.

    Example:
        class MyFixture:
            def start(self) -> None: ...
            def stop(self) -> None: ...
            def create_client(self) -> S3Client: ...
            def test_bucket_name(self) -> str: ...
            def key_prefix(self) -> str: ...
            def set_up_bucket(self, bucket: str) -> None: ...
            def tear_down_bucket(self, bucket: str) -> None: ...

        assert isinstance(MyFixture(), FixtureProtocol)
    """

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """
        Bring up the object storage service that clients connect to.

        Raises:
            StartupError: If the service cannot be bound or reached
        """
        ...

    def stop(self) -> None:
        """
        Tear down the object storage service.

        Safe to call after a failed ``start()`` and more than once.

        Raises:
            ShutdownError: If the service fails to shut down
        """
        ...

    # -------------------------------------------------------------------------
    # Clients and naming
    # -------------------------------------------------------------------------

    def create_client(self) -> "S3Client":
        """Return a newly created client connected to the service."""
        ...

    def test_bucket_name(self) -> str:
        """Return the bucket name used by this test run."""
        ...

    def key_prefix(self) -> str:
        """
        Return the common key prefix for objects created in test cases.

        With bucket ``oss-testing-bucket`` and prefix ``iceberg-objects/``,
        test objects look like::

            oss://oss-testing-bucket/iceberg-objects/a.dat
            oss://oss-testing-bucket/iceberg-objects/b.dat
        """
        ...

    # -------------------------------------------------------------------------
    # Bucket preparation
    # -------------------------------------------------------------------------

    def set_up_bucket(self, bucket: str) -> None:
        """Ensure the bucket exists. Idempotent."""
        ...

    def tear_down_bucket(self, bucket: str) -> None:
        """Delete all objects this suite created under ``key_prefix()``."""
        ...
