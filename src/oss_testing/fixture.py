"""Base class shared by the built-in fixture strategies.

``BaseFixture`` implements the bucket preparation half of the lifecycle
contract on top of ``create_client()``; subclasses provide ``start()``,
``stop()``, ``create_client()`` and ``key_prefix()``.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from types import TracebackType
from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError

from .exceptions import BucketOperationError
from .naming import DEFAULT_REGION, bucket_name_for, new_run_id

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

# S3 DeleteObjects accepts at most 1000 keys per request
DELETE_BATCH_SIZE = 1000

_OWNED_BUCKET_CODES = frozenset({"BucketAlreadyOwnedByYou", "BucketAlreadyExists"})
_MISSING_BUCKET_CODES = frozenset({"NoSuchBucket", "404"})


class BaseFixture(ABC):
    """
    Common implementation of the fixture lifecycle contract.

    Each instance carries its own run identifier, so two sequential calls to
    ``test_bucket_name()`` on one fixture return the same name while
    separate fixtures never collide.

    Fixtures are context managers::

        with MockFixture() as fixture:
            client = fixture.create_client()
    """

    def __init__(self, *, region: str = DEFAULT_REGION, run_id: uuid.UUID | None = None) -> None:
        self._region = region
        self._run_id = run_id or new_run_id()

    @property
    def run_id(self) -> uuid.UUID:
        """Identifier of the test-suite run this fixture belongs to."""
        return self._run_id

    @property
    def region(self) -> str:
        return self._region

    # -------------------------------------------------------------------------
    # Lifecycle (implemented by strategies)
    # -------------------------------------------------------------------------

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    @abstractmethod
    def create_client(self) -> S3Client: ...

    @abstractmethod
    def key_prefix(self) -> str: ...

    def test_bucket_name(self) -> str:
        return bucket_name_for(self._run_id)

    def __enter__(self) -> BaseFixture:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()

    # -------------------------------------------------------------------------
    # Bucket preparation
    # -------------------------------------------------------------------------

    def set_up_bucket(self, bucket: str) -> None:
        """
        Create the bucket unless it already exists.

        Args:
            bucket: Bucket name

        Raises:
            FixtureNotStartedError: If the fixture is not started
            BucketOperationError: If the service rejects the request
        """
        client = self.create_client()
        try:
            if self._bucket_exists(client, bucket):
                logger.debug("Bucket %s already exists", bucket)
                return
            kwargs: dict[str, Any] = {"Bucket": bucket}
            if self._region != "us-east-1":
                kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._region}
            try:
                client.create_bucket(**kwargs)
            except ClientError as e:
                # Lost a race with another setup of the same bucket
                if _error_code(e) not in _OWNED_BUCKET_CODES:
                    raise
            logger.debug("Created bucket %s", bucket)
        except ClientError as e:
            raise BucketOperationError(bucket, "set_up", e) from e
        finally:
            client.close()

    def tear_down_bucket(self, bucket: str) -> None:
        """
        Delete every object under ``key_prefix()`` in the bucket.

        Objects outside the prefix are left alone. A missing bucket is
        treated as already clean.

        Args:
            bucket: Bucket name

        Raises:
            FixtureNotStartedError: If the fixture is not started
            BucketOperationError: If listing or deletion fails
        """
        prefix = self.key_prefix()
        client = self.create_client()
        try:
            deleted = delete_prefix(client, bucket, prefix)
            logger.debug("Deleted %d objects under s3://%s/%s", deleted, bucket, prefix)
        except ClientError as e:
            if _error_code(e) in _MISSING_BUCKET_CODES:
                logger.debug("Bucket %s does not exist, nothing to tear down", bucket)
                return
            raise BucketOperationError(bucket, "tear_down", e) from e
        finally:
            client.close()

    @staticmethod
    def _bucket_exists(client: S3Client, bucket: str) -> bool:
        try:
            client.head_bucket(Bucket=bucket)
        except ClientError as e:
            if _error_code(e) in _MISSING_BUCKET_CODES:
                return False
            raise
        return True


def delete_prefix(client: S3Client, bucket: str, prefix: str) -> int:
    """
    Delete all objects whose key starts with ``prefix``.

    Args:
        client: S3 client
        bucket: Bucket name
        prefix: Key prefix (empty string means the whole bucket)

    Returns:
        Number of objects deleted
    """
    deleted = 0
    paginator = client.get_paginator("list_objects_v2")
    for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
        keys = [obj["Key"] for obj in page.get("Contents", [])]
        for i in range(0, len(keys), DELETE_BATCH_SIZE):
            batch = keys[i : i + DELETE_BATCH_SIZE]
            response = client.delete_objects(
                Bucket=bucket,
                Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
            )
            errors = response.get("Errors", [])
            if errors:
                first = errors[0]
                raise ClientError(
                    {"Error": {"Code": first.get("Code", ""), "Message": first.get("Message", "")}},
                    "DeleteObjects",
                )
            deleted += len(batch)
    return deleted


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))
