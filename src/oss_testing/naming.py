"""Environment variable names and test resource naming.

Bucket names follow S3/OSS rules: lowercase letters, digits and hyphens,
at most 63 characters. ``oss-testing-bucket-`` plus a 36-character UUID
stays within that limit.
"""

import uuid

FIXTURE_ENV_VAR = "OSS_TEST_RULE_CLASS_IMPL"
"""Environment variable naming the fixture strategy to instantiate."""

ENDPOINT_ENV_VAR = "OSS_TEST_ENDPOINT"
REGION_ENV_VAR = "OSS_TEST_REGION"
ACCESS_KEY_ID_ENV_VAR = "OSS_TEST_ACCESS_KEY_ID"
ACCESS_KEY_SECRET_ENV_VAR = "OSS_TEST_ACCESS_KEY_SECRET"
BUCKET_ENV_VAR = "OSS_TEST_BUCKET_NAME"
KEY_PREFIX_ENV_VAR = "OSS_TEST_KEY_PREFIX"

BUCKET_NAME_PREFIX = "oss-testing-bucket-"
DEFAULT_REGION = "us-east-1"

MOCK_KEY_PREFIX = "mock-objects/"
"""Key prefix for objects created against the mock fixture."""

INTEGRATION_KEY_PREFIX = "iceberg-objects/"
"""Default key prefix for objects created against a real service."""


def new_run_id() -> uuid.UUID:
    """Generate a run identifier for one test-suite invocation."""
    return uuid.uuid4()


def bucket_name_for(run_id: uuid.UUID) -> str:
    """
    Return the test bucket name for a run.

    Args:
        run_id: Identifier of the test-suite run

    Returns:
        ``"oss-testing-bucket-<run_id>"``
    """
    return f"{BUCKET_NAME_PREFIX}{run_id}"


def normalize_key_prefix(prefix: str) -> str:
    """Strip a leading slash and ensure the prefix ends with one.

    An empty prefix is returned unchanged (the whole bucket).
    """
    prefix = prefix.lstrip("/")
    if prefix and not prefix.endswith("/"):
        prefix += "/"
    return prefix
