"""pytest fixtures for suites that run against an object store.

Enable in a ``conftest.py``::

    pytest_plugins = ["oss_testing.pytest_plugin"]

Then request ``oss_fixture``, ``oss_client`` or ``oss_bucket`` in tests.
The strategy comes from ``OSS_TEST_RULE_CLASS_IMPL`` unless overridden
with ``--oss-fixture``.
"""

import os
from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest

from .lifecycle import running
from .naming import FIXTURE_ENV_VAR
from .protocol import FixtureProtocol
from .selector import resolve

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add --oss-fixture pytest option."""
    parser.addoption(
        "--oss-fixture",
        action="store",
        default=None,
        help=f"Object store fixture to run against (overrides {FIXTURE_ENV_VAR})",
    )


@pytest.fixture(scope="session")
def oss_fixture(request: pytest.FixtureRequest) -> Iterator[FixtureProtocol]:
    """Selected object store fixture, started for the whole session."""
    environ = dict(os.environ)
    override = request.config.getoption("--oss-fixture")
    if override:
        environ[FIXTURE_ENV_VAR] = override
    with running(resolve(environ)) as fixture:
        yield fixture


@pytest.fixture
def oss_client(oss_fixture: FixtureProtocol) -> Iterator["S3Client"]:
    """Client connected to the session's object store."""
    client = oss_fixture.create_client()
    yield client
    client.close()


@pytest.fixture
def oss_bucket(oss_fixture: FixtureProtocol) -> Iterator[str]:
    """Test bucket name; objects under the key prefix are removed after the test."""
    bucket = oss_fixture.test_bucket_name()
    oss_fixture.set_up_bucket(bucket)
    yield bucket
    oss_fixture.tear_down_bucket(bucket)
