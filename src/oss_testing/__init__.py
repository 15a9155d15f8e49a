"""
oss-testing: object storage fixtures for integration test suites.

This library provides:
- A lifecycle contract for test fixtures (FixtureProtocol)
- An in-process mock object store backed by moto (the default)
- A fixture for a real S3-compatible service such as Aliyun OSS
- Runtime selection through the OSS_TEST_RULE_CLASS_IMPL environment variable
- A pytest plugin exposing the selected fixture, a client and a test bucket

Example:
    from oss_testing import resolve, running

    with running(resolve()) as fixture:
        bucket = fixture.test_bucket_name()
        fixture.set_up_bucket(bucket)
        client = fixture.create_client()
        client.put_object(Bucket=bucket, Key=fixture.key_prefix() + "a.dat", Body=b"a")
        fixture.tear_down_bucket(bucket)
"""

# ---------------------------------------------------------------------------
# Lazy imports
# ---------------------------------------------------------------------------
# MockFixture, IntegrationFixture and resolve are imported lazily via
# __getattr__ below. Importing moto takes long enough to be noticeable, and
# code that only implements FixtureProtocol should not pay for it.
# ---------------------------------------------------------------------------
import importlib
import importlib.metadata
from typing import TYPE_CHECKING

from .exceptions import (
    BucketOperationError,
    ConfigurationError,
    FixtureError,
    FixtureNotStartedError,
    OSSTestingError,
    ShutdownError,
    StartupError,
    UnknownFixtureError,
)
from .lifecycle import apply, running
from .naming import FIXTURE_ENV_VAR
from .protocol import FixtureProtocol
from .registry import FixtureRegistry, default_registry

if TYPE_CHECKING:
    from .fixture import BaseFixture as BaseFixture
    from .integration import IntegrationConfig as IntegrationConfig
    from .integration import IntegrationFixture as IntegrationFixture
    from .mock import MockFixture as MockFixture
    from .mock import MockFixtureBuilder as MockFixtureBuilder
    from .selector import resolve as resolve

try:
    __version__ = importlib.metadata.version("oss-testing")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Selection and lifecycle
    "resolve",
    "running",
    "apply",
    "FIXTURE_ENV_VAR",
    # Contract
    "FixtureProtocol",
    "BaseFixture",
    "FixtureRegistry",
    "default_registry",
    # Strategies
    "MockFixture",
    "MockFixtureBuilder",
    "IntegrationFixture",
    "IntegrationConfig",
    # Exceptions - Base
    "OSSTestingError",
    # Exceptions - Configuration
    "ConfigurationError",
    "UnknownFixtureError",
    # Exceptions - Lifecycle
    "FixtureError",
    "StartupError",
    "ShutdownError",
    "FixtureNotStartedError",
    "BucketOperationError",
]

_LAZY = {
    "BaseFixture": ".fixture",
    "IntegrationConfig": ".integration",
    "IntegrationFixture": ".integration",
    "MockFixture": ".mock",
    "MockFixtureBuilder": ".mock",
    "resolve": ".selector",
}


def __getattr__(name: str) -> object:
    """Lazy import for names that pull in boto3 and moto.

    See Also:
        PEP 562 -- Module __getattr__ and __dir__
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = importlib.import_module(module_name, __name__)
    return getattr(module, name)
