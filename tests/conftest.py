"""Pytest fixtures for oss-testing tests."""

import pytest
from moto import mock_aws

from oss_testing.naming import FIXTURE_ENV_VAR

pytest_plugins = ["oss_testing.pytest_plugin", "pytester"]


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    # Unset AWS_ENDPOINT_URL to ensure moto intercepts requests
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)


@pytest.fixture
def mock_s3(aws_credentials):
    """Mock S3 in-process for tests."""
    with mock_aws():
        yield


@pytest.fixture
def clean_selector(monkeypatch):
    """Remove the fixture selector from the environment."""
    monkeypatch.delenv(FIXTURE_ENV_VAR, raising=False)
