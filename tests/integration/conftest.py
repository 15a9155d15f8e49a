"""Integration test fixtures: a real moto server on a loopback port."""

import pytest

from oss_testing.mock import MockFixture


@pytest.fixture
def mock_fixture():
    """Started silent MockFixture, stopped after the test."""
    with MockFixture.builder().silent().build() as fixture:
        yield fixture
