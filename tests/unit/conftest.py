"""Unit test fixtures."""

import pytest

from tests.fixtures.recording import RecordingFixture


@pytest.fixture
def recording_fixture() -> RecordingFixture:
    """Fixture double that records start/stop and bucket calls."""
    return RecordingFixture()
