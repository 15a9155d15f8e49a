"""Tests for the running() context manager and apply()."""

import pytest

from oss_testing.lifecycle import apply, running


class TestRunning:
    """Test running() context manager."""

    def test_starts_and_stops(self, recording_fixture) -> None:
        with running(recording_fixture) as fixture:
            assert fixture is recording_fixture
            assert recording_fixture.calls == ["start"]
        assert recording_fixture.calls == ["start", "stop"]

    def test_stops_once_when_body_raises(self, recording_fixture) -> None:
        with pytest.raises(ValueError, match="boom"):
            with running(recording_fixture):
                raise ValueError("boom")
        assert recording_fixture.calls.count("stop") == 1

    def test_stops_once_when_assertion_fails(self, recording_fixture) -> None:
        with pytest.raises(AssertionError):
            with running(recording_fixture):
                assert False, "test body failed"  # noqa: B011
        assert recording_fixture.calls == ["start", "stop"]

    def test_start_failure_skips_stop(self, recording_fixture) -> None:
        recording_fixture.fail_start = True
        with pytest.raises(RuntimeError, match="start failed"):
            with running(recording_fixture):
                pytest.fail("body must not run")
        assert recording_fixture.calls == ["start"]

    def test_stop_failure_propagates(self, recording_fixture) -> None:
        recording_fixture.fail_stop = True
        with pytest.raises(RuntimeError, match="stop failed"):
            with running(recording_fixture):
                pass

    def test_stop_failure_chains_body_error(self, recording_fixture) -> None:
        recording_fixture.fail_stop = True
        with pytest.raises(RuntimeError, match="stop failed") as exc_info:
            with running(recording_fixture):
                raise ValueError("boom")
        assert isinstance(exc_info.value.__context__, ValueError)


class TestApply:
    """Test apply() helper."""

    def test_returns_result(self, recording_fixture) -> None:
        def work(a: int, b: int = 0) -> int:
            assert recording_fixture.calls == ["start"]
            return a + b

        assert apply(recording_fixture, work, 2, b=3) == 5
        assert recording_fixture.calls == ["start", "stop"]

    def test_propagates_failure_after_stop(self, recording_fixture) -> None:
        def work() -> None:
            raise KeyError("missing")

        with pytest.raises(KeyError):
            apply(recording_fixture, work)
        assert recording_fixture.calls == ["start", "stop"]

    def test_stop_exactly_once_per_start(self, recording_fixture) -> None:
        for _ in range(3):
            apply(recording_fixture, lambda: None)
        assert recording_fixture.calls.count("start") == 3
        assert recording_fixture.calls.count("stop") == 3
