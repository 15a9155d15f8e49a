"""Tests for FixtureRegistry."""

import pytest

from oss_testing.exceptions import UnknownFixtureError
from oss_testing.integration import IntegrationFixture
from oss_testing.mock import MockFixture
from oss_testing.registry import FixtureRegistry, default_registry


class TestFixtureRegistry:
    """Test registration and lookup."""

    def test_add_and_get(self, recording_fixture) -> None:
        registry = FixtureRegistry()
        registry.add("recording", type(recording_fixture))
        assert registry.get("recording") is type(recording_fixture)

    def test_register_decorator_returns_class(self) -> None:
        registry = FixtureRegistry()

        @registry.register("custom")
        class CustomFixture(MockFixture):
            pass

        assert registry.get("custom") is CustomFixture
        assert CustomFixture.__name__ == "CustomFixture"

    def test_names_are_case_insensitive(self) -> None:
        registry = FixtureRegistry()
        registry.add("MinIO", MockFixture)
        assert registry.is_registered("minio")
        assert registry.is_registered(" MINIO ")
        assert registry.get("Minio") is MockFixture
        assert registry.names() == ["minio"]

    def test_later_registration_replaces(self) -> None:
        registry = FixtureRegistry()
        registry.add("store", MockFixture)
        registry.add("store", IntegrationFixture)
        assert registry.get("store") is IntegrationFixture
        assert len(registry) == 1

    def test_empty_name_rejected(self) -> None:
        registry = FixtureRegistry()
        with pytest.raises(ValueError, match="cannot be empty"):
            registry.add("  ", MockFixture)

    def test_unknown_name_lists_available(self) -> None:
        registry = FixtureRegistry()
        registry.add("mock", MockFixture)
        with pytest.raises(UnknownFixtureError) as exc_info:
            registry.get("minio")
        assert exc_info.value.name == "minio"
        assert exc_info.value.available == ["mock"]

    def test_contains_and_iter(self) -> None:
        registry = FixtureRegistry()
        registry.add("a", MockFixture)
        registry.add("b", IntegrationFixture)
        assert "A" in registry
        assert 42 not in registry
        assert list(registry) == ["a", "b"]

    def test_registries_are_independent(self) -> None:
        first = FixtureRegistry()
        second = FixtureRegistry()
        first.add("only-here", MockFixture)
        assert "only-here" not in second


class TestDefaultRegistry:
    """Test the built-in strategies."""

    def test_builtin_names(self) -> None:
        registry = default_registry()
        assert sorted(registry.names()) == ["integration", "mock"]
        assert registry.get("mock") is MockFixture
        assert registry.get("integration") is IntegrationFixture

    def test_returns_fresh_registry(self) -> None:
        first = default_registry()
        first.add("extra", MockFixture)
        assert "extra" not in default_registry()
