"""Registry of fixture strategies selectable by name.

Strategies are registered explicitly; the selector looks names up here
before falling back to importing a dotted class path.
"""

from collections.abc import Callable, Iterator
from typing import TypeVar

from .exceptions import UnknownFixtureError
from .protocol import FixtureProtocol

FixtureFactory = Callable[[], FixtureProtocol]

F = TypeVar("F", bound=Callable[..., FixtureProtocol])


class FixtureRegistry:
    """
    Mapping of strategy names to zero-argument fixture factories.

    Names are case-insensitive. Each registry is independent; use
    ``default_registry()`` for one preloaded with the built-in strategies.

    Example:
        registry = FixtureRegistry()

        @registry.register("minio")
        class MinioFixture(BaseFixture):
            ...
    """

    def __init__(self) -> None:
        self._factories: dict[str, Callable[..., FixtureProtocol]] = {}

    def register(self, name: str) -> Callable[[F], F]:
        """Decorator registering a fixture class or factory under ``name``."""

        def decorator(factory: F) -> F:
            self.add(name, factory)
            return factory

        return decorator

    def add(self, name: str, factory: Callable[..., FixtureProtocol]) -> None:
        key = name.strip().lower()
        if not key:
            raise ValueError("Fixture name cannot be empty")
        self._factories[key] = factory

    def get(self, name: str) -> Callable[..., FixtureProtocol]:
        """
        Look up the factory registered under ``name``.

        Raises:
            UnknownFixtureError: If nothing is registered under ``name``
        """
        try:
            return self._factories[name.strip().lower()]
        except KeyError:
            raise UnknownFixtureError(name, self._factories) from None

    def is_registered(self, name: str) -> bool:
        return name.strip().lower() in self._factories

    def names(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)


def default_registry() -> FixtureRegistry:
    """Return a new registry with the built-in ``mock`` and ``integration`` strategies."""
    from .integration import IntegrationFixture
    from .mock import MockFixture

    registry = FixtureRegistry()
    registry.add("mock", MockFixture)
    registry.add("integration", IntegrationFixture)
    return registry
