"""Fixture selection from the environment.

``resolve()`` reads ``OSS_TEST_RULE_CLASS_IMPL`` once and returns the
fixture a test suite should run against:

    (unset or empty)           -> silent MockFixture
    mock, integration, ...     -> strategy registered under that name
    pkg.module.Class           -> imported class (also ``pkg.module:Class``)
"""

from __future__ import annotations

import importlib
import inspect
import logging
import os
import uuid
from collections.abc import Callable, Mapping

from .exceptions import ConfigurationError
from .mock import MockFixture
from .naming import FIXTURE_ENV_VAR, new_run_id
from .protocol import FixtureProtocol
from .registry import FixtureRegistry, default_registry

logger = logging.getLogger(__name__)


def resolve(
    environ: Mapping[str, str] | None = None,
    *,
    registry: FixtureRegistry | None = None,
    run_id: uuid.UUID | None = None,
    log: logging.Logger | None = None,
) -> FixtureProtocol:
    """
    Select and construct the fixture for this test run.

    Args:
        environ: Environment to read the selector from (default: ``os.environ``)
        registry: Named strategies (default: ``default_registry()``)
        run_id: Run identifier for the default mock fixture (default: new UUID)
        log: Logger for the selection message (default: this module's logger)

    Returns:
        An unstarted fixture

    Raises:
        ConfigurationError: If the selected strategy cannot be found or
            constructed, or does not implement FixtureProtocol
    """
    env = os.environ if environ is None else environ
    log = log or logger
    impl = (env.get(FIXTURE_ENV_VAR) or "").strip()

    log.info("The initializing fixture implementation is: %s", impl or "<default mock>")

    if not impl:
        return MockFixture.builder().silent().run_id(run_id or new_run_id()).build()

    registry = registry if registry is not None else default_registry()
    if registry.is_registered(impl):
        factory = registry.get(impl)
    elif "." in impl or ":" in impl:
        factory = _import_factory(impl)
    else:
        # Raises UnknownFixtureError listing the registered names
        factory = registry.get(impl)

    return _construct(impl, factory)


def _import_factory(path: str) -> Callable[..., object]:
    """Import ``pkg.module.Class`` or ``pkg.module:Class``."""
    if ":" in path:
        module_path, _, attr = path.partition(":")
    else:
        module_path, _, attr = path.rpartition(".")

    if not module_path or not attr:
        raise ConfigurationError(f"Cannot initialize fixture, invalid class path: {path}", name=path)

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot initialize fixture, cannot import module {module_path!r}: {path}", name=path
        ) from e
    except Exception as e:
        raise ConfigurationError(
            f"Cannot initialize fixture, importing {module_path!r} failed: {path}: {e}", name=path
        ) from e

    factory = getattr(module, attr, None)
    if factory is None:
        raise ConfigurationError(
            f"Cannot initialize fixture, class not found: {path}", name=path
        )
    if not callable(factory):
        raise ConfigurationError(f"Cannot initialize fixture, not a class: {path}", name=path)
    return factory


def _construct(name: str, factory: Callable[..., object]) -> FixtureProtocol:
    if inspect.isabstract(factory):
        raise ConfigurationError(
            f"Cannot initialize fixture, {name} is abstract and has no no-arg constructor.",
            name=name,
        )

    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures; let the call decide
        signature = None
    if signature is not None:
        try:
            signature.bind()
        except TypeError as e:
            raise ConfigurationError(
                f"Cannot initialize fixture, missing no-arg constructor: {name}", name=name
            ) from e

    try:
        instance = factory()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Cannot initialize fixture, construction failed: {name}: {e}", name=name
        ) from e
    if not isinstance(instance, FixtureProtocol):
        raise ConfigurationError(
            f"Cannot initialize fixture, {name} does not implement FixtureProtocol.", name=name
        )
    return instance
