"""Scoped start/stop around a unit of test work."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

from .protocol import FixtureProtocol

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")
FixtureT = TypeVar("FixtureT", bound=FixtureProtocol)


@contextmanager
def running(fixture: FixtureT) -> Iterator[FixtureT]:
    """
    Start the fixture, yield it, and stop it on every exit path.

    ``stop()`` runs exactly once after a successful ``start()``, whether the
    body returns, fails an assertion or raises. If ``start()`` itself raises,
    the error propagates and ``stop()`` is not called.

    Example:
        with running(resolve()) as fixture:
            fixture.set_up_bucket(fixture.test_bucket_name())
    """
    name = type(fixture).__name__
    fixture.start()
    logger.debug("%s started", name)
    try:
        yield fixture
    finally:
        fixture.stop()
        logger.debug("%s stopped", name)


def apply(
    fixture: FixtureProtocol,
    work: Callable[P, R],
    *args: P.args,
    **kwargs: P.kwargs,
) -> R:
    """
    Run ``work(*args, **kwargs)`` with the fixture started.

    Returns:
        Whatever ``work`` returns. Exceptions from ``work`` propagate after
        the fixture is stopped.
    """
    with running(fixture):
        return work(*args, **kwargs)
