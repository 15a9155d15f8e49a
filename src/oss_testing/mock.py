"""In-process mock object store backed by moto's threaded server.

The mock fixture is the default strategy: it needs no credentials and no
network access beyond a loopback port.

Example:
    fixture = MockFixture.builder().silent().port(9000).build()
    with fixture:
        client = fixture.create_client()
        client.create_bucket(Bucket=fixture.test_bucket_name())
"""

from __future__ import annotations

import logging
import socket
import threading
import uuid
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config
from moto.server import ThreadedMotoServer

from .exceptions import FixtureNotStartedError, ShutdownError, StartupError
from .fixture import BaseFixture
from .naming import DEFAULT_REGION, MOCK_KEY_PREFIX

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"

# moto accepts any credentials
MOCK_ACCESS_KEY_ID = "testing"
MOCK_SECRET_ACCESS_KEY = "testing"

STARTUP_TIMEOUT = 10.0
"""Seconds to wait for the server thread to accept connections."""

REQUEST_LOGGER = "werkzeug"
"""Logger the server writes one INFO record per request to."""


def _reserve_port(host: str, port: int) -> int:
    """Bind ``host:port`` once to prove it is free and return the bound port.

    Port 0 asks the OS for an ephemeral port.

    Raises:
        OSError: If the address cannot be bound
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, port))
        return int(sock.getsockname()[1])


def _start_within(server: ThreadedMotoServer, timeout: float) -> None:
    """Run ``server.start()`` on a helper thread, waiting at most ``timeout`` seconds.

    The reserved port is released before moto binds it, so another process
    can take it in between. moto then fails inside its own thread and
    ``start()`` never returns.

    Raises:
        TimeoutError: If the server is not ready in time
        Exception: Whatever ``server.start()`` raised
    """
    errors: list[Exception] = []

    def target() -> None:
        try:
            server.start()
        except Exception as e:
            errors.append(e)

    starter = threading.Thread(target=target, name="oss-testing-mock-start", daemon=True)
    starter.start()
    starter.join(timeout)
    if starter.is_alive():
        raise TimeoutError(f"server not ready after {timeout:g}s")
    if errors:
        raise errors[0]


class MockFixture(BaseFixture):
    """
    Fixture running moto's S3 implementation on a loopback HTTP port.

    Args:
        host: Address to bind the server to
        port: Port to bind, or 0 to pick a free port at start
        silent: Suppress the server's per-request log output
        region: Region used for clients and bucket creation
        run_id: Run identifier for bucket naming (generated if omitted)
    """

    def __init__(
        self,
        *,
        host: str = DEFAULT_HOST,
        port: int = 0,
        silent: bool = False,
        region: str = DEFAULT_REGION,
        run_id: uuid.UUID | None = None,
    ) -> None:
        super().__init__(region=region, run_id=run_id)
        self._host = host
        self._port = port
        self._silent = silent
        self._server: ThreadedMotoServer | None = None
        self._endpoint_url: str | None = None
        self._saved_log_level: int | None = None

    @classmethod
    def builder(cls) -> MockFixtureBuilder:
        """Return a fluent builder for a ``MockFixture``."""
        return MockFixtureBuilder()

    @property
    def silent(self) -> bool:
        return self._silent

    @property
    def is_running(self) -> bool:
        return self._server is not None

    @property
    def endpoint_url(self) -> str:
        """HTTP endpoint of the running server.

        Raises:
            FixtureNotStartedError: If the server is not running
        """
        if self._endpoint_url is None:
            raise FixtureNotStartedError(type(self).__name__)
        return self._endpoint_url

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """
        Start the mock server.

        When silent, the server's request logger is raised to WARNING until
        ``stop()``.

        Raises:
            StartupError: If the port cannot be bound or the server fails
                or does not come up within ``STARTUP_TIMEOUT``
        """
        if self._server is not None:
            logger.warning("Mock object store already running at %s", self._endpoint_url)
            return

        name = type(self).__name__
        try:
            port = _reserve_port(self._host, self._port)
        except OSError as e:
            raise StartupError(name, f"cannot bind {self._host}:{self._port}: {e}", e) from e

        server = ThreadedMotoServer(ip_address=self._host, port=port, verbose=not self._silent)
        if self._silent:
            self._quiet_request_log()
        try:
            _start_within(server, STARTUP_TIMEOUT)
        except Exception as e:
            self._restore_request_log()
            raise StartupError(name, f"server failed on {self._host}:{port}: {e}", e) from e

        self._server = server
        self._endpoint_url = f"http://{self._host}:{port}"
        logger.info("Mock object store started at %s", self._endpoint_url)

    def stop(self) -> None:
        """
        Stop the mock server. A no-op when it is not running.

        Raises:
            ShutdownError: If the server fails to shut down
        """
        server = self._server
        if server is None:
            return
        endpoint = self._endpoint_url
        self._server = None
        self._endpoint_url = None
        try:
            server.stop()
        except Exception as e:
            raise ShutdownError(type(self).__name__, str(e), e) from e
        finally:
            self._restore_request_log()
        logger.info("Mock object store at %s stopped", endpoint)

    def _quiet_request_log(self) -> None:
        request_log = logging.getLogger(REQUEST_LOGGER)
        self._saved_log_level = request_log.level
        request_log.setLevel(logging.WARNING)

    def _restore_request_log(self) -> None:
        if self._saved_log_level is None:
            return
        logging.getLogger(REQUEST_LOGGER).setLevel(self._saved_log_level)
        self._saved_log_level = None

    # -------------------------------------------------------------------------
    # Clients and naming
    # -------------------------------------------------------------------------

    def create_client(self) -> S3Client:
        return boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            region_name=self._region,
            aws_access_key_id=MOCK_ACCESS_KEY_ID,
            aws_secret_access_key=MOCK_SECRET_ACCESS_KEY,
            config=Config(s3={"addressing_style": "path"}),
        )

    def key_prefix(self) -> str:
        return MOCK_KEY_PREFIX


class MockFixtureBuilder:
    """Fluent builder for ``MockFixture``.

    All configuration methods return ``self`` for chaining. Call ``build()``
    to get the fixture; nothing is started until ``start()``.
    """

    def __init__(self) -> None:
        self._host = DEFAULT_HOST
        self._port = 0
        self._silent = False
        self._region = DEFAULT_REGION
        self._run_id: uuid.UUID | None = None

    def host(self, address: str) -> MockFixtureBuilder:
        """Set the bind address (default: ``127.0.0.1``)."""
        self._host = address
        return self

    def port(self, number: int) -> MockFixtureBuilder:
        """Set the bind port (default: 0, pick a free port)."""
        if not 0 <= number <= 65535:
            raise ValueError(f"Port out of range: {number}")
        self._port = number
        return self

    def silent(self, value: bool = True) -> MockFixtureBuilder:
        """Suppress per-request server logging."""
        self._silent = value
        return self

    def region(self, name: str) -> MockFixtureBuilder:
        """Set the region used by clients (default: ``us-east-1``)."""
        self._region = name
        return self

    def run_id(self, value: uuid.UUID | None) -> MockFixtureBuilder:
        """Set the run identifier (default: generated per fixture)."""
        self._run_id = value
        return self

    def build(self) -> MockFixture:
        return MockFixture(
            host=self._host,
            port=self._port,
            silent=self._silent,
            region=self._region,
            run_id=self._run_id,
        )
