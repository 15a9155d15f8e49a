"""Fixture backed by a real object storage service.

Select it with ``OSS_TEST_RULE_CLASS_IMPL=integration`` and configure the
endpoint and credentials through environment variables:

    OSS_TEST_ENDPOINT           Service endpoint URL (default: boto3 default)
    OSS_TEST_REGION             Region (default: us-east-1)
    OSS_TEST_ACCESS_KEY_ID      Access key id (required)
    OSS_TEST_ACCESS_KEY_SECRET  Access key secret (required)
    OSS_TEST_BUCKET_NAME        Bucket to use (default: generated per run)
    OSS_TEST_KEY_PREFIX         Key prefix for test objects (default: iceberg-objects/)
"""

from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import ConfigurationError, FixtureNotStartedError, StartupError
from .fixture import BaseFixture
from .naming import (
    ACCESS_KEY_ID_ENV_VAR,
    ACCESS_KEY_SECRET_ENV_VAR,
    BUCKET_ENV_VAR,
    DEFAULT_REGION,
    ENDPOINT_ENV_VAR,
    INTEGRATION_KEY_PREFIX,
    KEY_PREFIX_ENV_VAR,
    REGION_ENV_VAR,
    bucket_name_for,
    normalize_key_prefix,
)

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrationConfig:
    """Connection settings for a real object storage service."""

    access_key_id: str
    access_key_secret: str
    endpoint_url: str | None = None
    region: str = DEFAULT_REGION
    bucket_name: str | None = None
    key_prefix: str = INTEGRATION_KEY_PREFIX

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> IntegrationConfig:
        """
        Create IntegrationConfig from environment variables.

        Raises:
            ConfigurationError: If the access key id or secret is missing
        """
        env = os.environ if environ is None else environ
        missing = [
            var for var in (ACCESS_KEY_ID_ENV_VAR, ACCESS_KEY_SECRET_ENV_VAR) if not env.get(var)
        ]
        if missing:
            raise ConfigurationError(
                f"Cannot initialize IntegrationFixture, missing environment: {', '.join(missing)}",
                name="integration",
            )
        region, bucket_name, key_prefix = _naming_from_environment(env)
        return cls(
            access_key_id=env[ACCESS_KEY_ID_ENV_VAR],
            access_key_secret=env[ACCESS_KEY_SECRET_ENV_VAR],
            endpoint_url=env.get(ENDPOINT_ENV_VAR) or None,
            region=region,
            bucket_name=bucket_name,
            key_prefix=key_prefix,
        )


def _naming_from_environment(env: Mapping[str, str]) -> tuple[str, str | None, str]:
    """Region, bucket name and key prefix; none of them is required."""
    return (
        env.get(REGION_ENV_VAR) or DEFAULT_REGION,
        env.get(BUCKET_ENV_VAR) or None,
        normalize_key_prefix(env.get(KEY_PREFIX_ENV_VAR) or INTEGRATION_KEY_PREFIX),
    )


class IntegrationFixture(BaseFixture):
    """
    Fixture that points clients at an existing object storage service.

    ``start()`` does not provision anything; it loads the configuration
    (from the environment unless one was given) and checks that the
    endpoint answers. ``stop()`` only forgets the connection.

    Without a config, region, bucket name and key prefix are read from the
    environment at construction and never change afterwards. Credentials
    and endpoint are read at ``start()``.

    Args:
        config: Connection settings, or None to read them from the environment
        run_id: Run identifier for bucket naming (generated if omitted)
    """

    def __init__(
        self,
        config: IntegrationConfig | None = None,
        *,
        run_id: uuid.UUID | None = None,
    ) -> None:
        if config is None:
            region, bucket_name, key_prefix = _naming_from_environment(os.environ)
        else:
            region, bucket_name, key_prefix = config.region, config.bucket_name, config.key_prefix
        super().__init__(region=region, run_id=run_id)
        self._config = config
        self._bucket_name = bucket_name or bucket_name_for(self.run_id)
        self._key_prefix = key_prefix
        self._started = False

    @property
    def config(self) -> IntegrationConfig | None:
        return self._config

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """
        Load configuration and verify the service is reachable.

        Raises:
            ConfigurationError: If credentials are missing
            StartupError: If the endpoint cannot be reached
        """
        if self._config is None:
            self._config = replace(
                IntegrationConfig.from_environment(),
                region=self._region,
                bucket_name=self._bucket_name,
                key_prefix=self._key_prefix,
            )

        client = self._new_client(self._config)
        try:
            client.head_bucket(Bucket=self.test_bucket_name())
        except ClientError:
            # Any service answer (404, 403, ...) proves the endpoint is up
            pass
        except BotoCoreError as e:
            endpoint = self._config.endpoint_url or "default endpoint"
            raise StartupError(type(self).__name__, f"cannot reach {endpoint}: {e}", e) from e
        finally:
            client.close()

        self._started = True
        logger.info(
            "Using object store at %s (bucket=%s, prefix=%s)",
            self._config.endpoint_url or "default endpoint",
            self.test_bucket_name(),
            self.key_prefix(),
        )

    def stop(self) -> None:
        self._started = False

    # -------------------------------------------------------------------------
    # Clients and naming
    # -------------------------------------------------------------------------

    def create_client(self) -> S3Client:
        if not self._started or self._config is None:
            raise FixtureNotStartedError(type(self).__name__)
        return self._new_client(self._config)

    def test_bucket_name(self) -> str:
        return self._bucket_name

    def key_prefix(self) -> str:
        return self._key_prefix

    @staticmethod
    def _new_client(config: IntegrationConfig) -> S3Client:
        return boto3.client(
            "s3",
            endpoint_url=config.endpoint_url,
            region_name=config.region,
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.access_key_secret,
            config=Config(retries={"max_attempts": 2, "mode": "standard"}),
        )
