"""S3 client factory for the tester.

Creates a boto3 S3 client for the configured endpoint using static
credentials and AWS Signature Version 4. The client is built once per
invocation and used for a single request.
"""

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError

from s3_tester import log
from s3_tester.config import ConfigError
from s3_tester.models import ConnectionDescriptor

MAX_PORT = 65535


class ClientBuildError(Exception):
    """Raised when boto3 fails to construct the S3 client."""

    pass


def validate_descriptor(descriptor: ConnectionDescriptor) -> None:
    """Check that the descriptor has everything needed to connect.

    Args:
        descriptor: Connection settings to validate

    Raises:
        ConfigError: Naming the first missing or invalid setting.
    """
    if not descriptor.endpoint:
        raise ConfigError("Please specify an S3 endpoint")
    if not descriptor.port:
        raise ConfigError("Please specify an S3 port")
    if not 1 <= descriptor.port <= MAX_PORT:
        raise ConfigError(f"Invalid S3 port '{descriptor.port}'")
    if not descriptor.access_key:
        raise ConfigError("Please specify an S3 access key")
    if not descriptor.secret_key:
        raise ConfigError("Please specify an S3 secret key")


def build_s3_client(descriptor: ConnectionDescriptor):
    """Build a boto3 S3 client for the given connection settings.

    Args:
        descriptor: Endpoint, port, credentials and TLS setting.

    Returns:
        A boto3 S3 client.

    Raises:
        ConfigError: If a required setting is missing.
        ClientBuildError: If boto3 rejects the settings.

    Note:
        No region is passed, so botocore's default applies. Path-style
        addressing keeps the bucket out of the host name, which custom
        endpoints usually require.
    """
    validate_descriptor(descriptor)

    log.info(
        "Connecting to S3 host '%s' on port '%d'",
        descriptor.endpoint,
        descriptor.port,
    )

    boto_config = Config(
        signature_version="s3v4",
        s3={"addressing_style": "path"},
        request_checksum_calculation="when_required",
        response_checksum_validation="when_required",
    )

    try:
        client = boto3.client(
            "s3",
            endpoint_url=descriptor.endpoint_url,
            aws_access_key_id=descriptor.access_key,
            aws_secret_access_key=descriptor.secret_key,
            use_ssl=descriptor.secure,
            config=boto_config,
        )
    except (BotoCoreError, ValueError) as e:
        raise ClientBuildError(f"Failed to create S3 client for '{descriptor.address}'") from e

    log.debug("S3 client ready for %s", descriptor.endpoint_url)
    return client
