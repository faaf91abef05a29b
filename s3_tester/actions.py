"""Upload and remove actions.

Each action performs exactly one S3 request. Problems with the arguments,
the configuration or the local file are raised as exceptions and turned
into fatal log records by the CLI.

A failed upload PUT is the exception to that rule: it is logged as an
error and the timing report is still printed, because the tool is a
measurement probe and scripted callers want the elapsed time of failed
transfers too. A failed remove is fatal.
"""

import os
import time
import uuid
from typing import BinaryIO, Optional, Sequence

from boto3.exceptions import S3UploadFailedError
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError

from s3_tester import log
from s3_tester.config import ConfigError
from s3_tester.models import ConnectionDescriptor, TransferStats, UploadResult
from s3_tester.progress import ProgressSink
from s3_tester.s3_client import build_s3_client
from s3_tester.units import format_duration, human_readable_size

CONTENT_TYPE = "application/octet-stream"

UPLOAD_ERRORS = (BotoCoreError, ClientError, S3UploadFailedError)


class ActionError(Exception):
    """Raised when an action cannot be carried out."""

    pass


def new_object_name() -> str:
    """Mint a random (version 4) UUID in canonical form."""
    return str(uuid.uuid4())


def require_bucket(descriptor: ConnectionDescriptor) -> None:
    if not descriptor.bucket:
        raise ConfigError("Please specify an S3 bucket")


def single_put_config(size_bytes: int) -> TransferConfig:
    """Transfer settings that send the whole body in one PUT.

    The multipart threshold sits above the body size and transfers run on
    the calling thread, so the progress callback fires in the same flow
    as the request body.
    """
    return TransferConfig(
        multipart_threshold=size_bytes + 1,
        use_threads=False,
    )


def put_file(
    client,
    bucket: str,
    object_name: str,
    fileobj: BinaryIO,
    size_bytes: int,
    progress: Optional[ProgressSink] = None,
) -> None:
    """Stream an open file to the bucket as a single PUT.

    Raises:
        BotoCoreError, ClientError, S3UploadFailedError: On request failure.
    """
    client.upload_fileobj(
        fileobj,
        bucket,
        object_name,
        ExtraArgs={"ContentType": CONTENT_TYPE},
        Callback=progress,
        Config=single_put_config(size_bytes),
    )


def upload(descriptor: ConnectionDescriptor, args: Sequence[str]) -> UploadResult:
    """Upload one local file under a freshly minted object name.

    Args:
        descriptor: Connection settings, including the target bucket
        args: Positional arguments; exactly one file path is expected

    Returns:
        The minted object name with transfer timing. ``error`` is set
        when the PUT failed.

    Raises:
        ActionError: Wrong arguments, or the file cannot be read.
        ConfigError: Connection settings are incomplete.
        ClientBuildError: boto3 rejected the settings.
    """
    if len(args) != 1:
        raise ActionError("Please specify a file to upload")
    file_path = args[0]

    try:
        size_bytes = os.stat(file_path).st_size
    except OSError as e:
        raise ActionError(f"File '{file_path}' does not exist") from e

    log.info(
        "File '%s' exists with size '%s'",
        file_path,
        human_readable_size(size_bytes),
    )

    try:
        fileobj = open(file_path, "rb")
    except OSError as e:
        raise ActionError(f"Failed to open file '{file_path}'") from e

    with fileobj:
        object_name = new_object_name()
        client = build_s3_client(descriptor)
        require_bucket(descriptor)

        log.info("Uploading file '%s' as ID '%s'", file_path, object_name)

        error: Optional[str] = None
        with ProgressSink(size_bytes) as progress:
            stats = TransferStats(size_bytes=size_bytes, started_at=time.monotonic())
            try:
                put_file(
                    client,
                    descriptor.bucket,
                    object_name,
                    fileobj,
                    size_bytes,
                    progress=progress,
                )
            except UPLOAD_ERRORS as e:
                error = str(e)
                stats.elapsed_seconds = time.monotonic() - stats.started_at
                log.error("Failed to upload", error=e)
            else:
                stats.elapsed_seconds = time.monotonic() - stats.started_at

    log.trace("Transferred %d bytes reported by progress callback", progress.transferred)
    log.info(
        "Uploaded file with '%s' in %s",
        human_readable_size(size_bytes),
        format_duration(stats.elapsed_seconds),
    )
    log.info(
        "Average upload speed: %s/s",
        human_readable_size(int(stats.bytes_per_second)),
    )

    return UploadResult(object_name=object_name, stats=stats, error=error)


def remove(descriptor: ConnectionDescriptor, args: Sequence[str]) -> str:
    """Delete one object from the bucket.

    Args:
        descriptor: Connection settings, including the bucket
        args: Positional arguments; exactly one object name is expected

    Returns:
        The removed object name.

    Raises:
        ActionError: Wrong arguments, or the endpoint refused the delete.
        ConfigError: Connection settings are incomplete.
        ClientBuildError: boto3 rejected the settings.
    """
    if len(args) != 1 or not args[0]:
        raise ActionError("Please specify an object to remove")
    object_name = args[0]

    client = build_s3_client(descriptor)
    require_bucket(descriptor)

    try:
        client.delete_object(Bucket=descriptor.bucket, Key=object_name)
    except (BotoCoreError, ClientError) as e:
        raise ActionError(f"Failed to remove object '{object_name}'") from e

    log.info("Removed object '%s'", object_name)
    return object_name
