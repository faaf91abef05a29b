"""Data models for the S3 tester."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Verbosity(Enum):
    """Log verbosity selected on the command line.

    The value is the name of the log level it enables.
    """

    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Connection settings for an S3-compatible endpoint.

    A port of ``None`` means no port was configured.
    """

    endpoint: str = ""
    port: Optional[int] = None
    access_key: str = ""
    secret_key: str = ""
    bucket: str = ""
    secure: bool = True

    @property
    def address(self) -> str:
        """Endpoint as ``host:port``."""
        return f"{self.endpoint}:{self.port}"

    @property
    def endpoint_url(self) -> str:
        """Endpoint URL including the scheme selected by ``secure``."""
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.address}"


@dataclass
class TransferStats:
    """Timing of a single upload."""

    size_bytes: int
    started_at: float
    elapsed_seconds: float = 0.0

    @property
    def bytes_per_second(self) -> float:
        """Average throughput, or 0 when no time elapsed."""
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.size_bytes / self.elapsed_seconds


@dataclass
class UploadResult:
    """Outcome of the upload action."""

    object_name: str
    stats: TransferStats
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
