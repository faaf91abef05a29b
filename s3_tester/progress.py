"""Byte progress bar for uploads.

The sink is passed to boto3 as the transfer callback. It is advanced and
redrawn on the thread that streams the request body; no refresh thread
is started.
"""

import time
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

# Minimum time between two redraws of the bar
REFRESH_INTERVAL = 0.1


class ProgressSink:
    """Progress bar scaled to a known number of bytes.

    Can be used as a context manager, which starts and stops the bar.

    Args:
        total_bytes: Number of bytes expected
        console: Console to draw on (defaults to the global Rich console)
        refresh_interval: Minimum seconds between redraws
    """

    def __init__(
        self,
        total_bytes: int,
        console: Optional[Console] = None,
        refresh_interval: float = REFRESH_INTERVAL,
    ):
        self.total_bytes = max(0, int(total_bytes))
        self.transferred = 0
        self.refresh_interval = refresh_interval
        self._progress = Progress(
            BarColumn(),
            DownloadColumn(binary_units=True),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=console,
            auto_refresh=False,
        )
        self._task: Optional[TaskID] = None
        self._last_refresh = 0.0

    def start(self) -> None:
        """Show the bar at zero."""
        self._task = self._progress.add_task("upload", total=self.total_bytes)
        self._progress.start()
        self._refresh(force=True)

    def __call__(self, bytes_amount: int) -> None:
        """Advance by a number of transferred bytes.

        boto3 reports negative amounts when it rewinds the body.
        """
        self.transferred += bytes_amount
        if self._task is None:
            return
        self._progress.update(self._task, advance=bytes_amount)
        self._refresh()

    def stop(self) -> None:
        """Draw the final state and release the terminal."""
        if self._task is None:
            return
        self._refresh(force=True)
        self._progress.stop()
        self._task = None

    def _refresh(self, force: bool = False) -> None:
        now = time.monotonic()
        if not force and (now - self._last_refresh) < self.refresh_interval:
            return
        self._last_refresh = now
        self._progress.refresh()

    def __enter__(self) -> "ProgressSink":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.stop()
        return False
