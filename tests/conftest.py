"""Shared fixtures."""

import pytest

from s3_tester import log
from s3_tester.config import GLOBAL_FLAGS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run every test without S3_* variables from the outer environment."""
    for flag in GLOBAL_FLAGS:
        monkeypatch.delenv(flag.env, raising=False)


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore the process-wide logger to info level after each test."""
    yield
    log.setup_output()
    log.apply_level("info")
