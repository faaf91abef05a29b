"""
S3 Tester.

Exercises an S3-compatible endpoint by uploading a single file under a
fresh object name (reporting elapsed time and throughput) or removing a
named object.
"""

__version__ = "1.0.0"

from s3_tester.cli import main

__all__ = ["main", "__version__"]
