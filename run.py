#!/usr/bin/env python3
"""
S3 Tester

Upload a file to an S3-compatible endpoint and report throughput, or
remove an object.

Usage:
    python run.py -e minio.local -p 9000 -b test upload ./a.bin
    python run.py -e minio.local -p 9000 -b test remove <object-name>
    S3_ENDPOINT=minio.local S3_PORT=9000 python run.py u ./a.bin
"""

import sys
from s3_tester.cli import main

if __name__ == "__main__":
    sys.exit(main())
