import sys

from s3_tester.cli import main

sys.exit(main())
