"""Command-line interface for the S3 tester.

Usage:
    s3-tester [global-flags] upload <path>
    s3-tester [global-flags] remove <object-name>
"""

import argparse
import sys
from typing import Callable, Optional

from s3_tester import __version__, log
from s3_tester.actions import ActionError, remove, upload
from s3_tester.config import (
    ConfigError,
    add_global_flags,
    resolve_descriptor,
    resolve_verbosity,
)
from s3_tester.s3_client import ClientBuildError

FATAL_ERRORS = (ConfigError, ActionError, ClientBuildError)


def run_upload(args: argparse.Namespace) -> int:
    """Upload the file named on the command line.

    A failed PUT is reported but still exits 0.
    """
    upload(resolve_descriptor(args), args.args)
    return 0


def run_remove(args: argparse.Namespace) -> int:
    """Remove the object named on the command line."""
    remove(resolve_descriptor(args), args.args)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Global flags take their defaults from the ``S3_*`` environment
    variables, so the environment is read here.

    Raises:
        ConfigError: If an environment variable holds an invalid value.
    """
    parser = argparse.ArgumentParser(
        prog="s3-tester",
        description="S3 Tester: upload or remove a single object on an S3-compatible endpoint",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    add_global_flags(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    upload_parser = subparsers.add_parser(
        "upload",
        aliases=["u"],
        help="Upload a file to the specified S3 bucket",
    )
    upload_parser.add_argument("args", nargs="*", metavar="PATH", help="file to upload")
    upload_parser.set_defaults(func=run_upload)

    remove_parser = subparsers.add_parser(
        "remove",
        aliases=["r"],
        help="Remove a file from the specified S3 bucket",
    )
    remove_parser.add_argument("args", nargs="*", metavar="OBJECT", help="object name to remove")
    remove_parser.set_defaults(func=run_remove)

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    return build_parser().parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 on success. Fatal errors exit 1 through SystemExit,
        usage errors exit 2.
    """
    try:
        args = parse_args(argv)
    except ConfigError as e:
        log.setup_output()
        log.fatal(str(e))

    log.init_logger(resolve_verbosity(args))

    action: Callable[[argparse.Namespace], int] = args.func
    try:
        return action(args)
    except FATAL_ERRORS as e:
        log.fatal(str(e), error=e.__cause__)


if __name__ == "__main__":
    sys.exit(main())
