"""Configuration resolution for the S3 tester.

Every global flag can be given on the command line or through an
environment variable. The environment supplies the default value, so a
flag given on the command line always wins.

Environment Variables:
    S3_ENDPOINT      S3 host, without scheme or port
    S3_PORT          TCP port
    S3_ACCESS_KEY    access key id
    S3_SECRET_KEY    secret access key
    S3_BUCKET        target bucket
    S3_INSECURE      disable TLS when true
    S3_VERBOSE       debug output
    S3_VERY_VERBOSE  trace output

Example:
    S3_PORT=9000 S3_ACCESS_KEY=key S3_SECRET_KEY=secret \\
        s3-tester --endpoint minio.local --bucket test upload ./a.bin
"""

import argparse
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from s3_tester.models import ConnectionDescriptor, Verbosity


class ConfigError(Exception):
    """Raised when configuration is missing or malformed."""

    pass


# Values accepted for boolean environment variables
TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass(frozen=True)
class FlagSpec:
    """A global flag and the environment variable backing it."""

    name: str
    env: str
    type: type
    help: str
    aliases: tuple[str, ...] = ()

    @property
    def dest(self) -> str:
        return self.name.replace("-", "_")

    @property
    def option_strings(self) -> list[str]:
        return [f"-{alias}" for alias in self.aliases] + [f"--{self.name}"]


GLOBAL_FLAGS = [
    FlagSpec("verbose", "S3_VERBOSE", bool, "debug output", ("v",)),
    FlagSpec("very-verbose", "S3_VERY_VERBOSE", bool, "trace output", ("vv",)),
    FlagSpec("endpoint", "S3_ENDPOINT", str, "s3 endpoint host (no scheme, no port)", ("e",)),
    FlagSpec("port", "S3_PORT", int, "s3 port", ("p",)),
    FlagSpec("access-key", "S3_ACCESS_KEY", str, "s3 access key", ("a",)),
    FlagSpec("secret-key", "S3_SECRET_KEY", str, "s3 secret key", ("s",)),
    FlagSpec("bucket", "S3_BUCKET", str, "s3 bucket", ("b",)),
    FlagSpec("insecure", "S3_INSECURE", bool, "s3 insecure connection (plain HTTP)"),
]


def parse_bool(value: str, env: str) -> bool:
    """Parse a boolean environment value.

    Raises:
        ConfigError: If the value is not a recognised boolean.
    """
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean value '{value}' for {env}")


def env_default(flag: FlagSpec, environ: Optional[Mapping[str, str]] = None) -> Any:
    """Read the default value of a flag from its environment variable.

    Args:
        flag: Flag to resolve
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The typed value, or the type's zero value when the variable is unset

    Raises:
        ConfigError: If the variable holds a value of the wrong type.
    """
    if environ is None:
        environ = os.environ

    raw = environ.get(flag.env, "")
    if flag.type is bool:
        return parse_bool(raw, flag.env) if raw else False
    if flag.type is int:
        if not raw:
            return 0
        try:
            return int(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid integer value '{raw}' for {flag.env}") from e
    return raw


def add_global_flags(
    parser: argparse.ArgumentParser,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Register all global flags on a parser, with environment defaults."""
    for flag in GLOBAL_FLAGS:
        default = env_default(flag, environ)
        help_text = f"{flag.help} [${flag.env}]"
        if flag.type is bool:
            parser.add_argument(
                *flag.option_strings,
                dest=flag.dest,
                action="store_true",
                default=default,
                help=help_text,
            )
        else:
            parser.add_argument(
                *flag.option_strings,
                dest=flag.dest,
                type=flag.type,
                default=default,
                metavar=flag.dest.upper(),
                help=help_text,
            )


def resolve_descriptor(args: argparse.Namespace) -> ConnectionDescriptor:
    """Build the connection descriptor from parsed arguments.

    Missing values are kept empty; they are rejected when a client is
    built. A port of 0 means unset.
    """
    port = args.port or None
    return ConnectionDescriptor(
        endpoint=args.endpoint or "",
        port=port,
        access_key=args.access_key or "",
        secret_key=args.secret_key or "",
        bucket=args.bucket or "",
        secure=not args.insecure,
    )


def resolve_verbosity(args: argparse.Namespace) -> Verbosity:
    """Pick the verbosity, very-verbose taking precedence over verbose."""
    if args.very_verbose:
        return Verbosity.TRACE
    if args.verbose:
        return Verbosity.DEBUG
    return Verbosity.INFO
