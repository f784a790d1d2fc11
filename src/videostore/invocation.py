"""Command line invocation of the videostore client.

The base command line parser is provided by :py:func:`base_parser`, and is
extended with the operation subcommands by :py:func:`make_parser`. Refer to
``python -m videostore --help`` for usage.

The time range may be given explicitly (``--from``/``--to``) or as the most
recent ``--last`` seconds. Timestamps are passed to the server unchanged.
"""

__all__ = ("address_from_args", "base_parser", "configure_logging", "make_parser", "time_range_from_args")

import argparse
import functools
import logging
import os
import typing

from videostore.exceptions import ConfigurationError
from videostore.timestamps import time_range

ADDRESS_ENVIRONMENT_VARIABLE = "VIDEOSTORE_ADDRESS"


def configure_logging(level: str) -> logging.Handler:
    """Attach a console handler to the 'videostore' logger at *level*."""
    character_stream = logging.StreamHandler()
    logging.getLogger("videostore").setLevel(level)
    character_stream.setLevel(level)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    character_stream.setFormatter(formatter)
    logging.getLogger("videostore").addHandler(character_stream)
    return character_stream


@functools.cache
def base_parser(add_help=False):
    """Get the base videostore argument parser.

    Provides the connection and logging options.

    By default, the returned ArgumentParser is created with ``add_help=False``
    to avoid conflicts when used as a *parent* for a parser more local to the caller.

    See Also:
         https://docs.python.org/3/library/argparse.html#parents
    """
    from . import __version__ as _videostore_version

    _parser = argparse.ArgumentParser(add_help=add_help)

    _parser.add_argument("--version", action="version", version=f"videostore version {_videostore_version}")

    _parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Optionally configure console logging to the indicated level.",
    )

    _parser.add_argument(
        "--address",
        type=str,
        help=f"Server address as HOST:PORT. (Default: ${ADDRESS_ENVIRONMENT_VARIABLE})",
    )

    _parser.add_argument("--name", type=str, default="vs-1", help="Video store resource name. (Default: vs-1)")

    _parser.add_argument("--remote", type=str, default="", help="Remote through which the resource is reached.")

    _parser.add_argument("--timeout", type=float, help="Per-call deadline in seconds.")

    _parser.add_argument("--tls", action="store_true", help="Use a secure channel with default SSL credentials.")

    return _parser


def _range_parser():
    _parser = argparse.ArgumentParser(add_help=False)
    _parser.add_argument("--from", dest="from_", metavar="TIMESTAMP", help="Start of the range (YYYY-MM-DD_HH-MM-SS).")
    _parser.add_argument("--to", metavar="TIMESTAMP", help="End of the range (YYYY-MM-DD_HH-MM-SS).")
    _parser.add_argument("--last", type=float, metavar="SECONDS", help="Use the most recent SECONDS, ending now (UTC).")
    _parser.add_argument("--container", type=str, default="mp4", help="Output container format. (Default: mp4)")
    return _parser


def make_parser(prog: str = "videostore"):
    """Make the full command line parser, with one subcommand per operation."""
    _parser = argparse.ArgumentParser(
        prog=prog,
        description="Fetch, save, or stream ranges of stored video from a videostore service.",
        parents=[base_parser()],
    )
    commands = _parser.add_subparsers(dest="command", required=True)

    fetch = commands.add_parser("fetch", parents=[_range_parser()], help="Fetch a range in one response.")
    fetch.add_argument("-o", "--output", required=True, help="File to write the video to.")

    save = commands.add_parser("save", parents=[_range_parser()], help="Save a range to a file on the server.")
    save.add_argument("--metadata", type=str, default="", help="Metadata to attach to the saved file.")
    save.add_argument("--async", dest="async_", action="store_true", help="Return before the file is complete.")

    stream = commands.add_parser("stream", parents=[_range_parser()], help="Stream a range in chunks.")
    stream.add_argument("-o", "--output", required=True, help="File to write the video to.")

    return _parser


def time_range_from_args(args: argparse.Namespace) -> typing.Tuple[str, str]:
    """Get (from, to) from parsed arguments.

    Raises:
        ConfigurationError: unless exactly one of ``--last`` or the ``--from``/``--to`` pair is given.
    """
    explicit = args.from_ is not None or args.to is not None
    if args.last is not None:
        if explicit:
            raise ConfigurationError("--last cannot be combined with --from or --to.")
        return time_range(args.last)
    if args.from_ is None or args.to is None:
        raise ConfigurationError("Provide both --from and --to, or --last.")
    return args.from_, args.to


def address_from_args(args: argparse.Namespace) -> str:
    """Get the server address from ``--address`` or the environment.

    Raises:
        ConfigurationError: if no address is available.
    """
    address = args.address or os.environ.get(ADDRESS_ENVIRONMENT_VARIABLE)
    if not address:
        raise ConfigurationError(f"Provide --address or set {ADDRESS_ENVIRONMENT_VARIABLE}.")
    return address
