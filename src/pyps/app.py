"""pyps - Command line entry point."""

import argparse
import logging
import sys

from pyps.collector import DEFAULT_PROCFS_PATH, ProcessCollector
from pyps.errors import EmptyReportError, PypsError, UsageError
from pyps.report import ProcessReport, SortKey

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str) -> None:
        raise UsageError(message)


def expand_short_flags(argv: list[str]) -> list[str]:
    """
    Split clustered short flags one letter at a time, as getopt does.

    '-zx' becomes '-z -x' so an unknown letter is reported on its own. The
    value of -d is attached to it ('-d PATH' and '-zdPATH' both yield
    '-dPATH'), so a path starting with '-' is still read as the directory.
    """
    expanded: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            expanded.append(arg)
            expanded.extend(args)
            break
        if not arg.startswith("-") or arg.startswith("--") or arg == "-":
            expanded.append(arg)
            continue
        for position, flag in enumerate(arg[1:], start=1):
            if flag != "d":
                expanded.append(f"-{flag}")
                continue
            value = arg[position + 1 :] or next(args, "")
            expanded.append(f"-d{value}")
            break
    return expanded


def build_parser() -> ArgumentParser:
    """Build the argument parser for the pyps command."""
    parser = ArgumentParser(
        prog="pyps",
        description="Display statistics of the processes found in a proc directory.",
    )
    parser.add_argument(
        "-d",
        dest="directory",
        metavar="PATH",
        default=DEFAULT_PROCFS_PATH,
        help=f"directory containing proc entries (default: {DEFAULT_PROCFS_PATH})",
    )
    parser.add_argument(
        "-p",
        dest="sort_key",
        action="store_const",
        const=SortKey.PID,
        default=SortKey.PID,
        help="sort proc entries by pid (default)",
    )
    parser.add_argument(
        "-c",
        dest="sort_key",
        action="store_const",
        const=SortKey.CMD,
        help="sort proc entries by command lexicographically",
    )
    parser.add_argument(
        "-z",
        dest="zombies_only",
        action="store_true",
        help="display only proc entries in the zombie state",
    )
    parser.add_argument(
        "-s",
        "--skip-errors",
        action="store_true",
        help="skip unreadable or malformed stat files instead of failing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress to stderr (-vv for debug output)",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by the -v count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the pyps command.

    Returns the exit status of a run. Like any argparse program, -h prints
    help and leaves through SystemExit(0) instead of returning.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    try:
        args, unknown = parser.parse_known_args(expand_short_flags(argv))
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if unknown:
        parser.print_usage(sys.stderr)

    configure_logging(args.verbose)

    collector = ProcessCollector(args.directory, skip_errors=args.skip_errors)
    report = ProcessReport(sort_key=args.sort_key, zombies_only=args.zombies_only)

    try:
        report.run(collector)
    except MemoryError:
        print("Error: not enough memory to collect process statistics", file=sys.stderr)
        return 1
    except PypsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        # An empty report prints nothing but does not fail the run
        return 0 if isinstance(exc, EmptyReportError) else 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
