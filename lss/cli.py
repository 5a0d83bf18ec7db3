"""
List the contents of a directory, with colour-coded names arranged into
columns to fit the terminal, or (with --long) one file per line along with
its permissions, owner, group, size and modification time.
"""

from typing import Optional

import os
import sys

from argparse import ArgumentParser, Namespace
from pathlib import Path

from lss.calendar_clock import CreationTimeUnavailableError
from lss.column_layout import format_with_terminal_width
from lss.entries import (
    Entry,
    FieldWidths,
    filter_hidden,
    long_line,
    read_dir,
    short_text,
    sort_entries,
)
from lss.identity import IdentityResolver
from lss.terminal import DEFAULT_COLUMNS, stream_is_terminal, terminal_columns


def add_arguments(parser: ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="""
            The directory to list. Defaults to the current directory.
        """,
    )
    parser.add_argument(
        "--humanize",
        "-H",
        action="store_true",
        help="""
            If given, show sizes in human readable units (e.g. 1.5K, 23M) in
            the long listing.
        """,
    )
    parser.add_argument(
        "--all",
        "-a",
        action="store_true",
        help="""
            If given, include entries whose names begin with a '.'.
        """,
    )
    parser.add_argument(
        "--long",
        "-l",
        action="store_true",
        help="""
            If given, show one file per line with its permissions, owner,
            group, size and modification time.
        """,
    )
    parser.add_argument(
        "--size",
        "-S",
        dest="size_sort",
        action="store_true",
        help="""
            If given, sort by file size (smallest first) rather than by name.
        """,
    )
    parser.add_argument(
        "--created",
        "-U",
        action="store_true",
        help="""
            If given, show file creation times rather than modification times
            (where the platform records them).
        """,
    )
    parser.add_argument(
        "--width",
        "-w",
        default=os.getenv("LSS_WIDTH"),
        help="""
            The terminal width (in columns) to fit the listing to. Defaults to
            the value of the LSS_WIDTH environment variable, if set, or the
            width of the terminal otherwise (or 80 if that is unknown).
        """,
    )
    parser.add_argument(
        "--color",
        "--colour",
        choices=["auto", "always", "never"],
        default=os.getenv("LSS_COLOR", "auto"),
        help="""
            Whether to colour file names by type. 'auto' (the default unless
            the LSS_COLOR environment variable says otherwise) colours names
            only when writing to a terminal.
        """,
    )


def parse_width(value: Optional[str]) -> Optional[int]:
    """
    Parse a --width value, returning None if not given. Raises ValueError
    for anything other than a non-negative integer.
    """
    if value is None or value == "":
        return None
    width = int(value)
    if width < 0:
        raise ValueError(f"width must not be negative: {width}")
    return width


def use_colour(setting: str) -> bool:
    """
    Decide whether to colour output given a --color setting. Raises
    ValueError for unknown settings (which argparse does not catch when they
    come from LSS_COLOR).
    """
    if setting == "always":
        return True
    elif setting == "never":
        return False
    elif setting == "auto":
        return stream_is_terminal(sys.stdout)
    else:
        raise ValueError(f"unknown colour setting: {setting}")


def read_entries(
    path: Path,
    resolver: IdentityResolver,
    created: bool,
) -> list[Entry]:
    """
    Read a directory's entries, falling back on modification times (with a
    warning) if creation times were requested but aren't available.
    """
    if created:
        try:
            return read_dir(path, resolver, use_created=True)
        except CreationTimeUnavailableError:
            print(
                "warning: creation times not available, showing modification times",
                file=sys.stderr,
            )
    return read_dir(path, resolver)


def list_directory(args: Namespace) -> None:
    try:
        width = parse_width(args.width)
    except ValueError:
        print(f"error: invalid width: {args.width!r}", file=sys.stderr)
        sys.exit(1)
    if width is None:
        width = terminal_columns(sys.stdout) or DEFAULT_COLUMNS

    try:
        colour = use_colour(args.color)
    except ValueError:
        print(f"error: invalid colour setting: {args.color!r}", file=sys.stderr)
        sys.exit(1)

    resolver = IdentityResolver()

    try:
        entries = read_entries(Path(args.path), resolver, args.created)
    except OSError as exc:
        print(
            f"error: cannot access {args.path}: {exc.strerror or exc}",
            file=sys.stderr,
        )
        sys.exit(1)

    entries = sort_entries(filter_hidden(entries, args.all), by_size=args.size_sort)
    if not entries:
        return

    if args.long:
        widths = FieldWidths.of(entries)
        for entry in entries:
            print(long_line(entry, widths, args.humanize, colour))
    else:
        print(
            format_with_terminal_width(
                (short_text(entry, colour) for entry in entries),
                width,
            )
        )


def main(argv: Optional[list[str]] = None) -> None:
    parser = ArgumentParser(description=__doc__)
    add_arguments(parser)
    args = parser.parse_args(argv)
    list_directory(args)


if __name__ == "__main__":
    main()
