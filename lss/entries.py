"""
Reading directory entries from the local filesystem and formatting them for
display.
"""

from typing import Iterable, NamedTuple, Optional

import os
import stat

from enum import Enum
from pathlib import Path

from lss.calendar_clock import Timestamp
from lss.identity import IdentityResolver, IdentityLookupError
from lss.terminal import Color


class FileType(Enum):
    file = "file"
    executable = "executable"
    dir = "dir"
    symlink = "symlink"
    broken_symlink = "broken_symlink"
    other = "other"


class Style(NamedTuple):
    color: Color
    suffix: Optional[str]


STYLES = {
    FileType.file: Style(Color.white, None),
    FileType.executable: Style(Color.green, None),
    FileType.dir: Style(Color.blue, "/"),
    FileType.symlink: Style(Color.aqua, "@"),
    FileType.broken_symlink: Style(Color.red, "!"),
    FileType.other: Style(Color.white, None),
}


class Entry(NamedTuple):
    name: str
    path: Path
    file_type: FileType
    # Only set for (non-broken) symlinks
    link_target: Optional[str]
    modified: Timestamp
    size: int
    owner: str
    group: str
    mode: str


# Type characters used in the first column of the mode string
FILE_TYPE_CHARS = {
    stat.S_IFDIR: "d",
    stat.S_IFREG: "-",
    stat.S_IFLNK: "l",
    stat.S_IFIFO: "p",
    stat.S_IFCHR: "c",
    stat.S_IFBLK: "b",
    stat.S_IFSOCK: "s",
}


def mode_string(st_mode: int) -> str:
    """
    Format a file's mode bits in the familiar ``drwxr-xr-x`` style, including
    the setuid (s/S), setgid (s/S) and sticky (t/T) bits.
    """
    out = FILE_TYPE_CHARS.get(stat.S_IFMT(st_mode), "?")

    for read, write, execute, special, special_char in [
        (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR, stat.S_ISUID, "s"),
        (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP, stat.S_ISGID, "s"),
        (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH, stat.S_ISVTX, "t"),
    ]:
        out += "r" if st_mode & read else "-"
        out += "w" if st_mode & write else "-"
        if st_mode & special:
            # Lower case when also executable, upper case otherwise
            out += special_char if st_mode & execute else special_char.upper()
        else:
            out += "x" if st_mode & execute else "-"

    return out


def human_readable_size(size: int) -> str:
    """
    Format a size in bytes using B, K, M or G suffixes (powers of 1024) with up
    to two decimal places, e.g. "1.5K" or "1.27M". Trailing zero decimals are
    omitted.
    """
    value = float(size)
    suffix = "B"
    for next_suffix in "KMG":
        if value > 1024:
            value /= 1024
            suffix = next_suffix

    # Round half away from zero to two decimal places
    hundredths = int(value * 100 + 0.5)

    if hundredths % 100 == 0:
        return f"{hundredths // 100}{suffix}"
    elif hundredths % 10 == 0:
        return f"{hundredths / 100:.1f}{suffix}"
    else:
        return f"{hundredths / 100:.2f}{suffix}"


def display_name(name: str) -> str:
    """
    Make a filename safe to print: bytes which weren't valid UTF-8 (and which
    Python has therefore surrogate-escaped) are replaced with U+FFFD.
    """
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def get_file_type(
    path: Path,
    st: os.stat_result,
) -> tuple[FileType, Optional[str]]:
    """
    Classify a file given its (non symlink-following) stat result. Returns the
    type and, for working symlinks, the link target.
    """
    if stat.S_ISDIR(st.st_mode):
        return (FileType.dir, None)
    elif stat.S_ISLNK(st.st_mode):
        try:
            target = os.readlink(path)
        except OSError:
            return (FileType.broken_symlink, None)
        if not path.exists():  # Dangling
            return (FileType.broken_symlink, None)
        return (FileType.symlink, display_name(target))
    elif stat.S_ISREG(st.st_mode):
        if st.st_mode & 0o111:
            return (FileType.executable, None)
        else:
            return (FileType.file, None)
    else:
        return (FileType.other, None)


def get_owner_and_group(
    st: os.stat_result,
    resolver: IdentityResolver,
) -> tuple[str, str]:
    """
    Look up the owner and group names for a file, falling back on the numeric
    IDs for IDs with no name.
    """
    try:
        owner = resolver.username(st.st_uid)
    except IdentityLookupError:
        owner = str(st.st_uid)

    try:
        group = resolver.groupname(st.st_gid)
    except IdentityLookupError:
        group = str(st.st_gid)

    return (owner, group)


def read_entry(
    path: Path,
    resolver: IdentityResolver,
    use_created: bool = False,
) -> Entry:
    """
    Read the metadata for a single file. Symlinks are not followed.

    When use_created is True, the file's creation time is reported in place of
    its modification time (raising OSError if unavailable).
    """
    st = os.lstat(path)
    file_type, link_target = get_file_type(path, st)
    owner, group = get_owner_and_group(st, resolver)

    if use_created:
        modified = Timestamp.from_created(st)
    else:
        modified = Timestamp.from_modified(st)

    return Entry(
        name=display_name(path.name),
        path=path,
        file_type=file_type,
        link_target=link_target,
        modified=modified,
        size=st.st_size,
        owner=owner,
        group=group,
        mode=mode_string(st.st_mode),
    )


def read_dir(
    path: Path,
    resolver: IdentityResolver,
    use_created: bool = False,
) -> list[Entry]:
    """
    Enumerate a directory, returning an :py:class:`Entry` for each file in it
    (in no particular order). The '.' and '..' entries are not included.

    Raises OSError if the directory (or any entry in it) cannot be read.
    """
    return [
        read_entry(entry, resolver, use_created)
        for entry in Path(path).iterdir()
    ]


def sort_entries(entries: Iterable[Entry], by_size: bool = False) -> list[Entry]:
    """
    Sort entries by name or, when by_size is True, in increasing order of
    size (with name order preserved amongst equally sized files).
    """
    out = sorted(entries, key=lambda entry: entry.name)
    if by_size:
        out.sort(key=lambda entry: entry.size)
    return out


def filter_hidden(entries: Iterable[Entry], show_all: bool = False) -> list[Entry]:
    """Remove dot-files unless show_all is True."""
    return [entry for entry in entries if show_all or not entry.name.startswith(".")]


class FieldWidths(NamedTuple):
    """Column widths for the fields of a long listing."""

    size: int = 0
    hsize: int = 0
    owner: int = 0
    group: int = 0

    @classmethod
    def of(cls, entries: Iterable[Entry]) -> "FieldWidths":
        widths = cls()
        for entry in entries:
            widths = cls(
                size=max(widths.size, len(str(entry.size))),
                hsize=max(widths.hsize, len(human_readable_size(entry.size))),
                owner=max(widths.owner, len(entry.owner)),
                group=max(widths.group, len(entry.group)),
            )
        return widths


def styled_name(entry: Entry, colour: bool = True, suffix: bool = True) -> str:
    """
    The entry's name, coloured according to its type (if colour is True) and
    followed by a type indicator suffix (e.g. '/' for directories) if suffix
    is True.
    """
    style = STYLES[entry.file_type]
    name = style.color.wrap(entry.name) if colour else entry.name
    if suffix and style.suffix is not None:
        name += style.suffix
    return name


def short_text(entry: Entry, colour: bool = True) -> str:
    return styled_name(entry, colour)


def long_line(
    entry: Entry,
    widths: FieldWidths,
    humanize: bool = False,
    colour: bool = True,
) -> str:
    """
    Format an entry as a line of a long listing, e.g.::

        -rw-r--r-- alice staff 1.5K Jan  5 09:03 notes.txt
    """
    if humanize:
        size = human_readable_size(entry.size)
        size_width = widths.hsize
    else:
        size = str(entry.size)
        size_width = widths.size

    if entry.file_type == FileType.symlink:
        name = f"{styled_name(entry, colour, suffix=False)} -> {entry.link_target}"
    else:
        name = styled_name(entry, colour)

    return (
        f"{entry.mode} "
        f"{entry.owner:>{widths.owner}} "
        f"{entry.group:>{widths.group}} "
        f"{size:>{size_width}} "
        f"{entry.modified.format()} "
        f"{name}"
    )
