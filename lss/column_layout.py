"""
Multi-column layout of directory listings, in the style of traditional
``ls`` output.

Given a list of (already formatted) names and the width of the terminal,
:py:func:`layout` decides how to arrange them:

* If everything fits on one line (separated by single spaces) a
  :py:class:`Joined` arrangement is used.
* Otherwise names are arranged into a :py:class:`Grid`, filled column-major
  (i.e. down each column, then across), using the smallest number of rows
  whose columns (separated by two spaces) fit within the terminal.

Widths are *visible* widths which the caller supplies alongside each name,
so names may contain ANSI colour escapes without throwing off the layout.

:py:func:`render` turns an arrangement back into text.
"""

from typing import Iterable, NamedTuple, Sequence, Union

from lss.terminal import visible_width


# Separators between entries in each arrangement
JOINED_SEPARATOR = " "
GRID_GAP = 2


class Name(NamedTuple):
    text: str
    width: int


class Joined(NamedTuple):
    """All names on a single line, separated by single spaces."""


class Grid(NamedTuple):
    """
    Names arranged column-major into the given number of rows. Name ``i`` is
    placed in row ``i % rows`` and column ``i // rows``.
    """

    rows: int
    column_widths: list[int]

    @property
    def columns(self) -> int:
        return len(self.column_widths)

    @property
    def total_width(self) -> int:
        return grid_width(self.column_widths)


Arrangement = Union[Joined, Grid]


def grid_width(column_widths: Sequence[int], gap: int = GRID_GAP) -> int:
    """Total width of a row of columns, including the gaps between them."""
    if not column_widths:
        return 0
    return sum(column_widths) + (len(column_widths) - 1) * gap


def column_widths_for(widths: Sequence[int], rows: int) -> list[int]:
    """
    For a list of name widths laid out column-major in the given number of
    rows, return the width of each column.
    """
    return [max(widths[start : start + rows]) for start in range(0, len(widths), rows)]


def layout(names: Sequence[Name], terminal_width: int) -> Arrangement:
    """
    Choose an arrangement for the supplied names.

    Names which fit on a single line are always joined onto it, even when a
    grid would also fit. Otherwise every row count from 1 upwards is tried in
    turn and the first whose grid fits is used. If none fits (e.g. because a
    single name is wider than the terminal) one name per row is used.
    """
    if terminal_width < 0:
        raise ValueError(f"terminal width must not be negative: {terminal_width}")

    count = len(names)
    widths = [name.width for name in names]

    if count == 0 or sum(widths) + (count - 1) <= terminal_width:
        return Joined()

    # NB: Total width does not reliably shrink as rows grows (columns can get
    # wider as they get longer) so every candidate is checked in order.
    for rows in range(1, count + 1):
        column_widths = column_widths_for(widths, rows)
        if grid_width(column_widths) <= terminal_width:
            return Grid(rows, column_widths)

    return Grid(count, column_widths_for(widths, count))


def render(names: Sequence[Name], arrangement: Arrangement) -> str:
    """
    Render names according to an arrangement produced by :py:func:`layout`.
    The result has no trailing newline.
    """
    if isinstance(arrangement, Joined):
        return JOINED_SEPARATOR.join(name.text for name in names)

    rows = arrangement.rows
    lines = []
    for row in range(rows):
        cells = []
        for column, width in enumerate(arrangement.column_widths):
            idx = column * rows + row
            if idx < len(names):
                cells.append((names[idx], width))

        # The last cell in each row is left unpadded
        line = ""
        for i, (name, width) in enumerate(cells):
            line += name.text
            if i != len(cells) - 1:
                line += " " * (width - name.width + GRID_GAP)
        lines.append(line.rstrip())

    return "\n".join(lines)


def format_with_terminal_width(texts: Iterable[str], terminal_width: int) -> str:
    """
    Lay out and render a list of display strings, measuring each one's
    visible width (ignoring ANSI escapes).
    """
    names = [Name(text, visible_width(text)) for text in texts]
    return render(names, layout(names, terminal_width))
