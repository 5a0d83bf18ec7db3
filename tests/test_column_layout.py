import pytest

from lss.column_layout import (
    Grid,
    Joined,
    Name,
    column_widths_for,
    format_with_terminal_width,
    grid_width,
    layout,
    render,
)
from lss.terminal import Color


def names_of(*texts: str) -> list[Name]:
    return [Name(text, len(text)) for text in texts]


class TestHelpers:
    def test_column_widths_for(self) -> None:
        widths = [1, 2, 3, 4]
        assert column_widths_for(widths, 1) == [1, 2, 3, 4]
        assert column_widths_for(widths, 2) == [2, 4]
        assert column_widths_for(widths, 3) == [3, 4]
        assert column_widths_for(widths, 4) == [4]

    def test_grid_width(self) -> None:
        assert grid_width([]) == 0
        assert grid_width([5]) == 5
        assert grid_width([3, 4]) == 9
        assert grid_width([1, 1, 1], gap=1) == 5

    def test_grid_properties(self) -> None:
        grid = Grid(2, [3, 4])
        assert grid.columns == 2
        assert grid.total_width == 9


class TestLayout:
    def test_empty(self) -> None:
        assert layout([], 80) == Joined()
        assert layout([], 0) == Joined()

    def test_fits_on_one_line(self) -> None:
        # 1 + 2 + 3 + 4 + 3 separating spaces
        assert layout(names_of("a", "bb", "ccc", "dddd"), 13) == Joined()

    def test_one_line_preferred_over_grid(self) -> None:
        # A two row grid would fit too, but a single line always wins
        names = names_of("aaaa", "b", "c", "dddd")
        assert layout(names, 80) == Joined()

    def test_one_too_wide_for_one_line(self) -> None:
        assert layout(names_of("a", "bb", "ccc", "dddd"), 12) == Grid(2, [2, 4])

    def test_narrow(self) -> None:
        # rows=1: 1+2+3+4 + 3*2 = 16
        # rows=2: [2, 4] -> 8
        # rows=3: [3, 4] -> 9
        # rows=4: [4] -> 4
        names = names_of("a", "bb", "ccc", "dddd")
        assert layout(names, 6) == Grid(4, [4])
        assert layout(names, 8) == Grid(2, [2, 4])
        assert layout(names, 9) == Grid(2, [2, 4])

    def test_total_width_not_monotonic(self) -> None:
        # rows=2: [1, 9, 1] -> 15
        # rows=3: [9, 9] -> 20
        # rows=4: [9, 1] -> 12
        names = names_of("a", "b", "c" * 9, "d" * 9, "e", "f")
        assert layout(names, 15) == Grid(2, [1, 9, 1])
        assert layout(names, 14) == Grid(4, [9, 1])
        assert layout(names, 12) == Grid(4, [9, 1])
        assert layout(names, 11) == Grid(6, [9])

    def test_single_name_too_wide(self) -> None:
        assert layout(names_of("x" * 50), 10) == Grid(1, [50])

    def test_all_names_too_wide(self) -> None:
        assert layout(names_of("x" * 50, "y" * 40), 10) == Grid(2, [50])

    def test_zero_width(self) -> None:
        assert layout(names_of("a", "b", "c"), 0) == Grid(3, [1])

    def test_negative_width(self) -> None:
        with pytest.raises(ValueError):
            layout(names_of("a"), -1)

    def test_uses_supplied_widths(self) -> None:
        # Text lengths disagree with supplied widths: the widths win
        names = [Name("\033[31mred\033[0m", 3), Name("blue", 4)]
        assert layout(names, 8) == Joined()
        assert layout(names, 7) == Grid(2, [4])

    def test_deterministic(self) -> None:
        names = names_of(*(f"file{i}" * (i % 4 + 1) for i in range(40)))
        assert layout(names, 60) == layout(names, 60)
        assert render(names, layout(names, 60)) == render(names, layout(names, 60))

    @pytest.mark.parametrize(
        "widths, terminal_width",
        [
            ([3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5], 20),
            ([3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5], 12),
            ([10] * 30, 80),
            ([1, 20, 1, 20, 1, 20, 1], 30),
            ([7, 7, 7, 30, 7, 7, 7], 40),
            (list(range(1, 26)), 50),
        ],
    )
    def test_fewest_rows_that_fit(self, widths: list[int], terminal_width: int) -> None:
        names = [Name("x" * width, width) for width in widths]
        grid = layout(names, terminal_width)
        assert isinstance(grid, Grid)

        assert grid.rows >= 1
        assert grid.rows <= len(names)
        assert grid.columns == -(-len(names) // grid.rows)
        assert grid.column_widths == column_widths_for(widths, grid.rows)
        assert grid.total_width <= terminal_width

        for rows in range(1, grid.rows):
            assert grid_width(column_widths_for(widths, rows)) > terminal_width


class TestRender:
    def test_empty(self) -> None:
        assert render([], Joined()) == ""
        assert format_with_terminal_width([], 80) == ""

    def test_joined(self) -> None:
        names = names_of("a", "bb", "ccc")
        assert render(names, Joined()) == "a bb ccc"

    def test_grid(self) -> None:
        names = names_of("a", "bb", "ccc", "dddd")
        assert render(names, Grid(2, [2, 4])) == "a   ccc\nbb  dddd"

    def test_one_per_row(self) -> None:
        names = names_of("a", "bb", "ccc", "dddd")
        assert render(names, Grid(4, [4])) == "a\nbb\nccc\ndddd"

    def test_ragged_last_column(self) -> None:
        names = names_of("a", "b", "c" * 9, "d" * 9, "e", "f")
        assert render(names, Grid(4, [9, 1])) == (
            "a          e\n"
            "b          f\n"
            "ccccccccc\n"
            "ddddddddd"
        )

    def test_no_trailing_whitespace(self) -> None:
        names = names_of("a", "b", "c" * 9, "d" * 9, "e", "f")
        assert render(names, Grid(2, [1, 9, 1])) == (
            "a  ccccccccc  e\n"
            "b  ddddddddd  f"
        )
        for line in render(names, Grid(4, [9, 1])).splitlines():
            assert line == line.rstrip()

    def test_single_wide_name_unpadded(self) -> None:
        assert format_with_terminal_width(["x" * 50], 10) == "x" * 50


class TestFormatWithTerminalWidth:
    def test_joined(self) -> None:
        assert format_with_terminal_width(["a", "bb", "ccc", "dddd"], 80) == "a bb ccc dddd"

    def test_grid(self) -> None:
        assert format_with_terminal_width(["a", "bb", "ccc", "dddd"], 8) == (
            "a   ccc\n"
            "bb  dddd"
        )

    def test_escape_sequences_not_counted(self) -> None:
        ab = Color.blue.wrap("ab")
        # Visible widths are 2, 1, 2, 1; a naive byte count would give the
        # first name a width of 11 and need a column each
        assert format_with_terminal_width([ab, "c", "dd", "e"], 6) == (
            f"{ab}  dd\n"
            "c   e"
        )

    def test_escape_sequences_fit_on_one_line(self) -> None:
        names = [Color.blue.wrap("dir") + "/", Color.green.wrap("run.sh")]
        # "dir/ run.sh" is 11 columns wide
        assert format_with_terminal_width(names, 11) == " ".join(names)
