"""Tests for the single-line solver."""

import pytest

from nonogram.grid.cell_grid import Grid
from nonogram.grid.parser import grid_from_rows, grid_to_rows
from nonogram.line.region import Region
from nonogram.types import CellState, Dimensions


def make_region(row_text, clue):
    """1行だけの盤面と、その行の Region を作る。"""
    grid = grid_from_rows([row_text])
    region = Region()
    region.initialize(grid.line(0, is_column=False), clue)
    return grid, region


@pytest.mark.parametrize(
    "start, clue, expected",
    [
        ("?????", "3", "??#??"),
        ("???", "1 1", "#.#"),
        ("????", "0", "...."),
        ("????", "", "...."),
        ("#????", "2", "##..."),
        ("????", "4", "####"),
        ("??.??", "2", "??.??"),
        ("?#???#?", "3 2", "?##??#?"),
    ],
)
def test_solve_line(start, clue, expected):
    grid, region = make_region(start, clue)
    region.solve()
    assert not region.in_error
    assert grid_to_rows(grid) == [expected]


def test_solve_reports_change():
    grid, region = make_region("???", "3")
    assert region.solve() is True
    assert region.solve() is False
    assert region.is_completed


def test_contradiction_sets_error():
    grid, region = make_region("?.?", "2")
    assert region.solve() is False
    assert region.in_error
    assert not region.is_completed


def test_filled_cell_outside_any_block_is_a_contradiction():
    grid, region = make_region("#?#?#", "1 1")
    region.solve()
    assert region.in_error


def test_clue_too_long_is_an_error_from_the_start():
    grid, region = make_region("?????", "3 2")
    assert region.in_error
    assert region.block_total == 5


def test_reset_clears_error_flag():
    grid, region = make_region("?.?", "2")
    region.solve()
    assert region.in_error

    grid.set(0, 1, CellState.UNKNOWN)
    region.reset_to_initial_state()
    assert not region.in_error
    assert region.solve() is True
    assert grid_to_rows(grid) == ["?#?"]


def test_known_cells_are_never_rewritten():
    grid, region = make_region("#.???", "1 2")
    before = grid.to_array()
    region.solve()
    after = grid.to_array()
    known = before != CellState.UNKNOWN
    assert (after[known] == before[known]).all()
    assert grid_to_rows(grid) == ["#.?#?"]


def test_column_region_writes_only_its_column():
    grid = Grid(Dimensions(3, 2))
    region = Region()
    region.initialize(grid.line(1, is_column=True), "3")
    region.solve()
    assert grid_to_rows(grid) == ["?#", "?#", "?#"]
    assert region.is_column and region.index == 1
    assert region.get_cell_state(2) is CellState.FILLED


def test_completed_line_must_match_clue():
    grid, region = make_region("#.#", "1 1")
    assert region.is_completed

    grid, region = make_region("##.", "1 1")
    assert not region.is_completed
