"""Tests for the single-depth guessing search (advanced pass)."""

import itertools

import numpy as np
import pytest

from nonogram.config import FAILED_PASSES_CODE, MAX_PASSES, UNIQUE_GUESS_WEIGHT
from nonogram.engine.propagation import simple_pass
from nonogram.engine.search import GuessContext, make_guess
from nonogram.engine.solver import Solver
from nonogram.engine.spiral import SpiralScanner
from nonogram.grid.cell_grid import Grid
from nonogram.grid.parser import clues_from_grid, grid_from_rows, grid_to_rows, parse_clue, runs_of
from nonogram.types import CellState, SolveStatus


def line_options(blocks, n):
    """長さ n の行で、手がかり blocks を満たす全パターン。"""
    return [
        bits for bits in itertools.product((0, 1), repeat=n)
        if runs_of([CellState.FILLED if b else CellState.EMPTY for b in bits]) == blocks
    ]


def count_solutions(row_clues, col_clues, limit=2):
    """総当たりで解の数を数える（limit 個見つかったら打ち切り）。"""
    n_cols = len(col_clues)
    options = [line_options(parse_clue(c), n_cols) for c in row_clues]
    col_blocks = [parse_clue(c) for c in col_clues]

    found = 0
    for rows in itertools.product(*options):
        ok = all(
            runs_of([CellState.FILLED if row[c] else CellState.EMPTY for row in rows]) == col_blocks[c]
            for c in range(n_cols)
        )
        if ok:
            found += 1
            if found >= limit:
                break
    return found


def satisfies(grid, row_clues, col_clues):
    rows, cols = clues_from_grid(grid)
    return (
        grid.count(CellState.UNKNOWN) == 0
        and [parse_clue(c) for c in rows] == [parse_clue(c) for c in row_clues]
        and [parse_clue(c) for c in cols] == [parse_clue(c) for c in col_clues]
    )


def random_puzzle(seed, rows, cols):
    rng = np.random.default_rng(seed)
    pattern = rng.integers(0, 2, size=(rows, cols))
    grid = Grid.from_array(np.where(pattern == 1, CellState.FILLED, CellState.EMPTY))
    row_clues, col_clues = clues_from_grid(grid)
    return row_clues, col_clues, grid


def test_ambiguous_puzzle_fails_when_unique_only(ambiguous_clues):
    rows, cols = ambiguous_clues
    solver = Solver(2, 2)
    assert solver.initialize(rows, cols)

    result = solver.solve(use_advanced=True, unique_only=True)
    assert result.status is SolveStatus.AMBIGUOUS
    assert result.code < 0


def test_ambiguous_puzzle_scores_when_ambiguity_allowed(ambiguous_clues):
    rows, cols = ambiguous_clues
    solver = Solver(2, 2)
    assert solver.initialize(rows, cols)

    result = solver.solve(use_advanced=True, unique_only=False)
    assert result.status is SolveStatus.SOLVED
    # 1ラウンド + 推測1回 x 10（曖昧）
    assert result.code == 11
    assert result.guesses == 1
    # 最初の推測（左上を空にする）の解が盤面に残る
    assert grid_to_rows(solver.grid) == [".#", "#."]
    assert solver.solved()


def test_make_guess_widens_then_flips_polarity():
    grid = Grid.from_array(np.full((10, 10), CellState.EMPTY))
    grid.set(5, 5, CellState.UNKNOWN)
    ctx = GuessContext(scanner=SpiralScanner(10, 10), backup=np.empty(100, dtype=np.int8))

    first = make_guess(ctx, grid)
    assert (first.row, first.col, first.state) == (5, 5, CellState.EMPTY)
    assert ctx.scanner.wide

    second = make_guess(ctx, grid)
    assert (second.row, second.col, second.state) == (5, 5, CellState.FILLED)

    assert make_guess(ctx, grid) is None


def test_make_guess_on_a_finished_grid_gives_up():
    grid = grid_from_rows(["#.", ".#"])
    ctx = GuessContext(scanner=SpiralScanner(2, 2), backup=np.empty(4, dtype=np.int8))
    assert make_guess(ctx, grid) is None


def test_ambiguity_found_after_simple_pass_stalls():
    # 3x3 の 2通り解パズルで、角以外が確定した状態
    rows = ["2", "1 1", "2"]
    cols = ["2", "1 1", "2"]
    solver = Solver(3, 3)
    assert solver.initialize(rows, cols)
    assert solver.simple_pass().status is SolveStatus.STALLED
    stalled = solver.grid.copy()
    assert grid_to_rows(stalled) == ["?#?", "#.#", "?#?"]

    result = solver.solve(unique_only=True)
    assert result.status is SolveStatus.AMBIGUOUS


@pytest.mark.parametrize("seed", range(25))
def test_random_puzzles_agree_with_brute_force(seed):
    rows, cols, pattern = random_puzzle(seed, 5, 5)
    n_solutions = count_solutions(rows, cols)
    assert n_solutions >= 1

    solver = Solver(5, 5)
    assert solver.initialize(rows, cols, solution_grid=pattern)
    result = solver.solve(use_advanced=True, unique_only=True)

    assert result.status in (SolveStatus.SOLVED, SolveStatus.AMBIGUOUS, SolveStatus.STALLED)
    if result.solved:
        # 一意と判定したなら、総当たりでも解は1つだけ
        assert n_solutions == 1
        assert solver.grid == pattern
    if n_solutions > 1:
        assert not result.solved


@pytest.mark.parametrize("seed", range(25))
def test_random_puzzles_with_ambiguity_allowed(seed):
    rows, cols, _ = random_puzzle(100 + seed, 4, 5)

    solver = Solver(4, 5)
    assert solver.initialize(rows, cols)
    result = solver.solve(use_advanced=True, unique_only=False)

    assert result.status in (SolveStatus.SOLVED, SolveStatus.STALLED)
    if result.solved:
        assert result.code > 0
        assert satisfies(solver.grid, rows, cols)
    else:
        # 推測で解けなかった場合は、推測前の盤面に戻っている
        assert solver.grid.count(CellState.UNKNOWN) > 0


def test_round_cap_reports_failed_passes():
    rows, cols, pattern = random_puzzle(6, 6, 6)
    solver = Solver(6, 6)
    assert solver.initialize(rows, cols)

    full = solver.simple_pass()
    assert full.solved and full.score > 1

    solver.initialize(rows, cols)
    result = simple_pass(list(solver.regions), solver.grid, solver.result, max_passes=1)
    assert result.status is SolveStatus.FAILED_PASSES
    assert result.code == FAILED_PASSES_CODE
    # 打ち切られても途中の盤面は結果バッファにコピーされる
    assert solver.result == solver.grid
    assert solver.grid.count(CellState.UNKNOWN) > 0


def test_unique_puzzle_solved_by_guessing():
    rows, cols, pattern = random_puzzle(43, 5, 5)
    assert count_solutions(rows, cols) == 1

    solver = Solver(5, 5)
    assert solver.initialize(rows, cols)
    assert solver.simple_pass().status is SolveStatus.STALLED

    result = solver.solve(use_advanced=True, unique_only=True)
    assert result.status is SolveStatus.SOLVED
    assert result.guesses == 1
    assert result.score == 5
    # 難易度 = simple pass のラウンド数 + 推測回数 × 2
    rounds = result.score - UNIQUE_GUESS_WEIGHT * result.guesses
    assert 1 <= rounds <= MAX_PASSES
    assert solver.grid == pattern


def test_both_guess_polarities_contradicting_is_an_error():
    # 塗りマス総数が合わない（行 2 / 列 3）ので、どちらの推測も矛盾する
    solver = Solver(2, 3)
    assert not solver.initialize(["1", "1"], ["1", "1", "1"])

    result = solver.solve(use_advanced=True, unique_only=False)
    assert result.status is SolveStatus.ERROR
    assert result.code == -1
    assert result.guesses == 1


def test_guess_budget_exhaustion_rolls_back(monkeypatch):
    monkeypatch.setattr("nonogram.engine.search.MAX_GUESSWORK", 0)
    clues = ["1"] * 4
    solver = Solver(4, 4)
    assert solver.initialize(clues, clues)

    result = solver.solve(use_advanced=True, unique_only=False)
    assert result.status is SolveStatus.FAILED_PASSES
    assert result.code == FAILED_PASSES_CODE
    assert result.guesses == 1
    assert solver.grid.count(CellState.UNKNOWN) == 16
