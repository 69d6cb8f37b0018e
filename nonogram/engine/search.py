# -*- coding: utf-8 -*-
"""
推測（guess）による探索（advanced pass）を行うモジュールです。

simple pass だけでは解けなくなったときに使います。
深さ 1 の推測のみで、推測の中でさらに推測することはしません。

ざっくり流れ
------------
1. スパイラル走査で次の UNKNOWN マスを選ぶ
2. そのマスを推測した状態にして simple pass を回す
3. 推測前の盤面に戻し、今度は反対の状態にして simple pass を回す
4. 両者の結果を比べる
   - 片方が解けて、もう片方が矛盾 → 一意な解
   - 両方とも解けた（または片方が行き詰まり） → 解が複数あり得る
   - 両方とも矛盾 → 本来起こらない内部エラー
   - どちらも解けない → 盤面を戻して次のマスへ
5. 解が見つかるか、推測回数の上限に達するか、走査し尽くすまで続ける

走査し尽くした場合は、まず走査範囲を盤面全体に広げ、
それでもだめなら推測する状態（EMPTY → FILLED）を反転して最初からやり直します。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from ..config import AMBIGUOUS_GUESS_WEIGHT, MAX_GUESSWORK, UNIQUE_GUESS_WEIGHT
from ..grid.cell_grid import Grid
from ..logging_utils import get_logger
from ..types import Cell, CellState, SolveResult, SolveStatus
from .spiral import SpiralScanner

if TYPE_CHECKING:
    from .solver import Solver

logger = get_logger()

# 最初に推測する状態
INITIAL_GUESS = CellState.EMPTY


@dataclass
class GuessContext:
    """
    推測探索全体で持ち回る情報をまとめたクラスです。
    """

    scanner: SpiralScanner
    backup: np.ndarray
    polarity: CellState = INITIAL_GUESS
    guesses: int = 0


def make_guess(ctx: GuessContext, grid: Grid) -> Optional[Cell]:
    """
    次に推測するマスを選びます。

    もう推測できるマスがなければ None を返します。
    """
    while True:
        coord = ctx.scanner.next_unknown(grid)
        if coord is not None:
            return Cell(coord[0], coord[1], ctx.polarity)

        if not ctx.scanner.wide:
            # 端の近くだけでは見つからなかったので全体に広げる
            ctx.scanner.restart(wide=True)
        elif ctx.polarity is INITIAL_GUESS:
            ctx.polarity = ctx.polarity.inverse()
            ctx.scanner.restart(wide=False)
        else:
            return None


def advanced_search(solver: "Solver", unique_only: bool = True) -> SolveResult:
    """
    推測探索のエントリポイント。

    Returns
    -------
    SolveResult
        SOLVED（score=難易度）, STALLED, FAILED_PASSES（推測回数の上限）,
        AMBIGUOUS（unique_only 指定時）, ERROR のいずれか。
    """
    grid = solver.grid
    ctx = GuessContext(
        scanner=SpiralScanner(grid.rows, grid.cols),
        backup=solver.save_position(solver.backup_buffer),
    )

    while ctx.guesses <= MAX_GUESSWORK:
        trial = make_guess(ctx, grid)
        if trial is None:
            logger.info("[advanced] no more cells to guess after %d guesses", ctx.guesses)
            return SolveResult(SolveStatus.STALLED, guesses=ctx.guesses)

        grid.set_cell(trial)
        first = solver.simple_pass(check_solution=solver.checks_solution)
        guess_contradicted = first.status is SolveStatus.CONTRADICTION

        # 反対の状態も試して、一意かどうかを確かめる
        solver.load_position(ctx.backup)
        ctx.guesses += 1
        grid.set_cell(trial.inverse())
        second = solver.simple_pass(check_solution=False, initialise=False)
        inverse_contradicted = second.status is SolveStatus.CONTRADICTION

        if guess_contradicted and inverse_contradicted:
            logger.critical("[advanced] both %s and its inverse are contradictory", trial)
            return SolveResult(SolveStatus.ERROR, guesses=ctx.guesses)

        if not (first.solved or second.solved):
            solver.load_position(ctx.backup)
            continue

        # どちらかが矛盾していれば、もう片方の解は一意
        ambiguous = not (guess_contradicted or inverse_contradicted)

        final = second
        if first.solved:
            # 元の推測の解を盤面に作り直す
            solver.load_position(ctx.backup)
            grid.set_cell(trial)
            final = solver.simple_pass()
            if not final.solved:
                final = first

        if unique_only and ambiguous:
            logger.info("[advanced] guess %s shows the puzzle is ambiguous", trial)
            return SolveResult(SolveStatus.AMBIGUOUS, guesses=ctx.guesses)

        weight = AMBIGUOUS_GUESS_WEIGHT if ambiguous else UNIQUE_GUESS_WEIGHT
        logger.info(
            "[advanced] solved after %d guesses (ambiguous=%s)", ctx.guesses, ambiguous
        )
        return SolveResult(
            SolveStatus.SOLVED,
            score=final.score + ctx.guesses * weight,
            guesses=ctx.guesses,
        )

    logger.warning("[advanced] guess budget of %d exhausted", MAX_GUESSWORK)
    solver.load_position(ctx.backup)
    return SolveResult(SolveStatus.FAILED_PASSES, guesses=ctx.guesses)
