# -*- coding: utf-8 -*-
"""
全行・全列に対する制約伝播（simple pass）を行うモジュールです。

すべての Region に対して solve() を繰り返し呼び、
どの行/列も変化しなくなる（不動点に達する）まで回します。

- どこかの Region が矛盾を報告したら、そのラウンドを即座に打ち切ります
- ラウンド数が MAX_PASSES に達しても変化が止まらなければ失敗とします
- 伝播が終わったら、盤面の内容を結果バッファにコピーします
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import MAX_PASSES
from ..grid.cell_grid import Grid
from ..line.region import Region
from ..logging_utils import get_logger
from ..types import CellState, SolveResult, SolveStatus

logger = get_logger()


def all_completed(regions: Sequence[Region]) -> bool:
    return all(r.is_completed for r in regions)


def differs_from_solution(region: Region, solution: Grid) -> bool:
    """
    Region の確定済みマスが、参照解と食い違っているかを判定します。

    UNKNOWN のマスは比較しません。
    """
    for i in range(region.n_cells):
        state = region.get_cell_state(i)
        if state == CellState.UNKNOWN:
            continue

        r, c = (i, region.index) if region.is_column else (region.index, i)
        expected = solution.get(r, c)
        if expected == CellState.FILLED:
            if state != CellState.EMPTY:
                continue
        elif state == CellState.EMPTY:
            continue

        return True

    return False


def simple_pass(
    regions: Sequence[Region],
    grid: Grid,
    result: Grid,
    solution: Optional[Grid] = None,
    initialise: bool = True,
    max_passes: int = MAX_PASSES,
) -> SolveResult:
    """
    制約伝播を不動点まで回します。

    Parameters
    ----------
    regions : list of Region
        行 → 列 の順に並んだ Region。
    grid : Grid
        作業用の盤面（Region の LineView が指している盤面）。
    result : Grid
        伝播後の盤面をコピーしておくバッファ。
    solution : Grid, optional
        参照解。渡された場合、食い違った行/列をログに出します。
    initialise : bool
        True なら最初に全 Region を初期状態に戻します。

    Returns
    -------
    SolveResult
        SOLVED（score=ラウンド数）, STALLED, FAILED_PASSES, CONTRADICTION のいずれか。
    """
    if initialise:
        for region in regions:
            region.reset_to_initial_state()

    changed = True
    rounds = 0
    contradiction: Optional[Region] = None

    # 少なくとも1つの Region が変化している間は回し続ける
    while changed and rounds < max_passes:
        changed = False
        rounds += 1

        for region in regions:
            if region.is_completed:
                continue

            if region.solve():
                changed = True

            if region.in_error:
                contradiction = region
                break

        if contradiction is not None or all_completed(regions):
            break

    result.copy_from(grid)

    if solution is not None:
        for region in regions:
            if differs_from_solution(region, solution):
                logger.debug("[simple] %r differs from the reference solution", region)

    if contradiction is not None:
        logger.debug("[simple] contradiction in %r after %d rounds", contradiction, rounds)
        return SolveResult(SolveStatus.CONTRADICTION)

    if all_completed(regions):
        return SolveResult(SolveStatus.SOLVED, score=rounds)

    if changed:
        logger.warning("[simple] still changing after %d rounds, giving up", rounds)
        return SolveResult(SolveStatus.FAILED_PASSES)

    return SolveResult(SolveStatus.STALLED)
