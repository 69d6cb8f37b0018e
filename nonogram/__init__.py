# nonogram/__init__.py
# -*- coding: utf-8 -*-
"""
nonogram パッケージの入口となるモジュールです。

api_proto/local_api.py などから:

    from nonogram import solve

と呼び出されることを想定しています。

ここでは、行・列の手がかりを受け取り、
1. 開始盤面・参照解の変換（テキスト行 / DataFrame / Grid）
2. Solver の初期化と整合性チェック
3. simple pass → （必要なら）advanced pass による探索
4. 表示用の結果構築
を順番に呼び出します。
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional, Sequence

from .config import DEFAULT_ADVANCED_ONLY, DEFAULT_UNIQUE_ONLY, DEFAULT_USE_ADVANCED
from .engine.solver import Solver
from .grid.cell_grid import Grid
from .grid.parser import clues_from_grid, format_clue, parse_clue, to_grid
from .logging_utils import get_logger
from .postprocess.result import build_result
from .types import Cell, CellState, Dimensions, SolveResult, SolveStatus

__version__ = "1.0.0"
__all__ = [
    "Cell",
    "CellState",
    "Dimensions",
    "Grid",
    "SolveResult",
    "SolveStatus",
    "Solver",
    "clues_from_grid",
    "format_clue",
    "parse_clue",
    "solve",
]

logger = get_logger()


def solve(
    row_clues: Sequence[str],
    col_clues: Sequence[str],
    start: Any = None,
    solution: Any = None,
    use_advanced: bool = DEFAULT_USE_ADVANCED,
    unique_only: bool = DEFAULT_UNIQUE_ONLY,
    advanced_only: bool = DEFAULT_ADVANCED_ONLY,
    cancel_event: Optional[threading.Event] = None,
) -> Dict[str, Any]:
    """
    ノノグラムを解くメイン関数。

    start / solution には Grid、テキスト行のリスト（"#.?"）、
    pandas.DataFrame のいずれかを渡せます。
    """
    logger.info("=== solve() START ===")
    logger.info("Puzzle size: %dx%d", len(row_clues), len(col_clues))

    # 1) 開始盤面・参照解をそろえる
    start_grid: Optional[Grid] = to_grid(start)
    solution_grid: Optional[Grid] = to_grid(solution)

    # 2) Solver の初期化
    solver = Solver(len(row_clues), len(col_clues))
    valid = solver.initialize(row_clues, col_clues, start_grid, solution_grid)
    if not valid:
        logger.info("Puzzle is not valid, nothing to solve.")
        return build_result(solver.grid, row_clues, col_clues, None, valid=False)

    # 3) 探索
    result = solver.solve(
        cancel_event=cancel_event,
        use_advanced=use_advanced,
        unique_only=unique_only,
        advanced_only=advanced_only,
    )
    logger.info(
        "Result: status=%s code=%d guesses=%d", result.status.value, result.code, result.guesses
    )

    # 4) 結果を構築
    out = build_result(
        solver.grid, row_clues, col_clues, result, valid=True, solved=solver.solved()
    )
    logger.info("=== solve() END ===")
    return out
