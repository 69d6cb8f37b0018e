# -*- coding: utf-8 -*-
"""
探索結果をもとに、JSON にしやすい結果辞書を構築するモジュールです。
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..grid.cell_grid import Grid
from ..grid.parser import grid_to_rows
from ..types import SolveResult


def build_result(
    grid: Grid,
    row_clues: Sequence[str],
    col_clues: Sequence[str],
    result: Optional[SolveResult],
    valid: bool = True,
    solved: bool = False,
) -> Dict[str, Any]:
    """
    解いた結果を辞書にまとめます。

    result が None の場合は「不正なパズルなので解いていない」ことを表します。
    """
    if result is None:
        status, code, score, guesses = "invalid", -1, 0, 0
    else:
        status = result.status.value
        code = result.code
        score = result.score if result.solved else 0
        guesses = result.guesses

    return {
        "status": status,
        "code": code,
        "score": score,
        "guesses": guesses,
        "solved": bool(solved),
        "valid": bool(valid),
        "rows": grid.rows,
        "cols": grid.cols,
        "grid": grid_to_rows(grid),
        "row_clues": list(row_clues),
        "col_clues": list(col_clues),
    }
