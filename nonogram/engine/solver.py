# -*- coding: utf-8 -*-
"""
ノノグラムを解くエンジン本体（Solver）のモジュールです。

Solver は盤面（Grid）と、行・列ごとの Region をまとめて持ち、
- simple pass : 制約伝播を不動点まで回す
- advanced pass : 1マスずつ推測して矛盾/一意性を調べる
を組み合わせて解を求めます。

使い方の例::

    solver = Solver(5, 5)
    if solver.initialize(row_clues, col_clues):
        result = solver.solve()
        if result.solved:
            print(solver.grid)
"""

from __future__ import annotations

import threading
from typing import List, Optional, Sequence

import numpy as np

from ..config import DEFAULT_ADVANCED_ONLY, DEFAULT_UNIQUE_ONLY, DEFAULT_USE_ADVANCED
from ..grid.cell_grid import Grid
from ..line.region import Region
from ..logging_utils import get_logger
from ..types import CellState, Dimensions, SolveResult, SolveStatus
from . import snapshot
from .propagation import simple_pass
from .search import advanced_search

logger = get_logger()


def _is_cancelled(cancel_event: Optional[threading.Event]) -> bool:
    return cancel_event is not None and cancel_event.is_set()


class Solver:
    """
    1つの大きさ（rows x cols）のパズルを解くエンジンです。

    盤面・結果バッファ・参照解・Region・スナップショット用バッファは
    コンストラクタ（または resize()）で一度だけ確保し、
    initialize() のたびに中身を入れ替えて使い回します。
    """

    def __init__(self, rows: int, cols: int):
        self.resize(rows, cols)

    def resize(self, rows: int, cols: int) -> None:
        """大きさを変え、持っている状態をすべて作り直します。"""
        dimensions = Dimensions(rows, cols)
        grid = Grid(dimensions)
        regions = [Region() for _ in range(rows + cols)]

        # すべて作り終えてから一度に差し替える
        self._dimensions = dimensions
        self._grid = grid
        self._result = Grid(dimensions)
        self._solution = Grid(dimensions)
        self._regions: List[Region] = regions
        self._backup = np.empty(dimensions.area, dtype=np.int8)
        self._check_solution = False
        self._initialized = False

    # ------------------------------------------------------------------
    # 読み取り専用プロパティ
    # ------------------------------------------------------------------
    @property
    def dimensions(self) -> Dimensions:
        return self._dimensions

    @property
    def rows(self) -> int:
        return self._dimensions.rows

    @property
    def cols(self) -> int:
        return self._dimensions.cols

    @property
    def grid(self) -> Grid:
        """作業用の盤面。"""
        return self._grid

    @property
    def result(self) -> Grid:
        """直近の simple pass 終了時点の盤面のコピー。"""
        return self._result

    @property
    def solution(self) -> Grid:
        """参照解（checks_solution が True のときだけ意味を持つ）。"""
        return self._solution

    @property
    def regions(self) -> Sequence[Region]:
        return tuple(self._regions)

    @property
    def checks_solution(self) -> bool:
        return self._check_solution

    @property
    def backup_buffer(self) -> np.ndarray:
        return self._backup

    # ------------------------------------------------------------------
    # 初期化と検査
    # ------------------------------------------------------------------
    def initialize(
        self,
        row_clues: Sequence[str],
        col_clues: Sequence[str],
        start_grid: Optional[Grid] = None,
        solution_grid: Optional[Grid] = None,
    ) -> bool:
        """
        パズルをセットします。

        手がかりの数が盤面の大きさと合わない場合は ValueError を送出します。
        start_grid を渡すとそこから解き始め、solution_grid を渡すと
        参照解との食い違いをチェックするモードになります。

        Returns
        -------
        bool
            valid() の結果。
        """
        if len(row_clues) != self.rows or len(col_clues) != self.cols:
            raise ValueError(
                f"Expected {self.rows} row clues and {self.cols} column clues, "
                f"got {len(row_clues)} and {len(col_clues)}"
            )

        self._check_solution = solution_grid is not None
        if solution_grid is not None:
            self._solution.copy_from(solution_grid)

        if start_grid is not None:
            self._grid.copy_from(start_grid)
        else:
            self._grid.set_all(CellState.UNKNOWN)

        index = 0
        for r in range(self.rows):
            self._regions[index].initialize(self._grid.line(r, False), row_clues[r])
            index += 1
        for c in range(self.cols):
            self._regions[index].initialize(self._grid.line(c, True), col_clues[c])
            index += 1

        self._initialized = True
        return self.valid()

    def valid(self) -> bool:
        """
        どの Region もエラーでなく、行と列の塗りマス総数が一致するか。

        解けることの証明ではなく、構造的な整合性チェックです。
        """
        if any(r.in_error for r in self._regions):
            return False

        row_total = sum(r.block_total for r in self._regions[: self.rows])
        col_total = sum(r.block_total for r in self._regions[self.rows:])
        return row_total == col_total

    def solved(self) -> bool:
        return all(r.is_completed for r in self._regions)

    # ------------------------------------------------------------------
    # スナップショット
    # ------------------------------------------------------------------
    def save_position(self, buffer: Optional[np.ndarray] = None) -> np.ndarray:
        return snapshot.save_position(self._grid, buffer)

    def load_position(self, saved: np.ndarray) -> None:
        snapshot.load_position(self._grid, saved)

    # ------------------------------------------------------------------
    # 解く
    # ------------------------------------------------------------------
    def simple_pass(self, check_solution: bool = False, initialise: bool = True) -> SolveResult:
        return simple_pass(
            self._regions,
            self._grid,
            self._result,
            solution=self._solution if check_solution else None,
            initialise=initialise,
        )

    def advanced_pass(self, unique_only: bool = DEFAULT_UNIQUE_ONLY) -> SolveResult:
        return advanced_search(self, unique_only=unique_only)

    def solve(
        self,
        cancel_event: Optional[threading.Event] = None,
        use_advanced: bool = DEFAULT_USE_ADVANCED,
        unique_only: bool = DEFAULT_UNIQUE_ONLY,
        advanced_only: bool = DEFAULT_ADVANCED_ONLY,
    ) -> SolveResult:
        """
        パズルを解きます。

        Parameters
        ----------
        cancel_event : threading.Event, optional
            simple pass の後と advanced pass の後にだけ確認します。
        use_advanced : bool
            simple pass で行き詰まったときに推測探索を行うか。
        unique_only : bool
            解が複数あり得る場合を失敗（AMBIGUOUS）とするか。
        advanced_only : bool
            simple pass だけで解けるパズルを TOO_SIMPLE として扱うか。
        """
        if not self._initialized:
            raise RuntimeError("Solver.initialize() must be called before solve()")

        result = self.simple_pass(self._check_solution)
        logger.debug("[solve] simple pass: %s", result)

        if _is_cancelled(cancel_event):
            return SolveResult(SolveStatus.CANCELLED)

        if result.solved and advanced_only:
            return SolveResult(SolveStatus.TOO_SIMPLE)

        if result.status is SolveStatus.STALLED and use_advanced:
            result = self.advanced_pass(unique_only)
            logger.debug("[solve] advanced pass: %s", result)

            if _is_cancelled(cancel_event):
                return SolveResult(SolveStatus.CANCELLED, guesses=result.guesses)

        if result.solved and self._check_solution and self._grid != self._solution:
            logger.warning("[solve] solution differs from the reference solution")

        return result
