# -*- coding: utf-8 -*-
"""
1行または1列（region）ごとの制約伝播を行うモジュールです。

ある行/列の手がかり（ブロック長の並び）と、
すでに分かっているマスの状態から、
「どの配置でも FILLED になるマス」「どの配置でも EMPTY になるマス」
を求めて盤面に書き込みます。

アルゴリズム
------------
- 左から: F[j][i] = 「先頭 j 個のブロックを cells[0:i] に矛盾なく置けるか」
- 右から: B[j][i] = 「j 番目以降のブロックを cells[i:n] に矛盾なく置けるか」
を動的計画法で求め、両者を組み合わせて各マスの
「空にできるか」「塗れるか」を判定します。

どちらにもできないマスがある（= 配置が1つもない）場合は矛盾です。
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from ..grid.cell_grid import LineView
from ..grid.parser import parse_clue, format_clue, runs_of
from ..types import CellState

FILLED = int(CellState.FILLED)
EMPTY = int(CellState.EMPTY)
UNKNOWN = int(CellState.UNKNOWN)


class Region:
    """
    1本の行/列を受け持つ制約ソルバです。

    盤面そのものは持たず、initialize() で渡された LineView 経由で
    自分の行/列のマスだけを読み書きします。
    """

    def __init__(self) -> None:
        self.view: Optional[LineView] = None
        self.blocks: List[int] = []
        self.block_total: int = 0
        self.in_error: bool = False

    def __repr__(self) -> str:
        kind = "col" if self.is_column else "row"
        return f"Region({kind}={self.index}, clue={format_clue(self.blocks)}, error={self.in_error})"

    def initialize(self, view: LineView, clue_text: Optional[str]) -> None:
        self.view = view
        self.blocks = parse_clue(clue_text)
        self.block_total = sum(self.blocks)
        self.reset_to_initial_state()

    @property
    def index(self) -> int:
        return self.view.index if self.view is not None else -1

    @property
    def is_column(self) -> bool:
        return self.view.is_column if self.view is not None else False

    @property
    def n_cells(self) -> int:
        return len(self.view) if self.view is not None else 0

    @property
    def min_length(self) -> int:
        """ブロックを最小の間隔で並べたときの長さ。"""
        if not self.blocks:
            return 0
        return self.block_total + len(self.blocks) - 1

    def reset_to_initial_state(self) -> None:
        """
        手がかりだけから状態を作り直します。

        それまでの解き途中の情報（エラーフラグ）は捨て、
        手がかりが行/列に収まらない場合だけ最初からエラーにします。
        """
        self.in_error = self.min_length > self.n_cells

    def get_cell_state(self, i: int) -> CellState:
        return self.view.get(i)

    @property
    def is_completed(self) -> bool:
        """すべてのマスが確定し、塗りブロックが手がかりと一致しているか。"""
        if self.in_error or self.view is None:
            return False
        states = self.view.states()
        if np.any(states == UNKNOWN):
            return False
        return runs_of(states) == self.blocks

    def solve(self) -> bool:
        """
        制約伝播を1回行い、マスが1つでも変わったら True を返します。

        確定済みのマスは書き換えません（UNKNOWN → EMPTY/FILLED のみ）。
        矛盾を見つけた場合は in_error を立てて False を返します。
        """
        states = self.view.states()
        possibilities = self._possibilities(states)
        if possibilities is None:
            self.in_error = True
            return False

        self.in_error = False
        can_empty, can_fill = possibilities
        changed = False

        for i, s in enumerate(states):
            if s != UNKNOWN:
                continue
            if can_fill[i] and not can_empty[i]:
                self.view.set(i, CellState.FILLED)
                changed = True
            elif can_empty[i] and not can_fill[i]:
                self.view.set(i, CellState.EMPTY)
                changed = True

        return changed

    def _possibilities(
        self, states: np.ndarray
    ) -> Optional[Tuple[List[bool], List[bool]]]:
        """
        各マスについて (空にできるか, 塗れるか) を求めます。

        配置が1つも存在しない場合は None を返します。
        """
        n = len(states)
        blocks = self.blocks
        k = len(blocks)

        # 区間 [a, b) に FILLED / EMPTY がいくつあるかを O(1) で調べるための累積和
        filled_ps = np.concatenate(([0], np.cumsum(states == FILLED)))
        empty_ps = np.concatenate(([0], np.cumsum(states == EMPTY)))

        def no_filled(a: int, b: int) -> bool:
            return filled_ps[b] - filled_ps[a] == 0

        def no_empty(a: int, b: int) -> bool:
            return empty_ps[b] - empty_ps[a] == 0

        # --- 左からの DP ---
        fwd = [[False] * (n + 1) for _ in range(k + 1)]
        for i in range(n + 1):
            fwd[0][i] = no_filled(0, i)
        for j in range(1, k + 1):
            length = blocks[j - 1]
            for i in range(1, n + 1):
                if states[i - 1] != FILLED and fwd[j][i - 1]:
                    fwd[j][i] = True
                    continue
                s = i - length
                if s < 0 or not no_empty(s, i):
                    continue
                if j == 1:
                    fwd[j][i] = fwd[0][s]
                else:
                    fwd[j][i] = s >= 1 and states[s - 1] != FILLED and fwd[j - 1][s - 1]

        if not fwd[k][n]:
            return None

        # --- 右からの DP ---
        bwd = [[False] * (n + 1) for _ in range(k + 1)]
        for i in range(n + 1):
            bwd[k][i] = no_filled(i, n)
        for j in range(k - 1, -1, -1):
            length = blocks[j]
            for i in range(n - 1, -1, -1):
                if states[i] != FILLED and bwd[j][i + 1]:
                    bwd[j][i] = True
                    continue
                e = i + length
                if e > n or not no_empty(i, e):
                    continue
                if j == k - 1:
                    bwd[j][i] = bwd[k][e]
                else:
                    bwd[j][i] = e < n and states[e] != FILLED and bwd[j + 1][e + 1]

        # --- 空にできるマス ---
        can_empty = [False] * n
        for p in range(n):
            if states[p] == FILLED:
                continue
            can_empty[p] = any(fwd[j][p] and bwd[j][p + 1] for j in range(k + 1))

        # --- 塗れるマス（ブロック j を位置 s から置ける範囲を差分配列で加算） ---
        diff = [0] * (n + 1)
        for j, length in enumerate(blocks):
            for s in range(0, n - length + 1):
                e = s + length
                if not no_empty(s, e):
                    continue
                if j == 0:
                    left_ok = fwd[0][s]
                else:
                    left_ok = s >= 1 and states[s - 1] != FILLED and fwd[j][s - 1]
                if not left_ok:
                    continue
                if j == k - 1:
                    right_ok = bwd[k][e]
                else:
                    right_ok = e < n and states[e] != FILLED and bwd[j + 1][e + 1]
                if right_ok:
                    diff[s] += 1
                    diff[e] -= 1

        can_fill = [False] * n
        running = 0
        for p in range(n):
            running += diff[p]
            can_fill[p] = running > 0

        return can_empty, can_fill
