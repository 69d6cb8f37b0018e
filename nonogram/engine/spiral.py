# -*- coding: utf-8 -*-
"""
推測するマスを選ぶための「スパイラル走査」を行うモジュールです。

外周から内側へ渦巻き状に
  上の行を右へ → 右の列を下へ → 下の行を左へ → 左の列を上へ
とたどり、1周するごとに1つ内側のリングへ移ります。

端に近いマスほど制約がきつく、推測の効果が大きいことが多いので、
最初は外側の数リングだけを見て、何も見つからなければ全体に広げます。
"""

from __future__ import annotations

from typing import Iterator, Optional

from ..config import INITIAL_MAX_TURNS
from ..grid.cell_grid import Grid
from ..types import CellCoord, CellState


def spiral_order(rows: int, cols: int, max_turns: int) -> Iterator[CellCoord]:
    """
    リング 0..max_turns の座標を外側から順に返します。

    盤面の外の座標は決して返しません。
    """
    for turn in range(max_turns + 1):
        top, left = turn, turn
        bottom, right = rows - 1 - turn, cols - 1 - turn
        if top > bottom or left > right:
            return

        for c in range(left, right + 1):
            yield (top, c)
        for r in range(top + 1, bottom + 1):
            yield (r, right)
        if top < bottom:
            for c in range(right - 1, left - 1, -1):
                yield (bottom, c)
        if left < right:
            for r in range(bottom - 1, top, -1):
                yield (r, left)


class SpiralScanner:
    """
    スパイラル走査のカーソルです。

    next_unknown() を呼ぶたびに、前回の続きから次の UNKNOWN マスを探します。
    最後まで見つからなければ None（走査し尽くした）を返します。
    """

    def __init__(self, rows: int, cols: int, initial_turns: int = INITIAL_MAX_TURNS):
        self.rows = rows
        self.cols = cols
        self.initial_turns = initial_turns
        self.restart(wide=False)

    @property
    def full_turns(self) -> int:
        """盤面全体を確実に覆うリング数。"""
        return min(self.rows, self.cols) // 2 + 2

    def restart(self, wide: bool) -> None:
        """先頭（左上）から走査し直します。wide=True なら全体を覆います。"""
        self.wide = wide
        self.max_turns = self.full_turns if wide else self.initial_turns
        self._order = spiral_order(self.rows, self.cols, self.max_turns)

    def next_unknown(self, grid: Grid) -> Optional[CellCoord]:
        for r, c in self._order:
            if grid.get(r, c) == CellState.UNKNOWN:
                return (r, c)
        return None
