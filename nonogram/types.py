# -*- coding: utf-8 -*-
"""
nonogram solver で使う主なデータ構造（型）をまとめたモジュールです。

dataclass / Enum を使うことで、
「この値はどんな状態を取り得るのか」を
分かりやすく表現しています。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Tuple

from .config import FAILED_PASSES_CODE

# グリッド上の座標を表す型 (row, col)
CellCoord = Tuple[int, int]


class CellState(IntEnum):
    """
    マスの状態です。

    numpy の int8 配列にそのまま格納できるよう IntEnum にしています。
    """

    UNKNOWN = 0
    EMPTY = 1
    FILLED = 2

    def inverse(self) -> "CellState":
        """EMPTY と FILLED を入れ替えます。UNKNOWN はそのまま。"""
        if self is CellState.EMPTY:
            return CellState.FILLED
        if self is CellState.FILLED:
            return CellState.EMPTY
        return self


@dataclass(frozen=True)
class Cell:
    """1マス分の「変更案」(row, col, state) を表します。"""

    row: int
    col: int
    state: CellState

    def inverse(self) -> "Cell":
        return Cell(self.row, self.col, self.state.inverse())


@dataclass(frozen=True)
class Dimensions:
    """
    盤面の大きさです。パズルを解いている間は変わりません。

    Attributes
    ----------
    rows : int
        行数（高さ）。
    cols : int
        列数（幅）。
    """

    rows: int
    cols: int

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Invalid dimensions: {self.rows}x{self.cols}")

    @property
    def area(self) -> int:
        return self.rows * self.cols


class SolveStatus(Enum):
    """
    solve() の結果の種類です。

    - SOLVED        : 解けた
    - STALLED       : 変化が止まったが解けていない（矛盾もない）
    - TOO_SIMPLE    : advanced_only 指定なのに simple pass だけで解けてしまった
    - FAILED_PASSES : ラウンド上限に達しても変化が止まらなかった
    - CONTRADICTION : どこかの行/列で矛盾が見つかった
    - AMBIGUOUS     : 解が複数ある（unique_only 指定時のみ）
    - CANCELLED     : 呼び出し側がキャンセルした
    - ERROR         : 推測もその反対も矛盾した（本来起こらない内部エラー）
    """

    SOLVED = "solved"
    STALLED = "stalled"
    TOO_SIMPLE = "too_simple"
    FAILED_PASSES = "failed_passes"
    CONTRADICTION = "contradiction"
    AMBIGUOUS = "ambiguous"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass
class SolveResult:
    """
    solve() / simple pass / advanced pass の結果です。

    Attributes
    ----------
    status : SolveStatus
        結果の種類。
    score : int
        SOLVED のとき、simple pass ならラウンド数、
        advanced pass なら難易度スコア。
    guesses : int
        advanced pass で消費した推測の回数。
    """

    status: SolveStatus
    score: int = 0
    guesses: int = 0

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def code(self) -> int:
        """
        旧来の符号付き整数コードを返します。

        正: 解けた（値は難易度/ラウンド数）, 0: 解けていないがエラーなし,
        FAILED_PASSES_CODE: ラウンド上限, その他の負: 矛盾・キャンセルなど。
        """
        if self.status is SolveStatus.SOLVED:
            return max(self.score, 1)
        if self.status in (SolveStatus.STALLED, SolveStatus.TOO_SIMPLE):
            return 0
        if self.status is SolveStatus.FAILED_PASSES:
            return FAILED_PASSES_CODE
        if self.status is SolveStatus.CANCELLED:
            return -2
        return -1

    @property
    def failed(self) -> bool:
        return self.code < 0
