# -*- coding: utf-8 -*-
"""
手がかり（clue）と盤面を内部表現に変換するモジュールです。

主な役割:
- 手がかり文字列 "1 2" / "1,2" をブロック長のリストに変換
- ブロック長のリストを正規の文字列 "1,2" に戻す
- テキストの行リストや pandas.DataFrame と Grid の相互変換
- 完成した盤面から手がかりを逆算
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config import (
    CLUE_SEPARATOR, EMPTY_ALIASES, EMPTY_CLUE_TEXT, EMPTY_SYMBOL,
    FILLED_ALIASES, FILLED_SYMBOL, UNKNOWN_ALIASES, UNKNOWN_SYMBOL,
)
from ..types import CellState, Dimensions
from .cell_grid import Grid

# 手がかり文字列として許す文字（数字と区切り文字）
CLUE_RE = re.compile(r"[\d\s,;/]*")
NUMBER_RE = re.compile(r"\d+")


def parse_clue(text: Optional[str]) -> List[int]:
    """
    手がかり文字列をブロック長のリストに変換します。

    例:
    - "1 2"  -> [1, 2]
    - "3,1"  -> [3, 1]
    - "0"    -> []   （行全体が空）
    - ""     -> []
    """
    if text is None:
        return []
    s = str(text).strip()
    if not CLUE_RE.fullmatch(s):
        raise ValueError(f"Invalid clue text: {text!r}")

    # 0 は「ブロックなし」の表記なので捨てる
    return [int(n) for n in NUMBER_RE.findall(s) if int(n) > 0]


def format_clue(blocks: Sequence[int]) -> str:
    """ブロック長のリストを "1,2" の形式に戻します。空なら "0"。"""
    if not blocks:
        return EMPTY_CLUE_TEXT
    return CLUE_SEPARATOR.join(str(int(b)) for b in blocks)


def runs_of(states: Sequence[int]) -> List[int]:
    """状態の並びから、FILLED の連続ブロック長を取り出します。"""
    runs: List[int] = []
    length = 0
    for s in states:
        if int(s) == CellState.FILLED:
            length += 1
        elif length:
            runs.append(length)
            length = 0
    if length:
        runs.append(length)
    return runs


def clues_from_grid(grid: Grid) -> Tuple[List[str], List[str]]:
    """
    完成した盤面から行・列の手がかり文字列を作ります。

    UNKNOWN のマスは空として扱います。
    """
    data = grid.data
    row_clues = [format_clue(runs_of(data[r, :])) for r in range(grid.rows)]
    col_clues = [format_clue(runs_of(data[:, c])) for c in range(grid.cols)]
    return row_clues, col_clues


def symbol_to_state(x: Any) -> CellState:
    """
    セル1個分の記号を CellState に変換します。

    変換ルール
    ----------
    - "#", "■", "1", "X" : FILLED
    - ".", "0", " ", "-" : EMPTY
    - "?", "", None      : UNKNOWN
    """
    if x is None:
        return CellState.UNKNOWN
    if isinstance(x, CellState):
        return x

    # DataFrame から来る 0/1 の数値は記号 "0"/"1" として扱う
    s = str(int(x)) if isinstance(x, (int, np.integer)) else str(x)
    if s == "":
        return CellState.UNKNOWN
    if len(s) != 1:
        raise ValueError(f"Unknown cell symbol: {x!r}")
    if s in FILLED_ALIASES:
        return CellState.FILLED
    if s in EMPTY_ALIASES:
        return CellState.EMPTY
    if s in UNKNOWN_ALIASES:
        return CellState.UNKNOWN
    raise ValueError(f"Unknown cell symbol: {x!r}")


def state_to_symbol(state: CellState) -> str:
    if state == CellState.FILLED:
        return FILLED_SYMBOL
    if state == CellState.EMPTY:
        return EMPTY_SYMBOL
    return UNKNOWN_SYMBOL


def grid_from_rows(rows: Sequence[str]) -> Grid:
    """
    テキストの行リストから Grid を作ります。

    例: ["#.#", "...", "###"]
    """
    if not rows:
        raise ValueError("At least one row is required")
    width = len(rows[0])
    if any(len(r) != width for r in rows):
        raise ValueError("All rows must have the same length")

    grid = Grid(Dimensions(len(rows), width))
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            grid.set(r, c, symbol_to_state(ch))
    return grid


def grid_to_rows(grid: Grid) -> List[str]:
    return [
        "".join(state_to_symbol(CellState(int(v))) for v in grid.data[r, :])
        for r in range(grid.rows)
    ]


def grid_from_frame(df: pd.DataFrame) -> Grid:
    """
    DataFrame（各セルに記号）から Grid を作ります。

    Parameters
    ----------
    df : pandas.DataFrame
        shape = (rows, cols) の盤面データ。
    """
    rows, cols = df.shape
    grid = Grid(Dimensions(rows, cols))

    for i in range(rows):
        for j in range(cols):
            value = df.iat[i, j]
            if isinstance(value, float) and np.isnan(value):
                value = None
            grid.set(i, j, symbol_to_state(value))

    return grid


def grid_to_frame(grid: Grid) -> pd.DataFrame:
    """Grid を記号の DataFrame に変換します。"""
    return pd.DataFrame([list(row) for row in grid_to_rows(grid)])


def to_grid(value: Any) -> Optional[Grid]:
    """
    Grid / テキスト行リスト / DataFrame / 2次元配列 のどれでも Grid にそろえます。
    """
    if value is None or isinstance(value, Grid):
        return value
    if isinstance(value, pd.DataFrame):
        return grid_from_frame(value)
    if isinstance(value, np.ndarray):
        return Grid.from_array(value)
    if isinstance(value, (list, tuple)) and value and isinstance(value[0], str):
        return grid_from_rows(value)
    return Grid.from_array(value)
