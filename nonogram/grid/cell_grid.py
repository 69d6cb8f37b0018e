# -*- coding: utf-8 -*-
"""
盤面（マスの状態の2次元配列）を表すモジュールです。

- Grid     : numpy の int8 配列で状態を保持する盤面
- LineView : 1行または1列だけを読み書きするためのアクセサ

行/列ソルバ（Region）には盤面全体ではなく LineView だけを渡し、
自分の行/列以外には触れないようにしています。
"""

from __future__ import annotations

from typing import Iterator, List

import numpy as np

from ..types import Cell, CellState, Dimensions


class Grid:
    """
    (row, col) で参照する可変の盤面です。

    範囲外の座標はプログラミングエラーとして IndexError を送出します。
    （numpy の負のインデックスによる折り返しは許しません）
    """

    def __init__(self, dimensions: Dimensions, fill: CellState = CellState.UNKNOWN):
        self.dimensions = dimensions
        self._data = np.full(
            (dimensions.rows, dimensions.cols), int(fill), dtype=np.int8
        )

    @classmethod
    def from_array(cls, array) -> "Grid":
        """CellState（または 0/1/2）の2次元配列から Grid を作ります。"""
        arr = np.asarray(array, dtype=np.int8)
        if arr.ndim != 2:
            raise ValueError(f"Grid array must be 2-dimensional, got shape {arr.shape}")
        if arr.size and (arr.min() < 0 or arr.max() > int(CellState.FILLED)):
            raise ValueError("Grid array contains values that are not cell states")
        grid = cls(Dimensions(arr.shape[0], arr.shape[1]))
        grid._data[:, :] = arr
        return grid

    @property
    def rows(self) -> int:
        return self.dimensions.rows

    @property
    def cols(self) -> int:
        return self.dimensions.cols

    @property
    def data(self) -> np.ndarray:
        """内部配列そのもの（スナップショット処理用）。"""
        return self._data

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Cell ({row}, {col}) is outside a {self.rows}x{self.cols} grid"
            )

    def get(self, row: int, col: int) -> CellState:
        self._check(row, col)
        return CellState(int(self._data[row, col]))

    def set(self, row: int, col: int, state: CellState) -> None:
        self._check(row, col)
        self._data[row, col] = int(state)

    def set_cell(self, cell: Cell) -> None:
        self.set(cell.row, cell.col, cell.state)

    def set_all(self, state: CellState) -> None:
        self._data.fill(int(state))

    def copy_from(self, other: "Grid") -> None:
        """other の内容で全体を上書きします（同じ大きさであること）。"""
        if other.dimensions != self.dimensions:
            raise ValueError(
                f"Cannot copy a {other.rows}x{other.cols} grid "
                f"into a {self.rows}x{self.cols} grid"
            )
        np.copyto(self._data, other._data)

    def copy(self) -> "Grid":
        grid = Grid(self.dimensions)
        grid.copy_from(self)
        return grid

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self._data == int(state)))

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def line(self, index: int, is_column: bool) -> "LineView":
        limit = self.cols if is_column else self.rows
        if not 0 <= index < limit:
            kind = "column" if is_column else "row"
            raise IndexError(f"No {kind} {index} in a {self.rows}x{self.cols} grid")
        return LineView(self, index, is_column)

    def cells(self) -> Iterator[Cell]:
        """行優先で全マスを Cell として返します。"""
        for r in range(self.rows):
            for c in range(self.cols):
                yield Cell(r, c, CellState(int(self._data[r, c])))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.dimensions == other.dimensions and bool(
            np.array_equal(self._data, other._data)
        )

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, unknown={self.count(CellState.UNKNOWN)})"


class LineView:
    """
    Grid の1行（is_column=False）または1列（is_column=True）への窓です。

    位置 i は、行なら列番号、列なら行番号に対応します。
    """

    def __init__(self, grid: Grid, index: int, is_column: bool):
        self._grid = grid
        self.index = index
        self.is_column = is_column

    def __len__(self) -> int:
        return self._grid.rows if self.is_column else self._grid.cols

    def coord(self, i: int) -> tuple:
        return (i, self.index) if self.is_column else (self.index, i)

    def get(self, i: int) -> CellState:
        r, c = self.coord(i)
        return self._grid.get(r, c)

    def set(self, i: int, state: CellState) -> None:
        r, c = self.coord(i)
        self._grid.set(r, c, state)

    def states(self) -> np.ndarray:
        if self.is_column:
            return self._grid.data[:, self.index].copy()
        return self._grid.data[self.index, :].copy()

    def as_list(self) -> List[CellState]:
        return [CellState(int(v)) for v in self.states()]
