# -*- coding: utf-8 -*-
"""
盤面のスナップショット（保存/復元）を行うモジュールです。

推測探索でのバックトラック専用で、
盤面全体を行優先の1次元配列としてコピーします。
差分だけの復元は行いません。
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..grid.cell_grid import Grid


def save_position(grid: Grid, snapshot: Optional[np.ndarray] = None) -> np.ndarray:
    """
    盤面を行優先で snapshot に書き出して返します。

    snapshot を渡した場合はそのバッファを再利用します（大きさは rows*cols）。
    """
    if snapshot is None:
        snapshot = np.empty(grid.dimensions.area, dtype=np.int8)
    elif snapshot.shape != (grid.dimensions.area,):
        raise ValueError(
            f"Snapshot of size {snapshot.size} does not fit a {grid.rows}x{grid.cols} grid"
        )
    np.copyto(snapshot, grid.data.reshape(-1))
    return snapshot


def load_position(grid: Grid, snapshot: np.ndarray) -> None:
    """save_position() で保存した内容で盤面全体を上書きします。"""
    if snapshot.shape != (grid.dimensions.area,):
        raise ValueError(
            f"Snapshot of size {snapshot.size} does not fit a {grid.rows}x{grid.cols} grid"
        )
    np.copyto(grid.data, snapshot.reshape(grid.rows, grid.cols))
