# -*- coding: utf-8 -*-
"""
nonogram.engine パッケージ

パズル全体を解くエンジンをまとめています。

- snapshot.py    : 盤面の保存/復元（バックトラック用）
- spiral.py      : 推測するマスを選ぶスパイラル走査
- propagation.py : 全行・全列の制約伝播（simple pass）
- search.py      : 深さ1の推測探索（advanced pass）
- solver.py      : 上記をまとめた Solver
"""

from .solver import Solver

__all__ = ["Solver"]
