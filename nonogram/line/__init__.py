# -*- coding: utf-8 -*-
"""
nonogram.line パッケージ

1本の行/列（region）単位の制約伝播をまとめています。
- region.py : 手がかりとマスの状態から確定マスを求める Region
"""

from .region import Region

__all__ = ["Region"]
