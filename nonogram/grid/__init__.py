# -*- coding: utf-8 -*-
"""
nonogram.grid パッケージ

盤面（グリッド）に関する処理をまとめたサブパッケージです。
- cell_grid.py : 盤面 Grid と、1行/1列へのアクセサ LineView
- parser.py    : 手がかり文字列やテキスト/DataFrame と内部表現の変換
"""
