# -*- coding: utf-8 -*-
"""
nonogram.postprocess パッケージ

解いた結果を API などで返しやすい形に整えます。
"""
