# -*- coding: utf-8 -*-
"""
nonogram 全体で共通して使う設定値をまとめたモジュールです。

実運用時には、ここを編集することで
- 制約伝播のラウンド数上限
- 推測（guess）の回数上限
- スパイラル走査の範囲
- 難易度スコアの重み
などを簡単に変更できます。
"""

from __future__ import annotations

import os

# ==== 制約伝播（simple pass）関連 ===========================================

# 1回の simple pass で回すラウンド数の上限。
# これを超えても変化が止まらない場合は「失敗（failed passes）」とみなします。
MAX_PASSES: int = 200

# ラウンド上限に達したときの旧来の整数コード
FAILED_PASSES_CODE: int = -9999

# ==== 推測探索（advanced pass）関連 =========================================

# 推測の回数上限
MAX_GUESSWORK: int = 999

# スパイラル走査で最初に見る「外周からのリング数」。
# 端に近いマスほど制約がきついので、まずは外側だけを試します。
INITIAL_MAX_TURNS: int = 3

# 推測が1回増えるごとに難易度スコアへ加算する重み
UNIQUE_GUESS_WEIGHT: int = 2
AMBIGUOUS_GUESS_WEIGHT: int = 10

# ==== solve() の既定フラグ ==================================================

DEFAULT_USE_ADVANCED: bool = True
DEFAULT_UNIQUE_ONLY: bool = True
DEFAULT_ADVANCED_ONLY: bool = False

# ==== テキスト表現 ==========================================================

# 出力に使う記号
FILLED_SYMBOL: str = "#"
EMPTY_SYMBOL: str = "."
UNKNOWN_SYMBOL: str = "?"

# 入力として受け付ける記号（出力記号に加えて）
FILLED_ALIASES: str = "#■1Xx"
EMPTY_ALIASES: str = ".0 -_"
UNKNOWN_ALIASES: str = "?"

# 空の手がかりを書き出すときの表記
EMPTY_CLUE_TEXT: str = "0"

# 手がかりを書き出すときの区切り文字
CLUE_SEPARATOR: str = ","

# ==== ログ関連 ==============================================================

# 環境変数 NONOGRAM_LOG_LEVEL で上書きできます（例: DEBUG）
LOG_LEVEL: str = os.getenv("NONOGRAM_LOG_LEVEL", "INFO")
