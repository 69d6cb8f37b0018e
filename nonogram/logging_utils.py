# -*- coding: utf-8 -*-
"""
ログ出力の設定を行うモジュールです。

nonogram パッケージのどこからでも

    from .logging_utils import get_logger
    logger = get_logger()

として同じ logger を使えるようにしています。
"""

from __future__ import annotations

import logging

from .config import LOG_LEVEL

# nonogram パッケージ共通で使うロガー名
LOGGER_NAME = "nonogram"


def get_logger() -> logging.Logger:
    """
    nonogram 全体で共通して使う logger を返します。

    すでに handler（出力先）が設定されていない場合は、
    標準出力（コンソール）に LOG_LEVEL のログを表示するように設定します。
    """
    logger = logging.getLogger(LOGGER_NAME)

    # まだハンドラが設定されていなければ、簡単な設定を行う
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))

    return logger
