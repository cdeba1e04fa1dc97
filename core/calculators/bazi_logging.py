#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
核心计算日志

排盘、历法等计算模块统一写入 "life_kline.core" 日志器。
日志输出失败（客户端断开导致的 Broken pipe）不会打断计算。
"""

import logging

CORE_LOGGER_NAME = 'life_kline.core'

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


class SafeStreamHandler(logging.StreamHandler):
    """写入 stderr 失败时丢弃该条记录"""

    def emit(self, record):
        try:
            super().emit(record)
        except (BrokenPipeError, OSError):
            pass


def get_core_logger(name: str = '') -> logging.Logger:
    """获取核心计算日志器，name 为子模块名（如 'bazi'）"""
    return logging.getLogger(f'{CORE_LOGGER_NAME}.{name}' if name else CORE_LOGGER_NAME)


def _configure_core_logger() -> logging.Logger:
    core_logger = get_core_logger()
    if not core_logger.handlers:
        handler = SafeStreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        core_logger.addHandler(handler)
        core_logger.setLevel(logging.INFO)
        core_logger.propagate = False
    return core_logger


logger = _configure_core_logger()


def safe_log(level: str, message: str, name: str = '') -> None:
    """按级别名写日志，未知级别按 info 处理"""
    try:
        get_core_logger(name).log(_LEVELS.get(level, logging.INFO), message)
    except (BrokenPipeError, OSError):
        pass
