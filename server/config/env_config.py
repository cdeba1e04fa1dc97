#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
环境判断与环境变量读取

ENV 优先，其次 APP_ENV，默认 local。
"""

import logging
import os
from typing import Literal, Optional

logger = logging.getLogger(__name__)

Environment = Literal["local", "staging", "production"]

_ENV_ALIASES = {
    "local": "local",
    "dev": "local",
    "development": "local",
    "test": "local",
    "stage": "staging",
    "staging": "staging",
    "prod": "production",
    "production": "production",
}


class EnvConfig:
    """
    环境配置读取器

    负责识别运行环境，并提供带类型转换的环境变量读取。
    """

    # 生产环境必需的环境变量
    PRODUCTION_REQUIRED_VARS = [
        "ANTHROPIC_AUTH_TOKEN",
    ]

    def __init__(self):
        raw_env = os.getenv("ENV", os.getenv("APP_ENV", "local")).lower()
        self._env: Environment = _ENV_ALIASES.get(raw_env, "local")
        if self.is_production:
            self._warn_missing_production_vars()

    def _warn_missing_production_vars(self):
        missing = [var for var in self.PRODUCTION_REQUIRED_VARS if not os.getenv(var)]
        if missing:
            # 不阻止启动，调用大模型时会返回明确错误
            logger.error(f"❌ 生产环境缺少必需环境变量: {', '.join(missing)}")

    @property
    def env(self) -> Environment:
        return self._env

    @property
    def is_production(self) -> bool:
        return self._env == "production"

    def get_config(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        读取字符串配置，空字符串视为未设置

        Raises:
            ValueError: required=True 且未设置
        """
        value = os.getenv(key)
        if value is None or value.strip() == "":
            value = default
        if required and value is None:
            raise ValueError(f"必需的环境变量 {key} 未设置")
        return value

    def get_bool_config(self, key: str, default: bool = False) -> bool:
        value = os.getenv(key, str(default)).lower()
        return value in ("true", "1", "yes", "on")

    def get_int_config(self, key: str, default: int = 0) -> int:
        value = os.getenv(key, str(default))
        try:
            return int(value)
        except ValueError:
            logger.warning(f"环境变量 {key}={value} 不是整数，使用默认值 {default}")
            return default

    def get_float_config(self, key: str, default: float = 0.0) -> float:
        value = os.getenv(key, str(default))
        try:
            return float(value)
        except ValueError:
            logger.warning(f"环境变量 {key}={value} 不是数字，使用默认值 {default}")
            return default


_env_config: Optional[EnvConfig] = None


def get_env_config() -> EnvConfig:
    """获取环境配置实例（全局单例）"""
    global _env_config
    if _env_config is None:
        _env_config = EnvConfig()
    return _env_config


def reset_env_config():
    """丢弃缓存的实例，下次读取时重新识别环境"""
    global _env_config
    _env_config = None


def is_production() -> bool:
    return get_env_config().is_production
