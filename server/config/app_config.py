#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
应用配置
所有配置统一从这里读取，避免配置分散
"""

from dataclasses import dataclass, field
from typing import Optional

from core.config.kline_config import get_chart_point_count
from server.config.env_config import get_env_config, reset_env_config

DEFAULT_LLM_BASE_URL = 'https://api.anthropic.com'
DEFAULT_LLM_MODEL = 'claude-3-5-sonnet-20241022'
ANTHROPIC_VERSION = '2023-06-01'


@dataclass
class LLMConfig:
    """大模型（Anthropic Messages API 兼容）配置"""
    base_url: str = DEFAULT_LLM_BASE_URL
    auth_token: Optional[str] = None
    model: str = DEFAULT_LLM_MODEL
    timeout: int = 300
    max_tokens: int = 16000
    temperature: float = 0.5

    @property
    def is_configured(self) -> bool:
        return bool(self.auth_token)

    @property
    def messages_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/v1/messages"

    @classmethod
    def from_env(cls) -> 'LLMConfig':
        env_config = get_env_config()
        return cls(
            base_url=env_config.get_config('ANTHROPIC_BASE_URL', default=DEFAULT_LLM_BASE_URL),
            auth_token=env_config.get_config('ANTHROPIC_AUTH_TOKEN'),
            model=env_config.get_config('ANTHROPIC_MODEL', default=DEFAULT_LLM_MODEL),
            timeout=env_config.get_int_config('LLM_TIMEOUT', default=300),
            max_tokens=env_config.get_int_config('LLM_MAX_TOKENS', default=16000),
            temperature=env_config.get_float_config('LLM_TEMPERATURE', default=0.5),
        )


@dataclass
class KLineConfig:
    """人生K线数据配置"""
    chart_points: int = 30

    @classmethod
    def from_env(cls) -> 'KLineConfig':
        return cls(chart_points=get_chart_point_count())


@dataclass
class AppConfig:
    """应用配置"""
    env: str = 'local'
    debug: bool = False
    log_level: str = 'INFO'
    host: str = '0.0.0.0'
    port: int = 8001

    llm: LLMConfig = field(default_factory=LLMConfig)
    kline: KLineConfig = field(default_factory=KLineConfig)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """从环境变量创建完整配置"""
        env_config = get_env_config()
        return cls(
            env=env_config.env,
            debug=env_config.get_bool_config('DEBUG', default=False),
            log_level=env_config.get_config('LOG_LEVEL', default='INFO'),
            host=env_config.get_config('HOST', default='0.0.0.0'),
            port=env_config.get_int_config('PORT', default=8001),
            llm=LLMConfig.from_env(),
            kline=KLineConfig.from_env(),
        )


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """获取全局配置实例（单例）"""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reload_config() -> AppConfig:
    """重新加载配置（环境变量变化后调用）"""
    global _config
    reset_env_config()
    _config = AppConfig.from_env()
    return _config
