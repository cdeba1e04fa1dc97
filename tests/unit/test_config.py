#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置管理单元测试
"""

import os
from unittest.mock import patch

import pytest

from core.config.kline_config import DEFAULT_CHART_POINTS, get_chart_point_count
from server.config.app_config import AppConfig, KLineConfig, LLMConfig, get_config, reload_config
from server.config.env_config import EnvConfig


class TestChartPointConfig:
    """chartData 点数配置"""

    def test_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_chart_point_count() == DEFAULT_CHART_POINTS == 30

    def test_from_env(self):
        with patch.dict(os.environ, {'LIFE_KLINE_CHART_POINTS': '100'}):
            assert get_chart_point_count() == 100
            assert KLineConfig.from_env().chart_points == 100

    @pytest.mark.parametrize("value", ['abc', '0', '-5'])
    def test_invalid_falls_back(self, value):
        with patch.dict(os.environ, {'LIFE_KLINE_CHART_POINTS': value}):
            assert get_chart_point_count() == 30


class TestLLMConfig:
    """大模型配置"""

    def test_from_env(self):
        with patch.dict(os.environ, {
            'ANTHROPIC_BASE_URL': 'https://proxy.example.com/',
            'ANTHROPIC_AUTH_TOKEN': 'sk-test',
            'ANTHROPIC_MODEL': 'test-model',
            'LLM_TIMEOUT': '60',
            'LLM_MAX_TOKENS': '8000',
            'LLM_TEMPERATURE': '0.2',
        }):
            config = LLMConfig.from_env()

            assert config.base_url == 'https://proxy.example.com/'
            assert config.messages_url == 'https://proxy.example.com/v1/messages'
            assert config.auth_token == 'sk-test'
            assert config.model == 'test-model'
            assert config.timeout == 60
            assert config.max_tokens == 8000
            assert config.temperature == 0.2
            assert config.is_configured is True

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = LLMConfig.from_env()

            assert config.base_url == 'https://api.anthropic.com'
            assert config.model == 'claude-3-5-sonnet-20241022'
            assert config.max_tokens == 16000
            assert config.temperature == 0.5
            assert config.auth_token is None
            assert config.is_configured is False

    def test_empty_token_not_configured(self):
        with patch.dict(os.environ, {'ANTHROPIC_AUTH_TOKEN': '  '}):
            assert LLMConfig.from_env().is_configured is False


class TestEnvConfig:
    """环境识别"""

    @pytest.mark.parametrize("value,expected", [
        ('prod', 'production'),
        ('production', 'production'),
        ('stage', 'staging'),
        ('dev', 'local'),
        ('something-else', 'local'),
    ])
    def test_environment_aliases(self, value, expected):
        with patch.dict(os.environ, {'ENV': value, 'ANTHROPIC_AUTH_TOKEN': 'x'}):
            assert EnvConfig().env == expected

    def test_app_env_fallback(self):
        with patch.dict(os.environ, {'APP_ENV': 'production', 'ANTHROPIC_AUTH_TOKEN': 'x'}, clear=True):
            assert EnvConfig().is_production is True

    def test_typed_getters(self):
        with patch.dict(os.environ, {'A_BOOL': 'yes', 'AN_INT': 'x', 'A_FLOAT': '1.5'}):
            env_config = EnvConfig()
            assert env_config.get_bool_config('A_BOOL') is True
            assert env_config.get_int_config('AN_INT', default=7) == 7
            assert env_config.get_float_config('A_FLOAT') == 1.5

    def test_required_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError):
                EnvConfig().get_config('MISSING_KEY', required=True)


class TestAppConfig:
    def test_from_env(self):
        with patch.dict(os.environ, {'DEBUG': 'true', 'PORT': '9000', 'LIFE_KLINE_CHART_POINTS': '100'}):
            config = AppConfig.from_env()

            assert config.debug is True
            assert config.port == 9000
            assert config.kline.chart_points == 100
            assert isinstance(config.llm, LLMConfig)

    def test_singleton_and_reload(self):
        with patch.dict(os.environ, {'ANTHROPIC_MODEL': 'model-a'}):
            first = reload_config()
            assert get_config() is first
            assert first.llm.model == 'model-a'

        with patch.dict(os.environ, {'ANTHROPIC_MODEL': 'model-b'}):
            assert reload_config().llm.model == 'model-b'

        reload_config()
