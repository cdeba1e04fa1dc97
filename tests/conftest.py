#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest 全局配置

提供：
- 共享 fixtures（应用、客户端、示例数据、假历法）
- 测试钩子
"""

import copy
from typing import Any, Dict

import pytest

from tests.kline_fixtures import FakeCalendar, make_result


@pytest.fixture(scope="function")
def fake_calendar() -> FakeCalendar:
    return FakeCalendar()


# ==================== 应用和客户端 Fixtures ====================

@pytest.fixture(scope="session")
def app():
    """
    创建 FastAPI 应用实例（整个测试会话共享）
    """
    from server.main import app
    return app


@pytest.fixture(scope="session")
def client(app):
    """
    创建测试客户端（整个测试会话共享）
    """
    from fastapi.testclient import TestClient
    return TestClient(app)


# ==================== 数据 Fixtures ====================

@pytest.fixture(scope="function")
def valid_result() -> Dict[str, Any]:
    """30 个数据点的合法结果"""
    return make_result()


@pytest.fixture(scope="function")
def flat_llm_output() -> Dict[str, Any]:
    """AI 返回的扁平格式（chartPoints + 顶层分析字段，百分制评分）"""
    result = make_result()
    flat = copy.deepcopy(result['analysis'])
    flat['summaryScore'] = 85
    flat['chartPoints'] = [dict(p, score=p['score'] * 10) for p in result['chartData']]
    flat['supportPressureLevels'] = [
        {'age': 25, 'type': 'support', 'value': 6.5, 'strength': 'strong',
         'reason': '正印护身，贵人相助', 'tenGod': '正印'},
    ]
    return flat


@pytest.fixture(scope="function")
def sample_prompt_input() -> Dict[str, Any]:
    return {
        'gender': 'Male',
        'birthYear': 1990,
        'yearPillar': '庚午',
        'monthPillar': '辛巳',
        'dayPillar': '庚辰',
        'hourPillar': '壬午',
        'startAge': 3,
    }


@pytest.fixture(autouse=True)
def _default_chart_points(monkeypatch):
    """测试默认使用 30 个数据点，避免受本地 .env 影响"""
    monkeypatch.setenv('LIFE_KLINE_CHART_POINTS', '30')


# ==================== Pytest Hooks ====================

def pytest_configure(config):
    """
    pytest 配置钩子
    """
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "api: API 测试")


def pytest_collection_modifyitems(config, items):
    """
    根据路径自动添加标记
    """
    for item in items:
        if "unit" in item.nodeid:
            item.add_marker(pytest.mark.unit)
        elif "api" in item.nodeid:
            item.add_marker(pytest.mark.api)
