#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线数据校验

validate_chart_data 按固定顺序检查，遇到第一个错误立即返回，
错误信息带字段路径与下标，可直接展示给用户：

1. 顶层是对象
2. analysis 存在
3. analysis.bazi 为 4 个元素的数组
4. chartData 为指定点数的数组
5. 逐个数据点：age / year / ganZhi / open / close / high / low / score / reason，
   K线逻辑 high >= max(open, close)、low <= min(open, close)，
   可选的 tenGod / energyScore / actionAdvice
6. analysis 的 9 个评分字段
7. 可选的 supportPressureLevels
"""

import re
from typing import Any, Dict, List, Optional

from core.calculators.helpers import has_value, is_number
from core.config.kline_config import (
    ACTION_SUGGESTION_COUNT,
    ACTION_WARNING_COUNT,
    ANALYSIS_SCORE_FIELDS,
    KLINE_VALUE_MAX,
    KLINE_VALUE_MIN,
    SCORE_MAX,
    SCORE_MIN,
    START_AGE_MAX,
    START_AGE_MIN,
    SUPPORT_PRESSURE_MAX_AGE,
    SUPPORT_PRESSURE_STRENGTHS,
    SUPPORT_PRESSURE_TYPES,
    TEN_GOD_LABELS,
    get_chart_point_count,
)
from core.exceptions import ChartValidationError

ENERGY_SCORE_FIELDS = ('total', 'monthCoefficient', 'dayRelation', 'hourFluctuation')

_GANZHI_PATTERN = re.compile(r'^[一-龥]{2}$')


def _ok() -> Dict[str, Any]:
    return {'valid': True}


def _fail(error: str) -> Dict[str, Any]:
    return {'valid': False, 'error': error}


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ''


def _in_range(value: Any, low: float, high: float) -> bool:
    return is_number(value) and low <= value <= high


def _validate_energy_score(energy: Any, prefix: str) -> Optional[str]:
    if not isinstance(energy, dict):
        return f'{prefix} 必须是对象'
    for name in ENERGY_SCORE_FIELDS:
        value = energy.get(name)
        if not _in_range(value, SCORE_MIN, SCORE_MAX):
            return f'{prefix}.{name} 必须在 {SCORE_MIN}-{SCORE_MAX} 范围内（当前: {value}）'
    if not isinstance(energy.get('isBelowSupport'), bool):
        return f'{prefix}.isBelowSupport 必须是布尔值'
    return None


def _validate_string_list(items: Any, expected: int, path: str) -> Optional[str]:
    if not isinstance(items, list) or len(items) != expected:
        actual = len(items) if isinstance(items, list) else '非数组'
        return f'{path} 必须是包含 {expected} 条的数组（当前: {actual}）'
    for j, item in enumerate(items):
        if not _is_non_empty_string(item):
            return f'{path}[{j}] 必须是非空字符串'
    return None


def _validate_action_advice(advice: Any, prefix: str) -> Optional[str]:
    if not isinstance(advice, dict):
        return f'{prefix} 必须是对象'
    error = _validate_string_list(advice.get('suggestions'), ACTION_SUGGESTION_COUNT, f'{prefix}.suggestions')
    if error:
        return error
    error = _validate_string_list(advice.get('warnings'), ACTION_WARNING_COUNT, f'{prefix}.warnings')
    if error:
        return error
    for name in ('basis', 'scenario'):
        value = advice.get(name)
        if value is not None and not isinstance(value, str):
            return f'{prefix}.{name} 必须是字符串'
    return None


def _validate_point(point: Any, index: int, max_age: int) -> Optional[str]:
    prefix = f'chartData[{index}]'

    if not isinstance(point, dict):
        return f'{prefix} 不是有效对象'

    age = point.get('age')
    if not is_number(age):
        return f'{prefix}.age 必须是数字'
    if age < 1 or age > max_age:
        return f'{prefix}.age 必须在 1-{max_age} 范围内（当前: {age}）'

    if not is_number(point.get('year')):
        return f'{prefix}.year 必须是数字'

    if not _is_non_empty_string(point.get('ganZhi')):
        return f'{prefix}.ganZhi 必须是非空字符串'

    for name in ('open', 'close', 'high', 'low'):
        value = point.get(name)
        if not _in_range(value, KLINE_VALUE_MIN, KLINE_VALUE_MAX):
            return f'{prefix}.{name} 必须在 {KLINE_VALUE_MIN}-{KLINE_VALUE_MAX} 范围内（当前: {value}）'

    score = point.get('score')
    if not _in_range(score, SCORE_MIN, SCORE_MAX):
        return f'{prefix}.score 必须在 {SCORE_MIN}-{SCORE_MAX} 范围内（当前: {score}）'

    if not _is_non_empty_string(point.get('reason')):
        return f'{prefix}.reason 必须是非空字符串'

    # K线逻辑：high >= max(open, close) && low <= min(open, close)
    max_oc = max(point['open'], point['close'])
    min_oc = min(point['open'], point['close'])
    if point['high'] < max_oc:
        return f"{prefix}.high ({point['high']}) 必须 >= max(open, close) ({max_oc})"
    if point['low'] > min_oc:
        return f"{prefix}.low ({point['low']}) 必须 <= min(open, close) ({min_oc})"

    ten_god = point.get('tenGod')
    if ten_god is not None and ten_god not in TEN_GOD_LABELS:
        return f'{prefix}.tenGod 必须是十神之一（当前: {ten_god}）'

    if point.get('energyScore') is not None:
        error = _validate_energy_score(point['energyScore'], f'{prefix}.energyScore')
        if error:
            return error

    if point.get('actionAdvice') is not None:
        error = _validate_action_advice(point['actionAdvice'], f'{prefix}.actionAdvice')
        if error:
            return error

    return None


def _validate_support_pressure_levels(levels: Any) -> Optional[str]:
    path = 'analysis.supportPressureLevels'
    if not isinstance(levels, list):
        return f'{path} 必须是数组'

    for i, level in enumerate(levels):
        prefix = f'{path}[{i}]'
        if not isinstance(level, dict):
            return f'{prefix} 不是有效对象'

        age = level.get('age')
        if not _in_range(age, 1, SUPPORT_PRESSURE_MAX_AGE):
            return f'{prefix}.age 必须在 1-{SUPPORT_PRESSURE_MAX_AGE} 范围内（当前: {age}）'

        value = level.get('value')
        if not _in_range(value, SCORE_MIN, SCORE_MAX):
            return f'{prefix}.value 必须在 {SCORE_MIN}-{SCORE_MAX} 范围内（当前: {value}）'

        if level.get('type') not in SUPPORT_PRESSURE_TYPES:
            return f"{prefix}.type 必须是 support 或 pressure（当前: {level.get('type')}）"

        if level.get('strength') not in SUPPORT_PRESSURE_STRENGTHS:
            return f"{prefix}.strength 必须是 weak、medium 或 strong（当前: {level.get('strength')}）"

        if not _is_non_empty_string(level.get('reason')):
            return f'{prefix}.reason 必须是非空字符串'

        ten_god = level.get('tenGod')
        if ten_god is not None and ten_god not in TEN_GOD_LABELS:
            return f'{prefix}.tenGod 必须是十神之一（当前: {ten_god}）'

    return None


def validate_chart_data(data: Any, expected_points: Optional[int] = None) -> Dict[str, Any]:
    """
    验证 JSON 数据的完整性

    Args:
        data: 标准化后的 LifeDestinyResult
        expected_points: chartData 要求的点数，默认读取 LIFE_KLINE_CHART_POINTS

    Returns:
        {'valid': True} 或 {'valid': False, 'error': 第一条错误}
    """
    if expected_points is None:
        expected_points = get_chart_point_count()

    if not data or not isinstance(data, dict):
        return _fail('数据格式错误：必须是有效的 JSON 对象')

    analysis = data.get('analysis')
    if not has_value(analysis):
        return _fail('缺少 analysis 字段')

    bazi = analysis.get('bazi') if isinstance(analysis, dict) else None
    if not isinstance(bazi, list) or len(bazi) != 4:
        return _fail('bazi 必须是包含4个元素的数组（年月日时）')

    chart_data = data.get('chartData')
    if not isinstance(chart_data, list):
        return _fail('缺少 chartData 字段或格式错误')

    if len(chart_data) != expected_points:
        return _fail(f'chartData 必须包含 {expected_points} 个数据点（当前: {len(chart_data)}）')

    for i, point in enumerate(chart_data):
        error = _validate_point(point, i, expected_points)
        if error:
            return _fail(error)

    for name in ANALYSIS_SCORE_FIELDS:
        score = analysis.get(name)
        if not _in_range(score, SCORE_MIN, SCORE_MAX):
            return _fail(f'analysis.{name} 必须在 {SCORE_MIN}-{SCORE_MAX} 范围内')

    if analysis.get('supportPressureLevels') is not None:
        error = _validate_support_pressure_levels(analysis['supportPressureLevels'])
        if error:
            return _fail(error)

    return _ok()


def assert_valid_chart_data(data: Any, expected_points: Optional[int] = None) -> Dict[str, Any]:
    """
    校验并返回数据

    Raises:
        ChartValidationError: 第一条校验失败
    """
    validation = validate_chart_data(data, expected_points)
    if not validation['valid']:
        raise ChartValidationError(validation['error'])
    return data


def validate_bazi_input(year_pillar: str, month_pillar: str, day_pillar: str, hour_pillar: str,
                        start_age: Any, first_dayun: str) -> Dict[str, Any]:
    """
    验证手动录入的八字信息（干支为 2 个汉字，起运年龄 0-10）
    """
    checks: List[tuple] = [
        (year_pillar, '年柱格式错误（应为2个汉字，如"癸未"）'),
        (month_pillar, '月柱格式错误（应为2个汉字）'),
        (day_pillar, '日柱格式错误（应为2个汉字）'),
        (hour_pillar, '时柱格式错误（应为2个汉字）'),
        (first_dayun, '第一步大运格式错误（应为2个汉字）'),
    ]
    for value, error in checks:
        if not isinstance(value, str) or not _GANZHI_PATTERN.match(value):
            return _fail(error)

    try:
        age = int(str(start_age).strip())
    except (TypeError, ValueError):
        return _fail(f'起运年龄必须在 {START_AGE_MIN}-{START_AGE_MAX} 之间')
    if age < START_AGE_MIN or age > START_AGE_MAX:
        return _fail(f'起运年龄必须在 {START_AGE_MIN}-{START_AGE_MAX} 之间')

    return _ok()
