#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
K线插值：年度数据 → 日级 / 周级数据

每一天按虚岁找到当年与下一年的数据点，按该日在农历年中的进度线性插值，
open/close 叠加 ±2.5% 的日间波动，high/low 在 open/close 基础上再扩展 0-2。
找不到当年数据点的日期直接跳过。
"""

import logging
import random
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional

from core.calculators.calendar_engine import CalendarEngine
from core.calculators.date_utils import (
    TimeRange,
    calculate_virtual_age,
    find_point_by_age,
    get_chinese_new_year_date,
)
from core.calculators.helpers import clamp, lerp, round_to_tenth
from core.calculators.LunarConverter import get_default_calendar

logger = logging.getLogger(__name__)

# 日间波动幅度（open/close 乘以 1 ± VARIATION/2）
VARIATION = 0.05
# high/low 相对 open/close 的最大扩展
MAX_SPREAD = 2.0
# 每日描述截取年度描述的前 N 个字
DAILY_REASON_LENGTH = 12

# 从年度数据点继承到每日数据点的可选字段
_INHERITED_FIELDS = ('daYun', 'tenGod', 'energyScore')


class RandomJitter:
    """随机波动，默认使用 random.random"""

    def __init__(self, rng: Optional[Callable[[], float]] = None):
        self._rng = rng or random.random

    def scale(self) -> float:
        return 1 + (self._rng() - 0.5) * VARIATION

    def spread(self) -> float:
        return self._rng() * MAX_SPREAD


class NoJitter:
    """无波动，用于测试与需要稳定输出的场景"""

    def scale(self) -> float:
        return 1.0

    def spread(self) -> float:
        return 0.0


def _lunar_year_progress(current: date, lunar_year: int, calendar: CalendarEngine) -> float:
    year_start = get_chinese_new_year_date(lunar_year, calendar)
    year_end = get_chinese_new_year_date(lunar_year + 1, calendar)
    total_days = (year_end - year_start).days
    if total_days <= 0:
        return 0.0
    return clamp((current - year_start).days / total_days, 0.0, 1.0)


def interpolate_kline_point(year_data: Dict[str, Any], next_year_data: Dict[str, Any],
                            progress: float, jitter=None) -> Dict[str, float]:
    """
    在两个年度数据点之间插值出单日的 open/close/high/low/score

    Args:
        year_data: 当年数据点
        next_year_data: 下一年数据点（没有时传入当年数据点）
        progress: 农历年内进度 0.0-1.0
        jitter: 波动策略，默认 RandomJitter
    """
    jitter = jitter or RandomJitter()

    base_open = lerp(year_data['open'], next_year_data['open'], progress)
    base_close = lerp(year_data['close'], next_year_data['close'], progress)

    open_value = round_to_tenth(base_open * jitter.scale())
    close_value = round_to_tenth(base_close * jitter.scale())

    max_oc = max(open_value, close_value)
    min_oc = min(open_value, close_value)

    return {
        'open': open_value,
        'close': close_value,
        'high': round_to_tenth(max_oc + jitter.spread()),
        'low': round_to_tenth(max(0, min_oc - jitter.spread())),
        'score': round_to_tenth(lerp(year_data['score'], next_year_data['score'], progress)),
    }


def _daily_reason(year_data: Dict[str, Any], day_name: str) -> str:
    base_reason = str(year_data.get('reason') or '')[:DAILY_REASON_LENGTH]
    return f'{base_reason}（{day_name}）'


def interpolate_daily_data(time_range: TimeRange, birth_date: date, chart_data: List[Dict[str, Any]],
                           calendar: Optional[CalendarEngine] = None, jitter=None) -> List[Dict[str, Any]]:
    """
    核心插值函数：从年度数据生成日级数据

    Args:
        time_range: 时间范围（含首尾两天）
        birth_date: 出生日期
        chart_data: 年度K线数据
        calendar: 历法实现，默认 lunar_python
        jitter: 波动策略，默认 RandomJitter

    Returns:
        每日数据点列表，找不到年度数据的日期不输出
    """
    calendar = calendar or get_default_calendar()
    jitter = jitter or RandomJitter()

    birth_lunar_year = calendar.solar_to_lunar(birth_date).year
    result = []
    skipped = 0

    current = time_range.start
    while current <= time_range.end:
        age = calculate_virtual_age(birth_date, current, calendar)
        year_data = find_point_by_age(chart_data, age)
        if year_data is None:
            skipped += 1
            current += timedelta(days=1)
            continue

        next_year_data = find_point_by_age(chart_data, age + 1) or year_data
        progress = _lunar_year_progress(current, birth_lunar_year + age - 1, calendar)
        values = interpolate_kline_point(year_data, next_year_data, progress, jitter)

        point = {
            'age': age,
            'year': current.year,
            'ganZhi': calendar.day_ganzhi(current),
            **values,
            'reason': _daily_reason(year_data, calendar.solar_to_lunar(current).day_name),
            'date': current.isoformat(),
            'isInterpolated': True,
        }
        for name in _INHERITED_FIELDS:
            if year_data.get(name) is not None:
                point[name] = year_data[name]
        result.append(point)

        current += timedelta(days=1)

    if skipped:
        logger.debug(f"插值跳过 {skipped} 天（无对应年龄的数据点）")
    return result


def aggregate_weekly(points: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    将日级数据按 ISO 周聚合为周K线

    开盘取周内第一天，收盘取最后一天，最高/最低取极值，评分取平均。
    """
    weeks: Dict[tuple, List[Dict[str, Any]]] = {}
    for point in sorted(points, key=lambda p: p['date']):
        iso_year, iso_week, _ = date.fromisoformat(point['date']).isocalendar()
        weeks.setdefault((iso_year, iso_week), []).append(point)

    result = []
    for days in weeks.values():
        first, last = days[0], days[-1]
        result.append({
            **first,
            'close': last['close'],
            'high': max(p['high'] for p in days),
            'low': min(p['low'] for p in days),
            'score': round_to_tenth(sum(p['score'] for p in days) / len(days)),
            'reason': last['reason'],
            'endDate': last['date'],
            'days': len(days),
        })
    return result
