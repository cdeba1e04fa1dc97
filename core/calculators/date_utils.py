#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
虚岁与视图日期范围工具

虚岁规则：出生即 1 岁，每过一个农历新年 +1 岁。
"""

import calendar as _calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from core.calculators.calendar_engine import CalendarEngine
from core.calculators.LunarConverter import get_default_calendar

GRANULARITY_DAY = 'day'
GRANULARITY_WEEK = 'week'


@dataclass(frozen=True)
class TimeRange:
    start: date
    end: date
    granularity: str = GRANULARITY_DAY


def calculate_virtual_age(birth_date: date, current_date: date,
                          calendar: Optional[CalendarEngine] = None) -> int:
    """
    计算虚岁

    Args:
        birth_date: 出生日期
        current_date: 当前日期
    Returns:
        虚岁 = 农历年数差 + 1
    """
    calendar = calendar or get_default_calendar()
    birth_lunar_year = calendar.solar_to_lunar(birth_date).year
    current_lunar_year = calendar.solar_to_lunar(current_date).year
    return current_lunar_year - birth_lunar_year + 1


def get_chinese_new_year_date(lunar_year: int, calendar: Optional[CalendarEngine] = None) -> date:
    """获取某个农历年的春节日期（正月初一）"""
    calendar = calendar or get_default_calendar()
    return calendar.lunar_new_year(lunar_year)


def _shift_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, _calendar.monthrange(year, month)[1])
    return date(year, month, day)


def get_daily_view_range(current_date: Optional[date] = None) -> TimeRange:
    """日视图：当前日期 ± 7 天"""
    current_date = current_date or date.today()
    return TimeRange(
        start=current_date - timedelta(days=7),
        end=current_date + timedelta(days=7),
        granularity=GRANULARITY_DAY,
    )


def get_weekly_view_range(current_date: Optional[date] = None) -> TimeRange:
    """周视图：当前日期 ± 1 个月（日期超出目标月天数时取月末）"""
    current_date = current_date or date.today()
    return TimeRange(
        start=_shift_months(current_date, -1),
        end=_shift_months(current_date, 1),
        granularity=GRANULARITY_WEEK,
    )


def get_year_data_for_date(target_date: date, birth_date: date, chart_data: List[Dict[str, Any]],
                           calendar: Optional[CalendarEngine] = None) -> Optional[Dict[str, Any]]:
    """将特定日期映射到对应的年度数据点，找不到时返回 None"""
    age = calculate_virtual_age(birth_date, target_date, calendar)
    return find_point_by_age(chart_data, age)


def find_point_by_age(chart_data: List[Dict[str, Any]], age: int) -> Optional[Dict[str, Any]]:
    for point in chart_data:
        if isinstance(point, dict) and point.get('age') == age:
            return point
    return None
