#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
历法能力接口

排盘、虚岁与插值只依赖这里定义的窄接口，默认实现见
core.calculators.LunarConverter（基于 lunar_python）。测试中可注入假历法。
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Protocol, Tuple

@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    month_name: str = ''
    day_name: str = ''
    is_leap_month: bool = False

@dataclass(frozen=True)
class FourPillars:
    year_pillar: str
    month_pillar: str
    day_pillar: str
    hour_pillar: str

    def as_list(self):
        return [self.year_pillar, self.month_pillar, self.day_pillar, self.hour_pillar]

    def to_dict(self) -> Dict[str, str]:
        return {
            'yearPillar': self.year_pillar,
            'monthPillar': self.month_pillar,
            'dayPillar': self.day_pillar,
            'hourPillar': self.hour_pillar,
        }


class CalendarEngine(Protocol):
    """公历/农历转换与八字排盘能力"""

    def solar_to_lunar(self, solar_date: date) -> LunarDate:
        ...

    def lunar_new_year(self, lunar_year: int) -> date:
        """农历某年正月初一对应的公历日期"""
        ...

    def eight_char_of(self, solar_date: date, hour: int) -> FourPillars:
        ...

    def luck_start(self, solar_date: date, hour: int, gender_code: int) -> Tuple[int, int]:
        """起运周岁 (start_year, start_month)；gender_code: 1=男, 0=女"""
        ...

    def day_ganzhi(self, solar_date: date) -> str:
        ...
