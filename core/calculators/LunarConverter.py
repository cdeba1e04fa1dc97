#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from datetime import date
from typing import Tuple

from lunar_python import Solar, Lunar

from core.calculators.calendar_engine import FourPillars, LunarDate


class LunarConverter:
    """农历转换工具类 - 基于 lunar_python 的默认历法实现"""

    @staticmethod
    def _solar(solar_date: date, hour: int = 0):
        return Solar.fromYmdHms(solar_date.year, solar_date.month, solar_date.day, hour, 0, 0)

    @staticmethod
    def solar_to_lunar(solar_date: date) -> LunarDate:
        """
        将公历日期转换为农历日期（按当天 00:00 计算）
        Args:
            solar_date: 公历日期
        Returns:
            LunarDate: 农历年月日
        """
        lunar = LunarConverter._solar(solar_date).getLunar()
        return LunarDate(
            year=lunar.getYear(),
            month=abs(lunar.getMonth()),
            day=lunar.getDay(),
            month_name=lunar.getMonthInChinese(),
            day_name=lunar.getDayInChinese(),
            is_leap_month=LunarConverter._get_leap_month_status(lunar),
        )

    @staticmethod
    def _get_leap_month_status(lunar) -> bool:
        """lunar_python 中闰月以负数月份表示"""
        return lunar.getMonth() < 0

    @staticmethod
    def lunar_new_year(lunar_year: int) -> date:
        """
        获取某个农历年的春节日期（正月初一）
        Args:
            lunar_year: 农历年份
        Returns:
            date: 春节公历日期
        """
        solar = Lunar.fromYmd(lunar_year, 1, 1).getSolar()
        return date(solar.getYear(), solar.getMonth(), solar.getDay())

    @staticmethod
    def eight_char_of(solar_date: date, hour: int) -> FourPillars:
        """
        获取指定公历日期、整点时刻的四柱
        Args:
            solar_date: 公历日期
            hour: 小时（0-23）
        """
        eight_char = LunarConverter._solar(solar_date, hour).getLunar().getEightChar()
        return FourPillars(
            year_pillar=eight_char.getYear(),
            month_pillar=eight_char.getMonth(),
            day_pillar=eight_char.getDay(),
            hour_pillar=eight_char.getTime(),
        )

    @staticmethod
    def luck_start(solar_date: date, hour: int, gender_code: int) -> Tuple[int, int]:
        """
        起运时间（周岁）
        Args:
            gender_code: 1 表示男性，0 表示女性
        Returns:
            (start_year, start_month)
        """
        eight_char = LunarConverter._solar(solar_date, hour).getLunar().getEightChar()
        yun = eight_char.getYun(gender_code)
        return yun.getStartYear(), yun.getStartMonth()

    @staticmethod
    def day_ganzhi(solar_date: date) -> str:
        """获取指定日期的日柱干支"""
        return LunarConverter._solar(solar_date).getLunar().getEightChar().getDay()


_default_calendar = None


def get_default_calendar() -> LunarConverter:
    """默认历法实例（无状态，可共享）"""
    global _default_calendar
    if _default_calendar is None:
        _default_calendar = LunarConverter()
    return _default_calendar
