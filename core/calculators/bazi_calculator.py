#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字排盘模块

根据公历日期 + 时辰 + 性别计算：
- 四柱（年柱/月柱/日柱/时柱）
- 出生农历年
- 起运年龄（虚岁，0-10）
- 大运方向（阳男阴女顺行，阴男阳女逆行）与第一步大运

流程：先校验输入，再调用历法；校验失败时不会触发任何历法计算。
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from core.calculators.bazi_logging import safe_log
from core.calculators.calendar_engine import CalendarEngine, FourPillars
from core.calculators.LunarConverter import get_default_calendar
from core.config.kline_config import (
    BIRTH_YEAR_MAX,
    BIRTH_YEAR_MIN,
    DEFAULT_START_AGE,
    START_AGE_MAX,
    START_AGE_MIN,
)
from core.data.shi_chen import SHI_CHEN_BY_NAME, get_hour_from_shi_chen
from core.data.stems_branches import is_valid_ganzhi, is_yang_stem, shift_ganzhi
from core.exceptions import CalendarComputationError, InvalidInputError

GENDER_MALE = 'Male'
GENDER_FEMALE = 'Female'
GENDERS = (GENDER_MALE, GENDER_FEMALE)

DIRECTION_FORWARD = '顺行'
DIRECTION_REVERSE = '逆行'


@dataclass(frozen=True)
class BirthInstant:
    """一次提交的出生信息（构造后不可变）"""
    solar_date: date
    shi_chen: str
    gender: str


@dataclass(frozen=True)
class BaziCalculationResult:
    pillars: FourPillars
    lunar_year: int
    start_age: int
    birth_year: int
    is_forward: bool
    dayun_direction: str
    first_dayun: str
    hour: int = field(default=0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.pillars.to_dict(),
            'lunarYear': self.lunar_year,
            'startAge': self.start_age,
            'birthYear': self.birth_year,
            'isForward': self.is_forward,
            'daYunDirection': self.dayun_direction,
            'firstDaYun': self.first_dayun,
        }


def _coerce_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), '%Y-%m-%d').date()
        except ValueError:
            return None
    return None


def validate_bazi_calculation_input(solar_date: Any, shi_chen: Any, gender: Any) -> Dict[str, Any]:
    """
    验证排盘输入

    Returns:
        {'valid': True} 或 {'valid': False, 'error': 原因}
    """
    birth_date = _coerce_date(solar_date)
    if birth_date is None:
        return {'valid': False, 'error': '出生日期无效'}

    if birth_date.year < BIRTH_YEAR_MIN or birth_date.year > BIRTH_YEAR_MAX:
        return {'valid': False, 'error': f'出生年份必须在 {BIRTH_YEAR_MIN}-{BIRTH_YEAR_MAX} 年之间'}

    if gender not in GENDERS:
        return {'valid': False, 'error': '性别必须是 Male 或 Female'}

    if shi_chen not in SHI_CHEN_BY_NAME:
        return {'valid': False, 'error': '时辰选择无效'}

    return {'valid': True}


def build_birth_instant(solar_date: Any, shi_chen: Any, gender: Any) -> BirthInstant:
    """
    校验并构造 BirthInstant

    Raises:
        InvalidInputError: 输入不合法
    """
    validation = validate_bazi_calculation_input(solar_date, shi_chen, gender)
    if not validation['valid']:
        raise InvalidInputError(validation['error'])
    return BirthInstant(solar_date=_coerce_date(solar_date), shi_chen=shi_chen, gender=gender)


def get_dayun_direction(year_pillar: str, gender: str) -> Dict[str, Any]:
    """
    判断大运方向（顺行/逆行）
    规则：阳男/阴女顺行，阴男/阳女逆行
    """
    is_yang_year = is_yang_stem(year_pillar.strip()[:1])
    is_forward = is_yang_year if gender == GENDER_MALE else not is_yang_year
    return {
        'is_forward': is_forward,
        'text': DIRECTION_FORWARD if is_forward else DIRECTION_REVERSE,
    }


def get_first_dayun(month_pillar: str, is_forward: bool) -> str:
    """第一步大运：顺行取月柱的下一个干支，逆行取上一个"""
    return shift_ganzhi(month_pillar, 1 if is_forward else -1)


def to_virtual_start_age(start_year: int, start_month: int) -> int:
    """周岁起运 → 虚岁：周岁 + 1，月数 >= 6 再 + 1，限制在 0-10"""
    start_age = start_year + 1
    if start_month >= 6:
        start_age += 1
    return max(START_AGE_MIN, min(START_AGE_MAX, start_age))


def calculate_start_age(calendar: CalendarEngine, solar_date: date, hour: int, gender: str) -> int:
    """
    计算起运年龄（虚岁）

    历法库计算失败时返回默认值 3，不阻断排盘。
    """
    gender_code = 1 if gender == GENDER_MALE else 0
    try:
        start_year, start_month = calendar.luck_start(solar_date, hour, gender_code)
        return to_virtual_start_age(int(start_year), int(start_month))
    except Exception as e:
        safe_log('warning', f"起运年龄计算失败，使用默认值 {DEFAULT_START_AGE}: {e}", name='bazi')
        return DEFAULT_START_AGE


def compute_four_pillars(birth: BirthInstant,
                         calendar: Optional[CalendarEngine] = None) -> BaziCalculationResult:
    """
    计算八字信息

    Args:
        birth: 出生信息
        calendar: 历法实现，默认 lunar_python

    Raises:
        InvalidInputError: 输入不合法（不会调用历法）
        CalendarComputationError: 历法计算失败
    """
    validation = validate_bazi_calculation_input(birth.solar_date, birth.shi_chen, birth.gender)
    if not validation['valid']:
        raise InvalidInputError(validation['error'])

    calendar = calendar or get_default_calendar()
    solar_date = _coerce_date(birth.solar_date)
    hour = get_hour_from_shi_chen(birth.shi_chen)

    try:
        pillars = calendar.eight_char_of(solar_date, hour)
        lunar_year = calendar.solar_to_lunar(solar_date).year
    except Exception as e:
        safe_log('error', f"八字计算失败: {solar_date} {birth.shi_chen}: {e}", name='bazi')
        raise CalendarComputationError('八字计算失败，请检查输入信息是否正确', details=str(e)) from e

    for label, pillar in zip(('年柱', '月柱', '日柱', '时柱'), pillars.as_list()):
        if not is_valid_ganzhi(pillar):
            safe_log('error', f"历法返回的{label}无效: {pillar!r}", name='bazi')
            raise CalendarComputationError('八字计算失败，请检查输入信息是否正确',
                                           details=f'{label}无效: {pillar!r}')

    start_age = calculate_start_age(calendar, solar_date, hour, birth.gender)
    direction = get_dayun_direction(pillars.year_pillar, birth.gender)

    result = BaziCalculationResult(
        pillars=pillars,
        lunar_year=lunar_year,
        start_age=start_age,
        birth_year=solar_date.year,
        is_forward=direction['is_forward'],
        dayun_direction=direction['text'],
        first_dayun=get_first_dayun(pillars.month_pillar, direction['is_forward']),
        hour=hour,
    )
    safe_log('debug', f"排盘完成: {' '.join(pillars.as_list())} 起运{start_age}岁 {direction['text']}", name='bazi')
    return result


def calculate_bazi(solar_date: Union[date, str], shi_chen: str, gender: str,
                   calendar: Optional[CalendarEngine] = None) -> BaziCalculationResult:
    """便捷入口：校验 + 排盘"""
    birth = build_birth_instant(solar_date, shi_chen, gender)
    return compute_four_pillars(birth, calendar)
