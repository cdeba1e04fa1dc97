#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""八字排盘单元测试"""

from datetime import date

import pytest

from core.calculators.bazi_calculator import (
    BirthInstant,
    build_birth_instant,
    calculate_bazi,
    calculate_start_age,
    compute_four_pillars,
    get_dayun_direction,
    get_first_dayun,
    to_virtual_start_age,
    validate_bazi_calculation_input,
)
from core.calculators.calendar_engine import FourPillars
from core.exceptions import CalendarComputationError, InvalidInputError
from tests.kline_fixtures import FakeCalendar

CASES = [
    {"solar_date": "1987-01-07", "shi_chen": "巳时", "gender": "Male", "expected_day": "丙辰"},
    {"solar_date": "1984-03-08", "shi_chen": "巳时", "gender": "Male", "expected_day": "辛丑"},
    {"solar_date": "2008-09-08", "shi_chen": "申时", "gender": "Female", "expected_day": "辛亥"},
]


class TestValidateInput:
    """输入校验测试"""

    def test_valid_input(self):
        assert validate_bazi_calculation_input("1990-05-15", "午时", "Male") == {'valid': True}

    def test_accepts_date_object(self):
        assert validate_bazi_calculation_input(date(1990, 5, 15), "子时", "Female")['valid'] is True

    @pytest.mark.parametrize("solar_date", ["1990-02-30", "not-a-date", "", None, 19900515])
    def test_invalid_date(self, solar_date):
        result = validate_bazi_calculation_input(solar_date, "午时", "Male")
        assert result == {'valid': False, 'error': '出生日期无效'}

    @pytest.mark.parametrize("solar_date", ["1899-12-31", "2101-01-01"])
    def test_year_out_of_range(self, solar_date):
        result = validate_bazi_calculation_input(solar_date, "午时", "Male")
        assert result['error'] == '出生年份必须在 1900-2100 年之间'

    def test_year_boundaries_accepted(self):
        assert validate_bazi_calculation_input("1900-01-01", "午时", "Male")['valid'] is True
        assert validate_bazi_calculation_input("2100-12-31", "午时", "Male")['valid'] is True

    @pytest.mark.parametrize("gender", ["male", "M", "", None])
    def test_invalid_gender(self, gender):
        result = validate_bazi_calculation_input("1990-05-15", "午时", gender)
        assert result['error'] == '性别必须是 Male 或 Female'

    @pytest.mark.parametrize("shi_chen", ["午", "noon", "", None])
    def test_invalid_shi_chen(self, shi_chen):
        result = validate_bazi_calculation_input("1990-05-15", shi_chen, "Male")
        assert result['error'] == '时辰选择无效'

    def test_build_birth_instant_raises(self):
        with pytest.raises(InvalidInputError) as exc_info:
            build_birth_instant("1990-05-15", "午时", "unknown")
        assert exc_info.value.message == '性别必须是 Male 或 Female'
        assert exc_info.value.code == 400

    def test_build_birth_instant_parses_date(self):
        birth = build_birth_instant("1990-05-15", "午时", "Male")
        assert birth.solar_date == date(1990, 5, 15)


class TestDayunDirection:
    """大运方向测试：阳男阴女顺行，阴男阳女逆行"""

    @pytest.mark.parametrize("year_pillar,gender,expected", [
        ("甲子", "Male", True),
        ("庚午", "Male", True),
        ("乙丑", "Male", False),
        ("癸未", "Male", False),
        ("甲子", "Female", False),
        ("乙丑", "Female", True),
    ])
    def test_direction(self, year_pillar, gender, expected):
        direction = get_dayun_direction(year_pillar, gender)
        assert direction['is_forward'] is expected
        assert direction['text'] == ('顺行' if expected else '逆行')

    def test_first_dayun_forward(self):
        assert get_first_dayun("辛巳", True) == "壬午"

    def test_first_dayun_reverse(self):
        assert get_first_dayun("辛巳", False) == "庚辰"

    def test_first_dayun_wraps_cycle(self):
        assert get_first_dayun("癸亥", True) == "甲子"
        assert get_first_dayun("甲子", False) == "癸亥"


class TestStartAge:
    """起运年龄测试"""

    @pytest.mark.parametrize("start_year,start_month,expected", [
        (2, 3, 3),
        (2, 6, 4),
        (0, 0, 1),
        (12, 0, 10),
        (9, 8, 10),
    ])
    def test_virtual_start_age(self, start_year, start_month, expected):
        assert to_virtual_start_age(start_year, start_month) == expected

    def test_gender_code_passed_to_calendar(self):
        received = {}

        class RecordingCalendar(FakeCalendar):
            def luck_start(self, solar_date, hour, gender_code):
                received['gender_code'] = gender_code
                return 1, 0

        calculate_start_age(RecordingCalendar(), date(1990, 5, 15), 12, "Female")
        assert received['gender_code'] == 0
        calculate_start_age(RecordingCalendar(), date(1990, 5, 15), 12, "Male")
        assert received['gender_code'] == 1

    def test_falls_back_to_default_on_failure(self):
        """测试：历法计算起运失败时使用默认值 3"""
        calendar = FakeCalendar(fail_luck=True)
        assert calculate_start_age(calendar, date(1990, 5, 15), 12, "Male") == 3


class TestComputeFourPillars:
    """排盘流程测试（假历法）"""

    def test_result_fields(self, fake_calendar):
        result = calculate_bazi("1990-05-15", "午时", "Male", fake_calendar)

        assert result.pillars.as_list() == ['庚午', '辛巳', '庚辰', '壬午']
        assert result.lunar_year == 1990
        assert result.birth_year == 1990
        assert result.start_age == 3
        assert result.is_forward is True
        assert result.dayun_direction == '顺行'
        assert result.first_dayun == '壬午'
        assert result.hour == 12

    def test_to_dict(self, fake_calendar):
        data = calculate_bazi("1990-05-15", "午时", "Female", fake_calendar).to_dict()
        assert data == {
            'yearPillar': '庚午',
            'monthPillar': '辛巳',
            'dayPillar': '庚辰',
            'hourPillar': '壬午',
            'lunarYear': 1990,
            'startAge': 3,
            'birthYear': 1990,
            'isForward': False,
            'daYunDirection': '逆行',
            'firstDaYun': '庚辰',
        }

    def test_invalid_input_never_calls_calendar(self, fake_calendar):
        """测试：输入非法时不触发任何历法计算"""
        birth = BirthInstant(solar_date=date(1990, 5, 15), shi_chen="午", gender="Male")
        with pytest.raises(InvalidInputError):
            compute_four_pillars(birth, fake_calendar)
        assert fake_calendar.calls == []

    def test_calendar_failure_raises(self):
        calendar = FakeCalendar(fail_eight_char=True)
        with pytest.raises(CalendarComputationError) as exc_info:
            calculate_bazi("1990-05-15", "午时", "Male", calendar)
        assert exc_info.value.message == '八字计算失败，请检查输入信息是否正确'
        assert exc_info.value.code == 500

    def test_malformed_pillar_raises(self):
        calendar = FakeCalendar(pillars=FourPillars('庚午', '辛巳', '庚', '壬午'))
        with pytest.raises(CalendarComputationError):
            calculate_bazi("1990-05-15", "午时", "Male", calendar)

    def test_luck_failure_does_not_block(self):
        calendar = FakeCalendar(fail_luck=True)
        result = calculate_bazi("1990-05-15", "午时", "Male", calendar)
        assert result.start_age == 3
        assert result.pillars.day_pillar == '庚辰'

    def test_shi_chen_mapped_to_mid_hour(self):
        hours = []

        class RecordingCalendar(FakeCalendar):
            def eight_char_of(self, solar_date, hour):
                hours.append(hour)
                return super().eight_char_of(solar_date, hour)

        calculate_bazi("1990-05-15", "子时", "Male", RecordingCalendar())
        calculate_bazi("1990-05-15", "亥时", "Male", RecordingCalendar())
        assert hours == [0, 22]


class TestLunarPythonEngine:
    """默认历法（lunar_python）排盘测试"""

    @pytest.mark.parametrize("case", CASES, ids=[c["solar_date"] for c in CASES])
    def test_day_pillar(self, case):
        result = calculate_bazi(case["solar_date"], case["shi_chen"], case["gender"])
        assert result.pillars.day_pillar == case["expected_day"]

    def test_four_pillars(self):
        result = calculate_bazi("1987-01-07", "巳时", "Male")
        assert result.pillars.as_list() == ['丙寅', '辛丑', '丙辰', '癸巳']
        assert result.lunar_year == 1986
        assert result.dayun_direction == '顺行'
        assert result.first_dayun == '壬寅'

    def test_start_age_in_range(self):
        for case in CASES:
            result = calculate_bazi(case["solar_date"], case["shi_chen"], case["gender"])
            assert 0 <= result.start_age <= 10
