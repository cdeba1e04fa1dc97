#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线服务层

串联排盘、提示词、大模型调用、结果标准化、校验与插值。
"""

import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional

from core.analyzers.chart_validator import assert_valid_chart_data, validate_bazi_input
from core.analyzers.kline_insight_analyzer import (
    find_risk_warning_point,
    group_action_advice,
    select_visible_levels,
)
from core.analyzers.kline_interpolator import aggregate_weekly, interpolate_daily_data
from core.analyzers.result_normalizer import transform_to_life_destiny_result
from core.calculators.bazi_calculator import calculate_bazi, get_dayun_direction, get_first_dayun
from core.calculators.calendar_engine import CalendarEngine
from core.calculators.date_utils import (
    GRANULARITY_DAY,
    GRANULARITY_WEEK,
    get_daily_view_range,
    get_weekly_view_range,
)
from core.data.stems_branches import is_valid_ganzhi
from core.exceptions import InvalidInputError
from server.services.llm_client import LifeKlineLLMClient
from server.utils.llm_text import parse_llm_json
from server.utils.prompt_builders import generate_user_prompt

logger = logging.getLogger(__name__)

VIEW_TYPES = (GRANULARITY_DAY, GRANULARITY_WEEK)


class LifeKlineService:
    """人生K线服务"""

    @staticmethod
    def calculate_bazi(solar_date: str, shi_chen: str, gender: str,
                       calendar: Optional[CalendarEngine] = None) -> Dict[str, Any]:
        """排盘，返回四柱、起运年龄、大运方向与第一步大运"""
        result = calculate_bazi(solar_date, shi_chen, gender, calendar)
        return result.to_dict()

    @staticmethod
    def build_prompt(user_input: Mapping[str, Any]) -> str:
        """
        校验八字信息并生成提示词

        Args:
            user_input: gender, birthYear, yearPillar, monthPillar, dayPillar, hourPillar, startAge

        Raises:
            InvalidInputError: 干支或起运年龄格式错误
        """
        month_pillar = user_input['monthPillar']
        if is_valid_ganzhi(month_pillar):
            is_forward = get_dayun_direction(user_input['yearPillar'], user_input['gender'])['is_forward']
            first_dayun = get_first_dayun(month_pillar, is_forward)
        else:
            first_dayun = month_pillar

        validation = validate_bazi_input(
            user_input['yearPillar'],
            month_pillar,
            user_input['dayPillar'],
            user_input['hourPillar'],
            user_input['startAge'],
            first_dayun,
        )
        if not validation['valid']:
            raise InvalidInputError(validation['error'])

        return generate_user_prompt(user_input)

    @staticmethod
    def process_raw_result(raw: Any) -> Dict[str, Any]:
        """
        标准化并校验解析后的 JSON

        Raises:
            ChartValidationError: 校验失败
        """
        result = transform_to_life_destiny_result(raw)
        return assert_valid_chart_data(result)

    @staticmethod
    def import_result(text: str) -> Dict[str, Any]:
        """
        导入 JSON 文本（AI 原始输出或导出的结果文件）

        Raises:
            ResultParseError: 不是合法 JSON
            ChartValidationError: 校验失败
        """
        raw = parse_llm_json(text)
        result = LifeKlineService.process_raw_result(raw)
        logger.info(f"导入人生K线数据: {len(result['chartData'])} 个数据点")
        return result

    @staticmethod
    def generate(user_input: Mapping[str, Any],
                 client: Optional[LifeKlineLLMClient] = None) -> Dict[str, Any]:
        """
        调用大模型生成人生K线

        Returns:
            {'data': LifeDestinyResult, 'usage': {'inputTokens', 'outputTokens'}}
        """
        prompt = LifeKlineService.build_prompt(user_input)
        logger.info(f"提示词长度: {len(prompt)} 字符")

        client = client or LifeKlineLLMClient()
        generation = client.generate(prompt)

        raw = parse_llm_json(generation['text'])
        result = LifeKlineService.process_raw_result(raw)
        return {'data': result, 'usage': generation['usage']}

    @staticmethod
    def interpolate(result: Any, birth_date: date, view: str,
                    current_date: Optional[date] = None,
                    calendar: Optional[CalendarEngine] = None,
                    jitter=None) -> Dict[str, Any]:
        """
        生成日视图 / 周视图数据

        Args:
            result: LifeDestinyResult（会先标准化并校验）
            birth_date: 出生日期
            view: day 或 week
            current_date: 视图中心日期，默认今天
        """
        if view not in VIEW_TYPES:
            raise InvalidInputError(f'视图类型必须是 day 或 week（当前: {view}）')

        validated = LifeKlineService.process_raw_result(result)
        chart_data = validated['chartData']

        if view == GRANULARITY_DAY:
            time_range = get_daily_view_range(current_date)
        else:
            time_range = get_weekly_view_range(current_date)

        points = interpolate_daily_data(time_range, birth_date, chart_data, calendar, jitter)
        if view == GRANULARITY_WEEK:
            points = aggregate_weekly(points)

        return {
            'view': view,
            'start': time_range.start.isoformat(),
            'end': time_range.end.isoformat(),
            'points': points,
            'levels': select_visible_levels(validated['analysis'].get('supportPressureLevels') or [], points),
        }

    @staticmethod
    def insights(result: Any) -> Dict[str, Any]:
        """
        年度数据解读：风险预警点、按场景分组的行动建议、图表展示的支撑/压力位

        Raises:
            ChartValidationError: 校验失败
        """
        validated = LifeKlineService.process_raw_result(result)
        chart_data = validated['chartData']
        advice_groups = group_action_advice(chart_data)
        return {
            'riskWarning': find_risk_warning_point(chart_data),
            'actionAdvice': [
                {'scenario': scenario, 'points': points}
                for scenario, points in advice_groups.items()
            ],
            'levels': select_visible_levels(validated['analysis'].get('supportPressureLevels') or [], chart_data),
        }
