# -*- coding: utf-8 -*-
"""
Prompt 构建工具模块

根据八字信息生成发送给大模型的完整提示词。
只依赖标准库与 core，不依赖 FastAPI，可以在脚本中安全导入。
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from core.calculators.bazi_calculator import get_dayun_direction
from core.config.kline_config import get_chart_point_count
from server.utils.prompts.life_kline import (
    GENDER_LABELS,
    USER_PROMPT_TEMPLATE,
    render_system_instruction,
)


def build_life_kline_prompt(four_pillars: Sequence[str], gender: str, birth_year: int, start_age: int,
                            chart_points: Optional[int] = None) -> str:
    """
    构建人生K线提示词

    Args:
        four_pillars: [年柱, 月柱, 日柱, 时柱]
        gender: Male / Female
        birth_year: 出生年份
        start_age: 起运年龄（虚岁）
        chart_points: 要求的数据点条数，默认 LIFE_KLINE_CHART_POINTS

    Returns:
        系统指令 + 用户八字信息 + JSON 输出要求
    """
    year_pillar, month_pillar, day_pillar, hour_pillar = four_pillars
    direction = get_dayun_direction(year_pillar, gender)

    return USER_PROMPT_TEMPLATE.format(
        system_instruction=render_system_instruction(chart_points or get_chart_point_count()),
        gender_text=GENDER_LABELS.get(gender, GENDER_LABELS['Female']),
        birth_year=birth_year,
        year_pillar=year_pillar,
        month_pillar=month_pillar,
        day_pillar=day_pillar,
        hour_pillar=hour_pillar,
        start_age=start_age,
        direction=direction['text'],
    )


def generate_user_prompt(user_input: Mapping[str, Any]) -> str:
    """
    从用户输入（camelCase 字段，与导出的 JSON 一致）生成提示词

    需要的字段：gender, birthYear, yearPillar, monthPillar, dayPillar, hourPillar, startAge
    """
    return build_life_kline_prompt(
        [
            user_input['yearPillar'],
            user_input['monthPillar'],
            user_input['dayPillar'],
            user_input['hourPillar'],
        ],
        user_input['gender'],
        user_input['birthYear'],
        user_input['startAge'],
    )


def prompt_input_from_bazi(bazi: Dict[str, Any], gender: str) -> Dict[str, Any]:
    """将排盘结果（BaziCalculationResult.to_dict()）转换为提示词输入"""
    return {
        'gender': gender,
        'birthYear': bazi['birthYear'],
        'yearPillar': bazi['yearPillar'],
        'monthPillar': bazi['monthPillar'],
        'dayPillar': bazi['dayPillar'],
        'hourPillar': bazi['hourPillar'],
        'startAge': bazi['startAge'],
    }
