#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线数据约束配置

chartData 点数在不同部署中存在 30 / 100 两种版本，统一通过
环境变量 LIFE_KLINE_CHART_POINTS 选择，默认 30。
"""

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_CHART_POINTS = 30

# 十神标签
TEN_GOD_LABELS = (
    '比肩', '劫财', '食神', '伤官', '偏财',
    '正财', '七杀', '正官', '偏印', '正印',
)

# 分析维度的评分字段（顺序即校验顺序）
ANALYSIS_SCORE_FIELDS = (
    'summaryScore',
    'personalityScore',
    'industryScore',
    'fengShuiScore',
    'wealthScore',
    'marriageScore',
    'healthScore',
    'familyScore',
    'cryptoScore',
)

# 分析维度的文本字段
ANALYSIS_TEXT_FIELDS = (
    'summary',
    'personality',
    'industry',
    'fengShui',
    'wealth',
    'marriage',
    'health',
    'family',
    'crypto',
    'cryptoYear',
    'cryptoStyle',
)

# K线数值范围
KLINE_VALUE_MIN = 0
KLINE_VALUE_MAX = 100
SCORE_MIN = 0
SCORE_MAX = 10

# 支撑/压力位
SUPPORT_PRESSURE_MAX_AGE = 30
SUPPORT_PRESSURE_TYPES = ('support', 'pressure')
SUPPORT_PRESSURE_STRENGTHS = ('weak', 'medium', 'strong')

# 行动建议条数
ACTION_SUGGESTION_COUNT = 3
ACTION_WARNING_COUNT = 2

# 起运年龄
START_AGE_MIN = 0
START_AGE_MAX = 10
DEFAULT_START_AGE = 3

# 出生年份范围
BIRTH_YEAR_MIN = 1900
BIRTH_YEAR_MAX = 2100


def get_chart_point_count() -> int:
    """读取 chartData 要求的点数（LIFE_KLINE_CHART_POINTS）"""
    value = os.getenv('LIFE_KLINE_CHART_POINTS', str(DEFAULT_CHART_POINTS))
    try:
        count = int(value)
    except ValueError:
        logger.warning(f"LIFE_KLINE_CHART_POINTS 配置无效: {value}，使用默认值 {DEFAULT_CHART_POINTS}")
        return DEFAULT_CHART_POINTS
    if count <= 0:
        logger.warning(f"LIFE_KLINE_CHART_POINTS 必须为正整数: {value}，使用默认值 {DEFAULT_CHART_POINTS}")
        return DEFAULT_CHART_POINTS
    return count
