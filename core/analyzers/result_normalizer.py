#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
AI 返回结果标准化

兼容两种结构：
- 嵌套结构：{"chartData": [...], "analysis": {...}}
- 扁平结构：{"chartPoints": [...], "summary": ..., "summaryScore": ..., ...}

评分统一为 0-10：大于 10 的数值视为百分制，除以 10 后四舍五入。
本模块只做结构整理，不做合法性判断，任何输入都不会抛异常；
合法性交给 chart_validator。
"""

from typing import Any, Dict, List

from core.calculators.helpers import has_value, is_number, round_half_up
from core.config.kline_config import ANALYSIS_SCORE_FIELDS, ANALYSIS_TEXT_FIELDS


def normalize_score(score: Any) -> Any:
    """标准化评分（0-100 转换为 0-10），非数值原样返回"""
    if is_number(score) and score > 10:
        return round_half_up(score / 10)
    return score


def _normalize_point(point: Any) -> Any:
    if not isinstance(point, dict):
        return point
    return {**point, 'score': normalize_score(point.get('score') or 0)}


def _normalize_points(points: Any) -> List[Any]:
    if not isinstance(points, list):
        return []
    return [_normalize_point(point) for point in points]


def _is_nested(data: Dict[str, Any]) -> bool:
    """chartData 与 analysis 同时存在（空数组、空对象也算存在）"""
    return has_value(data.get('chartData')) and has_value(data.get('analysis'))


def _build_analysis(source: Dict[str, Any]) -> Dict[str, Any]:
    """从 source 中提取分析字段，缺失的文本补空串，评分标准化"""
    analysis = dict(source)
    bazi = source.get('bazi')
    analysis['bazi'] = bazi if has_value(bazi) else []
    for text_field in ANALYSIS_TEXT_FIELDS:
        text = source.get(text_field)
        analysis[text_field] = text if has_value(text) else ''
    for score_field in ANALYSIS_SCORE_FIELDS:
        analysis[score_field] = normalize_score(source.get(score_field) or 0)
    return analysis


_FLAT_ANALYSIS_KEYS = ('bazi',) + ANALYSIS_TEXT_FIELDS + ANALYSIS_SCORE_FIELDS


def transform_to_life_destiny_result(data: Any) -> Dict[str, Any]:
    """
    转换为标准的 LifeDestinyResult 结构

    Args:
        data: 已解析的 JSON（任意结构）

    Returns:
        {"chartData": [...], "analysis": {...}}
    """
    if not isinstance(data, dict):
        data = {}

    # 已经是嵌套结构
    if _is_nested(data):
        return {
            'chartData': _normalize_points(data['chartData']),
            'analysis': _build_analysis(data['analysis'] if isinstance(data['analysis'], dict) else {}),
        }

    # 扁平结构：chartPoints -> chartData，分析字段散落在顶层
    raw_points = next((data[key] for key in ('chartPoints', 'chartData') if has_value(data.get(key))), [])
    flat_fields = {key: data.get(key) for key in _FLAT_ANALYSIS_KEYS}
    analysis = _build_analysis(flat_fields)
    if data.get('supportPressureLevels') is not None:
        analysis['supportPressureLevels'] = data['supportPressureLevels']

    return {
        'chartData': _normalize_points(raw_points),
        'analysis': analysis,
    }


normalize = transform_to_life_destiny_result
