#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
K线解读：风险预警点、行动建议分组、可见的支撑/压力位
"""

from collections import OrderedDict
from typing import Any, Dict, List, Optional

DEFAULT_SCENARIO = '综合'
# energyScore.total 缺失时按满分处理
MISSING_ENERGY_TOTAL = 10


def find_risk_warning_point(points: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    找出跌破支撑位且能量最低的数据点

    Returns:
        数据点；没有跌破支撑位的数据点时返回 None
    """
    below_support = [
        p for p in points
        if isinstance(p, dict) and (p.get('energyScore') or {}).get('isBelowSupport') is True
    ]
    if not below_support:
        return None

    def _total(point):
        total = point['energyScore'].get('total')
        return MISSING_ENERGY_TOTAL if total is None else total

    return min(below_support, key=_total)


def group_action_advice(points: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """按 actionAdvice.scenario 分组（缺失时归入"综合"），保持首次出现顺序"""
    groups: Dict[str, List[Dict[str, Any]]] = OrderedDict()
    for point in points:
        if not isinstance(point, dict) or not point.get('actionAdvice'):
            continue
        scenario = point['actionAdvice'].get('scenario') or DEFAULT_SCENARIO
        groups.setdefault(scenario, []).append(point)
    return groups


def select_visible_levels(levels: List[Dict[str, Any]], points: List[Dict[str, Any]]) -> Dict[str, Optional[Dict[str, Any]]]:
    """
    选出图表上展示的支撑位与压力位

    支撑位：value × 10 不高于全部 low 的最小值，取其中最高的一条；
    压力位：value × 10 不低于全部 high 的最大值，取其中最低的一条。
    """
    visible = {'support': None, 'pressure': None}
    if not levels or not points:
        return visible

    min_low = min(p['low'] for p in points)
    max_high = max(p['high'] for p in points)

    supports = [lv for lv in levels if lv.get('type') == 'support' and lv['value'] * 10 <= min_low]
    pressures = [lv for lv in levels if lv.get('type') == 'pressure' and lv['value'] * 10 >= max_high]

    if supports:
        visible['support'] = max(supports, key=lambda lv: lv['value'])
    if pressures:
        visible['pressure'] = min(pressures, key=lambda lv: lv['value'])
    return visible
