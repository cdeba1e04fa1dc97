#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
时辰常量定义

中国传统12时辰对应24小时制，排盘时取每个时辰的中间时刻。
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class ShiChen:
    name: str
    display_name: str
    range: str
    start_hour: int
    end_hour: int
    mid_hour: int  # 用于计算的中间时刻


SHI_CHEN_LIST: List[ShiChen] = [
    ShiChen('子时', '子时（夜半）', '23:00-01:00', 23, 1, 0),
    ShiChen('丑时', '丑时（鸡鸣）', '01:00-03:00', 1, 3, 2),
    ShiChen('寅时', '寅时（平旦）', '03:00-05:00', 3, 5, 4),
    ShiChen('卯时', '卯时（日出）', '05:00-07:00', 5, 7, 6),
    ShiChen('辰时', '辰时（食时）', '07:00-09:00', 7, 9, 8),
    ShiChen('巳时', '巳时（隅中）', '09:00-11:00', 9, 11, 10),
    ShiChen('午时', '午时（日中）', '11:00-13:00', 11, 13, 12),
    ShiChen('未时', '未时（日昳）', '13:00-15:00', 13, 15, 14),
    ShiChen('申时', '申时（哺时）', '15:00-17:00', 15, 17, 16),
    ShiChen('酉时', '酉时（日入）', '17:00-19:00', 17, 19, 18),
    ShiChen('戌时', '戌时（黄昏）', '19:00-21:00', 19, 21, 20),
    ShiChen('亥时', '亥时（人定）', '21:00-23:00', 21, 23, 22),
]

SHI_CHEN_BY_NAME: Dict[str, ShiChen] = {sc.name: sc for sc in SHI_CHEN_LIST}

SHI_CHEN_NAMES: List[str] = [sc.name for sc in SHI_CHEN_LIST]


def get_hour_from_shi_chen(name: str) -> int:
    """
    根据时辰名称获取对应的小时数（用于计算）

    Raises:
        ValueError: 未知时辰
    """
    shi_chen = SHI_CHEN_BY_NAME.get(name)
    if shi_chen is None:
        raise ValueError(f"Invalid shi chen name: {name}")
    return shi_chen.mid_hour


def get_shi_chen_from_hour(hour: int) -> str:
    """根据小时数获取对应的时辰名称"""
    # 子时跨日（23:00-01:00）
    if hour == 23 or hour == 0:
        return '子时'

    for sc in SHI_CHEN_LIST[1:]:
        if sc.start_hour <= hour < sc.end_hour:
            return sc.name
    return '子时'
