#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
天干地支基础数据

提供：
- 十天干 / 十二地支
- 阳干判断
- 六十甲子及合法性判断
"""

from typing import List

# 十天干
HEAVENLY_STEMS: List[str] = ['甲', '乙', '丙', '丁', '戊', '己', '庚', '辛', '壬', '癸']

# 十二地支
EARTHLY_BRANCHES: List[str] = ['子', '丑', '寅', '卯', '辰', '巳', '午', '未', '申', '酉', '戌', '亥']

# 阳干（用于判断大运顺逆）
YANG_STEMS = ('甲', '丙', '戊', '庚', '壬')

# 六十甲子：甲子、乙丑 …… 癸亥
SIXTY_JIAZI: List[str] = [
    HEAVENLY_STEMS[i % 10] + EARTHLY_BRANCHES[i % 12] for i in range(60)
]

_JIAZI_INDEX = {ganzhi: i for i, ganzhi in enumerate(SIXTY_JIAZI)}

def is_valid_ganzhi(value) -> bool:
    """是否为六十甲子中的合法干支（干支阴阳必须一致）"""
    return isinstance(value, str) and value in _JIAZI_INDEX

def get_jiazi_index(ganzhi: str) -> int:
    """
    获取干支在六十甲子中的序号（0-59）

    Raises:
        ValueError: 非法干支
    """
    if ganzhi not in _JIAZI_INDEX:
        raise ValueError(f"非法干支: {ganzhi}")
    return _JIAZI_INDEX[ganzhi]

def shift_ganzhi(ganzhi: str, steps: int) -> str:
    """在六十甲子中前进（steps>0）或后退（steps<0）若干步"""
    return SIXTY_JIAZI[(get_jiazi_index(ganzhi) + steps) % 60]

def is_yang_stem(stem: str) -> bool:
    return stem in YANG_STEMS
