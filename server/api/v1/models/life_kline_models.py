#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线请求模型

出生信息的合法性（日期范围、时辰、性别）由 core 层统一校验并返回 400，
这里只做必填与基础格式检查。
"""

from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from core.config.kline_config import BIRTH_YEAR_MAX, BIRTH_YEAR_MIN


class BaziCalculateRequest(BaseModel):
    """排盘请求"""
    solar_date: str = Field(..., description="阳历日期，格式：YYYY-MM-DD", examples=["1990-05-15"])
    shi_chen: str = Field(..., description="时辰：子时 ... 亥时", examples=["午时"])
    gender: str = Field(..., description="性别：Male 或 Female", examples=["Male"])

    @field_validator('solar_date', 'shi_chen', 'gender', mode='before')
    @classmethod
    def strip_value(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class LifeKlinePromptRequest(BaseModel):
    """提示词 / 生成请求（八字信息）"""
    gender: str = Field(..., description="性别：Male 或 Female", examples=["Male"])
    birth_year: int = Field(..., description="出生年份", examples=[1990])
    year_pillar: str = Field(..., description="年柱", examples=["庚午"])
    month_pillar: str = Field(..., description="月柱", examples=["辛巳"])
    day_pillar: str = Field(..., description="日柱", examples=["庚辰"])
    hour_pillar: str = Field(..., description="时柱", examples=["壬午"])
    start_age: int = Field(..., description="起运年龄（虚岁）", examples=[3])

    @field_validator('gender')
    @classmethod
    def validate_gender(cls, v):
        if v not in ('Male', 'Female'):
            raise ValueError('性别必须是 Male 或 Female')
        return v

    @field_validator('birth_year')
    @classmethod
    def validate_birth_year(cls, v):
        if v < BIRTH_YEAR_MIN or v > BIRTH_YEAR_MAX:
            raise ValueError(f'出生年份必须在 {BIRTH_YEAR_MIN}-{BIRTH_YEAR_MAX} 年之间')
        return v

    @field_validator('year_pillar', 'month_pillar', 'day_pillar', 'hour_pillar', mode='before')
    @classmethod
    def strip_pillar(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    def to_user_input(self) -> Dict[str, Any]:
        return {
            'gender': self.gender,
            'birthYear': self.birth_year,
            'yearPillar': self.year_pillar,
            'monthPillar': self.month_pillar,
            'dayPillar': self.day_pillar,
            'hourPillar': self.hour_pillar,
            'startAge': self.start_age,
        }


class LifeKlineImportRequest(BaseModel):
    """导入 JSON 文本"""
    text: str = Field(..., description="AI 返回的原始文本或导出的 JSON")

    @field_validator('text')
    @classmethod
    def validate_text(cls, v):
        if not v or not v.strip():
            raise ValueError('导入内容不能为空')
        return v


class LifeKlineInterpolateRequest(BaseModel):
    """日视图 / 周视图请求"""
    result: Dict[str, Any] = Field(..., description="LifeDestinyResult")
    birth_date: date = Field(..., description="出生日期", examples=["1990-05-15"])
    view: str = Field("day", description="视图：day 或 week", examples=["day"])
    current_date: Optional[date] = Field(None, description="视图中心日期，默认今天")

    @field_validator('view')
    @classmethod
    def validate_view(cls, v):
        if v not in ('day', 'week'):
            raise ValueError('视图类型必须是 day 或 week')
        return v


class LifeKlineInsightsRequest(BaseModel):
    """年度数据解读请求"""
    result: Dict[str, Any] = Field(..., description="LifeDestinyResult")
