#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线API接口
"""

import logging

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from server.api.v1.models.life_kline_models import (
    BaziCalculateRequest,
    LifeKlineImportRequest,
    LifeKlineInsightsRequest,
    LifeKlineInterpolateRequest,
    LifeKlinePromptRequest,
)
from server.services.life_kline_service import LifeKlineService
from server.services.llm_client import LifeKlineLLMClient
from server.utils.base_models import BaseAPIResponseDict

logger = logging.getLogger(__name__)

router = APIRouter()


class LifeKlineResponse(BaseAPIResponseDict):
    """人生K线响应模型"""
    pass


@router.post("/life-kline/bazi", response_model=LifeKlineResponse, summary="排盘（四柱 + 起运年龄）")
async def calculate_bazi(request: BaziCalculateRequest):
    """
    根据阳历日期、时辰、性别计算四柱

    - **solar_date**: 阳历日期 (YYYY-MM-DD)，1900-2100 年
    - **shi_chen**: 时辰（子时 ... 亥时）
    - **gender**: Male / Female
    """
    data = await run_in_threadpool(
        LifeKlineService.calculate_bazi,
        request.solar_date,
        request.shi_chen,
        request.gender,
    )
    return LifeKlineResponse.ok(data)


@router.post("/life-kline/prompt", response_model=LifeKlineResponse, summary="生成人生K线提示词")
async def build_prompt(request: LifeKlinePromptRequest):
    prompt = LifeKlineService.build_prompt(request.to_user_input())
    return LifeKlineResponse.ok({"prompt": prompt})


@router.post("/life-kline/generate", response_model=LifeKlineResponse, summary="调用大模型生成人生K线")
async def generate_life_kline(request: LifeKlinePromptRequest):
    """
    生成提示词 → 调用大模型 → 标准化 → 校验

    返回的 data 包含 result（LifeDestinyResult）与 usage（token 用量）
    """
    generation = await run_in_threadpool(LifeKlineService.generate, request.to_user_input())
    return LifeKlineResponse.ok({"result": generation["data"], "usage": generation["usage"]})


@router.post("/life-kline/import", response_model=LifeKlineResponse, summary="导入人生K线 JSON")
async def import_life_kline(request: LifeKlineImportRequest):
    result = LifeKlineService.import_result(request.text)
    return LifeKlineResponse.ok(result, message="导入成功")


@router.post("/life-kline/interpolate", response_model=LifeKlineResponse, summary="日视图 / 周视图数据")
async def interpolate_life_kline(request: LifeKlineInterpolateRequest):
    data = await run_in_threadpool(
        LifeKlineService.interpolate,
        request.result,
        request.birth_date,
        request.view,
        request.current_date,
    )
    return LifeKlineResponse.ok(data)


@router.post("/life-kline/insights", response_model=LifeKlineResponse, summary="风险预警、行动建议与支撑/压力位")
async def life_kline_insights(request: LifeKlineInsightsRequest):
    data = LifeKlineService.insights(request.result)
    return LifeKlineResponse.ok(data)


@router.get("/life-kline/test-connection", summary="测试大模型连接")
async def test_connection():
    client = LifeKlineLLMClient()
    return await run_in_threadpool(client.test_connection)
