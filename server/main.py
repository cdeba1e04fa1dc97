#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线 API 入口

启动顺序：加载 .env → 读取配置 → 配置日志 → 组装应用（中间件、路由）。
"""

import json
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

_dotenv_path = os.path.join(PROJECT_ROOT, '.env')
if os.path.exists(_dotenv_path):
    load_dotenv(_dotenv_path)

from server.config import AppConfig, get_config  # noqa: E402
from server.api.v1.life_kline import router as life_kline_router  # noqa: E402
from server.utils.exception_handler import ExceptionHandlerMiddleware  # noqa: E402

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate, max-age=0",
    "Pragma": "no-cache",
}


class UTF8JSONResponse(JSONResponse):
    """中文不转义，结果数据不缓存"""
    media_type = "application/json; charset=utf-8"

    def __init__(self, content, **kwargs):
        super().__init__(content, **kwargs)
        self.headers.update(NO_CACHE_HEADERS)

    def render(self, content) -> bytes:
        return json.dumps(content, ensure_ascii=False, allow_nan=False,
                          separators=(",", ":")).encode("utf-8")


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    组装 FastAPI 应用

    Args:
        config: 应用配置，默认读取环境变量
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"✓ 人生K线服务启动: env={config.env} 数据点={config.kline.chart_points} "
                    f"model={config.llm.model}")
        if not config.llm.is_configured:
            logger.warning("⚠ 未配置 ANTHROPIC_AUTH_TOKEN，/life-kline/generate 不可用")
        yield
        logger.info("✓ 人生K线服务已停止")

    app = FastAPI(
        title="LifeKlineAPI",
        description="人生K线：八字排盘、提示词生成、结果校验与日/周视图插值",
        version="1.0.0",
        debug=config.debug,
        lifespan=lifespan,
        default_response_class=UTF8JSONResponse,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.3f}s)")
        response.headers["X-Process-Time"] = f"{elapsed:.3f}"
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    # 最后添加的中间件位于最外层
    app.add_middleware(ExceptionHandlerMiddleware)

    app.include_router(life_kline_router, prefix="/api/v1", tags=["人生K线"])

    @app.get("/")
    async def root():
        return {"message": "人生K线 API 服务", "version": app.version, "docs": "/docs"}

    @app.get("/health")
    @app.get("/api/v1/health")
    async def health_check():
        """健康检查（/api/v1/health 供部署脚本使用）"""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "env": config.env,
            "chart_points": config.kline.chart_points,
            "llm_configured": config.llm.is_configured,
        }

    return app


configure_logging(get_config())
app = create_app()
