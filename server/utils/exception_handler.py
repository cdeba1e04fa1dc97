"""
统一异常处理中间件

业务异常（LifeKlineError）按自身 code / error_type 返回，
ValueError 返回 400，其余异常返回 500（生产环境隐藏详细信息）。
"""

import logging
from typing import Any, Callable

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.exceptions import LifeKlineError
from server.config.env_config import is_production

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "服务器内部错误，请稍后重试"


def error_response(status_code: int, error: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "error_type": error_type},
    )


def business_error_response(error: LifeKlineError) -> JSONResponse:
    """将业务异常转换为标准错误响应"""
    return JSONResponse(status_code=error.code, content=error.to_dict())


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """异常处理中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Any:
        path = request.url.path
        try:
            return await call_next(request)
        except HTTPException:
            raise
        except LifeKlineError as e:
            logger.warning(f"业务异常 [{path}] {e.error_type}: {e.message}")
            return business_error_response(e)
        except ValueError as e:
            logger.warning(f"参数错误 [{path}]: {e}")
            return error_response(400, str(e), "validation_error")
        except Exception as e:
            logger.exception(f"未处理的异常 [{path}]: {e}")
            detail = INTERNAL_ERROR_MESSAGE if is_production() else f"错误: {e}"
            return error_response(500, detail, "internal_error")
