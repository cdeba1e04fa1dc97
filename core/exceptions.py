#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线业务异常

与系统错误区分：所有异常都携带可直接展示给用户的 message，
以及 HTTP 层使用的 code / error_type。
"""

from typing import Optional


class LifeKlineError(Exception):
    """业务异常基类"""

    code = 400
    error_type = "business_error"

    def __init__(self, message: str, code: Optional[int] = None,
                 error_type: Optional[str] = None, details: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        if error_type is not None:
            self.error_type = error_type
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict:
        payload = {
            "success": False,
            "error": self.message,
            "error_type": self.error_type,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidInputError(LifeKlineError, ValueError):
    """出生信息不合法（日期、时辰、性别），在任何历法计算之前抛出"""

    code = 400
    error_type = "invalid_input"


class CalendarComputationError(LifeKlineError):
    """历法库计算八字失败"""

    code = 500
    error_type = "calculation_failed"


class ChartValidationError(LifeKlineError):
    """K线数据未通过结构校验，message 为第一条失败原因"""

    code = 422
    error_type = "validation_error"


class ResultParseError(LifeKlineError):
    """AI 返回文本无法解析为 JSON"""

    code = 422
    error_type = "parse_error"


class LLMServiceError(LifeKlineError):
    """大模型服务调用失败"""

    code = 502
    error_type = "llm_error"
