#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线接口的统一响应信封

成功：{"success": true, "data": {...}, "message": ...}
失败由 ExceptionHandlerMiddleware 输出：{"success": false, "error": ..., "error_type": ...}
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar('T')


class BaseAPIResponse(BaseModel, Generic[T]):
    success: bool = Field(..., description="是否成功")
    data: Optional[T] = Field(None, description="返回数据")
    error: Optional[str] = Field(None, description="错误信息")
    message: Optional[str] = Field(None, description="响应消息")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "data": {"yearPillar": "丙寅", "monthPillar": "庚子", "dayPillar": "甲子",
                         "hourPillar": "己巳", "startAge": 3, "daYunDirection": "顺行"},
                "error": None,
                "message": None,
            }
        }
    )

    @classmethod
    def ok(cls, data: T, message: Optional[str] = None):
        """成功响应"""
        return cls(success=True, data=data, message=message)


class BaseAPIResponseDict(BaseAPIResponse[Dict[str, Any]]):
    pass
