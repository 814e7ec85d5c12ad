#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
统一 API 响应模型

标准响应格式：
{
    "success": true/false,
    "data": {...},           # 成功时返回数据
    "error": "错误信息",      # 失败时返回错误
    "error_type": "...",     # 失败时的错误类型
    "timestamp": "2026-02-04T12:00:00"
}
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class APIResponse(BaseModel):
    """标准 API 响应"""
    model_config = ConfigDict(extra="allow")

    success: bool = Field(..., description="请求是否成功")
    data: Optional[Any] = Field(default=None, description="响应数据")
    error: Optional[str] = Field(default=None, description="错误信息")
    error_type: Optional[str] = Field(default=None, description="错误类型")
    timestamp: Optional[str] = Field(
        default_factory=lambda: datetime.now().isoformat(),
        description="响应时间戳"
    )

    @classmethod
    def ok(cls, data: Any = None) -> "APIResponse":
        """创建成功响应"""
        return cls(success=True, data=data)
