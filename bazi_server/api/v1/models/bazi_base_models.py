#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字基础请求模型 - 包含所有公共字段和验证器
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from bazi_core.models import ConversationMessage


class BaziChartRequest(BaseModel):
    """八字排盘请求"""
    solar_date: str = Field(..., description="阳历日期，格式：YYYY-MM-DD", examples=["1990-05-15"])
    solar_time: str = Field(..., description="出生时间，格式：HH:MM", examples=["14:30"])
    gender: str = Field(..., description="性别：male(男) 或 female(女)", examples=["male"])
    tianapi_key: Optional[str] = Field(None, description="天行 API 密钥（可选，不提供则使用服务端配置）")

    @field_validator('solar_date')
    @classmethod
    def validate_date(cls, v):
        """验证日期格式"""
        try:
            datetime.strptime(v, '%Y-%m-%d')
        except ValueError:
            raise ValueError('日期格式错误，应为 YYYY-MM-DD')
        return v

    @field_validator('solar_time')
    @classmethod
    def validate_time(cls, v):
        """验证时间格式"""
        try:
            datetime.strptime(v, '%H:%M')
        except ValueError:
            raise ValueError('时间格式错误，应为 HH:MM')
        return v

    @field_validator('gender')
    @classmethod
    def validate_gender(cls, v):
        """验证性别"""
        if v not in ['male', 'female']:
            raise ValueError('性别必须为 male 或 female')
        return v

    @property
    def birth_datetime(self) -> datetime:
        return datetime.strptime(f"{self.solar_date} {self.solar_time}", '%Y-%m-%d %H:%M')


class ConversationMessageModel(BaseModel):
    """对话历史中的一条消息"""
    role: Literal['user', 'assistant']
    content: str
    thinking: Optional[str] = None

    def to_message(self) -> ConversationMessage:
        return ConversationMessage(role=self.role, content=self.content, thinking=self.thinking)


class MindmapStreamRequest(BaziChartRequest):
    """思维导图流式请求"""
    model: Optional[str] = Field(None, description="模型名称（可选，默认使用服务端配置）")
    siliconflow_key: Optional[str] = Field(None, description="硅基流动 API 密钥（可选）")


class AnalysisStreamRequest(MindmapStreamRequest):
    """八字分析流式请求（支持多轮对话）"""
    messages: List[ConversationMessageModel] = Field(
        default_factory=list,
        description="对话历史；继续对话时最后一条为用户问题"
    )

    @property
    def history(self) -> List[ConversationMessage]:
        return [message.to_message() for message in self.messages]
