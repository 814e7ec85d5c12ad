#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LLM 流式服务基类

定义统一的 LLM 流式服务接口，八字分析和思维导图共用。
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncGenerator, Dict, List, Optional

from bazi_core.exceptions import BusinessError
from bazi_core.models import ChartResult
from bazi_server.services.chat_stream_client import ChatStreamClient

logger = logging.getLogger(__name__)


class BaseLLMStreamService(ABC):
    """LLM 流式服务基类 - 定义统一接口"""

    def __init__(self, chat_client: ChatStreamClient, model: str, temperature: float = 0.7):
        self.chat_client = chat_client
        self.model = model
        self.temperature = temperature

    @abstractmethod
    async def stream_analysis(
        self,
        chart: ChartResult,
        gender: str,
        trace_id: Optional[str] = None,
        **kwargs
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """
        流式生成结果

        Args:
            chart: 排盘结果
            gender: male / female
            trace_id: 请求追踪ID（可选，用于日志关联）

        Yields:
            dict: 包含 type 和 content 的字典，以 'complete' 或 'error' 结束
        """
        pass

    def _stream_deltas(self, messages: List[Dict[str, Any]]):
        return self.chat_client.stream_chat_completion(
            self.model,
            messages,
            temperature=self.temperature,
        )

    @staticmethod
    def _error_event(error: Exception, trace_id: Optional[str] = None) -> Dict[str, Any]:
        """把异常转换为 error 事件（已推送的部分内容保持不变）"""
        if isinstance(error, BusinessError):
            logger.error(f"[{trace_id or 'N/A'}] {error.message}")
            return {'type': 'error', 'content': error.message}

        logger.exception(f"[{trace_id or 'N/A'}] LLM流式生成异常: {error}")
        return {'type': 'error', 'content': f"生成失败: {error}"}
