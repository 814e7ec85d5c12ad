#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
硅基流动 Chat Completions 流式客户端

发送一次 stream=true 的 POST 请求，按行解析 SSE：
- data: {...}      取 choices[0].delta.content
- data: [DONE]     结束
单行解析失败只记录日志并跳过，不中断整个流。
"""

import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Union

import httpx

from bazi_core.exceptions import ChatRequestError, MissingCredentialError
from bazi_server.config.app_config import AppConfig, DEFAULT_SILICONFLOW_API_URL

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = 'data: '
SSE_DONE_LINE = 'data: [DONE]'


class _StreamDone:
    """SSE 结束标记"""

    def __repr__(self) -> str:
        return 'STREAM_DONE'


STREAM_DONE = _StreamDone()


def parse_sse_line(line: str) -> Union[str, _StreamDone, None]:
    """
    解析一行 SSE

    Returns:
        - STREAM_DONE: 结束行
        - None: 空行、非 data 行或没有增量文本
        - str: 增量文本

    Raises:
        ValueError / TypeError / KeyError / IndexError: data 行内容无法解析
    """
    if not line.strip():
        return None
    if line.rstrip('\r') == SSE_DONE_LINE:
        return STREAM_DONE
    if not line.startswith(SSE_DATA_PREFIX):
        return None

    payload = json.loads(line[len(SSE_DATA_PREFIX):])
    choices = payload.get('choices') or []
    if not choices:
        return None
    delta = choices[0].get('delta') or {}
    content = delta.get('content')
    if content is not None and not isinstance(content, str):
        raise TypeError(f"delta.content 类型错误: {type(content).__name__}")
    return content or None


class ChatStreamClient:
    """OpenAI 兼容的流式对话客户端"""

    def __init__(self, api_key: str, endpoint: str = DEFAULT_SILICONFLOW_API_URL,
                 timeout: float = 60.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            api_key: 硅基流动 API 密钥
            endpoint: chat/completions 地址
            timeout: 请求超时（秒）
            transport: 可选的 httpx 传输层（测试时注入 MockTransport）
        """
        if not api_key:
            raise MissingCredentialError("未配置硅基流动API密钥 (SILICONFLOW_KEY)", credential="siliconflow_key")
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
        }

    @classmethod
    def from_config(cls, config: AppConfig,
                    transport: Optional[httpx.AsyncBaseTransport] = None) -> 'ChatStreamClient':
        return cls(
            api_key=config.credentials.siliconflow_key,
            endpoint=config.services.chat_endpoint,
            timeout=config.services.request_timeout,
            transport=transport,
        )

    async def stream_chat_completion(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[str]:
        """
        流式对话

        Args:
            model: 模型名称
            messages: [{role, content}, ...]
            temperature: 采样温度
            max_tokens: 最大输出长度，None 表示不限制

        Yields:
            str: 增量文本

        Raises:
            ChatRequestError: HTTP 请求失败或响应状态非 2xx
        """
        payload = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "stream": True,
            "max_tokens": max_tokens,
        }
        logger.info(f"请求LLM流式接口: model={model}, messages={len(messages)}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                async with client.stream("POST", self.endpoint, headers=self.headers, json=payload) as response:
                    if not response.is_success:
                        body = (await response.aread()).decode('utf-8', errors='replace')
                        logger.error(f"LLM接口返回 {response.status_code}: {body[:500]}")
                        raise ChatRequestError(
                            f"AI分析请求失败: HTTP {response.status_code}",
                            status_code=response.status_code,
                        )

                    async for line in response.aiter_lines():
                        try:
                            parsed = parse_sse_line(line)
                        except (ValueError, TypeError, KeyError, IndexError, AttributeError) as e:
                            logger.warning(f"解析流式数据失败，已跳过: {e}; line={line[:200]!r}")
                            continue

                        if parsed is STREAM_DONE:
                            break
                        if parsed:
                            yield parsed
        except httpx.HTTPError as e:
            logger.error(f"LLM流式请求异常: {e}")
            raise ChatRequestError(f"AI分析请求失败: {e}") from e
