#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest 全局配置

提供：
- 共享 fixtures（排盘结果、配置、伪造的 LLM 客户端）
- 测试钩子
"""

import os
import sys
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

# 添加项目根目录到路径
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from bazi_core.models import ChartResult, LunarDate, Pillar
from bazi_core.exceptions import ChatRequestError
from bazi_server.config.app_config import AppConfig, CredentialsConfig, ServiceConfig
from tests.fixtures.sample_data import TIANAPI_SUCCESS_RESPONSE


# ==================== 数据 Fixtures ====================

@pytest.fixture(scope="function")
def sample_chart() -> ChartResult:
    """
    2025-12-11 12:00 的排盘结果

    Returns:
        ChartResult: 乙巳 戊子 甲寅 庚午
    """
    return ChartResult(
        year=Pillar('乙', '巳'),
        month=Pillar('戊', '子'),
        day=Pillar('甲', '寅'),
        hour=Pillar('庚', '午'),
        lunar_date=LunarDate(2025, 10, 22, False),
    )


@pytest.fixture(scope="function")
def app_config() -> AppConfig:
    """带测试密钥的应用配置"""
    return AppConfig(
        env="local",
        credentials=CredentialsConfig(tianapi_key="test-tianapi-key", siliconflow_key="test-sf-key"),
        services=ServiceConfig(),
    )


# ==================== Mock Fixtures ====================

@pytest.fixture(scope="function")
def mock_calendar_session():
    """
    Mock requests.Session，get() 返回天行 API 的成功响应

    Yields:
        MagicMock session 对象
    """
    session = MagicMock()
    response = MagicMock()
    response.status_code = 200
    response.raise_for_status.return_value = None
    response.json.return_value = TIANAPI_SUCCESS_RESPONSE
    session.get.return_value = response
    yield session


class FakeChatClient:
    """
    伪造的 ChatStreamClient，按顺序吐出预设的增量文本

    Attributes:
        calls: 每次调用的 (model, messages, temperature)
    """

    def __init__(self, deltas: List[str], error: Optional[Exception] = None):
        self.deltas = deltas
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def stream_chat_completion(self, model, messages, temperature=0.7, max_tokens=None):
        self.calls.append({"model": model, "messages": messages, "temperature": temperature})
        for delta in self.deltas:
            yield delta
        if self.error is not None:
            raise self.error


@pytest.fixture(scope="function")
def fake_chat_client_factory():
    """返回构造 FakeChatClient 的函数"""
    def factory(deltas: List[str], error: Optional[Exception] = None) -> FakeChatClient:
        return FakeChatClient(deltas, error)
    return factory


@pytest.fixture(scope="function")
def chat_request_error() -> ChatRequestError:
    return ChatRequestError("AI分析请求失败: HTTP 500", status_code=500)


# ==================== Pytest Hooks ====================

def pytest_collection_modifyitems(config, items):
    """根据路径自动添加标记"""
    for item in items:
        if "unit" in item.nodeid:
            item.add_marker(pytest.mark.unit)
        elif "api" in item.nodeid:
            item.add_marker(pytest.mark.api)
