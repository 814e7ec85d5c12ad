#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
tests/api/ 目录的 conftest —— 提供 TestClient 和 sample_bazi_request fixtures

万年历和 LLM 均被替换：排盘使用 Mock requests.Session，流式分析使用 FakeChatClient
"""
import pytest
from fastapi.testclient import TestClient

from bazi_server.api.dependencies import get_service_factory
from bazi_server.factories.service_factory import ServiceFactory
from bazi_server.main import create_app
from bazi_server.services.bazi_analysis_service import BaziAnalysisService
from bazi_server.services.bazi_chart_service import BaziChartService
from bazi_server.services.calendar_gateway import CalendarGateway
from bazi_server.services.mindmap_service import MindmapService
from tests.fixtures.sample_data import SAMPLE_BAZI_REQUEST


class FakeServiceFactory(ServiceFactory):
    """使用伪造外部依赖的服务工厂，记录每次传入的密钥和模型"""

    def __init__(self, config, calendar_session, chat_client):
        super().__init__(config)
        self.calendar_session = calendar_session
        self.chat_client = chat_client
        self.requested = []

    def create_chart_service(self, tianapi_key=None):
        self.requested.append(('chart', tianapi_key))
        config = self._with_credentials(tianapi_key=tianapi_key)
        return BaziChartService(CalendarGateway.from_config(config, session=self.calendar_session))

    def create_analysis_service(self, siliconflow_key=None, model=None):
        self.requested.append(('analysis', siliconflow_key, model))
        return BaziAnalysisService(self.chat_client, model=model or self.config.services.analysis_model)

    def create_mindmap_service(self, siliconflow_key=None, model=None):
        self.requested.append(('mindmap', siliconflow_key, model))
        return MindmapService(self.chat_client, model=model or self.config.services.mindmap_model)


@pytest.fixture
def chat_deltas():
    """FakeChatClient 依次返回的增量文本（可在测试中覆盖）"""
    return ["<think>日元甲木", "</think>性格", "仁厚"]


@pytest.fixture
def fake_factory(app_config, mock_calendar_session, fake_chat_client_factory, chat_deltas):
    return FakeServiceFactory(app_config, mock_calendar_session, fake_chat_client_factory(chat_deltas))


@pytest.fixture
def client(app_config, fake_factory):
    """创建 FastAPI TestClient"""
    app = create_app(app_config)
    app.dependency_overrides[get_service_factory] = lambda: fake_factory
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_bazi_request():
    """标准八字请求参数"""
    return dict(SAMPLE_BAZI_REQUEST)
