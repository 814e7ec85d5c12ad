#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
服务工厂单元测试
测试服务工厂创建服务实例，以及请求密钥覆盖配置密钥
"""

import pytest

from bazi_core.exceptions import MissingCredentialError
from bazi_server.config.app_config import AppConfig, CredentialsConfig
from bazi_server.factories.service_factory import ServiceFactory
from bazi_server.services.bazi_analysis_service import BaziAnalysisService
from bazi_server.services.bazi_chart_service import BaziChartService
from bazi_server.services.mindmap_service import MindmapService


class TestServiceFactory:
    """服务工厂测试类"""

    def test_create_chart_service(self, app_config):
        """测试创建排盘服务"""
        service = ServiceFactory(app_config).create_chart_service()

        assert isinstance(service, BaziChartService)
        assert service.gateway.api_key == "test-tianapi-key"
        assert service.gateway.base_url == app_config.services.calendar_base_url

    def test_request_key_overrides_config(self, app_config):
        """测试：请求中的密钥优先"""
        service = ServiceFactory(app_config).create_chart_service(tianapi_key="request-key")

        assert service.gateway.api_key == "request-key"
        # 原配置不受影响
        assert app_config.credentials.tianapi_key == "test-tianapi-key"

    def test_create_analysis_service(self, app_config):
        service = ServiceFactory(app_config).create_analysis_service()

        assert isinstance(service, BaziAnalysisService)
        assert service.model == app_config.services.analysis_model
        assert service.temperature == app_config.services.temperature
        assert service.chat_client.headers["Authorization"] == "Bearer test-sf-key"

    def test_create_analysis_service_with_model(self, app_config):
        service = ServiceFactory(app_config).create_analysis_service(siliconflow_key="sk-req", model="custom")

        assert service.model == "custom"
        assert service.chat_client.headers["Authorization"] == "Bearer sk-req"

    def test_create_mindmap_service(self, app_config):
        service = ServiceFactory(app_config).create_mindmap_service()

        assert isinstance(service, MindmapService)
        assert service.model == app_config.services.mindmap_model

    def test_missing_credentials(self):
        factory = ServiceFactory(AppConfig(credentials=CredentialsConfig()))

        with pytest.raises(MissingCredentialError):
            factory.create_chart_service()
        with pytest.raises(MissingCredentialError):
            factory.create_analysis_service()
        with pytest.raises(MissingCredentialError):
            factory.create_mindmap_service()
