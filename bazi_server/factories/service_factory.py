#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
服务工厂
根据应用配置统一创建服务实例；请求中携带的密钥优先于配置
"""

from dataclasses import replace
from typing import Optional

from bazi_server.config.app_config import AppConfig
from bazi_server.services.bazi_analysis_service import BaziAnalysisService
from bazi_server.services.bazi_chart_service import BaziChartService
from bazi_server.services.calendar_gateway import CalendarGateway
from bazi_server.services.chat_stream_client import ChatStreamClient
from bazi_server.services.mindmap_service import MindmapService


class ServiceFactory:
    """服务工厂类"""

    def __init__(self, config: AppConfig):
        self.config = config

    def _with_credentials(self, tianapi_key: Optional[str] = None,
                          siliconflow_key: Optional[str] = None) -> AppConfig:
        credentials = self.config.credentials.override(
            tianapi_key=tianapi_key,
            siliconflow_key=siliconflow_key,
        )
        return replace(self.config, credentials=credentials)

    def create_chart_service(self, tianapi_key: Optional[str] = None) -> BaziChartService:
        """创建八字排盘服务"""
        config = self._with_credentials(tianapi_key=tianapi_key)
        return BaziChartService(CalendarGateway.from_config(config))

    def create_analysis_service(self, siliconflow_key: Optional[str] = None,
                                model: Optional[str] = None) -> BaziAnalysisService:
        """创建八字分析服务"""
        config = self._with_credentials(siliconflow_key=siliconflow_key)
        return BaziAnalysisService(
            ChatStreamClient.from_config(config),
            model=model or config.services.analysis_model,
            temperature=config.services.temperature,
        )

    def create_mindmap_service(self, siliconflow_key: Optional[str] = None,
                               model: Optional[str] = None) -> MindmapService:
        """创建思维导图服务"""
        config = self._with_credentials(siliconflow_key=siliconflow_key)
        return MindmapService(
            ChatStreamClient.from_config(config),
            model=model or config.services.mindmap_model,
            temperature=config.services.temperature,
        )
