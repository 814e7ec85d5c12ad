# -*- coding: utf-8 -*-
"""FastAPI 依赖：从 app.state 取启动时加载的配置"""

from fastapi import Request

from bazi_server.config.app_config import AppConfig
from bazi_server.factories.service_factory import ServiceFactory


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_service_factory(request: Request) -> ServiceFactory:
    return ServiceFactory(get_app_config(request))
