# -*- coding: utf-8 -*-
"""
配置模块
"""

from .app_config import AppConfig, CredentialsConfig, ServiceConfig, get_config, reload_config

__all__ = ['AppConfig', 'CredentialsConfig', 'ServiceConfig', 'get_config', 'reload_config']
