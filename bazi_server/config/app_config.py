#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
统一应用配置管理

启动时从环境变量（及 .env）读取一次，保存在 app.state.config 上并显式向下传递，
调用第三方接口时不再读取任何全局存储。
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from bazi_server.config.env_config import get_env_config

DEFAULT_TIANAPI_BASE_URL = 'https://apis.tianapi.com/lunar/index'
DEFAULT_SILICONFLOW_API_URL = 'https://api.siliconflow.cn/v1/chat/completions'
DEFAULT_ANALYSIS_MODEL = 'Pro/deepseek-ai/DeepSeek-R1'
DEFAULT_MINDMAP_MODEL = 'Pro/deepseek-ai/DeepSeek-V3'


@dataclass
class CredentialsConfig:
    """第三方 API 密钥（天行万年历 / 硅基流动）"""
    tianapi_key: str = ''
    siliconflow_key: str = ''

    @classmethod
    def from_env(cls) -> 'CredentialsConfig':
        env_config = get_env_config()
        return cls(
            tianapi_key=env_config.get_config('TIANAPI_KEY', default=''),
            siliconflow_key=env_config.get_config('SILICONFLOW_KEY', default=''),
        )

    def override(self, tianapi_key: Optional[str] = None,
                 siliconflow_key: Optional[str] = None) -> 'CredentialsConfig':
        """请求中携带的密钥优先于配置"""
        return replace(
            self,
            tianapi_key=tianapi_key or self.tianapi_key,
            siliconflow_key=siliconflow_key or self.siliconflow_key,
        )


@dataclass
class ServiceConfig:
    """第三方服务配置"""
    calendar_base_url: str = DEFAULT_TIANAPI_BASE_URL
    chat_endpoint: str = DEFAULT_SILICONFLOW_API_URL
    analysis_model: str = DEFAULT_ANALYSIS_MODEL
    mindmap_model: str = DEFAULT_MINDMAP_MODEL
    temperature: float = 0.7
    request_timeout: float = 60.0

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        env_config = get_env_config()
        return cls(
            calendar_base_url=env_config.get_config('TIANAPI_BASE_URL', default=DEFAULT_TIANAPI_BASE_URL),
            chat_endpoint=env_config.get_config('SILICONFLOW_API_URL', default=DEFAULT_SILICONFLOW_API_URL),
            analysis_model=env_config.get_config('ANALYSIS_MODEL', default=DEFAULT_ANALYSIS_MODEL),
            mindmap_model=env_config.get_config('MINDMAP_MODEL', default=DEFAULT_MINDMAP_MODEL),
            temperature=env_config.get_float_config('LLM_TEMPERATURE', default=0.7),
            request_timeout=env_config.get_float_config('HTTP_TIMEOUT', default=60.0),
        )


@dataclass
class AppConfig:
    """应用配置"""
    env: str = 'local'
    debug: bool = False
    log_level: str = 'INFO'

    # 子配置
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    services: ServiceConfig = field(default_factory=ServiceConfig)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """从环境变量创建完整配置"""
        env_config = get_env_config()
        return cls(
            env=env_config.env,
            debug=env_config.get_bool_config('DEBUG', default=False),
            log_level=env_config.get_config('LOG_LEVEL', default='INFO').upper(),
            credentials=CredentialsConfig.from_env(),
            services=ServiceConfig.from_env(),
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.credentials.tianapi_key and self.credentials.siliconflow_key)


# 全局配置实例（单例模式）
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """获取全局配置实例（单例）"""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reload_config() -> AppConfig:
    """重新加载配置"""
    global _config
    _config = AppConfig.from_env()
    return _config
