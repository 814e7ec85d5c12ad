#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
业务异常定义

所有业务异常都继承 BusinessError，携带 HTTP 状态码和错误类型，
由 bazi_server.utils.exception_handler 统一转换为 API 错误响应。
"""


class BusinessError(Exception):
    """
    业务异常基类

    用于表示业务逻辑错误，与系统错误区分开来。
    """
    def __init__(self, message: str, code: int = 400, error_type: str = "business_error"):
        self.message = message
        self.code = code
        self.error_type = error_type
        super().__init__(message)


class MalformedPillarError(BusinessError):
    """干支字符串不足两个字符"""
    def __init__(self, message: str = "无效的干支数据", value: str = None):
        self.value = value
        super().__init__(message, code=400, error_type="malformed_pillar")


class UnknownStemError(BusinessError):
    """天干不在十天干之内"""
    def __init__(self, message: str = "无效的日干", stem: str = None):
        self.stem = stem
        super().__init__(message, code=400, error_type="unknown_stem")


class InvalidBirthDateError(BusinessError):
    """出生日期超出支持范围"""
    def __init__(self, message: str = "无效的日期格式"):
        super().__init__(message, code=400, error_type="invalid_birth_date")


class MissingCredentialError(BusinessError):
    """未配置第三方 API 密钥"""
    def __init__(self, message: str = "未配置API密钥", credential: str = None):
        self.credential = credential
        super().__init__(message, code=400, error_type="missing_credential")


class GatewayError(BusinessError):
    """万年历 API 调用失败（HTTP 错误、业务码非 200 或返回字段缺失）"""
    def __init__(self, message: str = "API请求失败", status_code: int = None):
        self.status_code = status_code
        super().__init__(message, code=502, error_type="calendar_gateway_error")


class ChatRequestError(BusinessError):
    """LLM 对话接口调用失败"""
    def __init__(self, message: str = "AI分析请求失败", status_code: int = None):
        self.status_code = status_code
        super().__init__(message, code=502, error_type="chat_request_error")
