"""
统一异常处理

把 BusinessError 及未处理异常转换为统一的 JSON 错误响应，避免每个接口重复 try/except
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bazi_core.exceptions import BusinessError
from bazi_server.config.env_config import is_production

logger = logging.getLogger(__name__)


def error_content(message: str, error_type: str) -> dict:
    return {
        "success": False,
        "error": message,
        "error_type": error_type,
    }


async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
    """业务异常，返回标准错误响应"""
    logger.warning(f"业务异常 [{request.url.path}]: {exc.message}")
    return JSONResponse(status_code=exc.code, content=error_content(exc.message, exc.error_type))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """其他未处理的异常"""
    logger.error(f"未处理的异常 [{request.url.path}]: {exc}", exc_info=True)

    # 生产环境不暴露详细错误信息
    if is_production():
        message = "服务器内部错误，请稍后重试"
    else:
        message = f"错误: {exc}"
    return JSONResponse(status_code=500, content=error_content(message, "internal_error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BusinessError, business_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
