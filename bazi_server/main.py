#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastAPI 应用主入口
"""

import os
import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response


# 自定义UTF-8 JSONResponse类，确保中文正确编码 + 不缓存
class UTF8JSONResponse(Response):
    media_type = "application/json; charset=utf-8"

    def __init__(self, content, **kwargs):
        super().__init__(content, **kwargs)
        self.headers["Cache-Control"] = "no-cache, no-store, must-revalidate, max-age=0"

    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,  # 关键：不转义非ASCII字符
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")


project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# 优先加载 .env 文件（必须在读取配置之前）
from dotenv import load_dotenv

load_dotenv(os.path.join(project_root, '.env'))

from bazi_server.config.app_config import AppConfig, get_config
from bazi_server.api.v1.bazi import router as bazi_router
from bazi_server.api.v1.bazi_stream import router as bazi_stream_router
from bazi_server.utils.exception_handler import register_exception_handlers

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    config: AppConfig = app.state.config
    logger.info(f"✓ 服务启动: env={config.env}, analysis_model={config.services.analysis_model}")
    if not config.has_credentials:
        logger.warning("⚠ 未配置完整的 API 密钥（TIANAPI_KEY / SILICONFLOW_KEY），需在请求中提供")
    yield
    logger.info("✓ 服务已停止")


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """创建应用，配置在启动时读取一次并挂在 app.state 上"""
    config = config or get_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title="BaziInsightAPI",
        description="八字排盘与 AI 命理分析 API 服务",
        version="1.0.0",
        lifespan=lifespan,
        debug=config.debug,
        default_response_class=UTF8JSONResponse,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(bazi_router, prefix="/api/v1", tags=["八字计算"])
    app.include_router(bazi_stream_router, prefix="/api/v1", tags=["AI分析（流式）"])

    @app.get("/api/v1/health")
    async def health_check():
        """健康检查"""
        return {
            "status": "healthy",
            "env": config.env,
            "credentials_configured": config.has_credentials,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bazi_server.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
        workers=1
    )
