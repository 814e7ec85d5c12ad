#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字 AI 分析 / 思维导图流式 API

使用 Server-Sent Events (SSE) 实时返回，每个事件为：
data: {"type": "...", "content": "..."}

排盘失败、密钥缺失或 LLM 调用失败都以 error 事件返回，已推送的内容保留。
"""

import asyncio
import json
import logging
import uuid
from typing import Any, AsyncGenerator, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from bazi_core.exceptions import BusinessError
from bazi_server.api.dependencies import get_service_factory
from bazi_server.api.v1.models.bazi_base_models import AnalysisStreamRequest, MindmapStreamRequest
from bazi_server.factories.service_factory import ServiceFactory

logger = logging.getLogger(__name__)

router = APIRouter()

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # 禁用 nginx 缓冲
}


def format_sse(event: Dict[str, Any]) -> str:
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


async def _calculate_chart(factory: ServiceFactory, request: MindmapStreamRequest):
    service = factory.create_chart_service(request.tianapi_key)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, service.calculate, request.birth_datetime)


async def analysis_stream_generator(request: AnalysisStreamRequest,
                                    factory: ServiceFactory) -> AsyncGenerator[str, None]:
    trace_id = uuid.uuid4().hex[:12]
    try:
        service = factory.create_analysis_service(request.siliconflow_key, request.model)
        chart = await _calculate_chart(factory, request)
    except BusinessError as e:
        logger.warning(f"[{trace_id}] 八字分析准备失败: {e.message}")
        yield format_sse({'type': 'error', 'content': e.message})
        return

    async for event in service.stream_analysis(chart, request.gender, trace_id=trace_id,
                                               history=request.history):
        yield format_sse(event)


async def mindmap_stream_generator(request: MindmapStreamRequest,
                                   factory: ServiceFactory) -> AsyncGenerator[str, None]:
    trace_id = uuid.uuid4().hex[:12]
    try:
        service = factory.create_mindmap_service(request.siliconflow_key, request.model)
        chart = await _calculate_chart(factory, request)
    except BusinessError as e:
        logger.warning(f"[{trace_id}] 思维导图准备失败: {e.message}")
        yield format_sse({'type': 'error', 'content': e.message})
        return

    async for event in service.stream_analysis(chart, request.gender, trace_id=trace_id):
        yield format_sse(event)


@router.post("/bazi/analysis/stream", summary="八字 AI 分析（流式）")
async def analysis_stream(request: AnalysisStreamRequest,
                          factory: ServiceFactory = Depends(get_service_factory)):
    """
    八字 AI 分析（支持继续对话）

    事件类型：thinking（思考过程，整体替换）、content（正文增量）、complete、error
    """
    return StreamingResponse(
        analysis_stream_generator(request, factory),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/bazi/mindmap/stream", summary="八字思维导图（流式）")
async def mindmap_stream(request: MindmapStreamRequest,
                         factory: ServiceFactory = Depends(get_service_factory)):
    """
    生成 Markdown 思维导图

    事件类型：progress（截至目前的完整 Markdown）、complete、error
    """
    return StreamingResponse(
        mindmap_stream_generator(request, factory),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
