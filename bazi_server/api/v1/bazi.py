#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字排盘 API
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from bazi_core.calculators.dayun_calculator import calculate_dayun
from bazi_server.api.dependencies import get_service_factory
from bazi_server.api.v1.models.base_response import APIResponse
from bazi_server.api.v1.models.bazi_base_models import BaziChartRequest
from bazi_server.factories.service_factory import ServiceFactory

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/bazi/chart", response_model=APIResponse, summary="八字排盘")
async def calculate_chart(request: BaziChartRequest,
                          factory: ServiceFactory = Depends(get_service_factory)):
    """
    计算四柱八字

    - **solar_date**: 阳历日期 (YYYY-MM-DD)
    - **solar_time**: 出生时间 (HH:MM)
    - **gender**: 性别 (male/female)
    - **tianapi_key**: 天行 API 密钥（可选）

    返回四柱、农历日期和大运序列
    """
    service = factory.create_chart_service(request.tianapi_key)

    # 万年历请求是同步 I/O，放到线程池执行
    loop = asyncio.get_running_loop()
    chart = await loop.run_in_executor(None, service.calculate, request.birth_datetime)

    return APIResponse.ok(data={
        'chart': chart.to_dict(),
        'lunar_date_text': chart.lunar_date.format(),
        'dayun': calculate_dayun(chart, request.gender),
    })
