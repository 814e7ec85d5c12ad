#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字排盘服务

先查询万年历（农历 + 干支），再在本地推算时柱。
"""

import logging
from datetime import datetime

from bazi_core.calculators.chart_calculator import build_chart, validate_birth_year
from bazi_core.models import ChartResult
from bazi_server.services.calendar_gateway import CalendarGateway

logger = logging.getLogger(__name__)


class BaziChartService:
    """八字排盘服务"""

    def __init__(self, gateway: CalendarGateway):
        self.gateway = gateway

    def calculate(self, birth: datetime) -> ChartResult:
        """
        计算完整八字

        Args:
            birth: 出生日期时间（当地时间）

        Returns:
            ChartResult

        Raises:
            InvalidBirthDateError: 年份超出 1900-2100
            GatewayError: 万年历接口失败
            MalformedPillarError / UnknownStemError: 干支数据无效
        """
        validate_birth_year(birth)

        lunar_date = self.gateway.solar_to_lunar(birth.date())
        ganzhi = self.gateway.get_ganzhi(birth.date())
        logger.debug(f"API returned GanZhi: {ganzhi}")

        chart = build_chart(birth, ganzhi, lunar_date)
        logger.info(
            f"八字计算完成: {chart.year.text} {chart.month.text} {chart.day.text} {chart.hour.text} "
            f"(农历 {lunar_date.format()})"
        )
        return chart
