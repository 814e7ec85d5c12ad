#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字排盘服务单元测试
"""

from datetime import datetime

import pytest

from bazi_core.exceptions import InvalidBirthDateError
from bazi_core.models import LunarDate, Pillar
from bazi_server.services.bazi_chart_service import BaziChartService
from bazi_server.services.calendar_gateway import CalendarGateway


class TestBaziChartService:

    def test_calculate(self, mock_calendar_session):
        service = BaziChartService(CalendarGateway("key", session=mock_calendar_session))

        chart = service.calculate(datetime(2025, 12, 11, 12, 0))

        assert [p.text for p in chart.pillars.values()] == ['乙巳', '戊子', '甲寅', '庚午']
        assert chart.lunar_date == LunarDate(2025, 10, 22, False)
        # 农历 + 干支各请求一次
        assert mock_calendar_session.get.call_count == 2

    def test_late_zi_hour(self, mock_calendar_session):
        """测试：23点为子时，时干按当天日干推算"""
        service = BaziChartService(CalendarGateway("key", session=mock_calendar_session))

        chart = service.calculate(datetime(2025, 12, 11, 23, 30))

        assert chart.hour == Pillar('甲', '子')

    @pytest.mark.parametrize("year", [1899, 2101])
    def test_year_out_of_range(self, mock_calendar_session, year):
        service = BaziChartService(CalendarGateway("key", session=mock_calendar_session))

        with pytest.raises(InvalidBirthDateError):
            service.calculate(datetime(year, 6, 1, 12, 0))

        mock_calendar_session.get.assert_not_called()
