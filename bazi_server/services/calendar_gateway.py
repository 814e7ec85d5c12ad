#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
万年历API服务 - 调用天聚数行（tianapi）农历接口

提供两个查询：
- solar_to_lunar: 公历转农历
- get_ganzhi: 年、月、日干支

每次调用都重新请求第三方接口，不做重试和缓存。
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

import requests

from bazi_core.constants import LEAP_MONTH_MARKER
from bazi_core.exceptions import GatewayError, MissingCredentialError
from bazi_core.models import GanZhi, LunarDate
from bazi_server.config.app_config import AppConfig, DEFAULT_TIANAPI_BASE_URL

logger = logging.getLogger(__name__)


class CalendarGateway:
    """天聚数行万年历 API 客户端"""

    def __init__(self, api_key: str, base_url: str = DEFAULT_TIANAPI_BASE_URL,
                 timeout: float = 10.0, session: Optional[requests.Session] = None):
        """
        Args:
            api_key: 天行 API 密钥
            base_url: 农历接口地址
            timeout: 请求超时（秒）
            session: 可选的 requests.Session（测试时可注入）
        """
        if not api_key:
            raise MissingCredentialError("未配置天行API密钥 (TIANAPI_KEY)", credential="tianapi_key")
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: AppConfig, session: Optional[requests.Session] = None) -> 'CalendarGateway':
        return cls(
            api_key=config.credentials.tianapi_key,
            base_url=config.services.calendar_base_url,
            timeout=config.services.request_timeout,
            session=session,
        )

    @staticmethod
    def format_date(day: date) -> str:
        """格式化为 YYYY-MM-DD，月份和日期补足两位"""
        return f"{day.year}-{day.month:02d}-{day.day:02d}"

    def _fetch(self, day: date) -> Dict[str, Any]:
        """请求农历接口，返回 result 字段"""
        date_str = self.format_date(day)
        params = {
            'key': self.api_key,
            'date': date_str,
        }
        logger.info(f"请求天行万年历API: date={date_str}")

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"天行API HTTP错误: {status_code} {e}")
            raise GatewayError(f"API请求失败: {status_code}", status_code=status_code) from e
        except requests.RequestException as e:
            logger.error(f"调用天行API失败: {e}")
            raise GatewayError(f"API请求失败: {e}") from e
        except ValueError as e:
            logger.error(f"天行API返回非JSON数据: {e}")
            raise GatewayError("API返回数据格式错误") from e

        logger.debug(f"天行API响应: {data}")

        if not isinstance(data, dict):
            raise GatewayError("API返回数据格式错误")

        if data.get('code') != 200:
            raise GatewayError(data.get('msg') or 'API请求失败')

        result = data.get('result')
        if not result:
            raise GatewayError("API返回数据格式错误")

        return result

    def solar_to_lunar(self, day: date) -> LunarDate:
        """获取农历日期"""
        result = self._fetch(day)

        lunar_text = result.get('lunardate')
        try:
            year, month, day_of_month = (int(part) for part in lunar_text.split('-'))
        except (AttributeError, ValueError) as e:
            raise GatewayError(f"农历日期格式错误: {lunar_text!r}") from e

        if not 1 <= month <= 12:
            raise GatewayError(f"农历月份超出范围: {month}")

        return LunarDate(
            year=year,
            month=month,
            day=day_of_month,
            is_leap=LEAP_MONTH_MARKER in (result.get('lubarmonth') or ''),
        )

    def get_ganzhi(self, day: date) -> GanZhi:
        """获取年、月、日干支"""
        result = self._fetch(day)

        year = result.get('tiangandizhiyear')
        month = result.get('tiangandizhimonth')
        day_ganzhi = result.get('tiangandizhiday')

        if not year or not month or not day_ganzhi:
            raise GatewayError("干支数据不完整")

        logger.debug(f"干支数据: year={year}, month={month}, day={day_ganzhi}")
        return GanZhi(year=year, month=month, day=day_ganzhi)
