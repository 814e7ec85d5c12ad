#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""prompt 公共格式化函数"""

from bazi_core.constants import GENDER_LABELS
from bazi_core.models import ChartResult


def format_bazi_pillars_text(chart: ChartResult) -> str:
    """四柱文本，每柱一行"""
    return (
        f"年柱：{chart.year.text}\n"
        f"月柱：{chart.month.text}\n"
        f"日柱：{chart.day.text}\n"
        f"时柱：{chart.hour.text}"
    )


def format_gender_text(gender: str) -> str:
    return f"性别：{GENDER_LABELS.get(gender, '女')}性"
