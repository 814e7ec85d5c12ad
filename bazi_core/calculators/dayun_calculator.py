#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
大运推算

以月柱为起点，男命顺排、女命逆排，每步大运天干、地支各移动一位。
"""

from typing import List

from bazi_core.constants import HEAVENLY_STEMS, EARTHLY_BRANCHES
from bazi_core.exceptions import MalformedPillarError, UnknownStemError
from bazi_core.models import ChartResult

DAYUN_STEPS = 10


def calculate_dayun(chart: ChartResult, gender: str, steps: int = DAYUN_STEPS) -> List[str]:
    """
    计算大运序列

    Args:
        chart: 排盘结果
        gender: male / female
        steps: 大运步数，默认 10 步

    Returns:
        List[str]: 干支字符串列表，第一步即月柱
    """
    stem_index = _index_of(HEAVENLY_STEMS, chart.month.stem, UnknownStemError)
    branch_index = _index_of(EARTHLY_BRANCHES, chart.month.branch, MalformedPillarError)
    direction = 1 if gender == 'male' else -1

    dayun = []
    for i in range(steps):
        stem = HEAVENLY_STEMS[(stem_index + direction * i + 10) % 10]
        branch = EARTHLY_BRANCHES[(branch_index + direction * i + 12) % 12]
        dayun.append(f"{stem}{branch}")
    return dayun


def _index_of(alphabet: List[str], symbol: str, error_cls) -> int:
    if symbol not in alphabet:
        raise error_cls(f"无效的月柱: {symbol!r}")
    return alphabet.index(symbol)
