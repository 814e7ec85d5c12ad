#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
排盘计算模块
"""

from .chart_calculator import (
    split_ganzhi,
    get_hour_branch,
    get_hour_stem_start_index,
    get_hour_stem,
    calculate_hour_pillar,
    validate_birth_year,
    build_chart,
)
from .dayun_calculator import calculate_dayun

__all__ = [
    'split_ganzhi',
    'get_hour_branch',
    'get_hour_stem_start_index',
    'get_hour_stem',
    'calculate_hour_pillar',
    'validate_birth_year',
    'build_chart',
    'calculate_dayun',
]
