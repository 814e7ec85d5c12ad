#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
四柱排盘

年、月、日三柱直接使用万年历返回的干支，只在本地推算时柱：
- 时支：按时辰对应表查找
- 时干：五鼠遁，起始索引 = (日干索引 * 2) % 10
"""

from datetime import datetime

from bazi_core.constants import (
    HEAVENLY_STEMS,
    EARTHLY_BRANCHES,
    HOUR_TO_BRANCH_TABLE,
    ZI_HOUR_BRANCH,
    MIN_BIRTH_YEAR,
    MAX_BIRTH_YEAR,
)
from bazi_core.exceptions import (
    MalformedPillarError,
    UnknownStemError,
    InvalidBirthDateError,
)
from bazi_core.models import Pillar, GanZhi, LunarDate, ChartResult


def split_ganzhi(ganzhi: str) -> Pillar:
    """
    从干支字符串中提取天干和地支

    Args:
        ganzhi: 干支字符串，如 "甲子"

    Returns:
        Pillar: 第一个字符为天干，第二个字符为地支

    Raises:
        MalformedPillarError: 字符串为空或不足两个字符
    """
    if not ganzhi or len(ganzhi) < 2:
        raise MalformedPillarError(f"无效的干支数据: {ganzhi!r}", value=ganzhi)
    return Pillar(stem=ganzhi[0], branch=ganzhi[1])


def get_hour_branch(hour: int) -> str:
    """获取时辰地支（23:00-1:00 为子时）"""
    if hour >= 23 or hour < 1:
        return ZI_HOUR_BRANCH

    for end_hour, branch in HOUR_TO_BRANCH_TABLE:
        if hour < end_hour:
            return branch

    return ZI_HOUR_BRANCH


def get_hour_stem_start_index(day_stem: str) -> int:
    """根据日干获取时干起始索引"""
    if day_stem not in HEAVENLY_STEMS:
        raise UnknownStemError(f"无效的日干: {day_stem!r}", stem=day_stem)
    return (HEAVENLY_STEMS.index(day_stem) * 2) % 10


def get_hour_stem(branch_index: int, start_index: int) -> str:
    """根据时支索引和起始索引获取时干"""
    return HEAVENLY_STEMS[(start_index + branch_index) % 10]


def calculate_hour_pillar(hour: int, day_stem: str) -> Pillar:
    """计算时柱"""
    branch = get_hour_branch(hour)
    branch_index = EARTHLY_BRANCHES.index(branch)
    start_index = get_hour_stem_start_index(day_stem)
    return Pillar(stem=get_hour_stem(branch_index, start_index), branch=branch)


def validate_birth_year(birth: datetime) -> None:
    """出生年份必须在 1900 - 2100 之间"""
    if not MIN_BIRTH_YEAR <= birth.year <= MAX_BIRTH_YEAR:
        raise InvalidBirthDateError(f"日期必须在{MIN_BIRTH_YEAR}年到{MAX_BIRTH_YEAR}年之间")


def build_chart(birth: datetime, ganzhi: GanZhi, lunar_date: LunarDate) -> ChartResult:
    """
    计算完整八字

    Args:
        birth: 出生日期时间（当地时间，只使用其小时）
        ganzhi: 万年历返回的年、月、日干支
        lunar_date: 农历日期

    Returns:
        ChartResult: 四柱 + 农历日期
    """
    year_pillar = split_ganzhi(ganzhi.year)
    month_pillar = split_ganzhi(ganzhi.month)
    day_pillar = split_ganzhi(ganzhi.day)
    hour_pillar = calculate_hour_pillar(birth.hour, day_pillar.stem)

    return ChartResult(
        year=year_pillar,
        month=month_pillar,
        day=day_pillar,
        hour=hour_pillar,
        lunar_date=lunar_date,
    )
