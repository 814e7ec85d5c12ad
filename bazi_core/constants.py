#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
天干地支常量
"""

from typing import List, Tuple

# 十天干（顺序不可调整，索引参与时干推算）
HEAVENLY_STEMS: List[str] = ['甲', '乙', '丙', '丁', '戊', '己', '庚', '辛', '壬', '癸']

# 十二地支
EARTHLY_BRANCHES: List[str] = ['子', '丑', '寅', '卯', '辰', '巳', '午', '未', '申', '酉', '戌', '亥']

# 时辰对应表：(结束小时（不含）, 地支)，按顺序查找第一个大于当前小时的边界
HOUR_TO_BRANCH_TABLE: List[Tuple[int, str]] = [
    (1, '子'),   # 23:00-1:00
    (3, '丑'),   # 1:00-3:00
    (5, '寅'),   # 3:00-5:00
    (7, '卯'),   # 5:00-7:00
    (9, '辰'),   # 7:00-9:00
    (11, '巳'),  # 9:00-11:00
    (13, '午'),  # 11:00-13:00
    (15, '未'),  # 13:00-15:00
    (17, '申'),  # 15:00-17:00
    (19, '酉'),  # 17:00-19:00
    (21, '戌'),  # 19:00-21:00
    (23, '亥'),  # 21:00-23:00
]

# 子时（23 点及 1 点之前）
ZI_HOUR_BRANCH = '子'

# 农历闰月标记
LEAP_MONTH_MARKER = '闰'

# 思考过程标签
THINK_OPEN_TAG = '<think>'
THINK_CLOSE_TAG = '</think>'

# 支持的出生年份范围
MIN_BIRTH_YEAR = 1900
MAX_BIRTH_YEAR = 2100

GENDER_LABELS = {
    'male': '男',
    'female': '女',
}
