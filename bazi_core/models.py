#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字数据模型

- Pillar: 一柱（天干 + 地支）
- LunarDate: 农历日期
- GanZhi: 万年历返回的年/月/日干支字符串
- ChartResult: 完整四柱排盘结果
- ConversationMessage: 对话历史中的一条消息
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Optional

from bazi_core.constants import LEAP_MONTH_MARKER

Role = Literal['user', 'assistant']


@dataclass(frozen=True)
class Pillar:
    """一柱：天干 + 地支"""
    stem: str
    branch: str

    @property
    def text(self) -> str:
        return f"{self.stem}{self.branch}"


@dataclass(frozen=True)
class LunarDate:
    """农历日期"""
    year: int
    month: int
    day: int
    is_leap: bool = False

    def format(self) -> str:
        """格式化为 1990年闰5月15日 形式"""
        leap = LEAP_MONTH_MARKER if self.is_leap else ''
        return f"{self.year}年{leap}{self.month}月{self.day}日"


@dataclass(frozen=True)
class GanZhi:
    """年、月、日干支（各两个字符）"""
    year: str
    month: str
    day: str


@dataclass(frozen=True)
class ChartResult:
    """四柱排盘结果，一次计算生成，不可修改"""
    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar
    lunar_date: LunarDate

    @property
    def pillars(self) -> Dict[str, Pillar]:
        return {
            'year': self.year,
            'month': self.month,
            'day': self.day,
            'hour': self.hour,
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ConversationMessage:
    """对话消息（thinking 只用于展示，不回传给模型）"""
    role: Role
    content: str
    thinking: Optional[str] = None

    def to_chat_message(self) -> Dict[str, str]:
        return {'role': self.role, 'content': self.content}
