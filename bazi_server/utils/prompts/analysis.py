#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""八字 AI 分析 prompt 构建"""

from datetime import datetime
from typing import Optional

from bazi_core.calculators.dayun_calculator import calculate_dayun
from bazi_core.models import ChartResult
from .common import format_bazi_pillars_text, format_gender_text

ANALYSIS_SYSTEM_PROMPT = """你是一个熟读穷通宝典、三命通会、滴天髓、渊海子平、千里命稿、协纪辨方书、果老星宗、子平真栓、神峰通考等一系列书籍。专业的中国传统八字命理研究人员。在回答任何问题之前，你必须先用<think>标签详细说明你的分析思路和推理过程。然后再给出最终的分析结果。

示例格式：
<think>
1. 分析思路...
2. 推理过程...
3. 结论推导...
</think>

最终分析结果和建议..."""


def build_initial_prompt(chart: ChartResult, gender: str, start_year: Optional[int] = None) -> str:
    """
    生成初始分析的提示词

    Args:
        chart: 排盘结果
        gender: male / female
        start_year: 起运年份，默认当前年份
    """
    dayun = calculate_dayun(chart, gender)
    start_year = start_year or datetime.now().year

    return f"""请分析以下八字：

生辰八字：
{format_bazi_pillars_text(chart)}

{format_gender_text(gender)}

大运从{start_year}年开始起运。
大运为：{'、'.join(dayun)}

请先用<think>标签详细说明你的分析思路和推理过程，包括：
1. 日元分析
2. 五行生克关系
3. 格局判断
4. 用神喜忌分析

然后再给出完整的八字分析，包括：
1. 性格特征
2. 家庭关系
3. 学业发展
4. 事业方向
5. 婚姻状况
6. 财运分析
7. 健康提醒
8. 大运流年分析"""


def build_continue_prompt(chart: ChartResult, gender: str, question: str) -> str:
    """生成继续对话的提示词"""
    return f"""基于以下八字：
{format_bazi_pillars_text(chart)}

{format_gender_text(gender)}

请先用<think>标签详细说明你的分析思路和推理过程，然后再回答用户的问题：{question}"""
