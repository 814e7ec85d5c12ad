#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""八字思维导图 prompt 构建"""

from bazi_core.models import ChartResult
from .common import format_bazi_pillars_text, format_gender_text

MINDMAP_SYSTEM_PROMPT = """你是一个专业的八字命理分析专家。请使用Markdown格式生成一个清晰的思维导图。

要求：
1. 使用Markdown标准语法
2. 只使用#、##、###等标题和-列表符号
3. 确保每个节点简洁明了
4. 不要使用其他格式化语法
5. 不要添加任何额外的说明文字
6. 严格按照思维导图的层级结构组织内容

示例格式：
# 主题
## 一级节点1
- 内容1
- 内容2
## 一级节点2
- 内容1
  - 子内容1
  - 子内容2
- 内容2"""


def build_mindmap_prompt(chart: ChartResult, gender: str) -> str:
    """生成思维导图的提示词"""
    return f"""请分析以下八字并生成思维导图：

生辰八字：
{format_bazi_pillars_text(chart)}

{format_gender_text(gender)}

请生成一个详细的思维导图，包括以下方面：

1. 基础信息（生辰八字、性别、命局特点）
2. 五行分析（日主特征、五行生克、喜用神、忌神）
3. 性格特征（性格优点、性格缺点、行为模式）
4. 事业发展（适合行业、发展方向、机遇时机）
5. 财运分析（财运特点、理财建议、破财因素）
6. 健康提示（易患疾病、养生建议、注意事项）
7. 人际关系（家庭关系、婚姻状况、社交特点）
8. 大运流年（近期运势、重要时期、发展建议）

注意：
1. 使用简洁的语言
2. 每个要点不超过20字
3. 保持层级结构清晰
4. 使用标准的Markdown语法"""
