# -*- coding: utf-8 -*-
"""
八字核心模块

纯计算逻辑，不涉及任何网络 I/O：
- 天干地支常量
- 四柱排盘（时柱推算）
- 大运推算
- LLM 流式输出的 <think> 标签拆分
"""
