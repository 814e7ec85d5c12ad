# -*- coding: utf-8 -*-
"""
LLM 流式输出处理
"""

from .think_tag_reducer import (
    StreamState,
    ThinkingUpdate,
    ContentUpdate,
    StreamEvent,
    reduce_chunk,
    flush,
    ThinkTagReducer,
)

__all__ = [
    'StreamState',
    'ThinkingUpdate',
    'ContentUpdate',
    'StreamEvent',
    'reduce_chunk',
    'flush',
    'ThinkTagReducer',
]
