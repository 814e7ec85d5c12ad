#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
<think> 标签流式拆分

LLM 以 token 为单位流式返回文本，<think>…</think> 标签可能被拆散在任意多个
分片中。reduce_chunk 是一个纯函数：输入上一次的 StreamState 和本次分片，
返回新的 StreamState 和需要推送给前端的事件列表。

- ThinkingUpdate: 思考过程，前端整体替换显示
- ContentUpdate: 正文增量，前端追加显示

每次调用只识别第一对完整标签，同一分片中的后续标签按正文处理。
文本末尾残缺的开始标签（如 "<thi"）会留在缓冲区等待下一个分片。
"""

import re
from dataclasses import dataclass, replace
from typing import List, Tuple, Union

from bazi_core.constants import THINK_OPEN_TAG, THINK_CLOSE_TAG

THINK_PATTERN = re.compile(
    re.escape(THINK_OPEN_TAG) + r'([\s\S]*?)' + re.escape(THINK_CLOSE_TAG)
)


@dataclass(frozen=True)
class StreamState:
    """
    单次请求的流式状态

    Attributes:
        buffer: 上一个边界之后尚未输出的文本（等待闭合标签）
        last_thinking: 最近一次推送的思考内容（用于去重）
        content: 已推送的正文累计
    """
    buffer: str = ''
    last_thinking: str = ''
    content: str = ''


@dataclass(frozen=True)
class ThinkingUpdate:
    text: str
    type: str = 'thinking'


@dataclass(frozen=True)
class ContentUpdate:
    text: str
    type: str = 'content'


StreamEvent = Union[ThinkingUpdate, ContentUpdate]


def reduce_chunk(state: StreamState, delta: str) -> Tuple[StreamState, List[StreamEvent]]:
    """
    处理一个流式分片

    Args:
        state: 当前状态
        delta: 本次收到的文本分片（可以为空字符串）

    Returns:
        (新状态, 事件列表)
    """
    full_text = state.buffer + delta
    events: List[StreamEvent] = []

    match = THINK_PATTERN.search(full_text)
    if match:
        thinking = match.group(1).strip()
        remaining = (full_text[:match.start()] + full_text[match.end():]).strip()
        last_thinking = state.last_thinking

        if thinking and thinking != last_thinking:
            events.append(ThinkingUpdate(thinking))
            last_thinking = thinking

        content = state.content
        if remaining:
            events.append(ContentUpdate(remaining))
            content += remaining

        return StreamState(buffer='', last_thinking=last_thinking, content=content), events

    # 有未闭合的思考标签，继续缓冲
    if THINK_OPEN_TAG in full_text:
        return replace(state, buffer=full_text), events

    # 末尾可能是被拆开的开始标签（如 "<thi"），先留在缓冲区
    split_at = _partial_open_tag_start(full_text)
    pending = full_text[split_at:] if split_at >= 0 else ''
    if split_at >= 0:
        full_text = full_text[:split_at]

    # 没有思考标签，作为普通内容处理
    text = full_text.strip()
    content = state.content
    if text:
        events.append(ContentUpdate(text))
        content += text
    return replace(state, buffer=pending, content=content), events


def flush(state: StreamState) -> Tuple[StreamState, List[StreamEvent]]:
    """
    流结束时处理缓冲区

    残缺的开始标签（如 "<"）按正文输出；真正未闭合的 <think> 内容丢弃。

    Returns:
        (新状态, 事件列表)
    """
    if not state.buffer or THINK_OPEN_TAG in state.buffer:
        return replace(state, buffer=''), []

    text = state.buffer.strip()
    if not text:
        return replace(state, buffer=''), []
    return replace(state, buffer='', content=state.content + text), [ContentUpdate(text)]


def _partial_open_tag_start(text: str) -> int:
    """返回末尾残缺开始标签的起始位置，没有则返回 -1"""
    for size in range(min(len(THINK_OPEN_TAG) - 1, len(text)), 0, -1):
        if text.endswith(THINK_OPEN_TAG[:size]):
            return len(text) - size
    return -1


class ThinkTagReducer:
    """reduce_chunk 的有状态包装，每个请求独占一个实例"""

    def __init__(self):
        self._state = StreamState()

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def thinking(self) -> str:
        return self._state.last_thinking

    @property
    def content(self) -> str:
        return self._state.content

    def feed(self, delta: str) -> List[StreamEvent]:
        self._state, events = reduce_chunk(self._state, delta)
        return events
