#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字 AI 分析流式服务

每个请求独占一个 StreamState，LLM 增量文本逐个经过 reduce_chunk，
拆分为思考过程（thinking，整体替换）和正文（content，增量追加）。
"""

import logging
from typing import Any, AsyncGenerator, Dict, List, Optional, Sequence

from bazi_core.models import ChartResult, ConversationMessage
from bazi_core.constants import THINK_OPEN_TAG
from bazi_core.stream.think_tag_reducer import StreamState, flush, reduce_chunk
from bazi_server.services.base_llm_stream_service import BaseLLMStreamService
from bazi_server.utils.prompts.analysis import (
    ANALYSIS_SYSTEM_PROMPT,
    build_initial_prompt,
    build_continue_prompt,
)

logger = logging.getLogger(__name__)


class BaziAnalysisService(BaseLLMStreamService):
    """八字分析（支持多轮对话）"""

    def build_messages(
        self,
        chart: ChartResult,
        gender: str,
        history: Sequence[ConversationMessage] = (),
        start_year: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        组装发送给模型的消息

        没有历史时发送初始分析提示词；有历史时以最后一条消息作为用户问题。
        """
        if history:
            prompt = build_continue_prompt(chart, gender, history[-1].content)
        else:
            prompt = build_initial_prompt(chart, gender, start_year=start_year)

        return [
            {'role': 'system', 'content': ANALYSIS_SYSTEM_PROMPT},
            *(message.to_chat_message() for message in history),
            {'role': 'user', 'content': prompt},
        ]

    async def stream_analysis(
        self,
        chart: ChartResult,
        gender: str,
        trace_id: Optional[str] = None,
        history: Sequence[ConversationMessage] = (),
        start_year: Optional[int] = None,
        **kwargs
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """
        流式生成八字分析

        Yields:
            dict:
                - {'type': 'thinking', 'content': 完整思考过程}
                - {'type': 'content', 'content': 正文增量}
                - {'type': 'complete', 'content': 正文全文, 'thinking': 思考过程}
                - {'type': 'error', 'content': 错误信息}
        """
        messages = self.build_messages(chart, gender, history, start_year=start_year)
        logger.info(f"[{trace_id or 'N/A'}] 开始八字分析: model={self.model}, history={len(history)}")

        state = StreamState()
        try:
            async for delta in self._stream_deltas(messages):
                state, events = reduce_chunk(state, delta)
                for event in events:
                    yield {'type': event.type, 'content': event.text}
        except Exception as e:
            yield self._error_event(e, trace_id)
            return

        if THINK_OPEN_TAG in state.buffer:
            logger.warning(f"[{trace_id or 'N/A'}] 流结束时思考标签未闭合，丢弃 {len(state.buffer)} 个字符")

        state, events = flush(state)
        for event in events:
            yield {'type': event.type, 'content': event.text}

        yield {'type': 'complete', 'content': state.content, 'thinking': state.last_thinking}
