#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字思维导图流式服务

模型直接输出 Markdown，不拆分思考标签；每次推送截至目前的完整 Markdown。
"""

import logging
from typing import Any, AsyncGenerator, Dict, List, Optional

from bazi_core.models import ChartResult
from bazi_server.services.base_llm_stream_service import BaseLLMStreamService
from bazi_server.utils.prompts.mindmap import MINDMAP_SYSTEM_PROMPT, build_mindmap_prompt

logger = logging.getLogger(__name__)


class MindmapService(BaseLLMStreamService):
    """八字思维导图"""

    def build_messages(self, chart: ChartResult, gender: str) -> List[Dict[str, Any]]:
        return [
            {'role': 'system', 'content': MINDMAP_SYSTEM_PROMPT},
            {'role': 'user', 'content': build_mindmap_prompt(chart, gender)},
        ]

    async def stream_analysis(
        self,
        chart: ChartResult,
        gender: str,
        trace_id: Optional[str] = None,
        **kwargs
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """
        流式生成思维导图 Markdown

        Yields:
            dict:
                - {'type': 'progress', 'content': 截至目前的 Markdown}
                - {'type': 'complete', 'content': 完整 Markdown}
                - {'type': 'error', 'content': 错误信息}
        """
        logger.info(f"[{trace_id or 'N/A'}] 开始生成思维导图: model={self.model}")

        parts: List[str] = []
        try:
            async for delta in self._stream_deltas(self.build_messages(chart, gender)):
                parts.append(delta)
                yield {'type': 'progress', 'content': ''.join(parts)}
        except Exception as e:
            yield self._error_event(e, trace_id)
            return

        yield {'type': 'complete', 'content': ''.join(parts)}
