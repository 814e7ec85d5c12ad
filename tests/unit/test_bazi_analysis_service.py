#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字分析流式服务单元测试

测试范围：
- 消息组装（首轮 / 多轮）
- thinking / content / complete 事件
- 流中断时的 error 事件
- 流结束时的缓冲区处理
"""

import pytest

from bazi_core.models import ConversationMessage
from bazi_server.services.bazi_analysis_service import BaziAnalysisService
from bazi_server.utils.prompts.analysis import ANALYSIS_SYSTEM_PROMPT


async def collect(service, *args, **kwargs):
    return [event async for event in service.stream_analysis(*args, **kwargs)]


class TestBuildMessages:

    def test_initial_messages(self, sample_chart, fake_chat_client_factory):
        service = BaziAnalysisService(fake_chat_client_factory([]), model="r1")

        messages = service.build_messages(sample_chart, "male", start_year=2030)

        assert len(messages) == 2
        assert messages[0] == {'role': 'system', 'content': ANALYSIS_SYSTEM_PROMPT}
        prompt = messages[1]['content']
        assert messages[1]['role'] == 'user'
        assert "年柱：乙巳" in prompt
        assert "时柱：庚午" in prompt
        assert "性别：男性" in prompt
        assert "大运从2030年开始起运。" in prompt
        assert "戊子、己丑、庚寅" in prompt

    def test_female_dayun_in_prompt(self, sample_chart, fake_chat_client_factory):
        service = BaziAnalysisService(fake_chat_client_factory([]), model="r1")

        prompt = service.build_messages(sample_chart, "female")[1]['content']

        assert "性别：女性" in prompt
        assert "戊子、丁亥、丙戌" in prompt

    def test_continue_messages(self, sample_chart, fake_chat_client_factory):
        service = BaziAnalysisService(fake_chat_client_factory([]), model="r1")
        history = [
            ConversationMessage('user', '请分析我的八字'),
            ConversationMessage('assistant', '日元甲木……', thinking='推理'),
            ConversationMessage('user', '明年财运如何？'),
        ]

        messages = service.build_messages(sample_chart, "male", history)

        assert [m['role'] for m in messages] == ['system', 'user', 'assistant', 'user', 'user']
        # thinking 不回传给模型
        assert messages[2] == {'role': 'assistant', 'content': '日元甲木……'}
        assert messages[-1]['content'].endswith("再回答用户的问题：明年财运如何？")
        assert "大运" not in messages[-1]['content']


class TestStreamAnalysis:

    @pytest.mark.asyncio
    async def test_thinking_then_content(self, sample_chart, fake_chat_client_factory):
        client = fake_chat_client_factory(["<thi", "nk>日元甲木</thi", "nk>性格", "仁厚"])
        service = BaziAnalysisService(client, model="r1", temperature=0.3)

        events = await collect(service, sample_chart, "male", trace_id="t-1")

        assert events == [
            {'type': 'thinking', 'content': '日元甲木'},
            {'type': 'content', 'content': '性格'},
            {'type': 'content', 'content': '仁厚'},
            {'type': 'complete', 'content': '性格仁厚', 'thinking': '日元甲木'},
        ]
        assert client.calls[0]['model'] == "r1"
        assert client.calls[0]['temperature'] == 0.3

    @pytest.mark.asyncio
    async def test_without_think_tag(self, sample_chart, fake_chat_client_factory):
        service = BaziAnalysisService(fake_chat_client_factory(["直接回答"]), model="r1")

        events = await collect(service, sample_chart, "female")

        assert events == [
            {'type': 'content', 'content': '直接回答'},
            {'type': 'complete', 'content': '直接回答', 'thinking': ''},
        ]

    @pytest.mark.asyncio
    async def test_unclosed_think_tag_discarded(self, sample_chart, fake_chat_client_factory):
        service = BaziAnalysisService(fake_chat_client_factory(["<think>还没想完"]), model="r1")

        events = await collect(service, sample_chart, "male")

        assert events == [{'type': 'complete', 'content': '', 'thinking': ''}]

    @pytest.mark.asyncio
    async def test_trailing_angle_bracket_kept(self, sample_chart, fake_chat_client_factory):
        """测试：末尾的 "<" 不是思考标签，流结束时按正文输出"""
        service = BaziAnalysisService(fake_chat_client_factory(["结论：甲", "<"]), model="r1")

        events = await collect(service, sample_chart, "male")

        assert events == [
            {'type': 'content', 'content': '结论：甲'},
            {'type': 'content', 'content': '<'},
            {'type': 'complete', 'content': '结论：甲<', 'thinking': ''},
        ]

    @pytest.mark.asyncio
    async def test_error_after_partial_content(self, sample_chart, fake_chat_client_factory, chat_request_error):
        client = fake_chat_client_factory(["<think>推理</think>", "部分"], error=chat_request_error)
        service = BaziAnalysisService(client, model="r1")

        events = await collect(service, sample_chart, "male")

        assert events == [
            {'type': 'thinking', 'content': '推理'},
            {'type': 'content', 'content': '部分'},
            {'type': 'error', 'content': 'AI分析请求失败: HTTP 500'},
        ]

    @pytest.mark.asyncio
    async def test_unexpected_error(self, sample_chart, fake_chat_client_factory):
        client = fake_chat_client_factory([], error=RuntimeError("boom"))
        service = BaziAnalysisService(client, model="r1")

        events = await collect(service, sample_chart, "male")

        assert events == [{'type': 'error', 'content': '生成失败: boom'}]

    @pytest.mark.asyncio
    async def test_history_passed_to_client(self, sample_chart, fake_chat_client_factory):
        client = fake_chat_client_factory(["好"])
        service = BaziAnalysisService(client, model="r1")
        history = [
            ConversationMessage('user', '请分析我的八字'),
            ConversationMessage('assistant', '分析'),
            ConversationMessage('user', '事业呢？'),
        ]

        await collect(service, sample_chart, "male", history=history)

        assert len(client.calls[0]['messages']) == 5

