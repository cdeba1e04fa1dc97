#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""大模型返回文本处理测试"""

import pytest

from core.exceptions import ResultParseError
from server.utils.llm_text import clean_markdown, parse_llm_json


class TestCleanMarkdown:
    def test_json_fence(self):
        assert clean_markdown('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert clean_markdown('```\n{"a": 1}\n```\n') == '{"a": 1}'

    def test_all_fences_removed(self):
        text = '```json {"a": 1} ``` ```json {"b": 2}```'
        assert '```' not in clean_markdown(text)

    def test_plain_text_trimmed(self):
        assert clean_markdown('  {"a": 1}  \n') == '{"a": 1}'


class TestParseLlmJson:
    def test_parse_fenced(self):
        assert parse_llm_json('```json\n{"chartPoints": []}\n```') == {'chartPoints': []}

    def test_invalid_json(self):
        with pytest.raises(ResultParseError) as exc_info:
            parse_llm_json('这不是 JSON')
        assert exc_info.value.message.startswith('JSON 解析失败')
        assert exc_info.value.details == '这不是 JSON'
        assert exc_info.value.code == 422

    @pytest.mark.parametrize("text", ['', '   ', None])
    def test_empty(self, text):
        with pytest.raises(ResultParseError) as exc_info:
            parse_llm_json(text)
        assert exc_info.value.message == 'AI 返回内容为空'

    def test_excerpt_truncated(self):
        with pytest.raises(ResultParseError) as exc_info:
            parse_llm_json('{' + 'x' * 500)
        assert len(exc_info.value.details) == 200
