# -*- coding: utf-8 -*-
"""
大模型返回文本处理：去除 Markdown 代码块标记并解析 JSON
"""

import json
import logging
import re
from typing import Any

from core.exceptions import ResultParseError

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r'```json\s*')
_FENCE = re.compile(r'```\s*')

# 解析失败时错误信息中附带的原文长度
EXCERPT_LENGTH = 200


def clean_markdown(text: str) -> str:
    """清理 Markdown 标记（去除所有 ```json 与 ``` 标记）"""
    text = _JSON_FENCE.sub('', text)
    text = _FENCE.sub('', text)
    return text.strip()


def parse_llm_json(text: str) -> Any:
    """
    清理并解析大模型返回的 JSON 文本

    Raises:
        ResultParseError: 文本为空或不是合法 JSON
    """
    if not isinstance(text, str) or not text.strip():
        raise ResultParseError('AI 返回内容为空')

    cleaned = clean_markdown(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        excerpt = cleaned[:EXCERPT_LENGTH]
        logger.warning(f"JSON 解析失败: {e.msg} (line {e.lineno}, column {e.colno})")
        raise ResultParseError(
            f'JSON 解析失败: {e.msg} (第 {e.lineno} 行第 {e.colno} 列)',
            details=excerpt,
        ) from e
