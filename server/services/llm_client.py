# -*- coding: utf-8 -*-
"""
人生K线 LLM 客户端

职责：
- 调用 Anthropic Messages API（或兼容代理）生成人生K线 JSON 文本
- 同时携带 x-api-key 与 Authorization: Bearer 两种认证头
- 不做重试，失败时抛出 LLMServiceError
"""

import logging
from typing import Any, Dict, Optional

import requests

from core.exceptions import LLMServiceError
from server.config.app_config import ANTHROPIC_VERSION, LLMConfig, get_config

logger = logging.getLogger(__name__)

CONNECTION_TEST_PROMPT = '请回复"连接成功"'
CONNECTION_TEST_MAX_TOKENS = 100


class LifeKlineLLMClient:
    """人生K线 LLM 客户端"""

    def __init__(self, config: Optional[LLMConfig] = None):
        self.config = config or get_config().llm

    def _headers(self) -> Dict[str, str]:
        token = self.config.auth_token
        return {
            'Content-Type': 'application/json',
            'anthropic-version': ANTHROPIC_VERSION,
            'x-api-key': token,
            'Authorization': f'Bearer {token}',
        }

    def _ensure_configured(self):
        if not self.config.is_configured:
            raise LLMServiceError('服务器配置错误：缺少 ANTHROPIC_AUTH_TOKEN 环境变量', code=500)

    def _post(self, payload: Dict[str, Any], timeout: int) -> requests.Response:
        url = self.config.messages_url
        logger.info(f"请求 LLM: {url} model={payload['model']} max_tokens={payload['max_tokens']}")
        try:
            return requests.post(url, headers=self._headers(), json=payload, timeout=timeout)
        except requests.RequestException as e:
            logger.error(f"LLM 网络请求失败: {e}")
            raise LLMServiceError('网络请求失败', code=502, details=str(e)) from e

    @staticmethod
    def _error_details(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and isinstance(body.get('error'), dict):
            return body['error'].get('message') or response.text
        return response.text

    def create_message(self, prompt: str, max_tokens: Optional[int] = None,
                       temperature: Optional[float] = None) -> Dict[str, Any]:
        """
        发送单轮对话请求

        Args:
            prompt: 用户提示词
            max_tokens: 最大输出 token，默认读取配置
            temperature: 采样温度，默认读取配置

        Returns:
            Messages API 的原始响应 JSON

        Raises:
            LLMServiceError: 未配置、网络失败或上游返回非 2xx
        """
        self._ensure_configured()

        payload = {
            'model': self.config.model,
            'max_tokens': max_tokens or self.config.max_tokens,
            'temperature': self.config.temperature if temperature is None else temperature,
            'messages': [{'role': 'user', 'content': prompt}],
        }
        response = self._post(payload, self.config.timeout)

        if not response.ok:
            details = self._error_details(response)
            logger.error(f"LLM 服务返回错误: HTTP {response.status_code} {details[:500]}")
            raise LLMServiceError(
                f'AI 服务调用失败: {response.reason}',
                code=response.status_code,
                details=details,
            )

        try:
            return response.json()
        except ValueError as e:
            raise LLMServiceError('AI 返回格式错误：响应不是 JSON', details=response.text[:1000]) from e

    def generate(self, prompt: str) -> Dict[str, Any]:
        """
        生成人生K线文本

        Returns:
            {'text': 模型返回的文本, 'usage': {'inputTokens', 'outputTokens'}}
        """
        data = self.create_message(prompt)

        content = data.get('content') or []
        block = next((b for b in content if isinstance(b, dict) and b.get('type') == 'text'), None)
        if block is None:
            raise LLMServiceError('AI 返回格式错误：未找到文本内容')

        usage = data.get('usage') or {}
        logger.info(f"LLM 生成完成: input={usage.get('input_tokens')} output={usage.get('output_tokens')}")
        return {
            'text': block.get('text', '').strip(),
            'usage': {
                'inputTokens': usage.get('input_tokens'),
                'outputTokens': usage.get('output_tokens'),
            },
        }

    def test_connection(self) -> Dict[str, Any]:
        """发送一个简单请求检查 LLM 服务是否可用（不抛出上游错误）"""
        self._ensure_configured()

        payload = {
            'model': self.config.model,
            'max_tokens': CONNECTION_TEST_MAX_TOKENS,
            'messages': [{'role': 'user', 'content': CONNECTION_TEST_PROMPT}],
        }
        try:
            response = self._post(payload, self.config.timeout)
        except LLMServiceError as e:
            return {'success': False, 'error': e.details, 'testUrl': self.config.messages_url}

        if not response.ok:
            return {
                'success': False,
                'status': response.status_code,
                'statusText': response.reason,
                'responseBody': response.text[:1000],
                'testUrl': self.config.messages_url,
            }
        return {
            'success': True,
            'status': response.status_code,
            'message': 'API 连接成功',
            'responseBody': response.text,
        }
