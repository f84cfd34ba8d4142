# -*- coding: utf-8 -*-
"""
上游模型服务

封装 LangChain 聊天模型，把上游的流式回复转换成纯文本片段序列。
模型实例在启动时创建一次，之后被所有请求并发只读共享。
"""
from typing import AsyncIterator, Sequence

from langchain.chat_models import init_chat_model
from langchain_core.messages import BaseMessage

from config import Settings
from logger import get_logger

logger = get_logger(__name__)


def chunk_text(chunk) -> str:
    """提取流式分块中的文本，content 可能是字符串或内容块列表"""
    content = getattr(chunk, "content", "")
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class ChatProvider:
    """上游聊天模型（流式）"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._model = self._create_model()

    def _create_model(self):
        """创建语言模型，不做任何重试"""
        model = self.settings.model
        provider = self.settings.provider
        logger.info(f"初始化上游模型: {model.model_name} @ {provider.base_url}")
        return init_chat_model(
            model.model_name,
            temperature=model.temperature,
            max_tokens=model.max_tokens,
            timeout=model.timeout,
            max_retries=0,
            api_key=provider.api_key,
            base_url=provider.base_url,
        )

    async def stream(self, messages: Sequence[BaseMessage]) -> AsyncIterator[str]:
        """
        流式调用上游模型

        Args:
            messages: 按顺序排列的对话消息（system 在前，user 在后）

        Yields:
            每个上游分块中的文本（可能为空字符串）
        """
        async for chunk in self._model.astream(list(messages)):
            yield chunk_text(chunk)
