# -*- coding: utf-8 -*-
"""上游模型封装测试"""
import asyncio
from unittest.mock import MagicMock, patch

from langchain_core.messages import AIMessageChunk, HumanMessage, SystemMessage

from config import ModelConfig, ProviderConfig, Settings
from services.provider import ChatProvider, chunk_text


def make_settings() -> Settings:
    return Settings(
        provider=ProviderConfig(api_key="sk-abc", base_url="https://upstream.example/v1"),
        model=ModelConfig(model_name="openai:deepseek-chat", temperature=0.9, timeout=30, max_tokens=100),
    )


def test_model_is_created_once_without_retries():
    with patch("services.provider.init_chat_model") as mock_init:
        ChatProvider(make_settings())

    mock_init.assert_called_once()
    args, kwargs = mock_init.call_args
    assert args == ("openai:deepseek-chat",)
    assert kwargs["temperature"] == 0.9
    assert kwargs["max_tokens"] == 100
    assert kwargs["timeout"] == 30
    assert kwargs["max_retries"] == 0
    assert kwargs["api_key"] == "sk-abc"
    assert kwargs["base_url"] == "https://upstream.example/v1"


def test_stream_yields_chunk_text_in_order():
    async def fake_astream(messages):
        for text in ["", "Wind", " passes"]:
            yield AIMessageChunk(content=text)

    model = MagicMock()
    model.astream = fake_astream
    messages = [SystemMessage(content="sys"), HumanMessage(content="hi")]

    with patch("services.provider.init_chat_model", return_value=model):
        provider = ChatProvider(make_settings())

    async def run():
        return [text async for text in provider.stream(messages)]

    assert asyncio.run(run()) == ["", "Wind", " passes"]


def test_chunk_text_handles_content_blocks():
    chunk = AIMessageChunk(content=[{"type": "text", "text": "风"}, {"type": "image_url"}, "起"])

    assert chunk_text(chunk) == "风起"
    assert chunk_text(AIMessageChunk(content="")) == ""
