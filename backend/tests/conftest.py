# -*- coding: utf-8 -*-
import json
import os

# app 模块导入时会校验密钥，必须在导入之前设置
os.environ["DEEPSEEK_API_KEY"] = "sk-test-key"

import pytest
from fastapi.testclient import TestClient

from app import app
from services.relay import ChatRelay, get_relay


class FakeProvider:
    """按给定片段回放的上游，可在最后抛出异常"""

    def __init__(self, fragments=(), error=None):
        self.fragments = list(fragments)
        self.error = error
        self.calls = []
        self.closed = False

    async def stream(self, messages):
        self.calls.append(messages)
        try:
            for fragment in self.fragments:
                yield fragment
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


def parse_frames(body: str) -> list:
    """把 SSE 响应体拆成 JSON 事件列表"""
    frames = []
    for block in body.split("\n\n"):
        if not block:
            continue
        assert block.startswith("data: ")
        frames.append(json.loads(block[len("data: "):]))
    return frames


@pytest.fixture
def make_client():
    """用指定的假上游替换中转服务，返回 TestClient"""

    def _make(provider: FakeProvider) -> TestClient:
        relay = ChatRelay(provider)
        app.dependency_overrides[get_relay] = lambda: relay
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
