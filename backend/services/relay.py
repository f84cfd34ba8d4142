# -*- coding: utf-8 -*-
"""
流式中转服务

接收用户提问，调用上游模型的流式接口，并把每个文本片段
按到达顺序转成 SSE 事件推送给浏览器。

错误分两条路径上报：
- 还未提交流式响应头时（参数错误、上游拒绝），抛出异常，由全局异常处理器返回 JSON；
- 已经提交流式响应头后（上游中途失败），在流末尾写入一个 error 事件。
"""
import asyncio
import json
import uuid
from typing import AsyncIterator, List, Optional

from fastapi import Request
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from exceptions import UpstreamRejection, UpstreamStreamFailure, ValidationError
from logger import get_logger
from models import ChatRequest, EndEvent, ErrorEvent, TextEvent
from prompts import build_system_prompt
from services.provider import ChatProvider

logger = get_logger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def sse_format(event) -> str:
    """格式化 SSE 消息"""
    data = json.dumps(event.model_dump(), ensure_ascii=False)
    return f"data: {data}\n\n"


class StreamSession:
    """
    一次流式会话：一个入站连接对应一个上游流

    状态: streaming -> completed | failed | cancelled
    """

    def __init__(self, session_id: str, fragments: AsyncIterator[str], first: str, exhausted: bool):
        self.session_id = session_id
        self.state = "streaming"
        self.started = False
        self._fragments = fragments
        self._first = first
        self._exhausted = exhausted

    async def events(self, request: Optional[Request] = None) -> AsyncIterator[str]:
        """
        生成 SSE 事件流

        Args:
            request: 入站请求，用于检测客户端是否已断开

        Yields:
            SSE 格式的事件，最后一个事件是 end 或 error
        """
        try:
            if self._first:
                yield self._emit(TextEvent(text=self._first))

            if not self._exhausted:
                async for fragment in self._fragments:
                    if request is not None and await request.is_disconnected():
                        self.state = "cancelled"
                        logger.info(f"[{self.session_id}] 客户端已断开，停止转发")
                        return
                    if fragment:
                        yield self._emit(TextEvent(text=fragment))

            self.state = "completed"
            logger.info(f"[{self.session_id}] 流式回复完成")
            yield self._emit(EndEvent())
        except asyncio.CancelledError:
            self.state = "cancelled"
            logger.info(f"[{self.session_id}] 连接被取消，释放上游流")
            raise
        except Exception as exc:
            failure = UpstreamStreamFailure(original_error=exc)
            self.state = "failed"
            logger.error(f"[{self.session_id}] 上游流中途失败: {exc}", exc_info=True)
            yield self._emit(ErrorEvent(error=failure.message))
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        """释放上游流，可重复调用；连接在开始迭代前断开时由路由的后台任务调用"""
        await self._fragments.aclose()

    def _emit(self, event) -> str:
        self.started = True
        return sse_format(event)


class ChatRelay:
    """流式中转服务类"""

    def __init__(self, provider: ChatProvider):
        self.provider = provider

    @staticmethod
    def validate(req: ChatRequest) -> str:
        """校验请求参数，返回用户消息"""
        if not isinstance(req.message, str) or not req.message.strip():
            raise ValidationError("请求参数错误：缺少 'message'。", field="message")
        return req.message

    @staticmethod
    def build_messages(req: ChatRequest) -> List[BaseMessage]:
        """组合 system 提示词和用户消息"""
        return [
            SystemMessage(content=build_system_prompt(req.language)),
            HumanMessage(content=req.message),
        ]

    async def open_session(self, req: ChatRequest) -> StreamSession:
        """
        打开一次流式会话

        先等待上游返回第一段非空文本（或正常结束），确认上游已接受请求后
        才交给调用方提交流式响应头；在此之前的任何失败都按上游拒绝处理。

        Args:
            req: 聊天请求

        Returns:
            可迭代 SSE 事件的流式会话

        Raises:
            ValidationError: 参数不合法，不会调用上游
            UpstreamRejection: 上游在输出任何内容之前失败
        """
        self.validate(req)
        session_id = uuid.uuid4().hex[:12]
        logger.info(f"[{session_id}] 新的流式会话, language={req.language}")

        fragments = self.provider.stream(self.build_messages(req))
        first, exhausted = "", False
        try:
            # 跳过空分块（如只带 role 的首个 delta），直到拿到第一段文本
            while not first:
                first = await fragments.__anext__()
        except StopAsyncIteration:
            exhausted = True
        except Exception as exc:
            await fragments.aclose()
            logger.error(f"[{session_id}] 上游拒绝请求: {exc}", exc_info=True)
            raise UpstreamRejection(original_error=exc) from exc

        return StreamSession(session_id, fragments, first, exhausted)


# ==================== 依赖注入 ====================

def get_relay(request: Request) -> ChatRelay:
    """获取启动时创建的中转服务实例（用于 FastAPI 依赖注入）"""
    return request.app.state.relay
