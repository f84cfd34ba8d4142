# -*- coding: utf-8 -*-
"""
聊天相关路由
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from models import ChatRequest, ErrorResponse
from services.relay import SSE_HEADERS, ChatRelay, get_relay

router = APIRouter(prefix="/api/chat", tags=["聊天"])


@router.post("", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def chat(req: ChatRequest, request: Request, relay: ChatRelay = Depends(get_relay)):
    """
    流式聊天接口

    发送消息并以 SSE 形式获取 AI 的流式回复。
    每个事件为 {"text": ...}，最后以 {"end": true} 或 {"error": ...} 结束。
    """
    session = await relay.open_session(req)
    return StreamingResponse(
        session.events(request),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
        # 客户端在开始迭代前就断开时，events() 的 finally 不会执行
        background=BackgroundTask(session.aclose),
    )
