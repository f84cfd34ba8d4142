# -*- coding: utf-8 -*-
"""
Pydantic 数据模型

定义 API 请求和响应的数据结构。
"""
from typing import Optional

from pydantic import BaseModel, Field


# ==================== 请求模型 ====================

class ChatRequest(BaseModel):
    """聊天请求"""
    message: Optional[str] = Field(None, description="用户消息内容（必填，不能为空）")
    language: Optional[str] = Field(None, description="回复所用的语言，例如 'zh'、'en'")


# ==================== 响应模型 ====================

class ErrorResponse(BaseModel):
    """非流式错误响应"""
    success: bool = Field(False, description="固定为 false")
    error: str = Field(..., description="错误信息")


# ==================== SSE 事件 ====================

class TextEvent(BaseModel):
    """一段增量文本"""
    text: str


class EndEvent(BaseModel):
    """正常结束标记"""
    end: bool = True


class ErrorEvent(BaseModel):
    """流式过程中的错误标记"""
    error: str
