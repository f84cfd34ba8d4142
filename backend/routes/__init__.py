# -*- coding: utf-8 -*-
"""Routes 模块"""

from .chat import router as chat_router

__all__ = ["chat_router"]
