# -*- coding: utf-8 -*-
"""
自定义异常模块

定义中转服务使用的各类异常。返回给调用方的只有 message，
上游的原始错误保存在 original_error 中，仅用于日志。
"""
from typing import Optional


class AppException(Exception):
    """应用程序基础异常"""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigError(AppException):
    """启动配置异常"""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIG_ERROR")


class ValidationError(AppException):
    """请求参数验证异常"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class UpstreamRejection(AppException):
    """上游服务在开始流式输出之前就拒绝或失败（鉴权、余额、参数错误等）"""

    def __init__(self, message: str = "AI 模型调用失败，请检查 API 密钥和余额。",
                 original_error: Optional[Exception] = None):
        super().__init__(message, code="UPSTREAM_REJECTED")
        self.original_error = original_error


class UpstreamStreamFailure(AppException):
    """上游服务在流式输出过程中失败"""

    def __init__(self, message: str = "AI 回复中断，请稍后重试。",
                 original_error: Optional[Exception] = None):
        super().__init__(message, code="UPSTREAM_STREAM_FAILED")
        self.original_error = original_error
