# -*- coding: utf-8 -*-
"""
Leyes 星河先知 - 流式中转服务入口

启动命令: uv run uvicorn app:app --port 3000
或: python app.py
"""
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from exceptions import AppException, ConfigError, ValidationError
from logger import get_logger
from models import ErrorResponse
from routes import chat_router
from services.provider import ChatProvider
from services.relay import ChatRelay

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    创建 FastAPI 应用实例

    上游模型和中转服务在这里创建一次，挂在 app.state 上供各请求共享。

    Raises:
        ConfigError: API 密钥缺失或格式无效
    """
    settings = settings or get_settings()
    settings.validate()

    app = FastAPI(
        title="Leyes 星河先知",
        description="把提问转发给大模型，并以 SSE 流式返回回复",
        version="1.0.0",
    )

    # 配置 CORS 中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=settings.app.cors_allow_credentials,
        allow_methods=settings.app.cors_allow_methods,
        allow_headers=settings.app.cors_allow_headers,
    )

    app.state.settings = settings
    app.state.relay = ChatRelay(ChatProvider(settings))

    # 注册路由
    app.include_router(chat_router)

    # 注册全局异常处理器
    register_exception_handlers(app)

    @app.get("/health", tags=["系统"])
    def health_check():
        """健康检查接口"""
        return {"status": "ok"}

    return app


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        logger.warning(f"验证错误: {exc.message}")
        return error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"请求体格式错误: {exc.errors()}")
        return error_response(400, "请求参数错误：'message' 必须是非空字符串。")

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        logger.error(f"应用异常 [{exc.code}]: {exc.message}")
        return error_response(500, exc.message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"未处理异常: {str(exc)}", exc_info=True)
        return error_response(500, "服务器内部错误")


def bootstrap(settings: Optional[Settings] = None) -> FastAPI:
    """创建应用实例，密钥无效时记录错误并以状态码 1 退出"""
    try:
        return create_app(settings)
    except ConfigError as exc:
        logger.error(f"❌ 启动失败: {exc.message}")
        sys.exit(1)


app = bootstrap()


def main() -> None:
    """命令行入口"""
    settings = get_settings()
    logger.info(f"✅ Leyes 流式中转服务启动，监听端口: http://{settings.app.host}:{settings.app.port}")
    uvicorn.run(app, host=settings.app.host, port=settings.app.port)


if __name__ == "__main__":
    main()
