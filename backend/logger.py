# -*- coding: utf-8 -*-
"""
日志配置模块

提供统一的日志配置，支持控制台和文件输出。
日志级别和日志文件分别由 LOG_LEVEL、LOG_FILE 环境变量控制。
"""
import logging
import os
import sys
from functools import lru_cache
from typing import Optional


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    配置根日志器

    Args:
        level: 日志级别，默认读取 LOG_LEVEL，未设置时为 INFO
        log_file: 日志文件路径，默认读取 LOG_FILE，未设置时只输出到控制台
    """
    level = level or os.getenv("LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("LOG_FILE")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


@lru_cache
def get_logger(name: str) -> logging.Logger:
    """
    获取命名日志器

    Args:
        name: 日志器名称，通常使用 __name__

    Returns:
        配置好的日志器实例
    """
    return logging.getLogger(name)


# 应用启动时初始化日志配置
setup_logging()
