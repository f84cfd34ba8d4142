# -*- coding: utf-8 -*-
"""
提示词模块

管理中转服务使用的系统提示词。
"""
from typing import Optional

from .oracle import DEFAULT_LANGUAGE_RULE, LANGUAGE_RULE, ORACLE_PROMPT


def build_system_prompt(language: Optional[str] = None) -> str:
    """按请求语言填充系统提示词，未指定语言时跟随提问语言"""
    if language and language.strip():
        rule = LANGUAGE_RULE.format(language=language.strip())
    else:
        rule = DEFAULT_LANGUAGE_RULE
    return ORACLE_PROMPT.format(language_rule=rule)


__all__ = [
    "ORACLE_PROMPT",
    "build_system_prompt",
]
