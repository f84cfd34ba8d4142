# -*- coding: utf-8 -*-
"""
应用配置管理

所有配置集中管理，支持通过环境变量覆盖默认值。
配置在启动时构建一次，之后只读，供所有请求共享。
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

from exceptions import ConfigError

load_dotenv()


@dataclass(frozen=True)
class ProviderConfig:
    """上游模型服务配置"""
    api_key: str = field(default_factory=lambda: os.getenv("DEEPSEEK_API_KEY", ""))
    base_url: str = field(default_factory=lambda: os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1"))
    key_prefix: str = "sk-"

    def validate(self) -> None:
        """校验 API 密钥，缺失或格式不对时拒绝启动"""
        if not self.api_key:
            raise ConfigError("未配置 DEEPSEEK_API_KEY，请在 .env 文件中设置。")
        if not self.api_key.startswith(self.key_prefix):
            raise ConfigError(f"DEEPSEEK_API_KEY 格式无效（应以 {self.key_prefix} 开头）。")


@dataclass(frozen=True)
class ModelConfig:
    """模型配置"""
    model_name: str = field(default_factory=lambda: os.getenv("MODEL_NAME", "openai:deepseek-chat"))
    temperature: float = field(default_factory=lambda: float(os.getenv("MODEL_TEMPERATURE", "0.9")))
    timeout: int = field(default_factory=lambda: int(os.getenv("MODEL_TIMEOUT", "60")))
    max_tokens: int = field(default_factory=lambda: int(os.getenv("MODEL_MAX_TOKENS", "100")))


@dataclass(frozen=True)
class AppConfig:
    """应用配置"""
    host: str = field(default_factory=lambda: os.getenv("APP_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("APP_PORT", "3000")))
    cors_origins: list = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list = field(default_factory=lambda: ["*"])
    cors_allow_headers: list = field(default_factory=lambda: ["*"])


@dataclass
class Settings:
    """全局配置容器"""
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    app: AppConfig = field(default_factory=AppConfig)

    def validate(self) -> None:
        self.provider.validate()


@lru_cache
def get_settings() -> Settings:
    """获取全局配置（单例）"""
    return Settings()
