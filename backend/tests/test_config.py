# -*- coding: utf-8 -*-
"""配置与启动校验测试"""
import pytest

from app import bootstrap, create_app
from config import ModelConfig, ProviderConfig, Settings, get_settings
from exceptions import ConfigError
from prompts import build_system_prompt


@pytest.mark.parametrize("api_key", ["", "pk-123", "abc"])
def test_invalid_api_key_refuses_to_start(api_key):
    settings = Settings(provider=ProviderConfig(api_key=api_key))

    with pytest.raises(ConfigError):
        create_app(settings)


def test_valid_api_key_passes():
    ProviderConfig(api_key="sk-123").validate()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("MODEL_TEMPERATURE", "0.3")
    monkeypatch.setenv("MODEL_MAX_TOKENS", "256")
    monkeypatch.setenv("DEEPSEEK_BASE_URL", "http://localhost:8000/v1")

    assert ModelConfig().temperature == 0.3
    assert ModelConfig().max_tokens == 256
    assert ProviderConfig().base_url == "http://localhost:8000/v1"


def test_defaults(monkeypatch):
    for name in ("MODEL_TEMPERATURE", "MODEL_MAX_TOKENS", "APP_PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(provider=ProviderConfig(api_key="sk-x"))

    assert settings.model.temperature == 0.9
    assert settings.model.max_tokens == 100
    assert settings.app.port == 3000


def test_system_prompt_language_slot():
    assert "English" in build_system_prompt("English")
    assert "{language" not in build_system_prompt(None)
    assert build_system_prompt("  ") == build_system_prompt(None)


@pytest.mark.parametrize("api_key", ["", "pk-123"])
def test_bootstrap_exits_with_status_1(api_key, caplog):
    settings = Settings(provider=ProviderConfig(api_key=api_key))

    with pytest.raises(SystemExit) as exc_info:
        bootstrap(settings)

    assert exc_info.value.code == 1
    assert "启动失败" in caplog.text


def test_bootstrap_reads_key_from_environment(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", "pk-from-env")
    get_settings.cache_clear()
    try:
        with pytest.raises(SystemExit) as exc_info:
            bootstrap()
    finally:
        get_settings.cache_clear()

    assert exc_info.value.code == 1


def test_bootstrap_with_valid_key_returns_app():
    app = bootstrap(Settings(provider=ProviderConfig(api_key="sk-ok")))

    assert app.state.settings.provider.api_key == "sk-ok"
