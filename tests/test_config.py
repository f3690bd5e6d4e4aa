from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote roster seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roster.core import config as core_config  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings():
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("STORAGE_BACKEND", "STORAGE_KEY_PREFIX", "LOG_LEVEL", "CORS_ORIGINS", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    settings = core_config.get_settings()
    assert settings.storage_backend == "file"
    assert settings.storage_key_prefix == "competehq_"
    assert settings.log_level == "INFO"
    assert settings.cors_origins == ()
    assert settings.app_env == "dev"


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.test, ,https://b.test")
    settings = core_config.get_settings()
    assert settings.storage_backend == "file"
    assert settings.log_level == "INFO"
    assert settings.cors_origins == ("https://a.test", "https://b.test")
