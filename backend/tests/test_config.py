"""Tests for environment-driven settings."""
from verdanta.core.config import Settings


def test_cors_origins_default():
    assert Settings().CORS_ORIGINS == ["*"]


def test_cors_origins_from_environment(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", '["http://farm.test", "http://ops.test"]')
    assert Settings().CORS_ORIGINS == ["http://farm.test", "http://ops.test"]
