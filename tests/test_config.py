"""Tests for configuration selection via APP_ENV."""
import pytest
from app.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config_class,
)


def test_testing_config_uses_memory_db(monkeypatch, app):
    monkeypatch.setenv('APP_ENV', 'testing')
    assert get_config_class() is TestingConfig
    assert app.config['TESTING'] is True
    assert app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite://')
    assert app.config['MAIL_SUPPRESS_SEND'] is True
    assert app.config['CELERY_TASK_ALWAYS_EAGER'] is True


def test_development_defaults(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'development')
    config = get_config_class()
    assert config is DevelopmentConfig
    assert config.DEBUG is True
    assert config.ORDERS_PER_PAGE == 10
    assert config.PAYPAL_ENDPOINT.endswith('/cgi-bin/webscr')


def test_unknown_env_falls_back_to_development(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'staging')
    assert get_config_class() is DevelopmentConfig


def test_production_requires_secrets(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.delenv('SECRET_KEY', raising=False)
    monkeypatch.delenv('DATABASE_URL', raising=False)
    with pytest.raises(RuntimeError) as exc:
        get_config_class()
    assert 'SECRET_KEY' in str(exc.value)
    assert 'DATABASE_URL' in str(exc.value)


def test_production_with_secrets(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.setenv('SECRET_KEY', 'prod-key')
    monkeypatch.setenv('DATABASE_URL', 'postgresql://db/depot')
    assert get_config_class() is ProductionConfig
