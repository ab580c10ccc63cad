"""
Tests for configuration validation
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError
from app.core.config import Settings


def test_prod_settings_rejects_wildcard_origins():
    """Production settings reject wildcard origins"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        APP_ENV="prod",
        ALLOWED_ORIGINS="*"
    )

    with pytest.raises(ValueError, match="ALLOWED_ORIGINS"):
        settings.validate_production()


def test_local_settings_allows_wildcard_origins():
    settings = Settings(
        DATABASE_URL="postgresql://test",
        APP_ENV="local",
        ALLOWED_ORIGINS="*"
    )

    settings.validate_production()
    assert settings.get_allowed_origins_list() == ["*"]


def test_get_allowed_origins_list():
    settings = Settings(ALLOWED_ORIGINS="https://example.com, https://app.example.com")
    origins = settings.get_allowed_origins_list()
    assert origins == ["https://example.com", "https://app.example.com"]


def test_defaults():
    settings = Settings()
    assert settings.BONUS_RATE == Decimal("0.10")
    assert settings.LOCK_TIMEOUT_SECONDS > 0


@pytest.mark.parametrize("rate", ["-0.1", "1.5"])
def test_bonus_rate_bounds(rate):
    with pytest.raises(ValidationError):
        Settings(BONUS_RATE=rate)


def test_invalid_app_env():
    with pytest.raises(ValidationError):
        Settings(APP_ENV="qa")


def test_log_level_is_uppercased():
    assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


def test_setup_logging_level_override():
    import logging
    from app.core.config import settings
    from app.core.logging import setup_logging

    root = logging.getLogger()
    previous = root.level
    try:
        setup_logging("warning")
        assert root.level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

        setup_logging()
        assert logging.getLevelName(root.level) == settings.LOG_LEVEL
    finally:
        root.setLevel(previous)
