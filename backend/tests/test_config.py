"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_production_refuses_default_jwt_secret(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.delenv("JWT_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_production_accepts_configured_secret(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("JWT_SECRET", "s3cr3t")
    monkeypatch.setenv("BOOKING_CACHE_TTL", "15")

    settings = Settings(_env_file=None)

    assert settings.JWT_SECRET == "s3cr3t"
    assert settings.BOOKING_CACHE_TTL == 15
