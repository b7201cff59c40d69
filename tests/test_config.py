"""Tests for startup configuration"""
import pytest
from pydantic import ValidationError

from eternal_admin.config import Settings


@pytest.mark.parametrize("missing", ["JWT_SECRET", "JWT_REFRESH_SECRET"])
def test_missing_secret_aborts(monkeypatch: pytest.MonkeyPatch, missing: str):
    """Settings refuse to load without both signing secrets"""
    monkeypatch.delenv(missing, raising=False)
    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None)
    assert missing in str(exc_info.value)


def test_blank_secret_aborts(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("JWT_SECRET", "   ")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_token_config_from_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("JWT_SECRET", "a-secret")
    monkeypatch.setenv("JWT_REFRESH_SECRET", "r-secret")
    config = Settings(_env_file=None).token_config
    assert config.access_secret == "a-secret"
    assert config.refresh_secret == "r-secret"
    assert config.access_expire_minutes == 15
    assert config.refresh_expire_days == 7
