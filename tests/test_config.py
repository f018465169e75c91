import pytest
from pydantic import ValidationError

from ureduce.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings()

    assert settings.base_url == "http://localhost:8080"
    assert settings.use_redirect_path is False
    assert settings.copied_reset_seconds == 2.0


def test_base_url_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BASE_URL", "https://sho.rt/")
    monkeypatch.setenv("USE_REDIRECT_PATH", "true")

    settings = get_settings()

    assert settings.base_url == "https://sho.rt"
    assert settings.use_redirect_path is True


def test_rejects_relative_base_url() -> None:
    with pytest.raises(ValidationError):
        Settings(base_url="localhost:8080")
