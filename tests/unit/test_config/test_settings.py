"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from xcuidriver.config.settings import (
    SessionConfig,
    Settings,
    WdaConfig,
    load_settings,
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's environment and .env out of these tests."""
    monkeypatch.chdir(tmp_path)
    for var in ("WDA_URL", "UDID", "XCUIDRIVER_WDA__BASE_URL"):
        monkeypatch.delenv(var, raising=False)


class TestSettings:
    def test_default_settings(self) -> None:
        settings = Settings()
        assert settings.wda.base_url == "http://127.0.0.1:8100"
        assert settings.session.platform_name == "iOS"
        assert settings.stub.port == 8100
        assert settings.logging.level == "INFO"

    def test_wda_config_rejects_bad_timeout(self) -> None:
        with pytest.raises(ValueError):
            WdaConfig(timeout=0)

    def test_session_caps(self) -> None:
        caps = SessionConfig(udid="SIM-1", native_web_tap=True).to_caps(wda_url="http://h:1")
        assert caps["platformName"] == "iOS"
        assert caps["udid"] == "SIM-1"
        assert caps["nativeWebTap"] is True
        assert caps["wdaUrl"] == "http://h:1"
        assert "bundleId" not in caps

    def test_prefixed_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XCUIDRIVER_WDA__BASE_URL", "http://10.0.0.2:8100")
        assert Settings().wda.base_url == "http://10.0.0.2:8100"


class TestLoadSettings:
    def test_missing_file(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.wda.timeout == 240.0

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "xcuidriver.yaml"
        path.write_text(
            "wda:\n  base_url: http://phone:8100\nsession:\n  real_device: true\n"
        )
        settings = load_settings(path)
        assert settings.wda.base_url == "http://phone:8100"
        assert settings.session.real_device is True

    def test_plain_env_vars_fill_unset(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WDA_URL", "http://env:8100")
        monkeypatch.setenv("UDID", "ENV-UDID")
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.wda.base_url == "http://env:8100"
        assert settings.session.udid == "ENV-UDID"

    def test_yaml_wins_over_plain_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WDA_URL", "http://env:8100")
        path = tmp_path / "xcuidriver.yaml"
        path.write_text("wda:\n  base_url: http://yaml:8100\n")
        assert load_settings(path).wda.base_url == "http://yaml:8100"
