"""Tests for the domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from xcuidriver.domain.models import (
    DriverSettings,
    ProxyRequest,
    ScreenInfo,
    SessionOptions,
    SettingsUpdate,
)


class TestSessionOptions:
    def test_defaults(self) -> None:
        opts = SessionOptions()
        assert opts.real_device is False
        assert opts.allow_touch_id_enroll is False
        assert opts.native_web_tap is False
        assert opts.is_simulator is True

    def test_camel_case_caps_and_extras(self) -> None:
        opts = SessionOptions.model_validate(
            {"realDevice": True, "allowTouchIdEnroll": True, "app": "/fake"}
        )
        assert opts.real_device is True
        assert opts.allow_touch_id_enroll is True
        caps = opts.to_caps()
        assert caps["realDevice"] is True
        assert caps["app"] == "/fake"
        assert "device" not in caps

    def test_rejects_non_device(self) -> None:
        with pytest.raises(ValidationError):
            SessionOptions(device="not a device")


class TestSettingsModels:
    def test_settings_alias(self) -> None:
        assert DriverSettings().model_dump(by_alias=True) == {"nativeWebTap": False}

    def test_update_reports_only_set_fields(self) -> None:
        assert SettingsUpdate.model_validate({}).changes() == {}
        assert SettingsUpdate.model_validate({"nativeWebTap": True}).changes() == {
            "native_web_tap": True
        }

    def test_update_forbids_unknown_keys(self) -> None:
        with pytest.raises(ValidationError):
            SettingsUpdate.model_validate({"unknownSetting": 1})

    def test_update_rejects_explicit_null(self) -> None:
        with pytest.raises(ValidationError):
            SettingsUpdate.model_validate({"nativeWebTap": None})

    def test_update_rejects_coercible_values(self) -> None:
        with pytest.raises(ValidationError):
            SettingsUpdate.model_validate({"nativeWebTap": "yes"})
        with pytest.raises(ValidationError):
            SettingsUpdate.model_validate({"nativeWebTap": 1})


class TestScreenInfo:
    def test_parses_agent_payload(self) -> None:
        info = ScreenInfo.model_validate(
            {"statusBarSize": {"width": 100, "height": 20}, "scale": 3}
        )
        assert info.scale == 3
        assert info.status_bar_size.height == 20

    def test_rejects_zero_scale(self) -> None:
        with pytest.raises(ValidationError):
            ScreenInfo.model_validate({"statusBarSize": {"width": 1, "height": 1}, "scale": 0})


class TestProxyRequest:
    def test_rejects_unknown_method(self) -> None:
        with pytest.raises(ValidationError):
            ProxyRequest(path="/status", method="PATCH")
