"""Tests for the driver's live settings."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from xcuidriver.domain.models import SettingsUpdate
from xcuidriver.driver.errors import InvalidArgumentError
from xcuidriver.driver.xcuitest import XCUITestDriver


class TestNativeWebTapSetting:
    @pytest.mark.asyncio
    async def test_defaults_to_false(self) -> None:
        driver = XCUITestDriver()
        assert (await driver.get_settings()).native_web_tap is False

    @pytest.mark.asyncio
    async def test_seeded_from_caps(self, base_caps: dict[str, Any]) -> None:
        driver = XCUITestDriver()
        assert (await driver.get_settings()).native_web_tap is False
        with patch.object(driver, "start", AsyncMock()):
            await driver.create_session({**base_caps, "nativeWebTap": True})
        assert (await driver.get_settings()).native_web_tap is True

    @pytest.mark.asyncio
    async def test_update_mirrors_into_options(self) -> None:
        driver = XCUITestDriver()
        assert (await driver.get_settings()).native_web_tap is False

        await driver.update_settings({"nativeWebTap": True})
        assert (await driver.get_settings()).native_web_tap is True
        assert driver.opts.native_web_tap is True

        await driver.update_settings({"nativeWebTap": False})
        assert (await driver.get_settings()).native_web_tap is False
        assert driver.opts.native_web_tap is False


class TestUpdateSettings:
    @pytest.mark.asyncio
    async def test_omitted_keys_keep_values(self) -> None:
        driver = XCUITestDriver()
        await driver.update_settings({"nativeWebTap": True})
        await driver.update_settings({})
        assert (await driver.get_settings()).native_web_tap is True

    @pytest.mark.asyncio
    async def test_accepts_typed_update(self) -> None:
        driver = XCUITestDriver()
        settings = await driver.update_settings(SettingsUpdate(native_web_tap=True))
        assert settings.native_web_tap is True

    @pytest.mark.asyncio
    async def test_unknown_key_rejected(self) -> None:
        driver = XCUITestDriver()
        with pytest.raises(InvalidArgumentError):
            await driver.update_settings({"nativeWebTap": True, "bogus": 1})
        assert (await driver.get_settings()).native_web_tap is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["sometimes", "yes", "true", 1, 0, None])
    async def test_wrong_type_rejected(self, value: Any) -> None:
        driver = XCUITestDriver()
        await driver.update_settings({"nativeWebTap": True})
        with pytest.raises(InvalidArgumentError):
            await driver.update_settings({"nativeWebTap": value})
        assert (await driver.get_settings()).native_web_tap is True
        assert driver.opts.native_web_tap is True

    @pytest.mark.asyncio
    async def test_returned_snapshot_is_detached(self) -> None:
        driver = XCUITestDriver()
        snapshot = await driver.get_settings()
        await driver.update_settings({"nativeWebTap": True})
        assert snapshot.native_web_tap is False
