"""Configuration management for xcuidriver.

Loads settings from a YAML configuration file with environment variable
overrides for the agent URL and device UDID. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/xcuidriver.yaml")


class WdaConfig(BaseModel):
    base_url: str = Field(default="http://127.0.0.1:8100", description="WebDriverAgent URL")
    timeout: float = Field(default=240.0, gt=0)


class SessionConfig(BaseModel):
    """Default capabilities for sessions started from the CLI."""

    platform_name: str = Field(default="iOS")
    device_name: str = Field(default="iPhone Simulator")
    udid: str | None = Field(default=None)
    bundle_id: str | None = Field(default=None)
    real_device: bool = Field(default=False)
    allow_touch_id_enroll: bool = Field(default=False)
    native_web_tap: bool = Field(default=False)

    def to_caps(self, wda_url: str | None = None) -> dict[str, Any]:
        """Build a camelCase capability mapping, omitting unset values."""
        caps: dict[str, Any] = {
            "platformName": self.platform_name,
            "deviceName": self.device_name,
            "realDevice": self.real_device,
            "allowTouchIdEnroll": self.allow_touch_id_enroll,
            "nativeWebTap": self.native_web_tap,
        }
        if self.udid:
            caps["udid"] = self.udid
        if self.bundle_id:
            caps["bundleId"] = self.bundle_id
        if wda_url:
            caps["wdaUrl"] = wda_url
        return caps


class StubConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8100, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for xcuidriver.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "XCUIDRIVER_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    wda: WdaConfig = Field(default_factory=WdaConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    stub: StubConfig = Field(default_factory=StubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: YAML file > env vars > .env file > defaults. The plain
    WDA_URL and UDID variables only fill values the YAML leaves unset.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _load_dotenv()

    yaml_data: dict[str, Any] = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict[str, Any]) -> None:
    """Apply environment variable overrides for non-prefixed vars."""
    wda_url = os.environ.get("WDA_URL", "")
    udid = os.environ.get("UDID", "")

    if wda_url:
        yaml_data.setdefault("wda", {})
        if not yaml_data["wda"].get("base_url"):
            yaml_data["wda"]["base_url"] = wda_url

    if udid:
        yaml_data.setdefault("session", {})
        if not yaml_data["session"].get("udid"):
            yaml_data["session"]["udid"] = udid
