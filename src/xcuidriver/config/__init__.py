"""Configuration management for xcuidriver.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for the agent URL and UDID.
"""

from xcuidriver.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
