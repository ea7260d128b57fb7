"""Configuration management."""
from .manager import Config, ConfigManager, mask_token, ENV_VARS, OUTPUT_FORMATS, DEFAULT_FORMAT

__all__ = ["Config", "ConfigManager", "mask_token", "ENV_VARS", "OUTPUT_FORMATS", "DEFAULT_FORMAT"]
