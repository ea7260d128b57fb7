"""Layered configuration: YAML file, then environment, then command-line flags."""
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict, Optional

import yaml

from ..utils.exceptions import ConfigError

ENV_VARS = {
    "token": "YNAB_TOKEN",
    "default_budget": "YNAB_DEFAULT_BUDGET",
    "format": "YNAB_FORMAT",
}

OUTPUT_FORMATS = ("json", "table")
DEFAULT_FORMAT = "json"


@dataclass
class Config:
    """ynabctl configuration."""
    token: Optional[str] = None
    default_budget: Optional[str] = None
    format: str = DEFAULT_FORMAT


def default_config_dir() -> Path:
    return Path.home() / ".config" / "ynabctl"


def mask_token(token: Optional[str]) -> str:
    """Hide all but the ends of a token for display."""
    if not token:
        return "(not set)"
    if len(token) <= 8:
        return "****"
    return f"{token[:4]}...{token[-4:]}"


class ConfigManager:
    """Loads and persists configuration."""
    
    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or default_config_dir()
        self.config_file = self.config_dir / "config.yaml"
    
    def _read_file(self) -> Dict[str, str]:
        """Read the persisted layer only."""
        if not self.config_file.exists():
            return {}
        
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file {self.config_file}: {e}")
        
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Malformed config file {self.config_file}: expected a mapping. "
                f"Fix or delete it, then run 'ynabctl config set-token <token>'"
            )
        
        known = {f.name for f in fields(Config)}
        return {k: str(v) for k, v in data.items() if k in known and v not in (None, "")}
    
    def load_config(self) -> Config:
        """Load the file layer and apply environment overrides."""
        values = self._read_file()
        
        for key, env_var in ENV_VARS.items():
            env_value = os.getenv(env_var)
            if env_value:
                values[key] = env_value
        
        return Config(**values)
    
    def save_config(self, config: Config) -> None:
        """Write configuration to the YAML file."""
        data = {k: v for k, v in asdict(config).items() if v}
        try:
            self.config_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
            self.config_dir.chmod(0o700)
            with open(self.config_file, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}")
    
    def update(self, **changes: str) -> Config:
        """Persist a partial update without copying environment values into the file."""
        values = self._read_file()
        values.update(changes)
        config = Config(**values)
        
        is_valid, message = self.validate_config(config)
        if not is_valid:
            raise ConfigError(message)
        
        self.save_config(config)
        return config
    
    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if config.format not in OUTPUT_FORMATS:
            return False, f"invalid format: {config.format} (must be 'json' or 'table')"
        
        return True, "Configuration is valid"
