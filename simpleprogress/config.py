"""
Configuration management with validation and migration
"""

import copy
import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from .ui.progress import BarConfig
from .utils.logging import DEFAULT_LOG_PATH, get_logger, validate_log_level

log = get_logger(__name__)

CONFIG_DIR = Path.home() / ".config" / "simpleprogress"
CONFIG_FILE = CONFIG_DIR / "config.json"


@dataclass
class LoggingConfig:
    """Configuration for structured logging with Rich console and JSON file output"""
    level: str = "WARNING"       # DEBUG, INFO, WARNING, ERROR
    file_enabled: bool = False
    console_enabled: bool = True
    json_file: bool = True
    path: Path = DEFAULT_LOG_PATH
    rotate_max_bytes: int = 10 * 1024 * 1024  # 10 MiB
    rotate_backups: int = 5
    rich_tracebacks: bool = True
    show_path: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if "path" in known:
            known["path"] = Path(known["path"])
        return cls(**known)


def _default_logging() -> Dict[str, Any]:
    section = asdict(LoggingConfig())
    section["path"] = str(section["path"])
    return section


# Configuration schema with defaults and validation
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0",
    "bar": asdict(BarConfig()),
    "spinner": {"message": ""},
    "logging": _default_logging(),
}


def _is_glyph(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 1


BAR_VALIDATORS = {
    "show_bar": lambda x: isinstance(x, bool),
    "show_percentage": lambda x: isinstance(x, bool),
    "show_count": lambda x: isinstance(x, bool),
    "show_arrow": lambda x: isinstance(x, bool),
    "show_rate": lambda x: isinstance(x, bool),
    "width": lambda x: isinstance(x, int) and not isinstance(x, bool) and x >= 0,
    "fill_char": _is_glyph,
    "empty_char": _is_glyph,
    "arrow_char": _is_glyph,
}

CONFIG_VALIDATORS = {
    "bar": lambda x: isinstance(x, dict) and all(
        key in BAR_VALIDATORS and BAR_VALIDATORS[key](value) for key, value in x.items()
    ),
    "spinner": lambda x: isinstance(x, dict) and isinstance(x.get("message", ""), str),
    "logging": lambda x: isinstance(x, dict) and validate_log_level(x.get("level", "INFO")),
}


class ConfigManager:
    """Configuration manager with validation and migration"""

    def __init__(self):
        self.config: Dict[str, Any] = {}

    def load_config(self) -> Dict[str, Any]:
        """Load configuration, falling back to defaults on any problem"""
        if CONFIG_FILE.exists():
            try:
                loaded_config = json.loads(CONFIG_FILE.read_text())
                self.config = self._migrate_config(loaded_config)
                self._validate_config()
                return self.config
            except (OSError, ValueError) as e:
                log.warning("config.load_failed", path=str(CONFIG_FILE), error=str(e))

        self.config = copy.deepcopy(DEFAULT_CONFIG)
        return self.config

    def save_config(self, config_data: Dict[str, Any]):
        """Save configuration with validation"""
        self._validate_config_data(config_data)

        config_data["version"] = DEFAULT_CONFIG["version"]

        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        CONFIG_FILE.write_text(json.dumps(config_data, indent=2))
        self.config = config_data

    def _migrate_config(self, loaded_config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge a loaded file over the defaults, section by section"""
        if not isinstance(loaded_config, dict):
            raise ValueError("Configuration file must contain a JSON object")

        migrated = copy.deepcopy(DEFAULT_CONFIG)
        for key, value in loaded_config.items():
            if key not in migrated:
                continue
            if isinstance(migrated[key], dict) and isinstance(value, dict):
                migrated[key].update(value)
            else:
                migrated[key] = value

        # 0.x files kept bar settings at the top level
        if loaded_config.get("version", "0.0") == "0.0":
            for key in BAR_VALIDATORS:
                if key in loaded_config:
                    migrated["bar"][key] = loaded_config[key]

        migrated["version"] = DEFAULT_CONFIG["version"]
        return migrated

    def _validate_config(self):
        self._validate_config_data(self.config)

    def _validate_config_data(self, config_data: Dict[str, Any]):
        """Validate configuration data against schema"""
        errors = []

        for key, validator in CONFIG_VALIDATORS.items():
            if key in config_data and not validator(config_data[key]):
                errors.append(f"Invalid value for '{key}': {config_data[key]}")

        if errors:
            error_msg = "Configuration validation errors:\n" + "\n".join(
                f"  • {e}" for e in errors
            )
            raise ValueError(error_msg)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with default"""
        return self.config.get(key, DEFAULT_CONFIG.get(key, default))

    def set(self, key: str, value: Any):
        """Set configuration value with validation"""
        if key in CONFIG_VALIDATORS and not CONFIG_VALIDATORS[key](value):
            raise ValueError(f"Invalid value for '{key}': {value}")

        self.config[key] = value

    def reset_to_defaults(self):
        self.config = copy.deepcopy(DEFAULT_CONFIG)

    def bar_config(self) -> BarConfig:
        """Bar defaults from the loaded configuration"""
        return BarConfig.from_dict(self.get("bar", {}))

    def logging_config(self) -> LoggingConfig:
        return LoggingConfig.from_dict(self.get("logging", {}))


# Global config manager instance
config_manager = ConfigManager()


def load_config():
    """Load configuration through the global manager"""
    return config_manager.load_config()


def save_config(config_data):
    """Save configuration through the global manager"""
    config_manager.save_config(config_data)
