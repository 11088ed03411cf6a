"""
Configuration Loader - Bridge Between JSON Config and AppSettings
================================================================
Loads configuration from an optional JSON file and maps it onto AppSettings.
Environment variables (and a .env file) still apply to anything the JSON
file does not set.
"""

import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .settings import AppSettings, LoggingSettings, NumericSettings

DEFAULT_CONFIG_PATHS = (
    "config/signalstream.json",
    "signalstream.json",
)

_settings: Optional[AppSettings] = None
_settings_lock = threading.RLock()


def _resolve_env_vars(data: Any) -> Any:
    """Resolve "${VAR}" placeholders recursively."""
    if isinstance(data, dict):
        return {k: _resolve_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars(i) for i in data]
    elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        var_name = data[2:-1]
        return os.getenv(var_name, "")
    return data


def load_app_settings_from_json(config_path: str) -> AppSettings:
    """
    Load AppSettings from a JSON configuration file.

    Recognized sections are "logging" and "numeric"; unknown keys are ignored.

    Args:
        config_path: Path to the JSON file

    Returns:
        Configured AppSettings instance
    """
    with open(config_path, 'r', encoding='utf-8') as f:
        config_data: Dict[str, Any] = json.load(f)

    resolved_data = _resolve_env_vars(config_data)

    logging_section = resolved_data.get('logging', {})
    numeric_section = resolved_data.get('numeric', {})

    return AppSettings(
        logging=LoggingSettings(**logging_section),
        numeric=NumericSettings(**numeric_section),
    )


def get_settings() -> AppSettings:
    """
    Get the process-wide settings, loading them on first use.

    Looks for a JSON config in the working directory, otherwise builds
    AppSettings from defaults and environment variables.
    """
    global _settings
    if _settings is not None:
        return _settings

    with _settings_lock:
        if _settings is not None:
            return _settings

        load_dotenv()
        settings = None
        for config_path in DEFAULT_CONFIG_PATHS:
            if Path(config_path).exists():
                settings = load_app_settings_from_json(config_path)
                break

        _settings = settings or AppSettings()
        return _settings


def reset_settings_cache() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    global _settings
    with _settings_lock:
        _settings = None
