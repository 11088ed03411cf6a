from .settings import AppSettings, LoggingSettings, LogLevel, NumericSettings
from .config_loader import get_settings, load_app_settings_from_json, reset_settings_cache

__all__ = [
    'AppSettings',
    'LoggingSettings',
    'LogLevel',
    'NumericSettings',
    'get_settings',
    'load_app_settings_from_json',
    'reset_settings_cache',
]
