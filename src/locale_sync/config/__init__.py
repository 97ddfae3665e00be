"""
Configuration module for locale-sync
"""

from .settings import Settings, SyncSettings, TranslatorSettings, LoggingSettings
from .load_config import load_settings, get_settings, reload_settings

__all__ = [
    'Settings', 'SyncSettings', 'TranslatorSettings', 'LoggingSettings',
    'load_settings', 'get_settings', 'reload_settings'
]
