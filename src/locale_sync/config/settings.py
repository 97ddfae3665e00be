"""
Configuration settings with validation
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional
from dotenv import load_dotenv

from locale_sync.errors import SettingsError
from locale_sync.utils.validators import LocaleValidator

# Load environment variables
load_dotenv()

MASTER_KEY_MODES = ('canonical', 'union')
TRANSLATOR_BACKENDS = ('placeholder', 'openai', 'libretranslate')

# Markers that cannot be derived from the language code
DEFAULT_PLACEHOLDERS = {
    'zh': '[待翻译ZH]',
}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def parse_placeholders(raw: str) -> Dict[str, str]:
    """Parse ``lang=marker`` pairs separated by commas"""
    markers: Dict[str, str] = {}
    for chunk in raw.split(','):
        if not chunk.strip():
            continue
        if '=' not in chunk:
            raise SettingsError(f"Invalid placeholder definition '{chunk.strip()}'. Use lang=marker.")
        lang, marker = chunk.split('=', 1)
        lang, marker = lang.strip().lower(), marker.strip()
        if not lang or not marker:
            raise SettingsError(f"Invalid placeholder definition '{chunk.strip()}'. Use lang=marker.")
        markers[lang] = marker
    return markers


@dataclass
class TranslatorSettings:
    """Translation backend configuration"""
    backend: str = 'placeholder'
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = 'gpt-4o-mini'
    libretranslate_url: Optional[str] = None
    libretranslate_api_key: Optional[str] = None

    def __post_init__(self):
        self.backend = (self.backend or 'placeholder').lower()
        if self.backend not in TRANSLATOR_BACKENDS:
            raise SettingsError(f"Translator must be one of: {', '.join(TRANSLATOR_BACKENDS)}")

        if self.backend == 'openai' and not self.api_key:
            raise SettingsError("OpenAI API key is required for the openai translator")

        if self.backend == 'libretranslate':
            if not self.libretranslate_url:
                raise SettingsError("LibreTranslate URL is required for the libretranslate translator")
            self.libretranslate_url = self.libretranslate_url.rstrip('/')


@dataclass
class SyncSettings:
    """Reconciliation behaviour"""
    base_language: str = 'en'
    master_keys: str = 'union'
    reverse_rule: bool = True
    sort_keys: bool = True
    indent: int = 2
    placeholders: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.base_language = self.base_language.lower()
        ok, error = LocaleValidator.validate_language_code(self.base_language)
        if not ok:
            raise SettingsError(error)

        if self.master_keys not in MASTER_KEY_MODES:
            raise SettingsError(f"Master key mode must be one of: {', '.join(MASTER_KEY_MODES)}")

        if self.indent < 0:
            raise SettingsError("Indent cannot be negative")

        self.placeholders = {**DEFAULT_PLACEHOLDERS, **self.placeholders}

    def placeholder_for(self, language: str) -> str:
        """Marker that tags a value of ``language`` as not yet translated"""
        language = language.lower()
        return self.placeholders.get(language, f"[NEEDS_TRANSLATION_{language.upper()}]")


@dataclass
class LoggingSettings:
    """Logging configuration"""
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.log_level.upper() not in valid_levels:
            raise SettingsError(f"Log level must be one of: {', '.join(valid_levels)}")

        self.log_level = self.log_level.upper()


@dataclass
class Settings:
    """Main configuration settings"""
    sync: SyncSettings
    translator: TranslatorSettings
    logging: LoggingSettings

    @classmethod
    def from_env(cls) -> 'Settings':
        """Create settings from environment variables"""
        indent_str = os.getenv('LOCALE_SYNC_INDENT', '2')
        try:
            indent = int(indent_str)
        except ValueError:
            raise SettingsError("Invalid LOCALE_SYNC_INDENT format. Use an integer.")

        return cls(
            sync=SyncSettings(
                base_language=os.getenv('LOCALE_SYNC_BASE_LANGUAGE', 'en'),
                master_keys=os.getenv('LOCALE_SYNC_MASTER_KEYS', 'union').lower(),
                reverse_rule=_env_flag('LOCALE_SYNC_REVERSE_RULE', True),
                sort_keys=_env_flag('LOCALE_SYNC_SORT_KEYS', True),
                indent=indent,
                placeholders=parse_placeholders(os.getenv('LOCALE_SYNC_PLACEHOLDERS', ''))
            ),
            translator=TranslatorSettings(
                backend=os.getenv('LOCALE_SYNC_TRANSLATOR', 'placeholder'),
                api_key=os.getenv('OPENAI_API_KEY'),
                base_url=os.getenv('OPENAI_BASE_URL'),
                model=os.getenv('OPENAI_MODEL', 'gpt-4o-mini'),
                libretranslate_url=os.getenv('LIBRETRANSLATE_URL'),
                libretranslate_api_key=os.getenv('LIBRETRANSLATE_API_KEY')
            ),
            logging=LoggingSettings(
                log_level=os.getenv('LOG_LEVEL', 'INFO'),
                log_file=os.getenv('LOCALE_SYNC_LOG_FILE') or None
            )
        )
