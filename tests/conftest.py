"""
Pytest configuration and fixtures
"""

import json
import pytest
from pathlib import Path
from typing import Dict, List, Tuple

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from locale_sync.config.settings import Settings, SyncSettings, TranslatorSettings, LoggingSettings
from locale_sync.models.entry import LocaleDictionary
from locale_sync.services.translator_service import PlaceholderTranslator


class RecordingTranslator(PlaceholderTranslator):
    """Placeholder stub that remembers every call"""

    def __init__(self, placeholder_for):
        super().__init__(placeholder_for)
        self.calls: List[Tuple[str, str, str]] = []
        self.closed = False

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        self.calls.append((text, source_lang, target_lang))
        return await super().translate(text, source_lang, target_lang)

    async def close(self):
        self.closed = True


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        sync=SyncSettings(),
        translator=TranslatorSettings(),
        logging=LoggingSettings()
    )


@pytest.fixture
def translator(test_settings: Settings) -> RecordingTranslator:
    """Create a recording placeholder translator."""
    return RecordingTranslator(test_settings.sync.placeholder_for)


@pytest.fixture
def make_dictionaries(test_settings: Settings):
    """Build language -> LocaleDictionary from plain mappings, in argument order."""
    def _make(**languages: Dict[str, str]) -> Dict[str, LocaleDictionary]:
        return {
            lang: LocaleDictionary.from_mapping(lang, test_settings.sync.placeholder_for(lang), data)
            for lang, data in languages.items()
        }
    return _make


@pytest.fixture
def write_json():
    """Write JSON to a path, creating parents."""
    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def read_json():
    def _read(path: Path):
        return json.loads(path.read_text(encoding="utf-8"))
    return _read
