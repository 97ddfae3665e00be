"""
Services for locale-sync
"""

from .dictionary_store import load_dictionary, load_keys, save_dictionary, save_keys
from .reconciler import Reconciler, reconcile
from .translator_service import (
    BaseTranslator, PlaceholderTranslator, OpenAITranslator, LibreTranslateTranslator, create_translator
)
from .sync_service import DictionaryTarget, TranslationSyncService

__all__ = [
    'load_dictionary', 'load_keys', 'save_dictionary', 'save_keys',
    'Reconciler', 'reconcile',
    'BaseTranslator', 'PlaceholderTranslator', 'OpenAITranslator', 'LibreTranslateTranslator',
    'create_translator',
    'DictionaryTarget', 'TranslationSyncService'
]
