"""
Utility modules for locale-sync
"""

from .validators import LocaleValidator
from .labels import generate_default_label
from .retry import retry_async

__all__ = ['LocaleValidator', 'generate_default_label', 'retry_async']
