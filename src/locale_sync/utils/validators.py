"""
Input validation utilities
"""

import re
from pathlib import Path
from typing import Any, Optional, Tuple

LANGUAGE_CODE_RE = re.compile(r'^[a-zA-Z]{2,3}([-_][a-zA-Z0-9]{2,8})*$')


class LocaleValidator:
    """Locale and dictionary data validation"""

    @staticmethod
    def validate_language_code(lang: str) -> Tuple[bool, str]:
        """Validate language code (``en``, ``zh``, ``pt-BR``, ``zh_Hant``)"""
        if not lang or not LANGUAGE_CODE_RE.match(lang):
            return False, f"Invalid language code '{lang}'. Expected something like 'en' or 'pt-BR'"

        return True, ""

    @staticmethod
    def validate_dictionary(data: Any) -> Tuple[bool, str]:
        """Validate parsed JSON as a flat key -> string mapping"""
        if not isinstance(data, dict):
            return False, f"Expected a JSON object, got {type(data).__name__}"

        bad_keys = [k for k, v in data.items() if not isinstance(v, str)]
        if bad_keys:
            preview = ', '.join(sorted(bad_keys)[:5])
            return False, f"Values must be strings; offending keys: {preview}"

        return True, ""

    @staticmethod
    def infer_language(path: Path) -> Optional[str]:
        """Guess the language code of a dictionary file from its path.

        ``locales/zh.json`` gives ``zh`` and
        ``public/locales/zh/translation.json`` gives ``zh``.
        Returns None when neither the file stem nor the parent directory
        looks like a language code.
        """
        path = Path(path)
        if LANGUAGE_CODE_RE.match(path.stem):
            return path.stem.lower()
        if LANGUAGE_CODE_RE.match(path.parent.name):
            return path.parent.name.lower()
        return None
