"""
Reading and writing translation files
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Union

from locale_sync.errors import KeysFileError
from locale_sync.utils.validators import LocaleValidator

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_dictionary(path: PathLike) -> Dict[str, str]:
    """
    Load a key -> string dictionary

    A missing file, unreadable file or anything that is not a flat JSON
    object of strings yields an empty dictionary.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"File not found: {path}. Starting with an empty dictionary.")
        return {}

    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error reading or parsing JSON from {path}: {e}")
        return {}

    ok, error = LocaleValidator.validate_dictionary(data)
    if not ok:
        logger.error(f"Ignoring contents of {path}: {error}")
        return {}

    return data


def load_keys(path: PathLike) -> List[str]:
    """
    Load the canonical keys list

    Raises:
        KeysFileError: the file is missing, not JSON, or not an array of strings
    """
    path = Path(path)
    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise KeysFileError(path, "file not found")
    except (OSError, ValueError) as e:
        raise KeysFileError(path, f"cannot be parsed: {e}")

    if not isinstance(data, list):
        raise KeysFileError(path, "does not contain a JSON array")

    non_strings = [item for item in data if not isinstance(item, str)]
    if non_strings:
        raise KeysFileError(path, f"array items must be strings, got {non_strings[0]!r}")

    keys: List[str] = []
    seen = set()
    for key in data:
        if not key.strip():
            logger.warning(f"Skipping blank key in {path}")
            continue
        if key in seen:
            logger.debug(f"Duplicate key '{key}' in {path}")
            continue
        seen.add(key)
        keys.append(key)

    return keys


def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w', encoding='utf-8') as f:
        f.write(data)
        f.write('\n')


def save_dictionary(path: PathLike, data: Mapping[str, str], sort_keys: bool = True, indent: int = 2) -> bool:
    """
    Write a dictionary as pretty-printed UTF-8 JSON

    Returns:
        True on success; write failures are logged and reported as False
    """
    path = Path(path)
    try:
        serialized = json.dumps(dict(data), ensure_ascii=False, indent=indent, sort_keys=sort_keys)
        _write_json(path, serialized)
    except OSError as e:
        logger.error(f"Error writing JSON to {path}: {e}")
        return False

    logger.info(f"Successfully saved {path}")
    return True


def save_keys(path: PathLike, keys: List[str], indent: int = 2) -> bool:
    """Rewrite the canonical keys file"""
    path = Path(path)
    try:
        _write_json(path, json.dumps(list(keys), ensure_ascii=False, indent=indent))
    except OSError as e:
        logger.error(f"Error writing keys to {path}: {e}")
        return False

    logger.info(f"Updated keys file {path} ({len(keys)} keys)")
    return True
