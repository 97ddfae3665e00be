#!/usr/bin/env python3
"""
Synchronize translation files without installing the package.

Usage:
    python scripts/synchronize_translations.py <keys.json> <en.json> <zh.json> [<ja.json> ...]

Exit code:
- 0: OK (files saved, or already in sync with --check)
- 1: Configuration error, or drift detected with --check
- 2: Usage error
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from locale_sync.main import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
