"""
Exceptions raised by locale-sync
"""


class LocaleSyncError(Exception):
    """Base error for fatal synchronization problems"""


class KeysFileError(LocaleSyncError):
    """Canonical keys source is missing or is not a JSON array of strings"""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Keys file {path}: {reason}")


class SettingsError(LocaleSyncError, ValueError):
    """Invalid configuration value"""
