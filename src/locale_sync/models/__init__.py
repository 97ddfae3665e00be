"""
Data models for locale-sync
"""

from .entry import Entry, EntryKind, LocaleDictionary
from .report import ReportEvent, SyncReport

__all__ = ['Entry', 'EntryKind', 'LocaleDictionary', 'ReportEvent', 'SyncReport']
