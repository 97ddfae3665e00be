"""
Structured result of a synchronization run
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ReportEvent:
    """One change made to a dictionary"""
    language: str
    key: str
    action: str
    value: str
    source_language: Optional[str] = None

    def describe(self) -> str:
        lang = self.language.upper()
        if self.action == 'default':
            return f'{lang}: Added key "{self.key}" with default: "{self.value}"'
        if self.action == 'reverse':
            return (f'{lang}: Translated key "{self.key}" from '
                    f'{(self.source_language or "?").upper()}: "{self.value}"')
        return (f'{lang}: Translated/Updated key "{self.key}" from '
                f'{(self.source_language or "?").upper()}: "{self.value}"')


@dataclass
class SyncReport:
    """Everything a run did, for the caller to print or inspect"""
    events: List[ReportEvent] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    saved: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    discovered_keys: List[str] = field(default_factory=list)
    translate_calls: int = 0
    dry_run: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.events)

    def record(self, language: str, key: str, action: str, value: str,
               source_language: Optional[str] = None) -> ReportEvent:
        event = ReportEvent(language, key, action, value, source_language)
        self.events.append(event)
        return event

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def events_for(self, language: str) -> List[ReportEvent]:
        return [e for e in self.events if e.language == language]

    def summary(self) -> str:
        parts = [f"{len(self.events)} change(s)", f"{self.translate_calls} translate call(s)"]
        if self.warnings:
            parts.append(f"{len(self.warnings)} warning(s)")
        if self.failed:
            parts.append(f"{len(self.failed)} file(s) failed to save")
        return ', '.join(parts)
