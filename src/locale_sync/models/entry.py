"""
Dictionary entry and per-language dictionary models
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Mapping, Optional


class EntryKind(str, Enum):
    """Whether a stored value is a real translation"""
    TRANSLATED = 'translated'
    PLACEHOLDER = 'placeholder'


@dataclass(frozen=True)
class Entry:
    """A single dictionary value.

    ``raw`` is the exact string persisted in the JSON file. Placeholder
    entries keep their marker in ``raw`` so files stay compatible with
    tools that only look at the prefix; ``text`` is the payload without it.
    """
    raw: str
    kind: EntryKind = EntryKind.TRANSLATED
    marker: Optional[str] = None

    @classmethod
    def parse(cls, raw: str, marker: str) -> 'Entry':
        """Classify a persisted string using the language's marker"""
        if marker and raw.startswith(marker):
            return cls(raw=raw, kind=EntryKind.PLACEHOLDER, marker=marker)
        return cls(raw=raw)

    @classmethod
    def placeholder(cls, text: str, marker: str) -> 'Entry':
        return cls(raw=f"{marker} {text}", kind=EntryKind.PLACEHOLDER, marker=marker)

    @property
    def text(self) -> str:
        if self.kind is EntryKind.PLACEHOLDER and self.marker:
            return self.raw[len(self.marker):].strip()
        return self.raw

    @property
    def is_placeholder(self) -> bool:
        return self.kind is EntryKind.PLACEHOLDER

    @property
    def is_blank(self) -> bool:
        return not self.raw.strip()

    def serialize(self) -> str:
        return self.raw


@dataclass
class LocaleDictionary:
    """Key -> Entry mapping for one language"""
    language: str
    marker: str
    entries: Dict[str, Entry] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, language: str, marker: str, data: Mapping[str, str]) -> 'LocaleDictionary':
        entries = {key: Entry.parse(value, marker) for key, value in data.items()}
        return cls(language=language, marker=marker, entries=entries)

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str) -> Optional[Entry]:
        return self.entries.get(key)

    def has_text(self, key: str) -> bool:
        """True when the key holds a non-blank value, placeholder or not"""
        entry = self.entries.get(key)
        return entry is not None and not entry.is_blank

    def is_valid(self, key: str) -> bool:
        """True when the key holds a real, non-blank translation"""
        entry = self.entries.get(key)
        return entry is not None and not entry.is_blank and not entry.is_placeholder

    def set(self, key: str, raw: str) -> bool:
        """Store ``raw`` for ``key``; return whether the stored value changed"""
        current = self.entries.get(key)
        if current is not None and current.raw == raw:
            return False
        self.entries[key] = Entry.parse(raw, self.marker)
        return True

    def to_dict(self, sort_keys: bool = True) -> Dict[str, str]:
        keys = sorted(self.entries) if sort_keys else list(self.entries)
        return {key: self.entries[key].serialize() for key in keys}
