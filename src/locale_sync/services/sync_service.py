"""
Load -> reconcile -> save orchestration for one synchronization run
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from locale_sync.config.settings import Settings
from locale_sync.errors import SettingsError
from locale_sync.models.entry import LocaleDictionary
from locale_sync.models.report import SyncReport
from locale_sync.services.dictionary_store import load_dictionary, load_keys, save_dictionary, save_keys
from locale_sync.services.reconciler import Reconciler
from locale_sync.services.translator_service import BaseTranslator

logger = logging.getLogger(__name__)


@dataclass
class DictionaryTarget:
    """A language code and the file holding its dictionary"""
    language: str
    path: Path


class TranslationSyncService:
    """Runs a full synchronization over files on disk"""

    def __init__(self, settings: Settings, translator: BaseTranslator):
        self.settings = settings
        self.translator = translator
        self.reconciler = Reconciler(
            translator.translate,
            base_language=settings.sync.base_language,
            reverse_rule=settings.sync.reverse_rule
        )

    def load(self, keys_path: Path, targets: Sequence[DictionaryTarget]) -> Tuple[List[str], Dict[str, LocaleDictionary]]:
        """
        Load the canonical keys and every dictionary

        Raises:
            KeysFileError: canonical keys source is unusable
        """
        canonical = load_keys(keys_path)
        logger.info(f"Loaded {len(canonical)} canonical keys from {keys_path}")

        dictionaries: Dict[str, LocaleDictionary] = {}
        for target in targets:
            data = load_dictionary(target.path)
            dictionaries[target.language] = LocaleDictionary.from_mapping(
                target.language,
                self.settings.sync.placeholder_for(target.language),
                data
            )
            logger.debug(f"{target.language}: {len(data)} entries from {target.path}")

        return canonical, dictionaries

    def build_master_keys(self, canonical: Sequence[str], dictionaries: Dict[str, LocaleDictionary]) -> List[str]:
        """
        Canonical keys in file order, then discovered keys sorted

        ``canonical`` mode only discovers keys left over in dependent
        languages; ``union`` mode also picks up keys present only in the
        base dictionary.
        """
        base_language = self.settings.sync.base_language
        known = set(canonical)
        discovered = set()
        for language, dictionary in dictionaries.items():
            if self.settings.sync.master_keys == 'canonical' and language == base_language:
                continue
            for key in dictionary:
                if not key.strip():
                    logger.warning(f"Skipping blank key in {language} dictionary")
                    continue
                if key not in known:
                    discovered.add(key)

        return list(canonical) + sorted(discovered)

    def _validate_targets(self, targets: Sequence[DictionaryTarget]) -> None:
        base_language = self.settings.sync.base_language
        languages = [t.language for t in targets]
        if base_language not in languages:
            raise SettingsError(f"No dictionary given for base language '{base_language}'")
        duplicates = sorted({lang for lang in languages if languages.count(lang) > 1})
        if duplicates:
            raise SettingsError(f"Duplicate dictionaries for language(s): {', '.join(duplicates)}")

    def save(self, targets: Sequence[DictionaryTarget], dictionaries: Dict[str, LocaleDictionary], report: SyncReport) -> None:
        """Save every dictionary; a failed file does not stop the others"""
        for target in targets:
            data = dictionaries[target.language].to_dict(sort_keys=self.settings.sync.sort_keys)
            if save_dictionary(target.path, data, sort_keys=self.settings.sync.sort_keys,
                               indent=self.settings.sync.indent):
                report.saved.append(str(target.path))
            else:
                report.failed.append(str(target.path))

    async def run(
        self,
        keys_path: Path,
        targets: Sequence[DictionaryTarget],
        dry_run: bool = False,
        write_keys: bool = False,
        report: Optional[SyncReport] = None
    ) -> SyncReport:
        """
        Synchronize all dictionaries

        Args:
            keys_path: JSON array of canonical keys
            targets: dictionaries to reconcile, base language included
            dry_run: reconcile in memory only
            write_keys: append discovered keys to the keys file

        Returns:
            Report of the run
        """
        self._validate_targets(targets)
        if report is None:
            report = SyncReport()
        report.dry_run = dry_run

        canonical, dictionaries = self.load(Path(keys_path), targets)
        master_keys = self.build_master_keys(canonical, dictionaries)
        report.discovered_keys = master_keys[len(canonical):]
        logger.info(
            f"Synchronizing {len(master_keys)} keys "
            f"({len(report.discovered_keys)} discovered) across {len(dictionaries)} languages"
        )

        await self.reconciler.reconcile(
            master_keys,
            dictionaries,
            canonical_keys=set(canonical),
            report=report
        )

        if dry_run:
            logger.info("Dry run: no files written")
            return report

        self.save(targets, dictionaries, report)

        if write_keys and report.discovered_keys:
            if not save_keys(keys_path, master_keys, indent=self.settings.sync.indent):
                report.failed.append(str(keys_path))

        return report
