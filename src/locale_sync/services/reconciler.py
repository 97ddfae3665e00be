"""
Reconciliation of per-language dictionaries against the master key set
"""

import inspect
import logging
from typing import Awaitable, Callable, Iterable, Mapping, Optional, Set, Union

from locale_sync.models.entry import LocaleDictionary
from locale_sync.models.report import SyncReport
from locale_sync.utils.labels import generate_default_label

logger = logging.getLogger(__name__)

TranslateFn = Callable[[str, str, str], Union[str, Awaitable[str]]]


class Reconciler:
    """
    Brings every dictionary in line with the master key set

    The base language is self-sufficient: its missing values come from
    ``generate_default_label``. Every other language is derived from the
    base value through ``translate``.
    """

    def __init__(self, translate: TranslateFn, base_language: str = 'en', reverse_rule: bool = True):
        self.translate = translate
        self.base_language = base_language
        self.reverse_rule = reverse_rule

    async def _translate(self, text: str, source: str, target: str, report: SyncReport) -> str:
        report.translate_calls += 1
        result = self.translate(text, source, target)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def reconcile(
        self,
        master_keys: Iterable[str],
        dictionaries: Mapping[str, LocaleDictionary],
        canonical_keys: Optional[Set[str]] = None,
        report: Optional[SyncReport] = None
    ) -> SyncReport:
        """
        Fill every key of ``master_keys`` in every dictionary, in place

        Args:
            master_keys: keys that must exist everywhere, processed in order
            dictionaries: language code -> dictionary; must include the base language
            canonical_keys: keys declared in the keys file. Keys outside it that
                occur in a non-base dictionary are eligible for the reverse rule.
                ``None`` means every master key is canonical.
            report: report to append to

        Returns:
            The report describing every change
        """
        if report is None:
            report = SyncReport()

        if self.base_language not in dictionaries:
            raise KeyError(f"Base language '{self.base_language}' has no dictionary")

        base = dictionaries[self.base_language]
        dependents = [d for lang, d in dictionaries.items() if lang != self.base_language]

        for key in master_keys:
            reverse = (
                self.reverse_rule
                and canonical_keys is not None
                and key not in canonical_keys
                and any(key in d for d in dependents)
            )

            if reverse:
                if not base.has_text(key):
                    await self._fill_base_from_dependent(key, base, dependents, report)
            elif not base.is_valid(key):
                self._fill_base_default(key, base, report)

            for target in dependents:
                await self._fill_dependent(key, base, target, report)

        return report

    def _fill_base_default(self, key: str, base: LocaleDictionary, report: SyncReport) -> None:
        label = generate_default_label(key)
        if base.set(key, label):
            event = report.record(base.language, key, 'default', label)
            logger.info(event.describe())

    async def _fill_base_from_dependent(self, key: str, base: LocaleDictionary, dependents, report: SyncReport) -> None:
        source = next((d for d in dependents if d.is_valid(key)), None)
        if source is None:
            if any(d.has_text(key) for d in dependents):
                logger.info(
                    f'{base.language.upper()}: Skipped translating placeholder text for key "{key}"'
                )
            self._fill_base_default(key, base, report)
            return

        text = source.get(key).text
        translated = await self._translate(text, source.language, base.language, report)
        if base.set(key, translated):
            event = report.record(base.language, key, 'reverse', translated, source.language)
            logger.info(event.describe())

    async def _fill_dependent(self, key: str, base: LocaleDictionary, target: LocaleDictionary, report: SyncReport) -> None:
        if target.is_valid(key):
            return

        base_entry = base.get(key)
        if base_entry is None or base_entry.is_blank:
            message = (f'{base.language.upper()} text for key "{key}" is missing. '
                       f'Cannot translate to {target.language.upper()}.')
            logger.warning(message)
            report.warn(message)
            return

        translated = await self._translate(base_entry.text, base.language, target.language, report)
        if target.set(key, translated):
            event = report.record(target.language, key, 'translate', translated, base.language)
            logger.info(event.describe())


async def reconcile(
    master_keys: Iterable[str],
    dictionaries: Mapping[str, LocaleDictionary],
    base_language: str,
    translate: TranslateFn,
    canonical_keys: Optional[Set[str]] = None,
    reverse_rule: bool = True
) -> SyncReport:
    """Functional form of ``Reconciler.reconcile``"""
    reconciler = Reconciler(translate, base_language=base_language, reverse_rule=reverse_rule)
    return await reconciler.reconcile(master_keys, dictionaries, canonical_keys=canonical_keys)
