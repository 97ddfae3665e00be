"""
Command-line entry point
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from locale_sync.config import Settings, load_settings
from locale_sync.config.settings import LoggingSettings, MASTER_KEY_MODES, TRANSLATOR_BACKENDS
from locale_sync.errors import LocaleSyncError, SettingsError
from locale_sync.models.report import SyncReport
from locale_sync.services.sync_service import DictionaryTarget, TranslationSyncService
from locale_sync.services.translator_service import create_translator
from locale_sync.utils.validators import LocaleValidator

logger = logging.getLogger(__name__)

USAGE_EXAMPLE = (
    "Example: locale-sync internationalization_keys.json "
    "public/locales/en/translation.json public/locales/zh/translation.json"
)


def setup_logging(settings: LoggingSettings) -> None:
    """Configure root logging once for the process"""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        try:
            handlers.append(logging.FileHandler(settings.log_file, encoding='utf-8'))
        except OSError as e:
            raise SettingsError(f"Cannot open log file {settings.log_file}: {e}")

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='locale-sync',
        description="Synchronize translation dictionaries with a canonical keys file",
        epilog=USAGE_EXAMPLE
    )
    parser.add_argument('keys', type=Path, help="JSON array of canonical keys")
    parser.add_argument('base', type=Path, help="Base language dictionary (e.g. en.json)")
    parser.add_argument('others', type=Path, nargs='+', help="Other language dictionaries")
    parser.add_argument('--languages', help="Comma-separated language codes, one per dictionary, in order")
    parser.add_argument('--master-keys', choices=MASTER_KEY_MODES,
                        help="canonical: keys file + keys left in other languages; union: keys of all dictionaries")
    parser.add_argument('--no-reverse', action='store_true',
                        help="Never translate leftover keys back into the base language")
    parser.add_argument('--no-sort', action='store_true', help="Keep insertion order when saving")
    parser.add_argument('--translator', choices=TRANSLATOR_BACKENDS, help="Translation backend")
    parser.add_argument('--check', action='store_true',
                        help="Do not write files; exit with 1 when dictionaries are out of sync")
    parser.add_argument('--write-keys', action='store_true',
                        help="Add discovered keys to the keys file so later runs treat them as canonical")
    return parser


def resolve_targets(paths: Sequence[Path], languages: Optional[str], default_base: str) -> List[DictionaryTarget]:
    """Pair every dictionary path with its language code; the first path is the base language"""
    if languages:
        codes = [code.strip().lower() for code in languages.split(',') if code.strip()]
        if len(codes) != len(paths):
            raise SettingsError(f"--languages lists {len(codes)} codes for {len(paths)} dictionaries")
    else:
        codes = []
        for index, path in enumerate(paths):
            code = LocaleValidator.infer_language(path)
            if code is None:
                if index > 0:
                    raise SettingsError(f"Cannot infer the language of {path}; pass --languages")
                code = default_base
            codes.append(code)

    for code in codes:
        ok, error = LocaleValidator.validate_language_code(code)
        if not ok:
            raise SettingsError(error)

    return [DictionaryTarget(language=code, path=path) for code, path in zip(codes, paths)]


def apply_overrides(settings: Settings, args: argparse.Namespace, base_language: str) -> Settings:
    """Fold command-line options over the environment settings"""
    sync_changes = {'base_language': base_language}
    if args.master_keys:
        sync_changes['master_keys'] = args.master_keys
    if args.no_reverse:
        sync_changes['reverse_rule'] = False
    if args.no_sort:
        sync_changes['sort_keys'] = False

    translator = settings.translator
    if args.translator:
        translator = dataclasses.replace(translator, backend=args.translator)

    return dataclasses.replace(
        settings,
        sync=dataclasses.replace(settings.sync, **sync_changes),
        translator=translator
    )


def print_report(report: SyncReport, languages: Sequence[str]) -> None:
    print('\n--- Synchronizing translations ---')
    if report.discovered_keys:
        print(f"🔎 {len(report.discovered_keys)} key(s) not in the keys file: {', '.join(report.discovered_keys)}")

    for language in languages:
        events = report.events_for(language)
        if not events:
            print(f"✅ {language}: up to date")
            continue
        print(f"✏️  {language}: {len(events)} key(s) added/updated")
        for event in events:
            print(f"   {event.describe()}")

    for warning in report.warnings:
        print(f"⚠️  {warning}")

    if not report.dry_run:
        print('\n--- Saving updated translation files ---')
        for path in report.saved:
            print(f"💾 {path}")
        for path in report.failed:
            print(f"❌ Failed to save {path}")

    print(f"\nSynchronization complete: {report.summary()}")


async def synchronize(settings: Settings, args: argparse.Namespace, targets: Sequence[DictionaryTarget]) -> SyncReport:
    translator = create_translator(settings)
    try:
        service = TranslationSyncService(settings, translator)
        return await service.run(args.keys, targets, dry_run=args.check, write_keys=args.write_keys)
    finally:
        await translator.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
        setup_logging(settings.logging)
        targets = resolve_targets([args.base, *args.others], args.languages, settings.sync.base_language)
        settings = apply_overrides(settings, args, targets[0].language)
        report = asyncio.run(synchronize(settings, args, targets))
    except LocaleSyncError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print_report(report, [t.language for t in targets])

    if args.check and report.changed:
        print("❌ Dictionaries are out of sync")
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == '__main__':
    run()
