"""
Integration tests for complete synchronization runs
"""

import dataclasses

import pytest

from locale_sync import main as cli
from locale_sync.config.settings import LoggingSettings
from locale_sync.errors import KeysFileError, SettingsError
from locale_sync.services.sync_service import DictionaryTarget, TranslationSyncService


@pytest.fixture
def project(tmp_path, write_json):
    """Keys file plus public/locales/<lang>/translation.json layout"""
    locales = tmp_path / "public" / "locales"
    keys = write_json(tmp_path / "internationalization_keys.json", ["todoList", "addTodo"])
    return {
        "root": tmp_path,
        "keys": keys,
        "en": locales / "en" / "translation.json",
        "zh": locales / "zh" / "translation.json",
        "ja": locales / "ja" / "translation.json",
    }


@pytest.fixture
def use_settings(monkeypatch, test_settings):
    """Make the CLI use test settings instead of the environment"""
    def _use(settings=None):
        monkeypatch.setattr(cli, "load_settings", lambda: settings or test_settings)
    _use()
    return _use


class TestSyncService:
    @pytest.mark.asyncio
    async def test_run_writes_complete_sorted_files(self, project, test_settings, translator, read_json):
        service = TranslationSyncService(test_settings, translator)
        targets = [DictionaryTarget("en", project["en"]), DictionaryTarget("zh", project["zh"])]

        report = await service.run(project["keys"], targets)

        assert read_json(project["en"]) == {"addTodo": "Add todo", "todoList": "Todo list"}
        assert read_json(project["zh"]) == {
            "addTodo": "[待翻译ZH] Add todo",
            "todoList": "[待翻译ZH] Todo list",
        }
        assert list(read_json(project["en"])) == ["addTodo", "todoList"]
        assert report.saved == [str(project["en"]), str(project["zh"])]
        assert report.failed == []

    @pytest.mark.asyncio
    async def test_second_run_leaves_files_untouched(self, project, test_settings, translator):
        service = TranslationSyncService(test_settings, translator)
        targets = [DictionaryTarget("en", project["en"]), DictionaryTarget("zh", project["zh"])]

        await service.run(project["keys"], targets)
        before = {lang: project[lang].read_bytes() for lang in ("en", "zh")}
        report = await service.run(project["keys"], targets)

        assert not report.changed
        assert {lang: project[lang].read_bytes() for lang in ("en", "zh")} == before

    @pytest.mark.asyncio
    async def test_union_mode_propagates_base_only_keys(self, project, test_settings, translator, write_json, read_json):
        write_json(project["en"], {"footer.copyright": "All rights reserved"})
        service = TranslationSyncService(test_settings, translator)
        targets = [DictionaryTarget("en", project["en"]), DictionaryTarget("zh", project["zh"])]

        report = await service.run(project["keys"], targets)

        assert report.discovered_keys == ["footer.copyright"]
        assert read_json(project["zh"])["footer.copyright"] == "[待翻译ZH] All rights reserved"

    @pytest.mark.asyncio
    async def test_canonical_mode_ignores_base_only_keys(self, project, test_settings, translator, write_json, read_json):
        write_json(project["en"], {"footer.copyright": "All rights reserved"})
        write_json(project["zh"], {"legacy.title": "旧标题"})
        settings = dataclasses.replace(
            test_settings, sync=dataclasses.replace(test_settings.sync, master_keys="canonical")
        )
        service = TranslationSyncService(settings, translator)
        targets = [DictionaryTarget("en", project["en"]), DictionaryTarget("zh", project["zh"])]

        report = await service.run(project["keys"], targets)

        assert report.discovered_keys == ["legacy.title"]
        assert "footer.copyright" not in read_json(project["zh"])
        assert read_json(project["en"])["footer.copyright"] == "All rights reserved"
        assert read_json(project["en"])["legacy.title"] == "[NEEDS_TRANSLATION_EN] 旧标题"

    @pytest.mark.asyncio
    async def test_blank_dictionary_keys_are_not_discovered(self, project, test_settings, translator, write_json, read_json):
        write_json(project["zh"], {"": "空", "legacy.title": "旧标题"})
        service = TranslationSyncService(test_settings, translator)
        targets = [DictionaryTarget("en", project["en"]), DictionaryTarget("zh", project["zh"])]

        report = await service.run(project["keys"], targets)

        assert report.discovered_keys == ["legacy.title"]
        assert "" not in read_json(project["en"])
        assert report.warnings == []

    @pytest.mark.asyncio
    async def test_write_keys_persists_discovered_keys(self, project, test_settings, translator, write_json, read_json):
        write_json(project["zh"], {"legacy.title": "旧标题"})
        service = TranslationSyncService(test_settings, translator)
        targets = [DictionaryTarget("en", project["en"]), DictionaryTarget("zh", project["zh"])]

        await service.run(project["keys"], targets, write_keys=True)

        assert read_json(project["keys"]) == ["todoList", "addTodo", "legacy.title"]

    @pytest.mark.asyncio
    async def test_dry_run_writes_nothing(self, project, test_settings, translator):
        service = TranslationSyncService(test_settings, translator)
        targets = [DictionaryTarget("en", project["en"]), DictionaryTarget("zh", project["zh"])]

        report = await service.run(project["keys"], targets, dry_run=True)

        assert report.changed and report.dry_run
        assert not project["en"].exists() and not project["zh"].exists()

    @pytest.mark.asyncio
    async def test_save_failure_does_not_stop_other_languages(self, project, test_settings, translator, read_json):
        project["zh"].mkdir(parents=True)
        service = TranslationSyncService(test_settings, translator)
        targets = [
            DictionaryTarget("en", project["en"]),
            DictionaryTarget("zh", project["zh"]),
            DictionaryTarget("ja", project["ja"]),
        ]

        report = await service.run(project["keys"], targets)

        assert report.failed == [str(project["zh"])]
        assert report.saved == [str(project["en"]), str(project["ja"])]
        assert read_json(project["ja"])["todoList"] == "[NEEDS_TRANSLATION_JA] Todo list"

    @pytest.mark.asyncio
    async def test_malformed_keys_file_aborts_before_writing(self, project, test_settings, translator, write_json):
        write_json(project["keys"], {"todoList": "Todo list"})
        service = TranslationSyncService(test_settings, translator)
        targets = [DictionaryTarget("en", project["en"]), DictionaryTarget("zh", project["zh"])]

        with pytest.raises(KeysFileError):
            await service.run(project["keys"], targets)
        assert translator.calls == []
        assert not project["en"].exists()

    @pytest.mark.asyncio
    async def test_missing_base_target_is_rejected(self, project, test_settings, translator):
        service = TranslationSyncService(test_settings, translator)
        with pytest.raises(SettingsError):
            await service.run(project["keys"], [DictionaryTarget("zh", project["zh"])])


class TestCommandLine:
    def test_successful_run(self, project, use_settings, read_json, capsys):
        code = cli.main([str(project["keys"]), str(project["en"]), str(project["zh"]), str(project["ja"])])

        assert code == 0
        assert read_json(project["en"]) == {"addTodo": "Add todo", "todoList": "Todo list"}
        assert read_json(project["ja"])["addTodo"] == "[NEEDS_TRANSLATION_JA] Add todo"
        out = capsys.readouterr().out
        assert 'EN: Added key "todoList" with default: "Todo list"' in out
        assert "Synchronization complete" in out

    def test_malformed_keys_file_exits_non_zero(self, project, use_settings, write_json, capsys):
        """Scenario D"""
        write_json(project["keys"], {"todoList": "Todo list"})
        write_json(project["zh"], {"todoList": "待办列表"})
        before = project["zh"].read_bytes()

        code = cli.main([str(project["keys"]), str(project["en"]), str(project["zh"])])

        assert code == 1
        assert not project["en"].exists()
        assert project["zh"].read_bytes() == before
        assert "does not contain a JSON array" in capsys.readouterr().err

    def test_missing_arguments_print_usage(self, project, use_settings, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(project["keys"]), str(project["en"])])

        assert exc_info.value.code != 0
        assert "usage:" in capsys.readouterr().err

    def test_check_mode(self, project, use_settings):
        args = [str(project["keys"]), str(project["en"]), str(project["zh"])]

        assert cli.main(["--check", *args]) == 1
        assert not project["en"].exists()

        assert cli.main(args) == 0
        assert cli.main(["--check", *args]) == 0

    def test_explicit_languages_and_no_sort(self, project, use_settings, read_json):
        en = project["root"] / "strings" / "base.json"
        fr = project["root"] / "strings" / "other.json"

        code = cli.main([
            "--languages", "en,fr", "--no-sort",
            str(project["keys"]), str(en), str(fr)
        ])

        assert code == 0
        assert list(read_json(en)) == ["todoList", "addTodo"]
        assert read_json(fr)["todoList"] == "[NEEDS_TRANSLATION_FR] Todo list"

    def test_language_count_mismatch(self, project, use_settings, capsys):
        code = cli.main([
            "--languages", "en", str(project["keys"]), str(project["en"]), str(project["zh"])
        ])

        assert code == 1
        assert "--languages" in capsys.readouterr().err

    def test_no_reverse_flag(self, project, use_settings, write_json, read_json):
        write_json(project["zh"], {"greeting": "你好"})

        code = cli.main(["--no-reverse", str(project["keys"]), str(project["en"]), str(project["zh"])])

        assert code == 0
        assert read_json(project["en"])["greeting"] == "Greeting"

    def test_translator_is_closed(self, project, use_settings, translator, monkeypatch):
        monkeypatch.setattr(cli, "create_translator", lambda settings: translator)

        cli.main([str(project["keys"]), str(project["en"]), str(project["zh"])])

        assert translator.closed
        assert len(translator.calls) == 2

    def test_unwritable_log_file_exits_non_zero(self, project, use_settings, test_settings, capsys):
        log_file = project["root"] / "missing" / "sync.log"
        use_settings(dataclasses.replace(test_settings, logging=LoggingSettings(log_file=str(log_file))))

        code = cli.main([str(project["keys"]), str(project["en"]), str(project["zh"])])

        assert code == 1
        assert "Cannot open log file" in capsys.readouterr().err
        assert not project["en"].exists()

    def test_setup_logging_rejects_missing_directory(self, tmp_path):
        with pytest.raises(SettingsError):
            cli.setup_logging(LoggingSettings(log_file=str(tmp_path / "nope" / "sync.log")))

    def test_resolve_targets_falls_back_to_configured_base(self, tmp_path):
        targets = cli.resolve_targets(
            [tmp_path / "i18n" / "messages.json", tmp_path / "zh.json"], None, "en"
        )
        assert [t.language for t in targets] == ["en", "zh"]

        with pytest.raises(SettingsError):
            cli.resolve_targets([tmp_path / "en.json", tmp_path / "i18n" / "extra.json"], None, "en")
