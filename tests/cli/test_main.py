"""
Tests for the CountCraft command line.
"""

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from countcraft import __version__
from countcraft.cli.main import SettingsReloader, app, poll_changes
from countcraft.core.adapters.document_store import MarkdownVault
from countcraft.core.counters.models import CounterConfig, CounterType
from countcraft.core.utils.config import CountCraftConfig, get_config


@pytest.fixture
def runner():
    return CliRunner()


def _add(runner, *args):
    result = runner.invoke(app, ["counters", "add", *args])
    assert result.exit_code == 0, result.output
    return result


class TestGlobalOptions:
    """Tests for top-level options."""

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_settings_option(self, runner, tmp_path):
        settings = tmp_path / "custom.json"
        _add(runner, "wordCount")
        result = runner.invoke(app, ["--settings", str(settings), "counters", "add", "lineCount"])
        assert result.exit_code == 0
        saved = json.loads(settings.read_text(encoding="utf-8"))
        properties = [c["property"] for c in saved["config"]["counters"]["calculations"]]
        assert properties == ["line-count"]


class TestCounterCommands:
    """Tests for `countcraft counters`."""

    def test_add_uses_default_property(self, runner):
        _add(runner, "wordCount")
        (config,) = get_config().counters.calculations
        assert config.type is CounterType.WORD_COUNT
        assert config.property == "word-count"
        assert config.name == "Word Count"
        assert config.parameter is None

    def test_add_is_persisted(self, runner):
        _add(runner, "lineCount", "--property", "lines")
        path = get_config().config_file
        saved = json.loads(open(path, encoding="utf-8").read())
        assert saved["config"]["counters"]["calculations"][0]["property"] == "lines"

    def test_add_heading_level(self, runner):
        _add(runner, "headingLevelCount", "--level", "2", "-p", "h2")
        assert get_config().counters.calculations[0].parameter == 2

    def test_heading_level_defaults_to_one(self, runner):
        _add(runner, "headingLevelCount")
        assert get_config().counters.calculations[0].parameter == 1

    def test_unknown_type(self, runner):
        result = runner.invoke(app, ["counters", "add", "sentenceCount"])
        assert result.exit_code == 2
        assert "Unknown counter type" in result.output

    def test_duplicate_property(self, runner):
        _add(runner, "wordCount")
        result = runner.invoke(app, ["counters", "add", "lineCount", "-p", "word-count"])
        assert result.exit_code == 2
        assert "already used" in result.output
        assert len(get_config().counters.calculations) == 1

    def test_level_out_of_range(self, runner):
        result = runner.invoke(app, ["counters", "add", "headingLevelCount", "--level", "9"])
        assert result.exit_code == 2
        assert get_config().counters.calculations == []

    def test_edit_keeps_id(self, runner):
        _add(runner, "wordCount")
        original = get_config().counters.calculations[0]
        result = runner.invoke(app, ["counters", "edit", original.id, "-p", "words"])
        assert result.exit_code == 0
        (edited,) = get_config().counters.calculations
        assert edited.id == original.id
        assert edited.property == "words"

    def test_edit_type_to_heading_level(self, runner):
        _add(runner, "wordCount")
        counter_id = get_config().counters.calculations[0].id
        result = runner.invoke(
            app, ["counters", "edit", counter_id, "--type", "headingLevelCount", "-l", "3"]
        )
        assert result.exit_code == 0
        edited = get_config().counters.calculations[0]
        assert edited.type is CounterType.HEADING_LEVEL_COUNT
        assert edited.parameter == 3

    def test_edit_unknown_id(self, runner):
        result = runner.invoke(app, ["counters", "edit", "counter_missing", "-p", "x"])
        assert result.exit_code == 1

    def test_enable_disable_remove(self, runner):
        _add(runner, "wordCount")
        counter_id = get_config().counters.calculations[0].id

        assert runner.invoke(app, ["counters", "disable", counter_id]).exit_code == 0
        assert get_config().counters.calculations[0].enabled is False
        assert runner.invoke(app, ["counters", "enable", counter_id]).exit_code == 0
        assert get_config().counters.calculations[0].enabled is True
        assert runner.invoke(app, ["counters", "remove", counter_id]).exit_code == 0
        assert get_config().counters.calculations == []
        assert runner.invoke(app, ["counters", "remove", counter_id]).exit_code == 1

    def test_list_and_types(self, runner):
        empty = runner.invoke(app, ["counters", "list"])
        assert "No counters configured" in empty.output
        _add(runner, "wordCount")
        assert runner.invoke(app, ["counters", "list"]).exit_code == 0
        assert runner.invoke(app, ["counters", "types"]).exit_code == 0


class TestCalculateAndPreview:
    """Tests for single-document commands."""

    def test_calculate_writes_properties(self, runner, vault_dir):
        _add(runner, "wordCount")
        _add(runner, "headingCount")
        result = runner.invoke(
            app, ["calculate", str(vault_dir / "note.md"), "--vault", str(vault_dir)]
        )
        assert result.exit_code == 0, result.output
        assert "Calculation completed successfully!" in result.output

        vault = MarkdownVault(vault_dir)
        assert vault.get_property("note.md", "word-count") == 11
        assert vault.get_property("note.md", "heading-count") == 2

    def test_calculate_unprocessable(self, runner, vault_dir):
        _add(runner, "wordCount")
        result = runner.invoke(
            app, ["calculate", str(vault_dir / "image.png"), "--vault", str(vault_dir)]
        )
        assert result.exit_code == 1

    def test_calculate_without_enabled_counters(self, runner, vault_dir):
        result = runner.invoke(
            app, ["calculate", str(vault_dir / "note.md"), "--vault", str(vault_dir)]
        )
        assert result.exit_code == 0
        assert "No calculations were performed" in result.output

    def test_preview_json(self, runner, vault_dir):
        result = runner.invoke(
            app,
            ["preview", str(vault_dir / "note.md"), "--vault", str(vault_dir), "--json"],
        )
        assert result.exit_code == 0, result.output
        stats = json.loads(result.stdout)
        assert stats["word_count"] == 11
        assert stats["headings_by_level"] == {"1": 1, "2": 1}
        assert MarkdownVault(vault_dir).get_property("note.md", "word-count") is None

    def test_preview_text(self, runner, vault_dir):
        result = runner.invoke(
            app, ["preview", str(vault_dir / "note.md"), "--vault", str(vault_dir)]
        )
        assert result.exit_code == 0
        assert "Statistics for note.md:" in result.output
        assert "Words: 11" in result.output


class TestBatch:
    """Tests for `countcraft batch`."""

    def test_batch_with_yes(self, runner, vault_dir):
        _add(runner, "wordCount")
        result = runner.invoke(app, ["batch", str(vault_dir), "--yes"])
        assert result.exit_code == 0, result.output

        vault = MarkdownVault(vault_dir)
        assert vault.get_property("plain.md", "word-count") == 3
        assert vault.get_property("sub/nested.md", "word-count") == 3
        assert "Batch calculation completed: 3/3 files processed" in result.output

    def test_batch_cancelled(self, runner, vault_dir):
        _add(runner, "wordCount")
        prompt = MagicMock()
        prompt.ask.return_value = False
        with patch("countcraft.cli.main.questionary.confirm", return_value=prompt):
            result = runner.invoke(app, ["batch", str(vault_dir)])
        assert result.exit_code == 130
        assert MarkdownVault(vault_dir).get_property("plain.md", "word-count") is None

    def test_batch_without_enabled_counters(self, runner, vault_dir):
        result = runner.invoke(app, ["batch", str(vault_dir), "--yes"])
        assert result.exit_code == 2

    def test_batch_missing_directory(self, runner, tmp_path):
        result = runner.invoke(app, ["batch", str(tmp_path / "absent"), "--yes"])
        assert result.exit_code == 1


class TestWatch:
    """Tests for `countcraft watch` and change detection."""

    def test_requires_auto_calculate(self, runner, vault_dir):
        result = runner.invoke(app, ["watch", str(vault_dir), "--max-polls", "1"])
        assert result.exit_code == 2

    def test_runs_until_max_polls(self, runner, vault_dir, monkeypatch):
        monkeypatch.setenv("COUNTCRAFT_AUTO_CALCULATE", "1")
        result = runner.invoke(
            app, ["watch", str(vault_dir), "--interval", "0", "--max-polls", "2"]
        )
        assert result.exit_code == 0, result.output
        assert "Watching" in result.output

    def test_reloader_follows_settings_file(self, runner):
        _add(runner, "wordCount")
        config = get_config()
        reloader = SettingsReloader(config)
        assert [c.type for c in reloader()] == [CounterType.WORD_COUNT]

        other = CountCraftConfig(config.config_file)
        other.counters.calculations = [
            c.with_changes(enabled=False) for c in other.counters.calculations
        ]
        other.save_to_file()

        assert [c.enabled for c in reloader()] == [False]
        assert [c.enabled for c in config.counters.calculations] == [False]

    def test_reloader_without_settings_file(self):
        config = CountCraftConfig()
        assert SettingsReloader(config)() == []

    def test_settings_edited_between_polls(self, runner, vault_dir, monkeypatch):
        monkeypatch.setenv("COUNTCRAFT_AUTO_CALCULATE", "1")
        monkeypatch.setenv("COUNTCRAFT_DEBOUNCE_SECONDS", "0")
        _add(runner, "wordCount")
        settings_file = get_config().config_file

        def edit_between_polls(_seconds):
            other = CountCraftConfig(settings_file)
            other.counters.calculations = [
                *(c.with_changes(enabled=False) for c in other.counters.calculations),
                CounterConfig(name="Lines", type=CounterType.LINE_COUNT, property="lines"),
            ]
            other.save_to_file()
            plain = vault_dir / "plain.md"
            stat = plain.stat()
            os.utime(plain, ns=(stat.st_atime_ns, stat.st_mtime_ns + 5_000_000_000))

        monkeypatch.setattr("countcraft.cli.main.time.sleep", edit_between_polls)
        result = runner.invoke(
            app, ["watch", str(vault_dir), "--interval", "0", "--max-polls", "1"]
        )
        assert result.exit_code == 0, result.output

        vault = MarkdownVault(vault_dir)
        assert vault.get_property("plain.md", "lines") == 2
        assert vault.get_property("plain.md", "word-count") is None

    def test_poll_changes(self, vault_dir):
        vault = MarkdownVault(vault_dir)
        changed, seen = poll_changes(vault, {})
        assert sorted(changed) == ["note.md", "plain.md", "sub/nested.md"]

        changed, seen = poll_changes(vault, seen)
        assert changed == []

        note = vault_dir / "plain.md"
        stat = note.stat()
        os.utime(note, ns=(stat.st_atime_ns, stat.st_mtime_ns + 5_000_000_000))
        (vault_dir / "new.md").write_text("new\n", encoding="utf-8")
        changed, _ = poll_changes(vault, seen)
        assert sorted(changed) == ["new.md", "plain.md"]


class TestSettingsCommands:
    """Tests for `countcraft settings`."""

    def test_export_and_import(self, runner, tmp_path):
        _add(runner, "wordCount")
        _add(runner, "lineCount")
        backup = tmp_path / "backup.json"
        assert runner.invoke(app, ["settings", "export", "-o", str(backup)]).exit_code == 0
        exported = get_config().counters.calculations

        counter_id = exported[0].id
        runner.invoke(app, ["counters", "remove", counter_id])
        assert len(get_config().counters.calculations) == 1

        result = runner.invoke(app, ["settings", "import", str(backup)])
        assert result.exit_code == 0, result.output
        assert "Settings imported successfully" in result.output
        assert get_config().counters.calculations == exported

    def test_export_to_stdout(self, runner):
        _add(runner, "wordCount")
        result = runner.invoke(app, ["settings", "export"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["counters"]["calculations"][0]["type"] == "wordCount"

    def test_invalid_import_keeps_settings(self, runner, tmp_path):
        _add(runner, "wordCount")
        bad = tmp_path / "bad.json"
        bad.write_text('{"calculations": "nope"}', encoding="utf-8")
        result = runner.invoke(app, ["settings", "import", str(bad)])
        assert result.exit_code == 2
        assert "Failed to import settings" in result.output
        assert len(get_config().counters.calculations) == 1

    def test_status(self, runner):
        _add(runner, "wordCount")
        result = runner.invoke(app, ["settings", "status"])
        assert result.exit_code == 0
        assert "Counters configured: 1" in result.output

    def test_show(self, runner):
        result = runner.invoke(app, ["settings", "show"])
        assert result.exit_code == 0
        assert "Count mode: raw" in result.output
